"""
Customer URL configuration.
"""

from django.urls import path

from apps.customers.views import (
    CustomerByAccountView,
    CustomerDetailView,
    CustomerListView,
)

urlpatterns = [
    path('customers', CustomerListView.as_view(), name='customer-list'),
    path(
        'customers/<str:customer_id>',
        CustomerDetailView.as_view(),
        name='customer-detail',
    ),
    path(
        'customers/account/<str:account_number>',
        CustomerByAccountView.as_view(),
        name='customer-by-account',
    ),
]
