"""
Payment URL configuration.
"""

from django.urls import path

from apps.payments.views import MakePaymentView, PaymentHistoryView

urlpatterns = [
    path('payments', MakePaymentView.as_view(), name='make-payment'),
    path(
        'payments/<str:account_number>',
        PaymentHistoryView.as_view(),
        name='payment-history',
    ),
]
