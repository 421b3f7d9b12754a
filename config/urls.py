"""
URL configuration for the EMI Payment Collection API.
"""

from django.contrib import admin
from django.urls import include, path

from apps.core.views import api_index, health_check

urlpatterns = [
    path('', api_index, name='api-index'),
    path('admin/', admin.site.urls),
    path('health/', health_check, name='health-check'),
    path('', include('apps.customers.urls')),
    path('', include('apps.payments.urls')),
    path('', include('apps.core.urls')),
]

handler404 = 'apps.core.views.route_not_found'
