"""
Core views for the Payment Collection API.
"""

import logging

from django.conf import settings
from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.tasks import ingest_customer_data, ingest_payment_data

logger = logging.getLogger(__name__)


def health_check(request):
    """
    GET /health/

    Simple health check endpoint for Docker and load balancer health checks.
    Exempt from API key authentication.
    """
    return JsonResponse({'status': 'healthy'}, status=200)


def api_index(request):
    """
    GET /

    Describes the API and lists its resource endpoints.
    """
    return JsonResponse(
        {
            'message': settings.API_NAME,
            'version': settings.API_VERSION,
            'status': 'running',
            'endpoints': {
                'customers': '/customers',
                'payments': '/payments',
            },
        },
        status=200,
    )


def route_not_found(request, exception=None):
    """JSON 404 for any URL that matches no route."""
    return JsonResponse(
        {
            'error': True,
            'status_code': 404,
            'detail': 'Route not found',
        },
        status=404,
    )


class TriggerIngestionView(APIView):
    """
    POST /ingest-data

    Trigger background ingestion of customer and payment data
    from Excel files via Celery tasks.
    """

    def post(self, request):
        """Trigger data ingestion tasks."""
        customer_task = ingest_customer_data.delay()
        payment_task = ingest_payment_data.delay()

        logger.info(
            "Data ingestion triggered: customer_task=%s, payment_task=%s",
            customer_task.id,
            payment_task.id,
        )

        return Response(
            {
                'message': 'Data ingestion tasks have been triggered.',
                'customer_task_id': customer_task.id,
                'payment_task_id': payment_task.id,
            },
            status=status.HTTP_202_ACCEPTED,
        )
