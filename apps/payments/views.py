"""
Payment views for the Payment Collection API.

Views are thin: all business logic is in the service layer.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.payments.serializers import (
    MakePaymentResponseSerializer,
    MakePaymentSerializer,
    PaymentSerializer,
)
from apps.payments.services import PaymentRecordingService

logger = logging.getLogger(__name__)


class MakePaymentView(APIView):
    """
    POST /payments

    Record a payment against a loan account.
    """

    service_class = PaymentRecordingService

    def post(self, request):
        """Handle payment submission."""
        serializer = MakePaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payment = self.service_class().record_payment(
            account_number=serializer.validated_data['account_number'],
            payment_amount=serializer.validated_data['payment_amount'],
            payment_date=serializer.validated_data.get('payment_date'),
            status=serializer.validated_data.get('status'),
        )

        response_serializer = MakePaymentResponseSerializer({
            'message': 'Payment successful',
            'payment': payment,
        })

        return Response(
            response_serializer.data,
            status=status.HTTP_201_CREATED,
        )


class PaymentHistoryView(APIView):
    """
    GET /payments/<account_number>

    List all payments for an account, newest first.
    """

    service_class = PaymentRecordingService

    def get(self, request, account_number):
        """Handle viewing payment history."""
        payments = self.service_class().get_payment_history(account_number)
        serializer = PaymentSerializer(payments, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)
