"""
Customer views for the Payment Collection API.

Views are thin: all business logic is in the service layer.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.customers.serializers import (
    CustomerBalanceSerializer,
    CustomerSerializer,
)
from apps.customers.services import LedgerService

logger = logging.getLogger(__name__)


class CustomerListView(APIView):
    """
    GET /customers

    List every loan account with this month's EMI balance.
    """

    ledger_class = LedgerService

    def get(self, request):
        """Handle listing customers."""
        customers = self.ledger_class().list_customers()
        serializer = CustomerBalanceSerializer(customers, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)


class CustomerDetailView(APIView):
    """
    GET /customers/<customer_id>

    View a loan account by internal id. Balance fields are not included.
    """

    ledger_class = LedgerService

    def get(self, request, customer_id):
        """Handle viewing a single customer."""
        customer = self.ledger_class().get_customer(customer_id)
        serializer = CustomerSerializer(customer)
        return Response(serializer.data, status=status.HTTP_200_OK)


class CustomerByAccountView(APIView):
    """
    GET /customers/account/<account_number>

    View a loan account by account number, with this month's EMI balance.
    """

    ledger_class = LedgerService

    def get(self, request, account_number):
        """Handle viewing a customer by account number."""
        customer = self.ledger_class().get_by_account_number(account_number)
        serializer = CustomerBalanceSerializer(customer)
        return Response(serializer.data, status=status.HTTP_200_OK)
