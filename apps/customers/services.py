"""
Customer service layer.

Holds the customer directory and the ledger query service that
computes each account's EMI balance for the current month.
Views delegate to this module; no business logic in views.
"""

import logging
from datetime import datetime
from typing import List, Optional

from django.utils import timezone

from apps.core.exceptions import (
    AccountNotFoundError,
    CustomerNotFoundError,
    store_unavailable_on_db_error,
)
from apps.core.utils import calculate_remaining_emi, emi_status, to_decimal
from apps.customers.models import Customer
from apps.payments.store import PaymentStore

logger = logging.getLogger(__name__)

CUSTOMER_FIELDS = (
    'id',
    'account_number',
    'issue_date',
    'interest_rate',
    'tenure',
    'emi_due',
)


class CustomerDirectory:
    """
    Read-only access to the ``customers`` table.

    Args:
        using: Database alias to run queries against (default: 'default').
    """

    def __init__(self, using: str = 'default'):
        self.using = using

    def _customers(self):
        return Customer.objects.using(self.using)

    def find_all(self) -> List[Customer]:
        return list(self._customers().order_by('id'))

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        return self._customers().filter(pk=customer_id).first()

    def find_by_account_number(self, account_number: str) -> Optional[Customer]:
        return self._customers().filter(account_number=account_number).first()


def customer_to_dict(customer: Customer) -> dict:
    """Public fields of a customer record."""
    return {field: getattr(customer, field) for field in CUSTOMER_FIELDS}


class LedgerService:
    """
    Service for customer lookups and monthly EMI balances.

    Args:
        directory: Customer directory (default: CustomerDirectory()).
        payments: Payment store used for monthly totals (default: PaymentStore()).
    """

    def __init__(
        self,
        directory: Optional[CustomerDirectory] = None,
        payments: Optional[PaymentStore] = None,
    ):
        self.directory = directory or CustomerDirectory()
        self.payments = payments or PaymentStore()

    def compute_balance(
        self,
        customer: Customer,
        now: Optional[datetime] = None,
    ) -> dict:
        """
        Compute a customer's EMI balance for the month containing ``now``.

        Only payments with status 'completed' dated within that calendar
        month count. The remaining EMI is clamped at zero.

        Args:
            customer: The Customer instance.
            now: Reference time for the month boundary (default: now).

        Returns:
            Customer fields plus total_paid_this_month, remaining_emi
            and emi_status.
        """
        total_paid = to_decimal(
            self.payments.sum_completed_this_month(customer.pk, now)
        )
        remaining = calculate_remaining_emi(customer.emi_due, total_paid)

        return {
            **customer_to_dict(customer),
            'total_paid_this_month': total_paid,
            'remaining_emi': remaining,
            'emi_status': emi_status(remaining),
        }

    def list_customers(self, now: Optional[datetime] = None) -> List[dict]:
        """Every customer, ordered by id, each with its monthly balance."""
        now = now or timezone.now()
        with store_unavailable_on_db_error('Error fetching customer data'):
            customers = self.directory.find_all()
            return [self.compute_balance(customer, now) for customer in customers]

    def get_customer(self, customer_id) -> dict:
        """
        Retrieve a customer by internal id, without balance fields.

        Raises:
            CustomerNotFoundError: If the id is not an integer or no customer has it.
        """
        try:
            customer_id = int(customer_id)
        except (TypeError, ValueError):
            raise CustomerNotFoundError()

        with store_unavailable_on_db_error('Error fetching customer data'):
            customer = self.directory.find_by_id(customer_id)

        if customer is None:
            raise CustomerNotFoundError()

        return customer_to_dict(customer)

    def get_by_account_number(
        self,
        account_number: str,
        now: Optional[datetime] = None,
    ) -> dict:
        """
        Retrieve a customer by account number, with balance fields.

        Raises:
            AccountNotFoundError: If the account number is unknown.
        """
        with store_unavailable_on_db_error('Error fetching customer data'):
            customer = self.directory.find_by_account_number(account_number)
            if customer is None:
                raise AccountNotFoundError()

            result = self.compute_balance(customer, now)

        logger.debug(
            "Account %s balance: paid=%s remaining=%s status=%s",
            account_number,
            result['total_paid_this_month'],
            result['remaining_emi'],
            result['emi_status'],
        )
        return result
