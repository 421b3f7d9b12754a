"""
Payment service layer.

Records payments against existing loan accounts and serves
payment history. Views delegate to this service.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union

from apps.core.exceptions import (
    AccountNotFoundError,
    PaymentValidationError,
    store_unavailable_on_db_error,
)
from apps.core.utils import current_payment_timestamp, parse_payment_timestamp
from apps.customers.services import CustomerDirectory
from apps.payments.models import STATUS_COMPLETED, Payment
from apps.payments.store import PaymentStore

logger = logging.getLogger(__name__)


class PaymentRecordingService:
    """
    Service for recording payments and reading payment history.

    Args:
        directory: Customer directory used for the account existence check.
        payments: Payment store used for insert and read-back.
    """

    def __init__(
        self,
        directory: Optional[CustomerDirectory] = None,
        payments: Optional[PaymentStore] = None,
    ):
        self.directory = directory or CustomerDirectory()
        self.payments = payments or PaymentStore()

    def record_payment(
        self,
        account_number: str,
        payment_amount: Decimal,
        payment_date: Union[datetime, str, None] = None,
        status: Optional[str] = None,
    ) -> Payment:
        """
        Record a payment against an existing account.

        Steps:
            1. Check required input (no store access on failure)
            2. Resolve the account number to a customer
            3. Insert the payment with a whole-second timestamp
            4. Re-read the inserted row and return it

        Args:
            account_number: Account being paid.
            payment_amount: Amount paid.
            payment_date: Optional timestamp (datetime or parseable string).
            status: Optional status, 'completed' when omitted.

        Returns:
            The stored Payment, including store-assigned fields.

        Raises:
            PaymentValidationError: Missing account number or amount.
            AccountNotFoundError: Unknown account number.
            StoreUnavailableError: The database call failed.
        """
        if not account_number or not payment_amount:
            raise PaymentValidationError()

        if payment_date:
            try:
                timestamp = parse_payment_timestamp(payment_date)
            except ValueError as exc:
                raise PaymentValidationError(detail=str(exc)) from exc
        else:
            timestamp = current_payment_timestamp()

        status = status or STATUS_COMPLETED

        with store_unavailable_on_db_error('Error processing payment'):
            customer = self.directory.find_by_account_number(account_number)
            if customer is None:
                logger.info(
                    "Payment rejected: account %s not found", account_number
                )
                raise AccountNotFoundError()

            payment_id = self.payments.insert(
                customer_id=customer.pk,
                account_number=account_number,
                amount=Decimal(str(payment_amount)),
                timestamp=timestamp,
                status=status,
            )
            payment = self.payments.find_by_id(payment_id)

        logger.info(
            "Payment #%d recorded for account %s: amount=%s, date=%s, status=%s",
            payment.pk,
            account_number,
            payment.payment_amount,
            payment.payment_date.isoformat(),
            payment.status,
        )

        return payment

    def get_payment_history(self, account_number: str) -> List[Payment]:
        """
        Retrieve all payments for an account, newest first.

        Unknown accounts simply have no history; this is not an error.
        """
        with store_unavailable_on_db_error('Error fetching payment history'):
            return self.payments.find_by_account_number(account_number)
