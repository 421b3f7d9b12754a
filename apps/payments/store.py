"""
Payment store: the append-only payment log behind the services.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from django.db.models import Sum

from apps.core.utils import month_bounds
from apps.payments.models import STATUS_COMPLETED, Payment


class PaymentStore:
    """
    Read/insert access to the ``payments`` table.

    Args:
        using: Database alias to run queries against (default: 'default').
    """

    def __init__(self, using: str = 'default'):
        self.using = using

    def _payments(self):
        return Payment.objects.using(self.using)

    def sum_completed_this_month(
        self,
        customer_id: int,
        now: Optional[datetime] = None,
    ) -> Decimal:
        """Sum of completed payments for the calendar month containing ``now``."""
        start, end = month_bounds(now)
        total = self._payments().filter(
            customer_id=customer_id,
            status=STATUS_COMPLETED,
            payment_date__gte=start,
            payment_date__lt=end,
        ).aggregate(total=Sum('payment_amount'))['total']
        return total or Decimal('0')

    def insert(
        self,
        customer_id: int,
        account_number: str,
        amount: Decimal,
        timestamp: datetime,
        status: str,
    ) -> int:
        """Insert a payment row and return its new id."""
        payment = self._payments().create(
            customer_id=customer_id,
            account_number=account_number,
            payment_amount=amount,
            payment_date=timestamp,
            status=status,
        )
        return payment.pk

    def find_by_id(self, payment_id: int) -> Optional[Payment]:
        return self._payments().filter(pk=payment_id).first()

    def find_by_account_number(self, account_number: str) -> List[Payment]:
        """All payments for an account, newest first."""
        return list(
            self._payments()
            .filter(account_number=account_number)
            .order_by('-payment_date', '-id')
        )
