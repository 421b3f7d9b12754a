"""
Payment model for the Payment Collection API.
"""

from django.db import models
from django.utils import timezone

STATUS_COMPLETED = 'completed'


class Payment(models.Model):
    """
    A single payment made against a loan account.

    Payments form an append-only log: rows are created once and
    never updated or deleted.
    """

    customer = models.ForeignKey(
        'customers.Customer',
        on_delete=models.PROTECT,
        related_name='payments',
        db_index=True,
        help_text="The loan account this payment is made against."
    )
    account_number = models.CharField(
        max_length=50,
        db_index=True,
        help_text="Copy of the customer's account number at payment time."
    )
    payment_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Amount paid.",
    )
    payment_date = models.DateTimeField(
        default=timezone.now,
        help_text="When the payment was made."
    )
    status = models.CharField(
        max_length=20,
        default=STATUS_COMPLETED,
        help_text="Payment status; only 'completed' counts towards the EMI."
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'payments'
        ordering = ['-payment_date']
        indexes = [
            models.Index(
                fields=['customer', 'status', 'payment_date'],
                name='idx_payment_customer_month'
            ),
        ]

    def __str__(self):
        return (
            f"Payment #{self.pk} - Account: {self.account_number} "
            f"- Amount: {self.payment_amount}"
        )
