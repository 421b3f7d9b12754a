"""
Customer (loan account) model for the Payment Collection API.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Customer(models.Model):
    """
    Represents a borrower's loan account.

    Holds the loan terms and the contractual monthly installment
    (EMI) that payments are collected against.
    """

    account_number = models.CharField(
        max_length=50,
        unique=True,
        help_text="Human-facing loan account number (case preserving)."
    )
    issue_date = models.DateField(
        help_text="Date the loan was issued."
    )
    interest_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))],
        help_text="Annual interest rate (percentage).",
    )
    tenure = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Loan tenure in months."
    )
    emi_due = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))],
        help_text="Contractual monthly installment.",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customers'
        ordering = ['id']

    def __str__(self):
        return f"{self.account_number} (ID: {self.pk})"
