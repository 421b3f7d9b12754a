"""
Tests for the monthly EMI balance computation.
"""

from datetime import date, datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from apps.core.utils import (
    calculate_remaining_emi,
    emi_status,
    month_bounds,
    parse_payment_timestamp,
)
from apps.customers.models import Customer
from apps.customers.services import LedgerService
from apps.payments.models import Payment


class RemainingEMITests(TestCase):
    """Test the clamped remaining-EMI helper."""

    def test_nothing_paid(self):
        self.assertEqual(
            calculate_remaining_emi(Decimal('5000.00'), Decimal('0')),
            Decimal('5000.00'),
        )

    def test_partial_payment(self):
        self.assertEqual(
            calculate_remaining_emi(Decimal('5000.00'), Decimal('3000.00')),
            Decimal('2000.00'),
        )

    def test_overpayment_clamped_to_zero(self):
        """Paying more than due never yields a negative balance."""
        self.assertEqual(
            calculate_remaining_emi(Decimal('5000.00'), Decimal('6000.00')),
            Decimal('0.00'),
        )

    def test_rounded_to_two_places(self):
        remaining = calculate_remaining_emi(Decimal('1000.005'), Decimal('0'))
        self.assertEqual(remaining, Decimal('1000.01'))

    def test_accepts_int_float_and_none(self):
        self.assertEqual(calculate_remaining_emi(1000, 250.5), Decimal('749.50'))
        self.assertEqual(calculate_remaining_emi(1000, None), Decimal('1000.00'))

    def test_status(self):
        self.assertEqual(emi_status(Decimal('0')), 'paid')
        self.assertEqual(emi_status(Decimal('0.01')), 'pending')


class MonthBoundsTests(TestCase):
    """Month boundaries are computed in the configured time zone."""

    def test_mid_month(self):
        now = timezone.make_aware(datetime(2024, 3, 15, 10, 0))
        start, end = month_bounds(now)
        self.assertEqual(start, timezone.make_aware(datetime(2024, 3, 1)))
        self.assertEqual(end, timezone.make_aware(datetime(2024, 4, 1)))

    def test_december_rolls_into_next_year(self):
        now = timezone.make_aware(datetime(2024, 12, 31, 23, 59))
        start, end = month_bounds(now)
        self.assertEqual(start, timezone.make_aware(datetime(2024, 12, 1)))
        self.assertEqual(end, timezone.make_aware(datetime(2025, 1, 1)))

    def test_naive_reference_treated_as_local(self):
        start, _ = month_bounds(datetime(2024, 7, 4, 12, 0))
        self.assertEqual(start, timezone.make_aware(datetime(2024, 7, 1)))


class ParsePaymentTimestampTests(TestCase):
    """Client timestamps are parsed and truncated to whole seconds."""

    def test_iso_with_zone(self):
        parsed = parse_payment_timestamp('2024-03-15T10:20:30.123Z')
        self.assertEqual(
            parsed,
            datetime(2024, 3, 15, 10, 20, 30, tzinfo=dt_timezone.utc),
        )

    def test_free_form_date(self):
        parsed = parse_payment_timestamp('15 March 2024 10:20')
        self.assertEqual(
            parsed,
            timezone.make_aware(datetime(2024, 3, 15, 10, 20)),
        )

    def test_datetime_input(self):
        value = datetime(2024, 3, 15, 10, 20, 30, 999999, tzinfo=dt_timezone.utc)
        self.assertEqual(parse_payment_timestamp(value).microsecond, 0)

    def test_invalid_raises_value_error(self):
        with self.assertRaises(ValueError):
            parse_payment_timestamp('not a date')


class ComputeBalanceTests(TestCase):
    """LedgerService.compute_balance against real payment rows."""

    def setUp(self):
        self.customer = Customer.objects.create(
            account_number='AC100',
            issue_date=date(2023, 1, 10),
            interest_rate=Decimal('10.50'),
            tenure=24,
            emi_due=Decimal('5000.00'),
        )
        self.ledger = LedgerService()
        self.now = timezone.now()
        self.month_start, self.month_end = month_bounds(self.now)

    def _pay(self, amount, when=None, status='completed'):
        return Payment.objects.create(
            customer=self.customer,
            account_number=self.customer.account_number,
            payment_amount=Decimal(amount),
            payment_date=when or self.now,
            status=status,
        )

    def test_no_payments(self):
        """No payments → nothing paid, full EMI remaining, pending."""
        result = self.ledger.compute_balance(self.customer, self.now)
        self.assertEqual(result['total_paid_this_month'], Decimal('0'))
        self.assertEqual(result['remaining_emi'], Decimal('5000.00'))
        self.assertEqual(result['emi_status'], 'pending')

    def test_partial_payment(self):
        self._pay('3000.00')
        result = self.ledger.compute_balance(self.customer, self.now)
        self.assertEqual(result['total_paid_this_month'], Decimal('3000.00'))
        self.assertEqual(result['remaining_emi'], Decimal('2000.00'))
        self.assertEqual(result['emi_status'], 'pending')

    def test_overpaid(self):
        self._pay('3000.00')
        self._pay('3000.00')
        result = self.ledger.compute_balance(self.customer, self.now)
        self.assertEqual(result['total_paid_this_month'], Decimal('6000.00'))
        self.assertEqual(result['remaining_emi'], Decimal('0.00'))
        self.assertEqual(result['emi_status'], 'paid')

    def test_exact_payment_is_paid(self):
        self._pay('5000.00')
        result = self.ledger.compute_balance(self.customer, self.now)
        self.assertEqual(result['remaining_emi'], Decimal('0.00'))
        self.assertEqual(result['emi_status'], 'paid')

    def test_non_completed_payments_ignored(self):
        self._pay('5000.00', status='pending')
        self._pay('5000.00', status='failed')
        result = self.ledger.compute_balance(self.customer, self.now)
        self.assertEqual(result['total_paid_this_month'], Decimal('0'))
        self.assertEqual(result['emi_status'], 'pending')

    def test_payments_outside_month_ignored(self):
        self._pay('4000.00', when=self.month_start - timedelta(seconds=1))
        self._pay('4000.00', when=self.month_end)
        self._pay('1000.00', when=self.month_start)
        result = self.ledger.compute_balance(self.customer, self.now)
        self.assertEqual(result['total_paid_this_month'], Decimal('1000.00'))
        self.assertEqual(result['remaining_emi'], Decimal('4000.00'))

    def test_same_month_previous_year_ignored(self):
        self._pay('5000.00', when=self.now - timedelta(days=366))
        result = self.ledger.compute_balance(self.customer, self.now)
        self.assertEqual(result['total_paid_this_month'], Decimal('0'))

    def test_other_customers_payments_ignored(self):
        other = Customer.objects.create(
            account_number='AC200',
            issue_date=date(2023, 1, 10),
            interest_rate=Decimal('9.00'),
            tenure=12,
            emi_due=Decimal('1000.00'),
        )
        Payment.objects.create(
            customer=other,
            account_number='AC200',
            payment_amount=Decimal('1000.00'),
            payment_date=self.now,
        )
        result = self.ledger.compute_balance(self.customer, self.now)
        self.assertEqual(result['total_paid_this_month'], Decimal('0'))

    def test_zero_emi_is_paid(self):
        self.customer.emi_due = Decimal('0.00')
        result = self.ledger.compute_balance(self.customer, self.now)
        self.assertEqual(result['remaining_emi'], Decimal('0.00'))
        self.assertEqual(result['emi_status'], 'paid')

    def test_result_includes_customer_fields(self):
        result = self.ledger.compute_balance(self.customer, self.now)
        self.assertEqual(result['id'], self.customer.pk)
        self.assertEqual(result['account_number'], 'AC100')
        self.assertEqual(result['issue_date'], date(2023, 1, 10))
        self.assertEqual(result['interest_rate'], Decimal('10.50'))
        self.assertEqual(result['tenure'], 24)
        self.assertEqual(result['emi_due'], Decimal('5000.00'))

    def test_reference_month_is_respected(self):
        """Balance for a past month counts that month's payments only."""
        last_month = self.month_start - timedelta(days=1)
        self._pay('2500.00', when=last_month)
        result = self.ledger.compute_balance(self.customer, last_month)
        self.assertEqual(result['total_paid_this_month'], Decimal('2500.00'))
        self.assertEqual(result['remaining_emi'], Decimal('2500.00'))
