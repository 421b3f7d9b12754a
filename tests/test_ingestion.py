"""
Tests for the data ingestion Celery tasks and management command.

Tasks are run with task.apply(), which executes them synchronously
in the test environment.
"""

import os
import tempfile
from datetime import date
from decimal import Decimal
from io import StringIO

import pandas as pd
from django.core.management import call_command
from django.test import TestCase, override_settings

from apps.core.tasks import ingest_customer_data, ingest_payment_data
from apps.customers.models import Customer
from apps.payments.models import Payment


def write_sheet(directory, name, data):
    path = os.path.join(directory, name)
    pd.DataFrame(data).to_excel(path, index=False)
    return path


class CustomerIngestionTests(TestCase):
    """Test cases for customer data ingestion."""

    def setUp(self):
        """Create a temporary Excel file for testing."""
        self.temp_dir = tempfile.mkdtemp()
        write_sheet(self.temp_dir, 'customer_data.xlsx', {
            'Account Number': ['AC100', 'AC200', 'AC300'],
            'Issue Date': ['2023-01-15', '2023-06-01', '2024-02-10'],
            'Interest Rate': [10.5, 12.0, 9.75],
            'Tenure': [24, 36, 12],
            'EMI Due': [5000, 3200.5, 1500],
        })

    def test_ingest_customer_data(self):
        """Test successful customer data ingestion."""
        with override_settings(DATA_DIR=self.temp_dir):
            result = ingest_customer_data.apply().get()

        self.assertEqual(result['status'], 'success')
        self.assertEqual(result['total_rows'], 3)
        self.assertEqual(result['created'], 3)
        self.assertEqual(result['errors'], 0)

        self.assertEqual(Customer.objects.count(), 3)
        customer = Customer.objects.get(account_number='AC200')
        self.assertEqual(customer.issue_date, date(2023, 6, 1))
        self.assertEqual(customer.interest_rate, Decimal('12.00'))
        self.assertEqual(customer.tenure, 36)
        self.assertEqual(customer.emi_due, Decimal('3200.50'))

    def test_ingest_idempotent(self):
        """Running ingestion twice doesn't create duplicates."""
        with override_settings(DATA_DIR=self.temp_dir):
            ingest_customer_data.apply().get()
            result = ingest_customer_data.apply().get()

        self.assertEqual(result['status'], 'success')
        self.assertEqual(Customer.objects.count(), 3)
        self.assertEqual(result['existing'], 3)
        self.assertEqual(result['created'], 0)

    def test_bad_rows_skipped(self):
        path = write_sheet(self.temp_dir, 'bad_customers.xlsx', {
            'account_number': ['AC900', None, 'AC901'],
            'issue_date': ['2023-01-01', '2023-01-01', 'not a date'],
            'interest_rate': [10, 10, 10],
            'tenure': [12, 12, 12],
            'emi_due': [100, 100, 100],
        })
        result = ingest_customer_data.apply(args=(path,)).get()

        self.assertEqual(result['created'], 1)
        self.assertEqual(result['errors'], 2)
        self.assertTrue(Customer.objects.filter(account_number='AC900').exists())

    def test_missing_file(self):
        """Test graceful handling of missing file."""
        with override_settings(DATA_DIR='/nonexistent/path'):
            result = ingest_customer_data.apply().get()
        self.assertEqual(result['status'], 'error')


class PaymentIngestionTests(TestCase):
    """Test cases for payment data ingestion."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.customer = Customer.objects.create(
            account_number='AC100',
            issue_date=date(2023, 1, 15),
            interest_rate=Decimal('10.50'),
            tenure=24,
            emi_due=Decimal('5000.00'),
        )
        write_sheet(self.temp_dir, 'payment_data.xlsx', {
            'account_number': ['AC100', 'AC100'],
            'payment_amount': [5000, 2500.25],
            'payment_date': ['2024-01-05 10:00:00', '2024-02-05 11:30:00'],
            'status': ['completed', None],
        })

    def test_ingest_payment_data(self):
        with override_settings(DATA_DIR=self.temp_dir):
            result = ingest_payment_data.apply().get()

        self.assertEqual(result['status'], 'success')
        self.assertEqual(result['total_rows'], 2)
        self.assertEqual(result['created'], 2)
        self.assertEqual(result['errors'], 0)

        payments = list(Payment.objects.order_by('payment_date'))
        self.assertEqual(len(payments), 2)
        self.assertEqual(payments[0].customer_id, self.customer.pk)
        self.assertEqual(payments[1].payment_amount, Decimal('2500.25'))
        self.assertEqual(payments[1].status, 'completed')

    def test_payment_ingestion_idempotent(self):
        with override_settings(DATA_DIR=self.temp_dir):
            ingest_payment_data.apply().get()
            result = ingest_payment_data.apply().get()

        self.assertEqual(Payment.objects.count(), 2)
        self.assertEqual(result['existing'], 2)

    def test_unknown_account_skipped(self):
        """Payments for accounts that don't exist are skipped."""
        path = write_sheet(self.temp_dir, 'orphans.xlsx', {
            'account_number': ['AC999', 'AC100'],
            'payment_amount': [100, -5],
            'payment_date': ['2024-01-01', '2024-01-01'],
        })
        result = ingest_payment_data.apply(args=(path,)).get()

        self.assertEqual(result['errors'], 2)
        self.assertEqual(Payment.objects.count(), 0)


class IngestDataCommandTests(TestCase):
    """Test the ingest_data management command."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.customer_file = write_sheet(self.temp_dir, 'customers.xlsx', {
            'account_number': ['AC100'],
            'issue_date': ['2023-01-15'],
            'interest_rate': [10.5],
            'tenure': [24],
            'emi_due': [5000],
        })
        self.payment_file = write_sheet(self.temp_dir, 'payments.xlsx', {
            'account_number': ['AC100'],
            'payment_amount': [1000],
            'payment_date': ['2024-01-05'],
        })

    def test_sync_ingestion(self):
        out = StringIO()
        call_command(
            'ingest_data',
            '--sync',
            customer_file=self.customer_file,
            payment_file=self.payment_file,
            stdout=out,
        )

        self.assertEqual(Customer.objects.count(), 1)
        self.assertEqual(Payment.objects.count(), 1)
        self.assertIn('Customer ingestion complete', out.getvalue())
        self.assertIn('Payment ingestion complete', out.getvalue())
