"""
Celery tasks for data ingestion.

Reads customer_data.xlsx and payment_data.xlsx using pandas and
bulk loads them into the database. Existing rows are never modified,
so running a task twice is safe.
"""

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path

import pandas as pd
from celery import shared_task
from django.conf import settings
from django.db import IntegrityError
from django.utils import timezone

logger = logging.getLogger(__name__)

CUSTOMER_FILE = 'customer_data.xlsx'
PAYMENT_FILE = 'payment_data.xlsx'


def _resolve_path(file_path, default_name):
    if file_path:
        return Path(file_path)
    return Path(settings.DATA_DIR) / default_name


def _read_sheet(file_path):
    """Read an Excel sheet and normalize its column names."""
    df = pd.read_excel(file_path)
    df.columns = [str(col).strip().lower().replace(' ', '_') for col in df.columns]
    return df


def _decimal(value):
    if pd.isna(value):
        raise ValueError("missing numeric value")
    return Decimal(str(value)).quantize(Decimal('0.01'))


@shared_task(
    bind=True,
    name='core.ingest_customer_data',
    max_retries=3,
    default_retry_delay=10,
)
def ingest_customer_data(self, file_path=None):
    """
    Ingest loan accounts from customer_data.xlsx.

    Expected columns: account_number, issue_date, interest_rate,
    tenure, emi_due. Accounts that already exist are left untouched.
    """
    from apps.customers.models import Customer

    file_path = _resolve_path(file_path, CUSTOMER_FILE)

    if not file_path.exists():
        logger.error("Customer data file not found: %s", file_path)
        return {'status': 'error', 'message': f'File not found: {file_path}'}

    try:
        logger.info("Starting customer data ingestion from %s", file_path)

        df = _read_sheet(file_path)
        logger.info("Read %d rows from %s", len(df), file_path.name)

        created_count = 0
        existing_count = 0
        error_count = 0

        for index, row in df.iterrows():
            try:
                account_number = row.get('account_number')
                if pd.isna(account_number) or not str(account_number).strip():
                    logger.warning(
                        "Row %d: missing account_number, skipping", index
                    )
                    error_count += 1
                    continue

                issue_date = pd.to_datetime(row.get('issue_date'), errors='coerce')
                if pd.isna(issue_date):
                    logger.warning("Row %d: invalid issue_date, skipping", index)
                    error_count += 1
                    continue

                _, created = Customer.objects.get_or_create(
                    account_number=str(account_number).strip(),
                    defaults={
                        'issue_date': issue_date.date(),
                        'interest_rate': _decimal(row.get('interest_rate')),
                        'tenure': int(row.get('tenure')),
                        'emi_due': _decimal(row.get('emi_due')),
                    },
                )

                if created:
                    created_count += 1
                else:
                    existing_count += 1

            except (ValueError, TypeError, InvalidOperation, IntegrityError) as e:
                logger.warning("Row %d: failed to process: %s", index, e)
                error_count += 1
                continue

        result = {
            'status': 'success',
            'total_rows': len(df),
            'created': created_count,
            'existing': existing_count,
            'errors': error_count,
        }
        logger.info("Customer data ingestion complete: %s", result)
        return result

    except Exception as exc:
        logger.exception("Customer data ingestion failed")
        raise self.retry(exc=exc)


@shared_task(
    bind=True,
    name='core.ingest_payment_data',
    max_retries=3,
    default_retry_delay=10,
)
def ingest_payment_data(self, file_path=None):
    """
    Ingest historical payments from payment_data.xlsx.

    Expected columns: account_number, payment_amount, payment_date and
    optionally status. A row matching an existing payment on account,
    date and amount is not inserted again. Rows referencing unknown
    accounts are skipped.
    """
    from apps.customers.models import Customer
    from apps.payments.models import STATUS_COMPLETED, Payment

    file_path = _resolve_path(file_path, PAYMENT_FILE)

    if not file_path.exists():
        logger.error("Payment data file not found: %s", file_path)
        return {'status': 'error', 'message': f'File not found: {file_path}'}

    try:
        logger.info("Starting payment data ingestion from %s", file_path)

        df = _read_sheet(file_path)
        logger.info("Read %d rows from %s", len(df), file_path.name)

        # Account number → customer id, for the existence check
        customer_ids = dict(
            Customer.objects.values_list('account_number', 'pk')
        )

        created_count = 0
        existing_count = 0
        error_count = 0

        for index, row in df.iterrows():
            try:
                account_number = row.get('account_number')

                if pd.isna(account_number):
                    logger.warning(
                        "Row %d: missing account_number, skipping", index
                    )
                    error_count += 1
                    continue

                account_number = str(account_number).strip()
                customer_id = customer_ids.get(account_number)
                if customer_id is None:
                    logger.warning(
                        "Row %d: account %s not found, skipping",
                        index,
                        account_number,
                    )
                    error_count += 1
                    continue

                amount = _decimal(row.get('payment_amount'))
                if amount <= 0:
                    logger.warning("Row %d: non-positive amount, skipping", index)
                    error_count += 1
                    continue

                payment_date = pd.to_datetime(
                    row.get('payment_date'), errors='coerce'
                )
                if pd.isna(payment_date):
                    logger.warning("Row %d: invalid payment_date, skipping", index)
                    error_count += 1
                    continue

                payment_date = payment_date.to_pydatetime().replace(microsecond=0)
                if timezone.is_naive(payment_date):
                    payment_date = timezone.make_aware(payment_date)

                status = row.get('status')
                if pd.isna(status) or not str(status).strip():
                    status = STATUS_COMPLETED

                _, created = Payment.objects.get_or_create(
                    account_number=account_number,
                    payment_date=payment_date,
                    payment_amount=amount,
                    defaults={
                        'customer_id': customer_id,
                        'status': str(status).strip(),
                    },
                )

                if created:
                    created_count += 1
                else:
                    existing_count += 1

            except (ValueError, TypeError, InvalidOperation, IntegrityError) as e:
                logger.warning("Row %d: failed to process: %s", index, e)
                error_count += 1
                continue

        result = {
            'status': 'success',
            'total_rows': len(df),
            'created': created_count,
            'existing': existing_count,
            'errors': error_count,
        }
        logger.info("Payment data ingestion complete: %s", result)
        return result

    except Exception as exc:
        logger.exception("Payment data ingestion failed")
        raise self.retry(exc=exc)
