"""
Management command to load customers and payments from Excel files.
"""

from django.core.management.base import BaseCommand

from apps.core.tasks import ingest_customer_data, ingest_payment_data


class Command(BaseCommand):
    help = 'Ingest customer and payment data from Excel files'

    def add_arguments(self, parser):
        parser.add_argument(
            '--customer-file',
            type=str,
            default=None,
            help='Path to customer data Excel file (default: DATA_DIR/customer_data.xlsx)',
        )
        parser.add_argument(
            '--payment-file',
            type=str,
            default=None,
            help='Path to payment data Excel file (default: DATA_DIR/payment_data.xlsx)',
        )
        parser.add_argument(
            '--sync',
            action='store_true',
            help='Run synchronously instead of via Celery',
        )

    def handle(self, *args, **options):
        # Customers first: payments are matched against existing accounts
        jobs = (
            ('Customer', ingest_customer_data, options['customer_file']),
            ('Payment', ingest_payment_data, options['payment_file']),
        )

        for label, task, file_path in jobs:
            if options['sync']:
                result = task.apply(args=(file_path,)).get()
                style = self.style.SUCCESS if result['status'] == 'success' else self.style.WARNING
                self.stdout.write(style(f'{label} ingestion complete: {result}'))
            else:
                queued = task.delay(file_path)
                self.stdout.write(
                    self.style.SUCCESS(f'{label} ingestion task queued: {queued.id}')
                )
