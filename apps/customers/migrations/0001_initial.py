from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Customer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('account_number', models.CharField(help_text='Human-facing loan account number (case preserving).', max_length=50, unique=True)),
                ('issue_date', models.DateField(help_text='Date the loan was issued.')),
                ('interest_rate', models.DecimalField(decimal_places=2, help_text='Annual interest rate (percentage).', max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('tenure', models.PositiveIntegerField(help_text='Loan tenure in months.', validators=[django.core.validators.MinValueValidator(1)])),
                ('emi_due', models.DecimalField(decimal_places=2, help_text='Contractual monthly installment.', max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'customers',
                'ordering': ['id'],
            },
        ),
    ]
