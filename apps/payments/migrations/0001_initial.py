import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('customers', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Payment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('account_number', models.CharField(db_index=True, help_text="Copy of the customer's account number at payment time.", max_length=50)),
                ('payment_amount', models.DecimalField(decimal_places=2, help_text='Amount paid.', max_digits=12)),
                ('payment_date', models.DateTimeField(default=django.utils.timezone.now, help_text='When the payment was made.')),
                ('status', models.CharField(default='completed', help_text="Payment status; only 'completed' counts towards the EMI.", max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('customer', models.ForeignKey(help_text='The loan account this payment is made against.', on_delete=django.db.models.deletion.PROTECT, related_name='payments', to='customers.customer')),
            ],
            options={
                'db_table': 'payments',
                'ordering': ['-payment_date'],
                'indexes': [models.Index(fields=['customer', 'status', 'payment_date'], name='idx_payment_customer_month')],
            },
        ),
    ]
