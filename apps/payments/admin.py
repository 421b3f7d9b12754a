from django.contrib import admin

from apps.payments.models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'customer', 'account_number', 'payment_amount',
        'payment_date', 'status', 'created_at',
    )
    list_filter = ('status', 'payment_date')
    search_fields = ('account_number',)
    readonly_fields = ('created_at',)
    raw_id_fields = ('customer',)
