from django.contrib import admin

from apps.customers.models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'account_number', 'issue_date',
        'interest_rate', 'tenure', 'emi_due', 'created_at',
    )
    list_filter = ('issue_date', 'tenure')
    search_fields = ('account_number',)
    readonly_fields = ('created_at', 'updated_at')
