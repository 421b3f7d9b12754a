"""
Customer serializers for the Payment Collection API.
"""

from rest_framework import serializers


class CustomerSerializer(serializers.Serializer):
    """Loan account details, without balance information."""

    id = serializers.IntegerField()
    account_number = serializers.CharField()
    issue_date = serializers.DateField()
    interest_rate = serializers.DecimalField(max_digits=5, decimal_places=2)
    tenure = serializers.IntegerField()
    emi_due = serializers.DecimalField(max_digits=12, decimal_places=2)


class CustomerBalanceSerializer(CustomerSerializer):
    """Loan account details with this month's EMI balance."""

    total_paid_this_month = serializers.DecimalField(max_digits=14, decimal_places=2)
    remaining_emi = serializers.DecimalField(max_digits=12, decimal_places=2)
    emi_status = serializers.ChoiceField(choices=['paid', 'pending'])
