"""
Payment serializers for the Payment Collection API.
"""

from decimal import Decimal, InvalidOperation

from rest_framework import serializers

from apps.core.exceptions import PaymentValidationError
from apps.core.utils import parse_payment_timestamp


def _is_missing(value):
    return value is None or not str(value).strip()


def _is_missing_amount(value):
    """Absent, blank or zero amounts count as missing."""
    if _is_missing(value):
        return True
    try:
        return Decimal(str(value).strip()) == 0
    except InvalidOperation:
        return False


class MakePaymentSerializer(serializers.Serializer):
    """
    Serializer for payment submission request.

    Fields are declared optional so that a missing account number or
    amount yields the single 'required' message instead of per-field errors.
    """

    account_number = serializers.CharField(
        max_length=50,
        required=False,
        allow_blank=True,
        allow_null=True,
        help_text="Loan account number to pay against.",
    )
    payment_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        required=False,
        allow_null=True,
        help_text="Amount being paid.",
    )
    payment_date = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        help_text="When the payment was made (defaults to now).",
    )
    status = serializers.CharField(
        max_length=20,
        required=False,
        allow_blank=True,
        allow_null=True,
        help_text="Payment status (defaults to 'completed').",
    )

    def to_internal_value(self, data):
        """Reject missing account number or amount before any field validation."""
        if hasattr(data, 'get') and (
            _is_missing(data.get('account_number'))
            or _is_missing_amount(data.get('payment_amount'))
        ):
            raise PaymentValidationError()
        return super().to_internal_value(data)

    def validate_payment_amount(self, value):
        """Reject negative amounts."""
        if value is not None and value <= Decimal('0'):
            raise serializers.ValidationError(
                "Payment amount must be greater than zero."
            )
        return value

    def validate_payment_date(self, value):
        """Parse any dateutil-readable timestamp."""
        if not value:
            return None
        try:
            return parse_payment_timestamp(value)
        except ValueError:
            raise serializers.ValidationError(
                "Payment date is not a valid date/time."
            )


class PaymentSerializer(serializers.Serializer):
    """Serializer for a stored payment record."""

    id = serializers.IntegerField()
    customer_id = serializers.IntegerField()
    account_number = serializers.CharField()
    payment_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    payment_date = serializers.DateTimeField()
    status = serializers.CharField()
    created_at = serializers.DateTimeField()


class MakePaymentResponseSerializer(serializers.Serializer):
    """Serializer for payment submission response."""

    message = serializers.CharField()
    payment = PaymentSerializer()
