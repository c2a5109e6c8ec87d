"""
DRF serializers for rental payments.

Request Serializers:
    RecordPaymentSerializer: POST /api/v1/payments/
    CashPaymentCreateSerializer: POST /api/v1/payments/cash/
    CardPaymentSerializer: POST /api/v1/payments/card/
    CashPaymentConfirmSerializer: POST /api/v1/admin/payments/confirm-cash/{rental_id}/
    PaymentFailSerializer: POST /api/v1/admin/payments/fail/{rental_id}/

Response Serializers:
    PaymentSerializer: Payment snapshot
    PaymentStatusSerializer: Payment projection of a rental
    PendingCashPaymentSerializer: Pending cash payment with rental and customer

Amounts are validated here (numeric, >= 0) and again by the ledger.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework import serializers

from payments.models import Payment
from payments.state_machines import PaymentMethod
from rentals.serializers import RentalSummarySerializer

MONEY_FIELD_KWARGS = {
    "max_digits": 12,
    "decimal_places": 2,
    "min_value": 0,
}


# =============================================================================
# Response Serializers
# =============================================================================


class PaymentSerializer(serializers.ModelSerializer):
    """Payment snapshot."""

    class Meta:
        model = Payment
        fields = [
            "id",
            "rental",
            "amount",
            "method",
            "status",
            "transaction_reference",
            "stripe_payment_id",
            "payment_details",
            "paid_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PaymentStatusSerializer(serializers.Serializer):
    """Serializes a PaymentStatusView."""

    rental_id = serializers.IntegerField()
    payment_method = serializers.CharField()
    payment_status = serializers.CharField(allow_null=True)
    payment_reference = serializers.CharField(allow_null=True)
    is_paid = serializers.BooleanField()
    is_confirmed = serializers.BooleanField()
    payment = PaymentSerializer(allow_null=True)


class PaymentCustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = get_user_model()
        fields = ["id", "username", "email", "first_name", "last_name"]
        read_only_fields = fields


class PendingRentalSerializer(RentalSummarySerializer):
    user = PaymentCustomerSerializer(read_only=True)


class PendingCashPaymentSerializer(PaymentSerializer):
    """Pending cash payment joined with its rental and the rental's owner."""

    rental = PendingRentalSerializer(read_only=True)


# =============================================================================
# Request Serializers
# =============================================================================


class RecordPaymentSerializer(serializers.Serializer):
    """
    Record a payment settled outside the system.

    Example payload:
        {"rental_id": 7, "amount": "500.00", "method": "online",
         "transaction_reference": "BANK-2291"}
    """

    rental_id = serializers.IntegerField(min_value=1)
    amount = serializers.DecimalField(**MONEY_FIELD_KWARGS)
    method = serializers.ChoiceField(choices=PaymentMethod.choices)
    transaction_reference = serializers.CharField(
        max_length=255,
        required=False,
        allow_null=True,
        allow_blank=True,
    )


class CashPaymentCreateSerializer(serializers.Serializer):
    rental_id = serializers.IntegerField(min_value=1)
    amount = serializers.DecimalField(**MONEY_FIELD_KWARGS)


class CashPaymentConfirmSerializer(serializers.Serializer):
    amount_received = serializers.DecimalField(**MONEY_FIELD_KWARGS)
    notes = serializers.CharField(
        max_length=500,
        required=False,
        allow_null=True,
        allow_blank=True,
    )


class CardPaymentSerializer(serializers.Serializer):
    """
    Card payment already authorized by the gateway.

    stripe_payment_id is the gateway charge id; payment_intent_id becomes
    the payment's transaction reference.
    """

    rental_id = serializers.IntegerField(min_value=1)
    amount = serializers.DecimalField(**MONEY_FIELD_KWARGS)
    stripe_payment_id = serializers.CharField(max_length=255)
    payment_intent_id = serializers.CharField(max_length=255)


class PaymentFailSerializer(serializers.Serializer):
    reason = serializers.CharField(
        max_length=500,
        required=False,
        allow_null=True,
        allow_blank=True,
    )
