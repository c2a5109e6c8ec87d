"""
Serializers for rental API requests and responses.

Request Serializers:
    RentalCreateSerializer: POST /api/v1/rentals/

Response Serializers:
    RentalSerializer: Rental with its items
    RentalSummarySerializer: Rental without items (embedded in payment responses)
"""

from rest_framework import serializers

from rentals.models import Rental, RentalItem


class RentalItemSerializer(serializers.ModelSerializer):
    """Rental line with the catalog item's name and size."""

    clothing_item_name = serializers.CharField(source="clothing_item.name", read_only=True)
    clothing_item_size = serializers.CharField(source="clothing_item.size", read_only=True)

    class Meta:
        model = RentalItem
        fields = [
            "id",
            "clothing_item",
            "clothing_item_name",
            "clothing_item_size",
            "quantity",
            "price_per_day",
            "subtotal",
        ]
        read_only_fields = fields


class RentalSummarySerializer(serializers.ModelSerializer):
    """Rental header fields, without items."""

    is_paid = serializers.BooleanField(read_only=True)
    is_confirmed = serializers.BooleanField(read_only=True)

    class Meta:
        model = Rental
        fields = [
            "id",
            "user",
            "rental_date",
            "return_date",
            "total_amount",
            "status",
            "notes",
            "payment_method",
            "payment_status",
            "payment_reference",
            "is_paid",
            "is_confirmed",
            "confirmed_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class RentalSerializer(RentalSummarySerializer):
    """Rental with its items."""

    items = RentalItemSerializer(many=True, read_only=True)

    class Meta(RentalSummarySerializer.Meta):
        fields = RentalSummarySerializer.Meta.fields + ["items"]
        read_only_fields = fields


class RentalLineSerializer(serializers.Serializer):
    clothing_item_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1, default=1)


class RentalCreateSerializer(serializers.Serializer):
    """
    Validates a rental creation request.

    Example payload:
        {
            "rental_date": "2025-01-01",
            "return_date": "2025-01-03",
            "notes": "Wedding on Saturday",
            "items": [{"clothing_item_id": 4, "quantity": 2}]
        }
    """

    rental_date = serializers.DateField()
    return_date = serializers.DateField()
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)
    items = RentalLineSerializer(many=True, allow_empty=False)

    def validate(self, attrs):
        if attrs["return_date"] <= attrs["rental_date"]:
            raise serializers.ValidationError(
                {"return_date": ["Return date must be after the rental date."]}
            )
        return attrs
