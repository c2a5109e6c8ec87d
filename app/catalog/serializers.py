"""
Serializers for the catalog API.

All serializers here are read-only; catalog writes go through the admin.
"""

from rest_framework import serializers

from catalog.models import Category, ClothingItem


class CategorySerializer(serializers.ModelSerializer):
    """Category list entry."""

    class Meta:
        model = Category
        fields = ["id", "name", "description"]
        read_only_fields = fields


class ClothingItemSerializer(serializers.ModelSerializer):
    """
    Clothing item with its category embedded.

    Money fields render as strings ("350.00").
    """

    category = CategorySerializer(read_only=True)
    is_available = serializers.BooleanField(read_only=True)

    class Meta:
        model = ClothingItem
        fields = [
            "id",
            "name",
            "description",
            "category",
            "size",
            "color",
            "brand",
            "price_per_day",
            "deposit_amount",
            "status",
            "condition",
            "is_available",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
