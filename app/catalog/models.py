"""
Catalog models: categories and rentable clothing items.

Usage:
    from catalog.models import ClothingItem, ClothingItemStatus

    available = ClothingItem.objects.filter(status=ClothingItemStatus.AVAILABLE)
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from core.models import BaseModel


class ClothingSize(models.TextChoices):
    """Garment sizes offered by the shop."""

    XS = "XS", "XS"
    S = "S", "S"
    M = "M", "M"
    L = "L", "L"
    XL = "XL", "XL"
    XXL = "XXL", "XXL"


class ClothingItemStatus(models.TextChoices):
    """
    Stock status of a clothing item.

    Only AVAILABLE items can be added to a new rental.
    """

    AVAILABLE = "available", "Available"
    RENTED = "rented", "Rented"
    MAINTENANCE = "maintenance", "Maintenance"
    CLEANING = "cleaning", "Cleaning"


class ClothingCondition(models.TextChoices):
    """Physical condition of a clothing item."""

    NEW = "new", "New"
    EXCELLENT = "excellent", "Excellent"
    GOOD = "good", "Good"
    FAIR = "fair", "Fair"


class Category(BaseModel):
    """Grouping of clothing items (e.g. Formal Wear)."""

    name = models.CharField(
        max_length=255,
        unique=True,
        help_text="Display name of the category",
    )
    description = models.TextField(
        blank=True,
        default="",
        help_text="Optional longer description",
    )

    class Meta:
        ordering = ["name"]
        verbose_name = "Category"
        verbose_name_plural = "Categories"

    def __str__(self) -> str:
        return self.name


class ClothingItem(BaseModel):
    """
    A rentable clothing item.

    Fields:
        category: Category the item is listed under
        size: Garment size
        price_per_day: Daily rental price, copied onto rental lines at booking time
        deposit_amount: Refundable deposit asked for the item
        status: Stock status (available, rented, maintenance, cleaning)
        condition: Physical condition
    """

    # ==========================================================================
    # Description
    # ==========================================================================

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="items",
        help_text="Category the item is listed under",
    )
    size = models.CharField(max_length=3, choices=ClothingSize.choices)
    color = models.CharField(max_length=100, blank=True, default="")
    brand = models.CharField(max_length=100, blank=True, default="")

    # ==========================================================================
    # Pricing
    # ==========================================================================

    price_per_day = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text="Daily rental price",
    )
    deposit_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Refundable deposit",
    )

    # ==========================================================================
    # Stock
    # ==========================================================================

    status = models.CharField(
        max_length=20,
        choices=ClothingItemStatus.choices,
        default=ClothingItemStatus.AVAILABLE,
        db_index=True,
    )
    condition = models.CharField(
        max_length=20,
        choices=ClothingCondition.choices,
        default=ClothingCondition.GOOD,
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Clothing Item"
        verbose_name_plural = "Clothing Items"
        indexes = [
            models.Index(fields=["category", "status"], name="clothing_item_category_status"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price_per_day__gte=0),
                name="clothing_item_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(deposit_amount__gte=0),
                name="clothing_item_deposit_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.size})"

    @property
    def is_available(self) -> bool:
        """Whether the item can be booked right now."""
        return self.status == ClothingItemStatus.AVAILABLE
