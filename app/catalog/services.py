"""
Catalog read service.

This is the only way the rentals app reaches catalog data, so the lookup
contract (price per day plus availability flag, or a not-found error) lives
in one place.

Usage:
    from catalog.services import CatalogService

    item = CatalogService.get_clothing_item(item_id)
    if item.is_available:
        ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalog.exceptions import ClothingItemNotFoundError
from catalog.models import Category, ClothingItem
from core.services import BaseService

if TYPE_CHECKING:
    from django.db.models import QuerySet


class CatalogService(BaseService):
    """Lookups and listings over the clothing catalog."""

    @classmethod
    def get_clothing_item(cls, item_id: int) -> ClothingItem:
        """
        Fetch a clothing item by primary key.

        Raises:
            ClothingItemNotFoundError: If no item has this id
        """
        try:
            return ClothingItem.objects.select_related("category").get(pk=item_id)
        except ClothingItem.DoesNotExist:
            raise ClothingItemNotFoundError(
                f"Clothing item {item_id} not found",
                details={"item_id": item_id},
            ) from None

    @classmethod
    def list_items(cls) -> QuerySet[ClothingItem]:
        """Item listing queryset, category joined; filtering is done by the view."""
        return ClothingItem.objects.select_related("category")

    @classmethod
    def list_categories(cls) -> QuerySet[Category]:
        return Category.objects.all()
