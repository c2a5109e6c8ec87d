"""
Tests for catalog models and the catalog lookup service.
"""

from decimal import Decimal

import pytest
from django.db import IntegrityError

from catalog.exceptions import ClothingItemNotFoundError
from catalog.models import ClothingItemStatus
from catalog.services import CatalogService
from catalog.tests.factories import ClothingItemFactory


@pytest.mark.django_db
class TestClothingItem:
    """Tests for the ClothingItem model."""

    def test_available_item(self):
        """Should report an available item as available."""
        item = ClothingItemFactory()

        assert item.is_available is True

    @pytest.mark.parametrize(
        "status",
        [
            ClothingItemStatus.RENTED,
            ClothingItemStatus.MAINTENANCE,
            ClothingItemStatus.CLEANING,
        ],
    )
    def test_unavailable_statuses(self, status):
        """Should report non-available statuses as unavailable."""
        assert ClothingItemFactory(status=status).is_available is False

    def test_negative_price_rejected_by_database(self):
        """Should reject a negative daily price at the database."""
        with pytest.raises(IntegrityError):
            ClothingItemFactory(price_per_day=Decimal("-1.00"))

    def test_str(self):
        """Should render name and size."""
        item = ClothingItemFactory(name="Caftan Luxe", size="M")

        assert str(item) == "Caftan Luxe (M)"


@pytest.mark.django_db
class TestCatalogService:
    """Tests for CatalogService lookups."""

    def test_get_clothing_item(self):
        """Should return the item by id."""
        item = ClothingItemFactory()

        assert CatalogService.get_clothing_item(item.id) == item

    def test_get_missing_item_raises_not_found(self):
        """Should raise a 404 error carrying the item id."""
        with pytest.raises(ClothingItemNotFoundError) as exc_info:
            CatalogService.get_clothing_item(999999)

        assert exc_info.value.status_code == 404
        assert exc_info.value.details == {"item_id": 999999}

    def test_list_items_joins_category(self, django_assert_num_queries):
        """Should load each item's category in the listing query."""
        ClothingItemFactory.create_batch(3)

        with django_assert_num_queries(1):
            names = [item.category.name for item in CatalogService.list_items()]

        assert len(names) == 3
