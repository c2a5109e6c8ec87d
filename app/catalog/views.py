"""
Read-only views for the clothing catalog.

URL Structure:
    /api/v1/catalog/items/          GET (filters: category_id, size, status, search)
    /api/v1/catalog/items/{id}/     GET
    /api/v1/catalog/categories/     GET

The catalog is public: no authentication is required to browse it.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import (
    OpenApiParameter,
    extend_schema,
    extend_schema_view,
)
from rest_framework import viewsets
from rest_framework.permissions import AllowAny

from catalog.filters import ClothingItemFilter
from catalog.serializers import CategorySerializer, ClothingItemSerializer
from catalog.services import CatalogService


@extend_schema_view(
    list=extend_schema(
        operation_id="list_clothing_items",
        summary="List clothing items",
        parameters=[
            OpenApiParameter(
                name="category_id",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                description="Only items in this category",
                required=False,
            ),
            OpenApiParameter(
                name="size",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Garment size (XS, S, M, L, XL, XXL)",
                required=False,
            ),
            OpenApiParameter(
                name="status",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Stock status (available, rented, maintenance, cleaning)",
                required=False,
            ),
            OpenApiParameter(
                name="search",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Substring match on name or description",
                required=False,
            ),
        ],
        tags=["Catalog"],
    ),
    retrieve=extend_schema(
        operation_id="get_clothing_item",
        summary="Get clothing item",
        tags=["Catalog"],
    ),
)
class ClothingItemViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Browse clothing items.

    list:
        Paginated item list, newest first, with optional filters.

    retrieve:
        Single item with its category.
    """

    serializer_class = ClothingItemSerializer
    permission_classes = [AllowAny]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ClothingItemFilter

    def get_queryset(self):
        return CatalogService.list_items()


@extend_schema_view(
    list=extend_schema(
        operation_id="list_categories",
        summary="List categories",
        tags=["Catalog"],
    ),
)
class CategoryViewSet(viewsets.ReadOnlyModelViewSet):
    """Browse categories, alphabetically."""

    serializer_class = CategorySerializer
    permission_classes = [AllowAny]
    pagination_class = None

    def get_queryset(self):
        return CatalogService.list_categories()
