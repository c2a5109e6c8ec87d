"""
URL configuration for the catalog API.

URL Structure:
    /items/             GET
    /items/{id}/        GET
    /categories/        GET

All URLs are prefixed with /api/v1/catalog/ in the main URL configuration.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from catalog.views import CategoryViewSet, ClothingItemViewSet

router = DefaultRouter()
router.register(r"items", ClothingItemViewSet, basename="clothing-item")
router.register(r"categories", CategoryViewSet, basename="category")

app_name = "catalog"

urlpatterns = [
    path("", include(router.urls)),
]
