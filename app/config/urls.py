"""
URL configuration for the clothing rental backend.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - JWT issuance (simplejwt)
        token/                     - Obtain access/refresh pair
        token/refresh/             - Refresh access token
    /api/v1/catalog/               - Clothing catalog (read-only)
        items/                     - Item list with filters
        items/{id}/                - Item detail
        categories/                - Category list
    /api/v1/rentals/               - Rentals
        (POST)                     - Create rental with items
        my/                        - Current user's rentals
    /api/v1/payments/              - Rental payments
        (POST)                     - Record a generic (already settled) payment
        cash/                      - Create pending cash payment
        card/                      - Record pre-authorized card payment
        status/{rental_id}/        - Payment status projection
    /api/v1/admin/payments/        - Staff payment management
        pending-cash/              - Pending cash payments, newest first
        confirm-cash/{rental_id}/  - Confirm cash received
        fail/{rental_id}/          - Mark pending payment failed

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Authentication (simplejwt)
    path("auth/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    # Catalog
    path("catalog/", include("catalog.urls")),
    # Rentals
    path("rentals/", include("rentals.urls")),
    # Payments
    path("payments/", include("payments.urls")),
    path("admin/payments/", include("payments.admin_urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Clothing Rental Admin"
admin.site.site_title = "Rental Admin Portal"
admin.site.index_title = "Rentals, payments and catalog"
