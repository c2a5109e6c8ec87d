"""
URL configuration for the rentals app.

Routes (prefixed with /api/v1/rentals/):
    - POST ""    - Create rental
    - GET  my/   - Current user's rentals
"""

from django.urls import path

from rentals.views import MyRentalsView, RentalCreateView

app_name = "rentals"

urlpatterns = [
    path("", RentalCreateView.as_view(), name="create"),
    path("my/", MyRentalsView.as_view(), name="my"),
]
