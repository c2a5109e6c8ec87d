"""
Rentals app configuration.
"""

from django.apps import AppConfig


class RentalsConfig(AppConfig):
    """Configuration for the rentals application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "rentals"
    verbose_name = "Rentals"
