"""
Payments app configuration.

This app records how rentals are paid:
- Payment model and its state machine
- Payment ledger that mirrors payment state onto rentals
- Rental orchestrator behind the rental and payment endpoints
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """Configuration for the payments application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments"
