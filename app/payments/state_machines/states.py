"""
State enums for payment models.

These are Django TextChoices for database storage and admin integration;
Payment.status is driven by django-fsm transitions.

Payment States:
    pending → paid (terminal)
    pending → failed (terminal)
    refunded is storable but no transition leads to it
"""

from django.db import models


class PaymentStatus(models.TextChoices):
    """
    States for the Payment lifecycle.

    Also used for Rental.payment_status, which mirrors the status of the
    rental's payment inside the same transaction.

    State Flow (cash):
        PENDING → PAID (staff confirms cash received)
        PENDING → FAILED (staff marks it failed)

    State Flow (card, recorded payments):
        created directly as PAID
    """

    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    FAILED = "failed", "Failed"
    REFUNDED = "refunded", "Refunded"


class PaymentMethod(models.TextChoices):
    """How a payment was made."""

    CASH = "cash", "Cash"
    CARD = "card", "Card"
    ONLINE = "online", "Online"
