"""
State enums for rental models.

Rental States:
    pending → confirmed (terminal)

Rental.payment_status reuses payments.state_machines.PaymentStatus because it
is a projection of the owning Payment's status.
"""

from django.db import models


class RentalStatus(models.TextChoices):
    """
    States for the Rental lifecycle.

    A rental is created PENDING and becomes CONFIRMED once its payment
    completes. There is no way back.
    """

    PENDING = "pending", "Pending"
    CONFIRMED = "confirmed", "Confirmed"


class RentalPaymentMethod(models.TextChoices):
    """How the customer settles the rental. NONE until a payment exists."""

    NONE = "none", "None"
    CARD = "card", "Card"
    CASH = "cash", "Cash"
