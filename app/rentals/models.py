"""
Rental and RentalItem models.

A Rental is a booking of one or more clothing items for a date range. Its
total is fixed when it is created: each RentalItem freezes the catalog's
daily price at booking time, so later catalog edits never change what an
existing rental costs.

Usage:
    from rentals.models import Rental
    from rentals.states import RentalStatus

    # State transitions using django-fsm
    rental.confirm(now=timezone.now())  # pending -> confirmed
    rental.save()
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.db import models
from django_fsm import FSMField, transition

from core.models import BaseModel
from payments.state_machines import PaymentStatus
from rentals.states import RentalPaymentMethod, RentalStatus


class Rental(BaseModel):
    """
    A customer's booking.

    State Flow:
        PENDING -> CONFIRMED

    Fields:
        user: Customer who owns the rental
        rental_date / return_date: Booked date range (return after rental)
        total_amount: Sum of item subtotals, computed at creation
        status: FSM state (pending, confirmed)
        payment_method: none until a payment exists, then cash or card
        payment_status: Mirror of the payment's status
        payment_reference: PAY-<token>-<id>, assigned once, unique
        confirmed_at: Set exactly once, by the confirm transition

    Note:
        Only RentalService and the payment ledger write to rentals. Nothing
        deletes them.
    """

    # ==========================================================================
    # Ownership & Dates
    # ==========================================================================

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="rentals",
        help_text="Customer who owns the rental",
    )

    rental_date = models.DateField(help_text="First day of the rental")
    return_date = models.DateField(help_text="Day the items are returned")

    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Sum of item subtotals, fixed at creation",
    )

    notes = models.TextField(blank=True, default="")

    # ==========================================================================
    # State
    # ==========================================================================

    # protected=False so refresh_from_db() can reload the field
    status = FSMField(
        default=RentalStatus.PENDING,
        choices=RentalStatus.choices,
        db_index=True,
        protected=False,
        help_text="Current state of the rental (managed by FSM)",
    )

    confirmed_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the rental was confirmed",
    )

    # ==========================================================================
    # Payment Projection
    # ==========================================================================

    payment_method = models.CharField(
        max_length=10,
        choices=RentalPaymentMethod.choices,
        default=RentalPaymentMethod.NONE,
    )

    payment_status = models.CharField(
        max_length=10,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
        db_index=True,
        help_text="Mirrors the status of the rental's payment",
    )

    payment_reference = models.CharField(
        max_length=64,
        null=True,
        blank=True,
        unique=True,
        help_text="Customer-facing payment reference (PAY-...)",
    )

    class Meta:
        ordering = ["-rental_date", "-created_at"]
        verbose_name = "Rental"
        verbose_name_plural = "Rentals"
        indexes = [
            models.Index(fields=["user", "rental_date"], name="rental_user_rental_date"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(return_date__gt=models.F("rental_date")),
                name="rental_return_after_rental",
            ),
            models.CheckConstraint(
                condition=models.Q(total_amount__gte=0),
                name="rental_total_non_negative",
            ),
            models.CheckConstraint(
                condition=(
                    models.Q(status=RentalStatus.CONFIRMED, confirmed_at__isnull=False)
                    | (
                        ~models.Q(status=RentalStatus.CONFIRMED)
                        & models.Q(confirmed_at__isnull=True)
                    )
                ),
                name="rental_confirmed_at_matches_status",
            ),
        ]

    def __str__(self) -> str:
        return f"Rental({self.pk}, {self.status}, {self.total_amount})"

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID

    @property
    def is_confirmed(self) -> bool:
        return self.status == RentalStatus.CONFIRMED

    # ==========================================================================
    # State Transitions (django-fsm)
    # ==========================================================================

    @transition(
        field=status,
        source=RentalStatus.PENDING,
        target=RentalStatus.CONFIRMED,
    )
    def confirm(self, now):
        """
        Confirm the rental.

        Transition: PENDING -> CONFIRMED

        Called once the rental's payment is complete.
        """
        self.confirmed_at = now


class RentalItem(BaseModel):
    """
    One catalog item within a rental.

    Fields:
        rental: Owning rental (deleted with it)
        clothing_item: Catalog item rented
        quantity: Units rented (>= 1)
        price_per_day: Catalog price copied at booking time, never re-read
        subtotal: price_per_day * quantity * days, rounded to cents
    """

    rental = models.ForeignKey(
        Rental,
        on_delete=models.CASCADE,
        related_name="items",
    )
    clothing_item = models.ForeignKey(
        "catalog.ClothingItem",
        on_delete=models.PROTECT,
        related_name="rental_items",
    )
    quantity = models.PositiveIntegerField(default=1)
    price_per_day = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text="Daily price frozen from the catalog",
    )
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        ordering = ["id"]
        verbose_name = "Rental Item"
        verbose_name_plural = "Rental Items"
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="rental_item_quantity_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(price_per_day__gte=0),
                name="rental_item_price_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"RentalItem({self.pk}, item={self.clothing_item_id}, qty={self.quantity})"
