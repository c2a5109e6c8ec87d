"""
Payment model: the single settlement record of a rental.

Usage:
    from payments.models import Payment
    from payments.state_machines import PaymentMethod, PaymentStatus

    payment = Payment.objects.create(
        rental=rental,
        amount=Decimal("500.00"),
        method=PaymentMethod.CASH,
    )

    # State transitions using django-fsm
    payment.mark_paid(now=timezone.now(), reference="CASH-4F1A9C2B7D3E")
    payment.save()
"""

from __future__ import annotations

from django.db import models
from django_fsm import FSMField, transition

from core.models import BaseModel
from payments.state_machines import PaymentMethod, PaymentStatus


class Payment(BaseModel):
    """
    Monetary settlement of one rental.

    State Flow:
        PENDING -> PAID
        PENDING -> FAILED

    Card and recorded payments are created directly in PAID.

    Fields:
        rental: Rental being paid (one payment per rental)
        amount: Amount charged, >= 0
        method: cash, card or online
        status: FSM state
        transaction_reference: PAY-/CASH- reference or gateway intent id
        stripe_payment_id: Gateway charge id, card payments only
        paid_at: Set when the payment becomes PAID, never changed after
        payment_details: Append-only metadata, see payments.types
    """

    # ==========================================================================
    # Relationships
    # ==========================================================================

    rental = models.OneToOneField(
        "rentals.Rental",
        on_delete=models.CASCADE,
        related_name="payment",
        help_text="Rental settled by this payment",
    )

    # ==========================================================================
    # Amount & Method
    # ==========================================================================

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Amount charged",
    )

    method = models.CharField(
        max_length=10,
        choices=PaymentMethod.choices,
        help_text="How the customer pays",
    )

    # ==========================================================================
    # State
    # ==========================================================================

    # protected=False so refresh_from_db() can reload the field
    status = FSMField(
        default=PaymentStatus.PENDING,
        choices=PaymentStatus.choices,
        db_index=True,
        protected=False,
        help_text="Current state of the payment (managed by FSM)",
    )

    paid_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the payment was completed",
    )

    # ==========================================================================
    # References
    # ==========================================================================

    transaction_reference = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Payment reference (PAY-..., CASH-...) or gateway intent id",
    )

    stripe_payment_id = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Gateway charge id (card payments)",
    )

    # ==========================================================================
    # Metadata
    # ==========================================================================

    payment_details = models.JSONField(
        default=dict,
        blank=True,
        help_text="Append-only metadata (confirmation, gateway ids, failure reason)",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Payment"
        verbose_name_plural = "Payments"
        indexes = [
            models.Index(fields=["method", "status"], name="payment_method_status"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gte=0),
                name="payment_amount_non_negative",
            ),
            models.CheckConstraint(
                condition=(
                    models.Q(status=PaymentStatus.PAID, paid_at__isnull=False)
                    | (
                        ~models.Q(status=PaymentStatus.PAID)
                        & models.Q(paid_at__isnull=True)
                    )
                ),
                name="payment_paid_at_matches_status",
            ),
        ]

    def __str__(self) -> str:
        return f"Payment({self.pk}, {self.method}, {self.status}, {self.amount})"

    @property
    def is_paid(self) -> bool:
        return self.status == PaymentStatus.PAID

    @property
    def is_pending(self) -> bool:
        return self.status == PaymentStatus.PENDING

    @property
    def is_failed(self) -> bool:
        return self.status == PaymentStatus.FAILED

    # ==========================================================================
    # State Transitions (django-fsm)
    # ==========================================================================

    @transition(
        field=status,
        source=PaymentStatus.PENDING,
        target=PaymentStatus.PAID,
    )
    def mark_paid(self, now, reference: str | None = None):
        """
        Mark the payment as paid.

        Transition: PENDING -> PAID

        Replaces transaction_reference when a new one is given.
        """
        self.paid_at = now
        if reference:
            self.transaction_reference = reference

    @transition(
        field=status,
        source=PaymentStatus.PENDING,
        target=PaymentStatus.FAILED,
    )
    def mark_failed(self):
        """
        Mark the payment as failed.

        Transition: PENDING -> FAILED

        The reason is recorded in payment_details by the ledger.
        """
