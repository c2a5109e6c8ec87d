"""
Rental orchestrator: the use cases behind the rental and payment endpoints.

The orchestrator:
- Resolves the rental the actor is allowed to see (staff see all rentals,
  customers only their own; anything else reads as not found)
- Runs each multi-entity use case in one transaction
- Converts domain errors into ServiceResult failures with their HTTP status
- Logs unexpected errors with a correlation id and returns an opaque failure

The acting user and the clock are parameters, so tests can pin both.

Usage:
    from payments.services import RentalOrchestrator

    result = RentalOrchestrator.create_cash_payment(
        actor=request.user,
        rental_id=42,
        amount=Decimal("500.00"),
    )
    if result.success:
        payment = result.data.payment
        reference = result.data.payment_reference
    else:
        return Response(result.to_response(), status=result.status_code)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from django.utils import timezone

from core.services import BaseService, ServiceResult
from payments.exceptions import PaymentNotFoundError
from payments.models import Payment
from payments.services.payment_ledger import PaymentLedger
from payments.state_machines import PaymentMethod, PaymentStatus
from payments.types import PaymentDetailKey
from rentals.services import RentalService

if TYPE_CHECKING:
    from datetime import date
    from decimal import Decimal
    from typing import Any

    from django.contrib.auth.models import AbstractBaseUser

    from rentals.models import Rental

Clock = Callable[[], datetime]


# =============================================================================
# Result Types
# =============================================================================


@dataclass
class PaymentOutcome:
    """
    Payment and rental snapshots after a payment use case.

    Attributes:
        payment: The payment as committed
        rental: The rental as committed
        payment_reference: Customer-facing PAY- reference (cash creation only)
    """

    payment: Payment
    rental: Rental
    payment_reference: str | None = None


@dataclass
class PaymentStatusView:
    """Read-only projection of a rental's payment state."""

    rental_id: int
    payment_method: str
    payment_status: str
    payment_reference: str | None
    is_paid: bool
    is_confirmed: bool
    payment: Payment | None


# =============================================================================
# Rental Orchestrator
# =============================================================================


class RentalOrchestrator(BaseService):
    """
    Entry point for rental and payment use cases.

    All methods are class methods returning ServiceResult; none of them
    raise for domain failures.
    """

    # ==========================================================================
    # Rentals
    # ==========================================================================

    @classmethod
    def create_rental(
        cls,
        actor: AbstractBaseUser,
        rental_date: date,
        return_date: date,
        items: list[dict[str, Any]],
        notes: str | None = None,
    ) -> ServiceResult[Rental]:
        """
        Create a pending rental owned by the actor.

        Returns:
            ServiceResult with the rental, its items preloaded
        """
        try:
            with cls.atomic():
                rental = RentalService.create_rental(
                    owner=actor,
                    rental_date=rental_date,
                    return_date=return_date,
                    line_items=items,
                    notes=notes,
                )
            rental = RentalService.list_rentals_for_owner(actor).get(pk=rental.pk)
        except Exception as exc:
            return cls.handle_exception(exc, "create rental")

        return ServiceResult.success(rental)

    @classmethod
    def list_my_rentals(cls, actor: AbstractBaseUser) -> ServiceResult[list[Rental]]:
        """Actor's rentals, latest rental_date first, each with its items."""
        try:
            rentals = list(RentalService.list_rentals_for_owner(actor))
        except Exception as exc:
            return cls.handle_exception(exc, "list rentals")
        return ServiceResult.success(rentals)

    # ==========================================================================
    # Payments
    # ==========================================================================

    @classmethod
    def record_generic_payment(
        cls,
        actor: AbstractBaseUser,
        rental_id: int,
        amount: Decimal,
        method: str,
        reference: str | None = None,
        clock: Clock = timezone.now,
    ) -> ServiceResult[PaymentOutcome]:
        """
        Record a payment that has already been settled and confirm the rental.

        The payment is created as paid immediately, whatever the method.
        """
        now = clock()
        try:
            with cls.atomic():
                rental = cls._visible_rental(actor, rental_id)
                payment = PaymentLedger.create_payment(
                    rental,
                    amount,
                    method,
                    now=now,
                    status=PaymentStatus.PAID,
                    reference=reference,
                    details={PaymentDetailKey.RECORDED_BY: cls._actor_id(actor)},
                )
                rental = RentalService.confirm_rental(payment.rental, now)
        except Exception as exc:
            return cls.handle_exception(exc, "record payment")

        return ServiceResult.success(PaymentOutcome(payment=payment, rental=rental))

    @classmethod
    def create_cash_payment(
        cls,
        actor: AbstractBaseUser,
        rental_id: int,
        amount: Decimal,
        clock: Clock = timezone.now,
    ) -> ServiceResult[PaymentOutcome]:
        """
        Open a pending cash payment for a rental.

        Assigns the rental's PAY- reference (or reuses it) and stores it as
        the payment's transaction reference.
        """
        now = clock()
        try:
            with cls.atomic():
                rental = cls._visible_rental(actor, rental_id, for_update=True)
                reference = RentalService.generate_payment_reference(rental)
                payment = PaymentLedger.create_payment(
                    rental,
                    amount,
                    PaymentMethod.CASH,
                    now=now,
                    status=PaymentStatus.PENDING,
                    reference=reference,
                )
        except Exception as exc:
            return cls.handle_exception(exc, "create cash payment")

        return ServiceResult.success(
            PaymentOutcome(payment=payment, rental=payment.rental, payment_reference=reference)
        )

    @classmethod
    def confirm_cash_payment(
        cls,
        actor: AbstractBaseUser,
        rental_id: int,
        amount_received: Decimal,
        notes: str | None = None,
        clock: Clock = timezone.now,
    ) -> ServiceResult[PaymentOutcome]:
        """
        Confirm cash received for a rental (staff).

        Fails with 404 when the rental has no cash payment and with 400 when
        it is already paid; nothing changes in either case.
        """
        now = clock()
        try:
            with cls.atomic():
                rental = cls._visible_rental(actor, rental_id)
                payment, rental = PaymentLedger.confirm_cash_payment(
                    rental,
                    amount_received,
                    actor_id=cls._actor_id(actor),
                    now=now,
                    notes=notes,
                )
        except Exception as exc:
            return cls.handle_exception(exc, "confirm cash payment")

        return ServiceResult.success(PaymentOutcome(payment=payment, rental=rental))

    @classmethod
    def process_card_payment(
        cls,
        actor: AbstractBaseUser,
        rental_id: int,
        amount: Decimal,
        gateway_charge_id: str,
        payment_intent_id: str,
        clock: Clock = timezone.now,
    ) -> ServiceResult[PaymentOutcome]:
        """
        Record a card payment authorized upstream and confirm the rental.
        """
        now = clock()
        try:
            with cls.atomic():
                rental = cls._visible_rental(actor, rental_id)
                payment, rental = PaymentLedger.process_card_payment(
                    rental,
                    amount,
                    gateway_charge_id=gateway_charge_id,
                    payment_intent_id=payment_intent_id,
                    now=now,
                )
        except Exception as exc:
            return cls.handle_exception(exc, "process card payment")

        return ServiceResult.success(PaymentOutcome(payment=payment, rental=rental))

    @classmethod
    def fail_payment(
        cls,
        actor: AbstractBaseUser,
        rental_id: int,
        reason: str | None = None,
        clock: Clock = timezone.now,
    ) -> ServiceResult[PaymentOutcome]:
        """Mark a rental's pending payment as failed (staff)."""
        now = clock()
        try:
            with cls.atomic():
                rental = cls._visible_rental(actor, rental_id)
                payment = cls._payment_of(rental)
                payment = PaymentLedger.mark_as_failed(payment, now=now, reason=reason)
        except Exception as exc:
            return cls.handle_exception(exc, "fail payment")

        return ServiceResult.success(PaymentOutcome(payment=payment, rental=payment.rental))

    # ==========================================================================
    # Queries
    # ==========================================================================

    @classmethod
    def get_payment_status(
        cls,
        actor: AbstractBaseUser,
        rental_id: int,
    ) -> ServiceResult[PaymentStatusView]:
        """Payment projection of one rental. No side effects."""
        try:
            rental = cls._visible_rental(actor, rental_id)
            payment = Payment.objects.filter(rental=rental).first()
        except Exception as exc:
            return cls.handle_exception(exc, "get payment status")

        return ServiceResult.success(
            PaymentStatusView(
                rental_id=rental.pk,
                payment_method=rental.payment_method,
                payment_status=rental.payment_status,
                payment_reference=rental.payment_reference,
                is_paid=rental.is_paid,
                is_confirmed=rental.is_confirmed,
                payment=payment,
            )
        )

    @classmethod
    def list_pending_cash_payments(cls) -> ServiceResult[list[Payment]]:
        """Pending cash payments, newest first, with rental and customer."""
        try:
            payments = list(
                Payment.objects.filter(
                    method=PaymentMethod.CASH,
                    status=PaymentStatus.PENDING,
                )
                .select_related("rental__user")
                .order_by("-created_at")
            )
        except Exception as exc:
            return cls.handle_exception(exc, "list pending cash payments")
        return ServiceResult.success(payments)

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @classmethod
    def _visible_rental(
        cls,
        actor: AbstractBaseUser,
        rental_id: int,
        for_update: bool = False,
    ) -> Rental:
        owner = None if actor.is_staff else actor
        return RentalService.get_rental(rental_id, owner=owner, for_update=for_update)

    @classmethod
    def _payment_of(cls, rental: Rental) -> Payment:
        payment = Payment.objects.filter(rental=rental).first()
        if payment is None:
            raise PaymentNotFoundError(
                "No payment found for this rental",
                details={"rental_id": rental.pk},
            )
        return payment

    @staticmethod
    def _actor_id(actor: AbstractBaseUser | None) -> str:
        if actor is None or actor.pk is None:
            return "system"
        return str(actor.pk)
