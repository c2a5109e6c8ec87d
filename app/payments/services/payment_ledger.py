"""
Payment ledger: owns the Payment lifecycle of a rental.

Every operation:
    1. opens a transaction (nested calls become savepoints)
    2. locks the rental row, then its payment row (payments.locks)
    3. applies the payment change and mirrors it onto the rental

so a reader never sees rental.payment_status disagree with payment.status,
and two concurrent confirmations of the same cash payment serialize: the
second one finds the payment already paid and fails.

Callers pass the clock value (``now``) and the acting user's id explicitly.

Usage:
    from payments.services import PaymentLedger

    payment = PaymentLedger.create_payment(
        rental, Decimal("500.00"), PaymentMethod.CASH, now=timezone.now(),
    )
    payment, rental = PaymentLedger.confirm_cash_payment(
        rental, Decimal("500.00"), actor_id="12", now=timezone.now(),
    )
"""

from __future__ import annotations

import secrets
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from django.conf import settings
from django_fsm import can_proceed

from core.services import BaseService
from payments.exceptions import (
    InvalidPaymentStateError,
    PaymentAlreadyExistsError,
    PaymentNotFoundError,
    PaymentValidationError,
)
from payments.locks import lock_rental_for_payment
from payments.models import Payment
from payments.state_machines import PaymentMethod, PaymentStatus
from payments.types import PaymentDetailKey, append_payment_details
from rentals.services import RentalService
from rentals.states import RentalPaymentMethod

if TYPE_CHECKING:
    from datetime import datetime
    from typing import Any

    from rentals.models import Rental

# Payment methods that have a rental-level counterpart; others leave it as is
RENTAL_METHOD_FOR_PAYMENT = {
    PaymentMethod.CASH.value: RentalPaymentMethod.CASH,
    PaymentMethod.CARD.value: RentalPaymentMethod.CARD,
}


class PaymentLedger(BaseService):
    """Create payments and drive their state transitions."""

    # ==========================================================================
    # Creation
    # ==========================================================================

    @classmethod
    def create_payment(
        cls,
        rental: Rental,
        amount: Decimal,
        method: str,
        now: datetime,
        status: str = PaymentStatus.PENDING,
        reference: str | None = None,
        gateway_id: str | None = None,
        details: dict[PaymentDetailKey, Any] | None = None,
    ) -> Payment:
        """
        Create the rental's payment and mirror it onto the rental.

        Args:
            rental: Rental being paid
            amount: Amount charged (>= 0)
            method: cash, card or online
            now: Current time; becomes paid_at when status is PAID
            status: PENDING (cash awaiting confirmation) or PAID
            reference: Transaction reference to store
            gateway_id: Gateway charge id (card)
            details: Initial payment details

        Returns:
            The new Payment; ``payment.rental`` is the locked, updated rental

        Raises:
            PaymentValidationError: Negative amount, unknown method or status
            PaymentAlreadyExistsError: The rental already has a payment
            RentalNotFoundError: The rental no longer exists
        """
        amount = cls._validate_amount(amount)
        if method not in PaymentMethod.values:
            raise PaymentValidationError(
                f"Unknown payment method: {method}",
                details={"method": [f"Must be one of {', '.join(PaymentMethod.values)}."]},
            )
        if status not in (PaymentStatus.PENDING, PaymentStatus.PAID):
            raise PaymentValidationError(
                f"Payments cannot be created as {status}",
                details={"status": status},
            )

        with cls.atomic():
            locked_rental, existing = lock_rental_for_payment(rental.pk)
            if existing is not None:
                raise PaymentAlreadyExistsError(
                    f"Rental {locked_rental.pk} already has a payment",
                    details={
                        "rental_id": locked_rental.pk,
                        "payment_id": existing.pk,
                        "current_status": existing.status,
                    },
                )

            payment = Payment(
                rental=locked_rental,
                amount=amount,
                method=method,
                status=status,
                transaction_reference=reference,
                stripe_payment_id=gateway_id,
                paid_at=now if status == PaymentStatus.PAID else None,
                payment_details=append_payment_details({}, details or {}),
            )
            payment.save()

            RentalService.sync_payment_status(
                locked_rental,
                status,
                payment_method=RENTAL_METHOD_FOR_PAYMENT.get(PaymentMethod(method).value),
            )

        if amount != locked_rental.total_amount:
            cls.get_logger().warning(
                f"Payment amount differs from rental {locked_rental.pk} total",
                extra={
                    "rental_id": locked_rental.pk,
                    "amount": str(amount),
                    "total_amount": str(locked_rental.total_amount),
                },
            )
        cls.get_logger().info(
            f"Created {method} payment {payment.pk} for rental {locked_rental.pk}",
            extra={
                "payment_id": payment.pk,
                "rental_id": locked_rental.pk,
                "method": method,
                "status": status,
                "amount": str(amount),
            },
        )
        return payment

    # ==========================================================================
    # Transitions
    # ==========================================================================

    @classmethod
    def mark_as_paid(
        cls,
        payment: Payment,
        now: datetime,
        reference: str | None = None,
    ) -> Payment:
        """
        Move a pending payment to PAID and mirror it onto the rental.

        Raises:
            InvalidPaymentStateError: Payment is already paid or failed
            PaymentNotFoundError: Payment no longer exists
        """
        with cls.atomic():
            _, locked = cls._lock_existing_payment(payment)
            cls._apply_paid(locked, now, reference)
        return locked

    @classmethod
    def mark_as_failed(
        cls,
        payment: Payment,
        now: datetime,
        reason: str | None = None,
    ) -> Payment:
        """
        Move a pending payment to FAILED and mirror it onto the rental.

        The reason and time are appended to payment_details; earlier entries
        are kept.

        Raises:
            InvalidPaymentStateError: Payment is already paid or failed
            PaymentNotFoundError: Payment no longer exists
        """
        with cls.atomic():
            rental, locked = cls._lock_existing_payment(payment)
            if not can_proceed(locked.mark_failed):
                raise InvalidPaymentStateError(
                    f"Cannot fail a {locked.status} payment",
                    details={"payment_id": locked.pk, "current_status": locked.status},
                )

            locked.mark_failed()
            locked.payment_details = append_payment_details(
                locked.payment_details,
                {
                    PaymentDetailKey.FAILURE_REASON: reason,
                    PaymentDetailKey.FAILED_AT: now,
                },
            )
            locked.save(update_fields=["status", "payment_details", "updated_at"])
            RentalService.sync_payment_status(rental, PaymentStatus.FAILED)

        cls.get_logger().info(
            f"Payment {locked.pk} failed",
            extra={"payment_id": locked.pk, "rental_id": rental.pk, "reason": reason},
        )
        return locked

    # ==========================================================================
    # Composite Operations
    # ==========================================================================

    @classmethod
    def confirm_cash_payment(
        cls,
        rental: Rental,
        amount_received: Decimal,
        actor_id: str,
        now: datetime,
        notes: str | None = None,
    ) -> tuple[Payment, Rental]:
        """
        Confirm that cash was received for a rental and confirm the rental.

        Steps (one transaction):
            1. Lock rental and payment
            2. Require a pending cash payment
            3. Mark it paid with a fresh CASH-<token> reference
            4. Record who confirmed, how much was received, notes and time
            5. Confirm the rental

        Raises:
            PaymentNotFoundError: No payment, or the payment is not cash
            InvalidPaymentStateError: Payment already paid (or failed)
        """
        amount_received = cls._validate_amount(amount_received, field="amount_received")

        with cls.atomic():
            locked_rental, payment = lock_rental_for_payment(rental.pk)
            if payment is None or payment.method != PaymentMethod.CASH:
                raise PaymentNotFoundError(
                    "No cash payment found for this rental",
                    details={"rental_id": locked_rental.pk},
                )
            if payment.is_paid:
                raise InvalidPaymentStateError(
                    "Payment already confirmed",
                    details={"payment_id": payment.pk, "current_status": payment.status},
                )

            cls._apply_paid(payment, now, f"CASH-{cls._reference_token()}")
            payment.payment_details = append_payment_details(
                payment.payment_details,
                {
                    PaymentDetailKey.CONFIRMED_BY: actor_id,
                    PaymentDetailKey.AMOUNT_RECEIVED: amount_received,
                    PaymentDetailKey.CONFIRMATION_NOTES: notes,
                    PaymentDetailKey.CONFIRMED_AT: now,
                },
            )
            payment.save(update_fields=["payment_details", "updated_at"])
            RentalService.confirm_rental(locked_rental, now)

        cls.get_logger().info(
            f"Cash payment {payment.pk} confirmed for rental {locked_rental.pk}",
            extra={
                "payment_id": payment.pk,
                "rental_id": locked_rental.pk,
                "confirmed_by": actor_id,
                "amount_received": str(amount_received),
            },
        )
        return payment, locked_rental

    @classmethod
    def process_card_payment(
        cls,
        rental: Rental,
        amount: Decimal,
        gateway_charge_id: str,
        payment_intent_id: str,
        now: datetime,
    ) -> tuple[Payment, Rental]:
        """
        Record an already-authorized card payment and confirm the rental.

        The payment is created directly as PAID; the rental moves to
        payment_method=card, payment_status=paid and confirmed in the same
        transaction, so no intermediate pending state is ever committed.

        Raises:
            PaymentAlreadyExistsError: The rental already has a payment
        """
        with cls.atomic():
            payment = cls.create_payment(
                rental,
                amount,
                PaymentMethod.CARD,
                now=now,
                status=PaymentStatus.PAID,
                reference=payment_intent_id,
                gateway_id=gateway_charge_id,
                details={
                    PaymentDetailKey.GATEWAY_CHARGE_ID: gateway_charge_id,
                    PaymentDetailKey.PAYMENT_INTENT_ID: payment_intent_id,
                    PaymentDetailKey.PROCESSED_AT: now,
                },
            )
            locked_rental = RentalService.confirm_rental(payment.rental, now)

        return payment, locked_rental

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @classmethod
    def _lock_existing_payment(cls, payment: Payment) -> tuple[Rental, Payment]:
        rental, locked = lock_rental_for_payment(payment.rental_id)
        if locked is None or locked.pk != payment.pk:
            raise PaymentNotFoundError(
                f"Payment {payment.pk} not found",
                details={"payment_id": payment.pk},
            )
        return rental, locked

    @classmethod
    def _apply_paid(cls, payment: Payment, now: datetime, reference: str | None) -> None:
        """Transition a locked payment to PAID and mirror it onto its rental."""
        if not can_proceed(payment.mark_paid):
            raise InvalidPaymentStateError(
                f"Cannot mark a {payment.status} payment as paid",
                details={"payment_id": payment.pk, "current_status": payment.status},
            )

        payment.mark_paid(now, reference)
        payment.save(update_fields=["status", "paid_at", "transaction_reference", "updated_at"])
        RentalService.sync_payment_status(payment.rental, PaymentStatus.PAID)

    @classmethod
    def _reference_token(cls) -> str:
        return secrets.token_hex(settings.PAYMENT_REFERENCE_TOKEN_BYTES).upper()

    @classmethod
    def _validate_amount(cls, amount: Any, field: str = "amount") -> Decimal:
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError):
            raise PaymentValidationError(
                f"Invalid {field}",
                details={field: ["A valid number is required."]},
            ) from None
        if not value.is_finite() or value < 0:
            raise PaymentValidationError(
                f"{field} cannot be negative",
                details={field: ["Ensure this value is greater than or equal to 0."]},
            )
        return value
