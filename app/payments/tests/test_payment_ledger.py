"""
Tests for PaymentLedger.

Every test checks the rental projection alongside the payment: after each
successful operation rental.payment_status equals payment.status.
"""

import re
from decimal import Decimal

import pytest

from payments.exceptions import (
    InvalidPaymentStateError,
    PaymentAlreadyExistsError,
    PaymentNotFoundError,
    PaymentValidationError,
)
from payments.models import Payment
from payments.services import PaymentLedger
from payments.state_machines import PaymentMethod, PaymentStatus
from payments.tests.factories import PaymentFactory
from rentals.states import RentalPaymentMethod, RentalStatus


def assert_projection_matches(payment):
    payment.refresh_from_db()
    payment.rental.refresh_from_db()
    assert payment.rental.payment_status == payment.status


# =============================================================================
# create_payment
# =============================================================================


@pytest.mark.django_db
class TestCreatePayment:
    """Tests for PaymentLedger.create_payment."""

    def test_pending_cash_payment(self, rental, now):
        """Should create a pending payment and project it onto the rental."""
        payment = PaymentLedger.create_payment(
            rental, Decimal("500.00"), PaymentMethod.CASH, now=now, reference="PAY-AB-1"
        )

        assert payment.status == PaymentStatus.PENDING
        assert payment.method == PaymentMethod.CASH
        assert payment.paid_at is None
        assert payment.transaction_reference == "PAY-AB-1"
        rental.refresh_from_db()
        assert rental.payment_method == RentalPaymentMethod.CASH
        assert rental.payment_status == PaymentStatus.PENDING
        assert_projection_matches(payment)

    def test_paid_payment_sets_paid_at(self, rental, now):
        """Should stamp paid_at when created as paid."""
        payment = PaymentLedger.create_payment(
            rental,
            Decimal("500.00"),
            PaymentMethod.CARD,
            now=now,
            status=PaymentStatus.PAID,
        )

        assert payment.paid_at == now
        rental.refresh_from_db()
        assert rental.payment_method == RentalPaymentMethod.CARD
        assert rental.is_paid is True
        assert_projection_matches(payment)

    def test_online_method_leaves_rental_method(self, rental, now):
        """Should not change the rental method for online payments."""
        PaymentLedger.create_payment(
            rental,
            Decimal("500.00"),
            PaymentMethod.ONLINE,
            now=now,
            status=PaymentStatus.PAID,
        )

        rental.refresh_from_db()
        assert rental.payment_method == RentalPaymentMethod.NONE
        assert rental.payment_status == PaymentStatus.PAID

    def test_initial_details_are_serialized(self, rental, now):
        """Should store initial details as JSON values."""
        payment = PaymentLedger.create_payment(
            rental, Decimal("500.00"), "cash", now=now, details={"recorded_by": "5"}
        )

        payment.refresh_from_db()
        assert payment.payment_details == {"recorded_by": "5"}

    def test_second_payment_conflicts(self, pending_cash_rental, now):
        """Should raise a conflict for a second payment."""
        with pytest.raises(PaymentAlreadyExistsError) as exc_info:
            PaymentLedger.create_payment(
                pending_cash_rental, Decimal("500.00"), PaymentMethod.CARD, now=now
            )

        assert exc_info.value.status_code == 409
        assert Payment.objects.count() == 1

    def test_negative_amount(self, rental, now):
        """Should reject a negative amount."""
        with pytest.raises(PaymentValidationError):
            PaymentLedger.create_payment(rental, Decimal("-5.00"), PaymentMethod.CASH, now=now)

        assert Payment.objects.count() == 0

    def test_unknown_method(self, rental, now):
        """Should reject an unknown payment method."""
        with pytest.raises(PaymentValidationError):
            PaymentLedger.create_payment(rental, Decimal("5.00"), "cheque", now=now)

    def test_cannot_create_failed(self, rental, now):
        """Should not create a payment directly as failed."""
        with pytest.raises(PaymentValidationError):
            PaymentLedger.create_payment(
                rental, Decimal("5.00"), PaymentMethod.CASH, now=now, status=PaymentStatus.FAILED
            )

    def test_amount_mismatch_only_warns(self, rental, now, mocker):
        """Should accept an amount off the rental total and log a warning."""
        logger = mocker.patch.object(PaymentLedger, "get_logger").return_value

        payment = PaymentLedger.create_payment(
            rental, Decimal("450.00"), PaymentMethod.CASH, now=now
        )

        assert payment.amount == Decimal("450.00")
        logger.warning.assert_called_once()


# =============================================================================
# mark_as_paid / mark_as_failed
# =============================================================================


@pytest.mark.django_db
class TestTransitions:
    """Tests for PaymentLedger status transitions."""

    def test_mark_as_paid(self, pending_cash_payment, now):
        """Should mark the payment and the rental paid."""
        payment = PaymentLedger.mark_as_paid(pending_cash_payment, now=now, reference="REF-9")

        assert payment.status == PaymentStatus.PAID
        assert payment.paid_at == now
        assert payment.transaction_reference == "REF-9"
        assert_projection_matches(payment)

    def test_mark_as_paid_twice(self, pending_cash_payment, now):
        """Should reject paying a payment twice."""
        PaymentLedger.mark_as_paid(pending_cash_payment, now=now)

        with pytest.raises(InvalidPaymentStateError):
            PaymentLedger.mark_as_paid(pending_cash_payment, now=now)

    def test_mark_as_failed_records_reason(self, pending_cash_payment, now):
        """Should record the failure reason in the details."""
        payment = PaymentLedger.mark_as_failed(
            pending_cash_payment, now=now, reason="Customer never came"
        )

        assert payment.status == PaymentStatus.FAILED
        payment.refresh_from_db()
        assert payment.payment_details["failure_reason"] == "Customer never came"
        assert payment.payment_details["failed_at"] == now.isoformat()
        assert_projection_matches(payment)

    def test_mark_paid_payment_failed(self, rental, now):
        """Should reject failing a paid payment."""
        payment = PaymentLedger.create_payment(
            rental, Decimal("500.00"), PaymentMethod.CARD, now=now, status=PaymentStatus.PAID
        )

        with pytest.raises(InvalidPaymentStateError):
            PaymentLedger.mark_as_failed(payment, now=now)

        assert_projection_matches(payment)
        assert payment.status == PaymentStatus.PAID

    def test_unsaved_payment_not_found(self, rental, now):
        """Should raise not found for a payment missing from the database."""
        stray = PaymentFactory.build(rental=rental)

        with pytest.raises(PaymentNotFoundError):
            PaymentLedger.mark_as_paid(stray, now=now)


# =============================================================================
# confirm_cash_payment
# =============================================================================


@pytest.mark.django_db
class TestConfirmCashPayment:
    """Tests for PaymentLedger.confirm_cash_payment."""

    def test_confirms_payment_and_rental(self, pending_cash_rental, now):
        """Should mark the cash payment paid and confirm the rental."""
        payment, rental = PaymentLedger.confirm_cash_payment(
            pending_cash_rental,
            Decimal("500.00"),
            actor_id="12",
            now=now,
            notes="Paid at the counter",
        )

        assert payment.status == PaymentStatus.PAID
        assert payment.paid_at == now
        assert re.fullmatch(r"CASH-[0-9A-F]{12}", payment.transaction_reference)
        assert rental.status == RentalStatus.CONFIRMED
        assert rental.confirmed_at == now
        assert rental.payment_status == PaymentStatus.PAID

        payment.refresh_from_db()
        assert payment.payment_details == {
            "confirmed_by": "12",
            "amount_received": "500.00",
            "confirmation_notes": "Paid at the counter",
            "confirmed_at": now.isoformat(),
        }
        assert_projection_matches(payment)

    def test_rental_reference_is_kept(self, pending_cash_rental, now):
        """Should keep the rental's PAY- reference."""
        reference = pending_cash_rental.payment_reference

        _, rental = PaymentLedger.confirm_cash_payment(
            pending_cash_rental, Decimal("500.00"), actor_id="12", now=now
        )

        rental.refresh_from_db()
        assert rental.payment_reference == reference

    def test_already_paid(self, pending_cash_rental, now):
        """Should reject confirming a paid payment."""
        PaymentLedger.confirm_cash_payment(
            pending_cash_rental, Decimal("500.00"), actor_id="12", now=now
        )
        before = Payment.objects.get(rental=pending_cash_rental)

        with pytest.raises(InvalidPaymentStateError) as exc_info:
            PaymentLedger.confirm_cash_payment(
                pending_cash_rental, Decimal("500.00"), actor_id="13", now=now
            )

        after = Payment.objects.get(rental=pending_cash_rental)
        assert exc_info.value.message == "Payment already confirmed"
        assert after.transaction_reference == before.transaction_reference
        assert after.payment_details == before.payment_details
        assert after.paid_at == before.paid_at

    def test_no_payment(self, rental, now):
        """Should raise not found when the rental has no payment."""
        with pytest.raises(PaymentNotFoundError) as exc_info:
            PaymentLedger.confirm_cash_payment(rental, Decimal("500.00"), actor_id="12", now=now)

        assert exc_info.value.message == "No cash payment found for this rental"

    def test_card_payment_is_not_cash(self, rental, now):
        """Should not confirm a card payment as cash."""
        PaymentFactory(rental=rental, method=PaymentMethod.CARD)

        with pytest.raises(PaymentNotFoundError):
            PaymentLedger.confirm_cash_payment(rental, Decimal("500.00"), actor_id="12", now=now)


# =============================================================================
# process_card_payment
# =============================================================================


@pytest.mark.django_db
class TestProcessCardPayment:
    """Tests for PaymentLedger.process_card_payment."""

    def test_paid_and_confirmed(self, rental, now):
        """Should store a paid card payment and confirm the rental."""
        payment, confirmed = PaymentLedger.process_card_payment(
            rental,
            Decimal("500.00"),
            gateway_charge_id="ch_1",
            payment_intent_id="pi_1",
            now=now,
        )

        assert payment.status == PaymentStatus.PAID
        assert payment.method == PaymentMethod.CARD
        assert payment.stripe_payment_id == "ch_1"
        assert payment.transaction_reference == "pi_1"
        assert confirmed.status == RentalStatus.CONFIRMED
        assert confirmed.payment_method == RentalPaymentMethod.CARD
        assert confirmed.payment_status == PaymentStatus.PAID

        payment.refresh_from_db()
        assert payment.payment_details["gateway_charge_id"] == "ch_1"
        assert payment.payment_details["payment_intent_id"] == "pi_1"
        assert payment.payment_details["processed_at"] == now.isoformat()
        assert_projection_matches(payment)

    def test_rolls_back_when_confirmation_fails(self, rental, now, mocker):
        """Should leave no payment behind when confirmation fails."""
        mocker.patch(
            "payments.services.payment_ledger.RentalService.confirm_rental",
            side_effect=RuntimeError("boom"),
        )

        with pytest.raises(RuntimeError):
            PaymentLedger.process_card_payment(
                rental,
                Decimal("500.00"),
                gateway_charge_id="ch_1",
                payment_intent_id="pi_1",
                now=now,
            )

        rental.refresh_from_db()
        assert Payment.objects.count() == 0
        assert rental.payment_status == PaymentStatus.PENDING
        assert rental.payment_method == RentalPaymentMethod.NONE
