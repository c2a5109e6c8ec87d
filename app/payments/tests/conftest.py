"""
Pytest fixtures for payment tests.

Fixtures provide rentals and payments in the states the payment flows start
from, with the rental projection consistent with the payment.

Usage:
    def test_confirm(pending_cash_rental, staff_user):
        result = RentalOrchestrator.confirm_cash_payment(staff_user, pending_cash_rental.id, ...)
"""

from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from payments.services import PaymentLedger
from payments.state_machines import PaymentMethod
from rentals.services import RentalService
from rentals.tests.factories import RentalFactory

FIXED_NOW = datetime(2025, 1, 1, 10, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def now():
    """Pinned clock value."""
    return FIXED_NOW


@pytest.fixture
def clock(now):
    """Clock callable returning the pinned time."""
    return lambda: now


@pytest.fixture
def rental(db, user):
    """Pending 500.00 rental owned by ``user``, without a payment."""
    return RentalFactory(user=user, total_amount=Decimal("500.00"))


@pytest.fixture
def pending_cash_rental(rental, now):
    """Rental with a pending cash payment and a PAY- reference."""
    reference = RentalService.generate_payment_reference(rental)
    PaymentLedger.create_payment(
        rental,
        Decimal("500.00"),
        PaymentMethod.CASH,
        now=now,
        reference=reference,
    )
    rental.refresh_from_db()
    return rental


@pytest.fixture
def pending_cash_payment(pending_cash_rental):
    return pending_cash_rental.payment
