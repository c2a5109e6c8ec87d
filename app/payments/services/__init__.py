"""
Payment services for rentals.

This module provides:
- PaymentLedger: Creates payments and drives their state transitions
- RentalOrchestrator: Entry point for rental and payment use cases

Usage:
    from payments.services import RentalOrchestrator

    result = RentalOrchestrator.process_card_payment(
        actor=request.user,
        rental_id=42,
        amount=Decimal("500.00"),
        gateway_charge_id="ch_123",
        payment_intent_id="pi_123",
    )
"""

from payments.services.payment_ledger import PaymentLedger
from payments.services.rental_orchestrator import (
    PaymentOutcome,
    PaymentStatusView,
    RentalOrchestrator,
)

__all__ = [
    "PaymentLedger",
    "PaymentOutcome",
    "PaymentStatusView",
    "RentalOrchestrator",
]
