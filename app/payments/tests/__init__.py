"""
Tests for payments app.

This package contains test modules for:
- test_types.py: Append-only payment details
- test_models.py: Payment transitions and constraints
- test_locks.py: Rental/payment row locking
- test_payment_ledger.py: PaymentLedger operations and rental projection
- test_orchestrator.py: RentalOrchestrator use cases
- test_views.py: API endpoint tests

Usage:
    pytest payments/tests/
    pytest payments/tests/test_orchestrator.py
"""
