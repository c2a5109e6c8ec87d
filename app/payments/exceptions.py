"""
Payment-specific exceptions for payment operations.

Exception Hierarchy:
    PaymentError (base for payment domain)
    ├── PaymentNotFoundError - No payment (or no cash payment) for a rental (404)
    ├── PaymentValidationError - Bad amount, method or detail key (400)
    ├── InvalidPaymentStateError - Transition not allowed from current status (400)
    ├── PaymentAlreadyExistsError - Rental already has its one payment (409)
    └── PaymentDetailConflictError - Write-once detail key already recorded (409)

Usage:
    from payments.exceptions import InvalidPaymentStateError

    if payment.is_paid:
        raise InvalidPaymentStateError(
            "Payment already confirmed",
            details={"current_status": payment.status},
        )
"""

from __future__ import annotations

from core.exceptions import (
    BaseApplicationError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)


class PaymentError(BaseApplicationError):
    """
    Base exception for all payment operations.

    Subclasses also inherit from the matching core error so that the HTTP
    status follows the core taxonomy.
    """

    default_error_code: str = "PAYMENT_ERROR"


class PaymentNotFoundError(PaymentError, NotFoundError):
    """
    Raised when a rental has no payment of the expected kind.

    Example:
        raise PaymentNotFoundError(
            "No cash payment found for this rental",
            details={"rental_id": rental.pk},
        )
    """

    default_error_code: str = "PAYMENT_NOT_FOUND"


class PaymentValidationError(PaymentError, ValidationError):
    """
    Raised when payment input is invalid.

    Use for:
    - Negative amounts
    - Unknown payment methods
    - Unknown payment detail keys
    """

    default_error_code: str = "PAYMENT_VALIDATION_ERROR"


class InvalidPaymentStateError(PaymentError, InvalidStateError):
    """
    Raised when a payment cannot make the requested transition.

    Paid and failed payments are terminal; confirming an already-paid cash
    payment lands here rather than being silently ignored.
    """

    default_error_code: str = "INVALID_PAYMENT_STATE"


class PaymentAlreadyExistsError(PaymentError, ConflictError):
    """Raised when a second payment is started for the same rental."""

    default_error_code: str = "PAYMENT_ALREADY_EXISTS"


class PaymentDetailConflictError(PaymentError, ConflictError):
    """Raised when a payment detail key that is already set would be overwritten."""

    default_error_code: str = "PAYMENT_DETAIL_CONFLICT"
