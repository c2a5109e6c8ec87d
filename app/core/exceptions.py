"""
Base exception classes for application-wide error handling.

Every domain failure raised by a service derives from BaseApplicationError.
Each class carries the HTTP status it maps to, so the orchestration layer can
turn any of them into a ServiceResult without a lookup table.

Exception Hierarchy:
    BaseApplicationError (base, 400)
    ├── ValidationError - Input validation failures (400)
    ├── NotFoundError - Resource not found or not visible to the caller (404)
    ├── InvalidStateError - Operation not allowed in the current state (400)
    ├── ConflictError - Duplicates and write-once violations (409)
    └── UnexpectedError - Anything not anticipated by the domain (500)

Usage:
    from core.exceptions import ValidationError, NotFoundError

    # Raise with message only
    raise ValidationError("Return date must be after the rental date")

    # Raise with error code and details
    raise NotFoundError(
        "Rental not found",
        error_code="RENTAL_NOT_FOUND",
        details={"rental_id": 42},
    )

    # Convert to dict for API response
    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=e.status_code)

Note:
    These exceptions are for domain/business logic errors.
    DRF handles API-layer exceptions (serialization, authentication, etc.).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, identifiers, etc.)
        status_code: HTTP status the error maps to
    """

    default_error_code: str = "APPLICATION_ERROR"
    status_code: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Example:
            {
                "error": "Rental not found",
                "error_code": "RENTAL_NOT_FOUND",
                "details": {"rental_id": 42}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for malformed dates, empty item lists, negative amounts, unknown
    payment detail keys and similar business rule violations detected in the
    service layer. Field-level problems go in ``details``.
    """

    default_error_code: str = "VALIDATION_ERROR"
    status_code: int = 400


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Also raised when the resource exists but belongs to someone else and the
    caller is not staff, so that existence is not leaked.
    """

    default_error_code: str = "NOT_FOUND"
    status_code: int = 404


class InvalidStateError(BaseApplicationError):
    """
    Raised when an operation is not allowed in the resource's current state.

    Example:
        raise InvalidStateError(
            "Payment is not pending",
            error_code="PAYMENT_NOT_PENDING",
            details={"current_status": payment.status},
        )
    """

    default_error_code: str = "INVALID_STATE"
    status_code: int = 400


class ConflictError(BaseApplicationError):
    """
    Raised when an operation conflicts with data that already exists.

    Use for duplicate payments on one rental and attempts to overwrite a
    write-once value.
    """

    default_error_code: str = "CONFLICT"
    status_code: int = 409


class UnexpectedError(BaseApplicationError):
    """
    Raised for failures the domain did not anticipate.

    The message returned to clients is opaque; the correlation id in
    ``details`` ties the response to the server-side log entry.
    """

    default_error_code: str = "UNEXPECTED_ERROR"
    status_code: int = 500
