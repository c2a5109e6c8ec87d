"""
Rental-specific exceptions.

Exception Hierarchy:
    RentalError (base for rental domain)
    ├── RentalNotFoundError - Rental lookup failures, including rentals the
    │                         caller does not own (404)
    ├── RentalValidationError - Bad date range, empty or unavailable items (400)
    └── InvalidPricingInputError - Pricing inputs out of range (400)

Usage:
    from rentals.exceptions import RentalNotFoundError

    raise RentalNotFoundError(
        f"Rental {rental_id} not found",
        details={"rental_id": rental_id},
    )
"""

from core.exceptions import BaseApplicationError, NotFoundError, ValidationError


class RentalError(BaseApplicationError):
    """Base exception for all rental operations."""

    default_error_code: str = "RENTAL_ERROR"


class RentalNotFoundError(RentalError, NotFoundError):
    """Raised when a rental does not exist or is not visible to the caller."""

    default_error_code: str = "RENTAL_NOT_FOUND"


class RentalValidationError(RentalError, ValidationError):
    """
    Raised when a rental request is invalid.

    Use for:
    - return_date not after rental_date
    - Empty item list
    - Items that are not currently available
    """

    default_error_code: str = "RENTAL_VALIDATION_ERROR"


class InvalidPricingInputError(RentalError, ValidationError):
    """Raised when quantity < 1, a daily price is negative, or the dates are inverted."""

    default_error_code: str = "INVALID_PRICING_INPUT"
