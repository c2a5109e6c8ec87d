"""
Base service layer patterns for business logic encapsulation.

This module provides foundational patterns for the service layer:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with common service utilities

Service Layer Philosophy:
    Services encapsulate business logic separate from views and models.
    Views handle HTTP concerns, models handle data, services handle logic.

Pattern Comparison:
    - Exceptions (core.exceptions): raised inside domain services
    - ServiceResult: returned by the orchestration layer facing the views

Usage:
    from core.services import BaseService, ServiceResult

    class RentalOrchestrator(BaseService):
        @classmethod
        def create_rental(cls, owner, **data) -> ServiceResult[Rental]:
            try:
                with cls.atomic():
                    rental = RentalService.create_rental(owner, **data)
            except BaseApplicationError as exc:
                return ServiceResult.from_error(exc)
            return ServiceResult.success(rental)

    # In view
    result = RentalOrchestrator.create_rental(request.user, **data)
    if result.success:
        return Response(RentalSerializer(result.data).data, status=201)
    return Response(result.to_response(), status=result.status_code)
"""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

from core.exceptions import BaseApplicationError, UnexpectedError

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any

# Generic type for ServiceResult data
T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code for client handling
        errors: Field-level errors for validation failures
        status_code: HTTP status a failed result maps to
        correlation_id: Set on unexpected failures to match server logs

    Usage:
        # Success case
        return ServiceResult.success(rental)

        # Failure case
        return ServiceResult.failure("Rental not found", "RENTAL_NOT_FOUND", status_code=404)

        # Check result
        result = RentalOrchestrator.get_payment_status(user, rental_id)
        if result.success:
            projection = result.data
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, Any] | None = field(default=None)
    status_code: int = 200
    correlation_id: str | None = None

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """Create a successful result."""
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, Any] | None = None,
        status_code: int = 400,
        correlation_id: str | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            errors: Field-level errors (for validation failures)
            status_code: HTTP status to respond with
            correlation_id: Identifier logged alongside unexpected failures

        Example:
            return ServiceResult.failure(
                "Validation failed",
                error_code="VALIDATION_ERROR",
                errors={"items": ["At least one item is required."]},
            )
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=errors,
            status_code=status_code,
            correlation_id=correlation_id,
        )

    @classmethod
    def from_error(cls, exc: BaseApplicationError) -> ServiceResult[T]:
        """
        Create a failed result from a domain exception.

        The status code and error code are taken from the exception class.
        """
        return cls.failure(
            exc.message,
            error_code=exc.error_code,
            errors=exc.details or None,
            status_code=exc.status_code,
            correlation_id=exc.details.get("correlation_id"),
        )

    def to_response(self) -> dict[str, Any]:
        """
        Convert to API response format.

        Returns:
            Dict with success status and data or error details
        """
        if self.success:
            return {"success": True, "data": self.data}

        response: dict[str, Any] = {
            "success": False,
            "error": self.error,
        }
        if self.error_code:
            response["error_code"] = self.error_code
        if self.errors:
            response["errors"] = self.errors
        if self.correlation_id:
            response["correlation_id"] = self.correlation_id
        return response

    def __bool__(self) -> bool:
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management
    - Conversion of raised errors into ServiceResult

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state)
        - Domain services raise core.exceptions errors
        - Orchestrators return ServiceResult
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation raises, all
        changes are rolled back. Nested blocks become savepoints.

        Example:
            with cls.atomic():
                rental = Rental.objects.create(...)
                RentalItem.objects.create(rental=rental, ...)
                # If the item insert fails, the rental is rolled back too
        """
        with transaction.atomic():
            yield

    @classmethod
    def handle_exception(cls, exc: Exception, context: str = "") -> ServiceResult:
        """
        Convert an exception to ServiceResult with logging.

        Domain errors become failures carrying their own status code.
        Anything else is logged with its traceback under a fresh
        correlation id and reported as an opaque 500.
        """
        if isinstance(exc, BaseApplicationError):
            cls.get_logger().info(
                f"{context} rejected: {exc}" if context else f"Rejected: {exc}",
                extra={"error_code": exc.error_code},
            )
            return ServiceResult.from_error(exc)

        correlation_id = str(uuid.uuid4())
        cls.get_logger().error(
            f"Unexpected error during {context or 'service call'}",
            exc_info=True,
            extra={"correlation_id": correlation_id},
        )
        wrapped = UnexpectedError(
            "An unexpected error occurred",
            details={"correlation_id": correlation_id},
        )
        return ServiceResult.failure(
            wrapped.message,
            error_code=wrapped.error_code,
            status_code=wrapped.status_code,
            correlation_id=correlation_id,
        )
