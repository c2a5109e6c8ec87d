"""
Core Application - Infrastructure & Base Classes

Generic building blocks shared by the domain apps. Nothing in here knows
about rentals, payments or the catalog.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Services (import from core.services):
    - BaseService: Base class for service layer (logging, transactions)
    - ServiceResult: Standard result wrapper for success/failure handling

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes and HTTP status
    - ValidationError: Input validation failures
    - NotFoundError: Resource not found
    - InvalidStateError: Operation not allowed in the current state
    - ConflictError: Duplicates and write-once violations
    - UnexpectedError: Unanticipated failures, reported with a correlation id

Views (import from core.views):
    - health_check: Database liveness probe
"""
