"""
Row locking for payment operations.

Every payment write locks the owning rental row first, then the payment row.
Taking the locks in that fixed order means two requests touching the same
rental serialize instead of deadlocking, and the second one sees the first
one's committed result (e.g. a payment that is already paid).

Usage:
    from payments.locks import lock_rental_for_payment

    with transaction.atomic():
        rental, payment = lock_rental_for_payment(rental_id)
        if payment is not None and payment.is_paid:
            raise InvalidPaymentStateError(...)

Note:
    Must be called inside a transaction. The locks are held until the
    transaction commits or rolls back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import transaction

from payments.models import Payment
from rentals.services import RentalService

if TYPE_CHECKING:
    from django.contrib.auth.models import AbstractBaseUser

    from rentals.models import Rental


def lock_rental_for_payment(
    rental_id: int,
    owner: AbstractBaseUser | None = None,
) -> tuple[Rental, Payment | None]:
    """
    Lock a rental and its payment, in that order.

    Args:
        rental_id: Rental primary key
        owner: When given, rentals of other users are reported missing

    Returns:
        (rental, payment) with both rows locked; payment is None when the
        rental has none yet

    Raises:
        RentalNotFoundError: If the rental does not exist (or is not owner's)
        TransactionManagementError: If called outside a transaction
    """
    if not transaction.get_connection().in_atomic_block:
        raise transaction.TransactionManagementError(
            "lock_rental_for_payment() must be called inside a transaction"
        )

    rental = RentalService.get_rental(rental_id, owner=owner, for_update=True)
    payment = Payment.objects.select_for_update().filter(rental_id=rental.pk).first()
    if payment is not None:
        # Projections go through the locked instance
        payment.rental = rental
    return rental, payment


__all__ = [
    "lock_rental_for_payment",
]
