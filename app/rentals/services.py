"""
Rental service: the only writer of Rental and RentalItem rows.

Responsibilities:
    - Create a rental with its items and computed total, atomically
    - Confirm a rental (idempotent; confirmed_at set once)
    - Project the payment status and method onto the rental
    - Assign the customer-facing payment reference (idempotent)
    - Owner-scoped lookups, optionally locking the row

Methods that mutate an existing rental expect the caller to hold the row
lock (see payments.locks) when other writers could race them.

Usage:
    from rentals.services import RentalService

    rental = RentalService.create_rental(
        owner=request.user,
        rental_date=date(2025, 1, 1),
        return_date=date(2025, 1, 3),
        line_items=[{"clothing_item_id": 5, "quantity": 2}],
    )
"""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

from django.conf import settings

from catalog.services import CatalogService
from core.services import BaseService
from rentals.exceptions import RentalNotFoundError, RentalValidationError
from rentals.models import Rental, RentalItem
from rentals.pricing import PricingLine, compute_rental_pricing

if TYPE_CHECKING:
    from datetime import date, datetime
    from typing import Any

    from django.contrib.auth.models import AbstractBaseUser
    from django.db.models import QuerySet


class RentalService(BaseService):
    """Rental lifecycle operations."""

    # ==========================================================================
    # Creation
    # ==========================================================================

    @classmethod
    def create_rental(
        cls,
        owner: AbstractBaseUser,
        rental_date: date,
        return_date: date,
        line_items: list[dict[str, Any]],
        notes: str | None = None,
    ) -> Rental:
        """
        Create a pending rental with its items.

        Each catalog item is resolved and its current daily price frozen
        onto the rental line. The rental and all of its items are written in
        one transaction; any failure leaves nothing behind.

        Args:
            owner: Customer the rental belongs to
            rental_date: First day
            return_date: Return day, strictly after rental_date
            line_items: [{"clothing_item_id": int, "quantity": int}, ...]
            notes: Optional free text

        Raises:
            RentalValidationError: Empty items, bad date range, or an item
                that is not available
            ClothingItemNotFoundError: A referenced item does not exist
            InvalidPricingInputError: Quantity below 1
        """
        if not line_items:
            raise RentalValidationError(
                "At least one item is required",
                details={"items": ["At least one item is required."]},
            )
        if return_date <= rental_date:
            raise RentalValidationError(
                "Return date must be after the rental date",
                details={"return_date": ["Must be after rental_date."]},
            )

        with cls.atomic():
            resolved = []
            for line in line_items:
                item = CatalogService.get_clothing_item(line["clothing_item_id"])
                if not item.is_available:
                    raise RentalValidationError(
                        f"Clothing item {item.pk} is not available",
                        error_code="CLOTHING_ITEM_UNAVAILABLE",
                        details={"item_id": item.pk, "status": item.status},
                    )
                resolved.append((item, line.get("quantity", 1)))

            pricing = compute_rental_pricing(
                [PricingLine(item.price_per_day, quantity) for item, quantity in resolved],
                rental_date,
                return_date,
                min_days=settings.RENTAL_MIN_CHARGE_DAYS,
            )

            rental = Rental.objects.create(
                user=owner,
                rental_date=rental_date,
                return_date=return_date,
                total_amount=pricing.total,
                notes=notes or "",
            )
            RentalItem.objects.bulk_create(
                [
                    RentalItem(
                        rental=rental,
                        clothing_item=item,
                        quantity=quantity,
                        price_per_day=item.price_per_day,
                        subtotal=subtotal,
                    )
                    for (item, quantity), subtotal in zip(resolved, pricing.subtotals)
                ]
            )

        cls.get_logger().info(
            f"Created rental {rental.pk}",
            extra={
                "rental_id": rental.pk,
                "user_id": owner.pk,
                "days": pricing.days,
                "total_amount": str(pricing.total),
                "item_count": len(resolved),
            },
        )
        return rental

    # ==========================================================================
    # State & Projection
    # ==========================================================================

    @classmethod
    def confirm_rental(cls, rental: Rental, now: datetime) -> Rental:
        """
        Confirm a rental.

        Already-confirmed rentals are returned unchanged; confirmed_at is
        never overwritten.
        """
        if rental.is_confirmed:
            return rental

        rental.confirm(now)
        rental.save(update_fields=["status", "confirmed_at", "updated_at"])

        cls.get_logger().info(
            f"Confirmed rental {rental.pk}",
            extra={"rental_id": rental.pk, "confirmed_at": now.isoformat()},
        )
        return rental

    @classmethod
    def sync_payment_status(
        cls,
        rental: Rental,
        new_status: str,
        payment_method: str | None = None,
    ) -> Rental:
        """
        Write the payment's status (and optionally method) onto the rental.

        Must run in the same transaction as the payment change it mirrors.
        """
        rental.payment_status = new_status
        update_fields = ["payment_status", "updated_at"]
        if payment_method is not None:
            rental.payment_method = payment_method
            update_fields.append("payment_method")
        rental.save(update_fields=update_fields)
        return rental

    @classmethod
    def generate_payment_reference(cls, rental: Rental) -> str:
        """
        Return the rental's payment reference, assigning one if missing.

        Format: PAY-<random hex, upper case>-<rental id>. The token comes
        from the secrets module; the rental id suffix makes it unique.
        """
        if rental.payment_reference:
            return rental.payment_reference

        token = secrets.token_hex(settings.PAYMENT_REFERENCE_TOKEN_BYTES).upper()
        rental.payment_reference = f"PAY-{token}-{rental.pk}"
        rental.save(update_fields=["payment_reference", "updated_at"])
        return rental.payment_reference

    # ==========================================================================
    # Queries
    # ==========================================================================

    @classmethod
    def list_rentals_for_owner(cls, owner: AbstractBaseUser) -> QuerySet[Rental]:
        """Owner's rentals, latest rental_date first, items preloaded."""
        return (
            Rental.objects.filter(user=owner)
            .prefetch_related("items__clothing_item")
            .order_by("-rental_date", "-created_at")
        )

    @classmethod
    def get_rental(
        cls,
        rental_id: int,
        owner: AbstractBaseUser | None = None,
        for_update: bool = False,
    ) -> Rental:
        """
        Fetch a rental by id.

        Args:
            rental_id: Rental primary key
            owner: When given, rentals of other users are reported missing
            for_update: Lock the row (SELECT ... FOR UPDATE); needs a transaction

        Raises:
            RentalNotFoundError: Missing, or owned by someone other than ``owner``
        """
        queryset = Rental.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        if owner is not None:
            queryset = queryset.filter(user=owner)

        try:
            return queryset.get(pk=rental_id)
        except Rental.DoesNotExist:
            raise RentalNotFoundError(
                f"Rental {rental_id} not found",
                details={"rental_id": rental_id},
            ) from None
