"""
Rental pricing.

Pure functions: no database access, no settings lookups, no clock. Callers
pass everything in, which keeps the arithmetic trivially testable.

Rules:
    - days = max(min_days, whole days between the two dates)
    - subtotal = price_per_day * quantity * days, rounded half-up to 0.01
      per line, before summing
    - total = sum of subtotals

Usage:
    from rentals.pricing import PricingLine, compute_rental_pricing

    pricing = compute_rental_pricing(
        [PricingLine(Decimal("100.00"), 2), PricingLine(Decimal("50.00"), 1)],
        date(2025, 1, 1),
        date(2025, 1, 3),
    )
    pricing.subtotals  # (Decimal("400.00"), Decimal("100.00"))
    pricing.total      # Decimal("500.00")
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from rentals.exceptions import InvalidPricingInputError

if TYPE_CHECKING:
    from collections.abc import Iterable

CENT = Decimal("0.01")


@dataclass(frozen=True)
class PricingLine:
    """
    One priced line: a daily price and a quantity.

    Attributes:
        unit_price_per_day: Daily price of one unit
        quantity: Number of units rented (>= 1)
    """

    unit_price_per_day: Decimal
    quantity: int


@dataclass(frozen=True)
class RentalPricing:
    """Result of pricing a rental. ``subtotals`` follows the input order."""

    days: int
    subtotals: tuple[Decimal, ...]
    total: Decimal


def rental_days(rental_date: date, return_date: date, min_days: int = 1) -> int:
    """
    Number of charged days between two dates.

    Datetimes are accepted too; partial days are dropped, then the minimum
    applies, so a same-day return still costs ``min_days``.
    """
    return max(min_days, (return_date - rental_date).days)


def quantize_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def compute_rental_pricing(
    items: Iterable[PricingLine],
    rental_date: date,
    return_date: date,
    min_days: int = 1,
) -> RentalPricing:
    """
    Price a rental.

    Args:
        items: Lines to price, in display order
        rental_date: First day of the rental
        return_date: Day the items come back (must be after rental_date)
        min_days: Smallest number of days ever charged

    Returns:
        RentalPricing with the charged days, per-line subtotals and total

    Raises:
        InvalidPricingInputError: quantity < 1, negative price, or
            return_date <= rental_date
    """
    if return_date <= rental_date:
        raise InvalidPricingInputError(
            "Return date must be after the rental date",
            details={
                "rental_date": rental_date.isoformat(),
                "return_date": return_date.isoformat(),
            },
        )

    days = rental_days(rental_date, return_date, min_days)

    subtotals = []
    for index, line in enumerate(items):
        price = Decimal(str(line.unit_price_per_day))
        if line.quantity < 1:
            raise InvalidPricingInputError(
                "Quantity must be at least 1",
                details={"line": index, "quantity": line.quantity},
            )
        if price < 0:
            raise InvalidPricingInputError(
                "Price per day cannot be negative",
                details={"line": index, "unit_price_per_day": str(price)},
            )
        subtotals.append(quantize_money(price * line.quantity * days))

    total = sum(subtotals, Decimal("0.00"))
    return RentalPricing(days=days, subtotals=tuple(subtotals), total=total)
