"""
Payment detail keys and the append-only merge used for Payment.payment_details.

The details bag is a JSON object that only ever grows: each producer writes
its own keys once, and nothing overwrites or removes an existing entry.

Producers:
    cash confirmation: confirmed_by, amount_received, confirmation_notes, confirmed_at
    card processing:   gateway_charge_id, payment_intent_id, processed_at
    failure:           failure_reason, failed_at
    recorded payment:  recorded_by

Usage:
    from payments.types import PaymentDetailKey, append_payment_details

    payment.payment_details = append_payment_details(
        payment.payment_details,
        {PaymentDetailKey.FAILURE_REASON: "Customer never showed up"},
    )
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from payments.exceptions import PaymentDetailConflictError, PaymentValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any


class PaymentDetailKey(str, Enum):
    """Keys allowed in Payment.payment_details."""

    CONFIRMED_BY = "confirmed_by"
    AMOUNT_RECEIVED = "amount_received"
    CONFIRMATION_NOTES = "confirmation_notes"
    CONFIRMED_AT = "confirmed_at"
    GATEWAY_CHARGE_ID = "gateway_charge_id"
    PAYMENT_INTENT_ID = "payment_intent_id"
    PROCESSED_AT = "processed_at"
    FAILURE_REASON = "failure_reason"
    FAILED_AT = "failed_at"
    RECORDED_BY = "recorded_by"


def to_json_value(value: Any) -> Any:
    """Convert Decimals and datetimes into JSON-safe strings."""
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def append_payment_details(
    existing: Mapping[str, Any] | None,
    additions: Mapping[PaymentDetailKey | str, Any],
) -> dict[str, Any]:
    """
    Return a new details dict with ``additions`` merged in.

    Entries whose value is None are skipped. The input mapping is not
    modified.

    Raises:
        PaymentValidationError: A key is not a PaymentDetailKey
        PaymentDetailConflictError: A key is already present
    """
    merged = dict(existing or {})

    for raw_key, value in additions.items():
        try:
            key = PaymentDetailKey(raw_key).value
        except ValueError:
            raise PaymentValidationError(
                f"Unknown payment detail key: {raw_key}",
                details={"key": str(raw_key)},
            ) from None

        if value is None:
            continue
        if key in merged:
            raise PaymentDetailConflictError(
                f"Payment detail '{key}' is already recorded",
                details={"key": key},
            )
        merged[key] = to_json_value(value)

    return merged
