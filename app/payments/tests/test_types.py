"""
Tests for the append-only payment details merge.
"""

from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from payments.exceptions import PaymentDetailConflictError, PaymentValidationError
from payments.types import PaymentDetailKey, append_payment_details, to_json_value


class TestToJsonValue:
    """Tests for to_json_value."""

    def test_decimal_becomes_string(self):
        """Should render a Decimal as a string."""
        assert to_json_value(Decimal("500.00")) == "500.00"

    def test_datetime_becomes_isoformat(self):
        """Should render a datetime in ISO format."""
        moment = datetime(2025, 1, 1, 10, 0, tzinfo=dt_timezone.utc)

        assert to_json_value(moment) == "2025-01-01T10:00:00+00:00"

    def test_other_values_unchanged(self):
        """Should pass other values through."""
        assert to_json_value("12") == "12"
        assert to_json_value(3) == 3


class TestAppendPaymentDetails:
    """Tests for append_payment_details."""

    def test_adds_new_keys(self):
        """Should add new entries."""
        details = append_payment_details(
            {},
            {
                PaymentDetailKey.CONFIRMED_BY: "7",
                PaymentDetailKey.AMOUNT_RECEIVED: Decimal("500.00"),
            },
        )

        assert details == {"confirmed_by": "7", "amount_received": "500.00"}

    def test_keeps_existing_entries(self):
        """Should keep entries already present."""
        existing = {"payment_intent_id": "pi_1"}

        details = append_payment_details(existing, {PaymentDetailKey.FAILURE_REASON: "declined"})

        assert details == {"payment_intent_id": "pi_1", "failure_reason": "declined"}

    def test_does_not_mutate_input(self):
        """Should return a new dict."""
        existing = {"recorded_by": "3"}

        append_payment_details(existing, {PaymentDetailKey.FAILED_AT: "2025-01-01"})

        assert existing == {"recorded_by": "3"}

    def test_accepts_string_keys(self):
        """Should accept plain string keys."""
        details = append_payment_details(None, {"processed_at": "2025-01-01"})

        assert details == {"processed_at": "2025-01-01"}

    def test_skips_none_values(self):
        """Should drop None values."""
        details = append_payment_details({}, {PaymentDetailKey.CONFIRMATION_NOTES: None})

        assert details == {}

    def test_existing_key_is_never_overwritten(self):
        """Should never overwrite an existing entry."""
        with pytest.raises(PaymentDetailConflictError) as exc_info:
            append_payment_details(
                {"confirmed_by": "7"},
                {PaymentDetailKey.CONFIRMED_BY: "8"},
            )

        assert exc_info.value.status_code == 409

    def test_unknown_key_rejected(self):
        """Should reject keys outside the known set."""
        with pytest.raises(PaymentValidationError):
            append_payment_details({}, {"card_number": "4242"})
