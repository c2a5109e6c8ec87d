"""
Tests for the payment API endpoints.
"""

from decimal import Decimal

import pytest
from rest_framework import status

from payments.models import Payment
from payments.state_machines import PaymentMethod, PaymentStatus
from payments.tests.factories import PaymentFactory
from rentals.models import Rental

PAYMENTS_URL = "/api/v1/payments/"
CASH_URL = "/api/v1/payments/cash/"
CARD_URL = "/api/v1/payments/card/"
PENDING_CASH_URL = "/api/v1/admin/payments/pending-cash/"


def status_url(rental_id):
    return f"/api/v1/payments/status/{rental_id}/"


def confirm_url(rental_id):
    return f"/api/v1/admin/payments/confirm-cash/{rental_id}/"


def fail_url(rental_id):
    return f"/api/v1/admin/payments/fail/{rental_id}/"


# =============================================================================
# Customer Endpoints
# =============================================================================


class TestRecordPaymentView:
    """Tests for POST /api/v1/payments/."""

    def test_records_paid_payment(self, authenticated_client, rental):
        """Should record a paid payment and return 201."""
        response = authenticated_client.post(
            PAYMENTS_URL,
            {
                "rental_id": rental.id,
                "amount": "500.00",
                "method": "online",
                "transaction_reference": "BANK-77",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["message"] == "Payment recorded successfully"
        assert response.data["payment"]["status"] == "paid"
        assert response.data["payment"]["transaction_reference"] == "BANK-77"
        assert response.data["rental"]["status"] == "confirmed"
        assert response.data["rental"]["payment_status"] == "paid"

    def test_invalid_method(self, authenticated_client, rental):
        """Should return 400 for an unknown method."""
        response = authenticated_client.post(
            PAYMENTS_URL,
            {"rental_id": rental.id, "amount": "500.00", "method": "cheque"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "method" in response.data

    def test_negative_amount(self, authenticated_client, rental):
        """Should return 400 for a negative amount."""
        response = authenticated_client.post(
            PAYMENTS_URL,
            {"rental_id": rental.id, "amount": "-1.00", "method": "cash"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "amount" in response.data

    def test_requires_authentication(self, api_client, rental):
        """Should return 401 without credentials."""
        response = api_client.post(
            PAYMENTS_URL,
            {"rental_id": rental.id, "amount": "500.00", "method": "cash"},
            format="json",
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestCashPaymentCreateView:
    """Tests for POST /api/v1/payments/cash/."""

    def test_creates_pending_cash_payment(self, authenticated_client, rental):
        """Should create a pending cash payment and return its reference."""
        response = authenticated_client.post(
            CASH_URL, {"rental_id": rental.id, "amount": "500.00"}, format="json"
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["message"] == "Cash payment created successfully"
        assert response.data["payment"]["status"] == "pending"
        assert response.data["payment"]["method"] == "cash"
        assert response.data["payment_reference"].startswith("PAY-")
        assert response.data["payment_reference"].endswith(f"-{rental.id}")
        assert response.data["rental"]["payment_reference"] == response.data["payment_reference"]

    def test_foreign_rental_is_not_found(self, other_client, rental):
        """Should return 404 for another customer's rental."""
        response = other_client.post(
            CASH_URL, {"rental_id": rental.id, "amount": "500.00"}, format="json"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert Payment.objects.count() == 0

    def test_second_payment_conflicts(self, authenticated_client, pending_cash_rental):
        """Should return 409 for a second payment."""
        response = authenticated_client.post(
            CASH_URL, {"rental_id": pending_cash_rental.id, "amount": "500.00"}, format="json"
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["success"] is False


class TestCardPaymentView:
    """Tests for POST /api/v1/payments/card/."""

    def test_processes_card_payment(self, authenticated_client, rental):
        """Should process the card payment and return 200."""
        response = authenticated_client.post(
            CARD_URL,
            {
                "rental_id": rental.id,
                "amount": "500.00",
                "stripe_payment_id": "ch_1",
                "payment_intent_id": "pi_1",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Card payment processed successfully"
        assert response.data["payment"]["method"] == "card"
        assert response.data["payment"]["status"] == "paid"
        assert response.data["payment"]["stripe_payment_id"] == "ch_1"
        assert response.data["rental"]["status"] == "confirmed"
        assert response.data["rental"]["payment_method"] == "card"
        assert response.data["rental"]["payment_status"] == "paid"

    def test_missing_gateway_ids(self, authenticated_client, rental):
        """Should return 400 without gateway ids."""
        response = authenticated_client.post(
            CARD_URL, {"rental_id": rental.id, "amount": "500.00"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "stripe_payment_id" in response.data
        assert "payment_intent_id" in response.data


class TestPaymentStatusView:
    """Tests for GET /api/v1/payments/status/{rental_id}/."""

    def test_projection(self, authenticated_client, pending_cash_rental):
        """Should return the rental's payment projection."""
        response = authenticated_client.get(status_url(pending_cash_rental.id))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["rental_id"] == pending_cash_rental.id
        assert response.data["payment_method"] == "cash"
        assert response.data["payment_status"] == "pending"
        assert response.data["payment_reference"] == pending_cash_rental.payment_reference
        assert response.data["is_paid"] is False
        assert response.data["is_confirmed"] is False
        assert response.data["payment"]["amount"] == "500.00"

    def test_without_payment(self, authenticated_client, rental):
        """Should return a null payment for an unpaid rental."""
        response = authenticated_client.get(status_url(rental.id))

        assert response.data["payment_method"] == "none"
        assert response.data["payment"] is None

    def test_foreign_rental(self, other_client, rental):
        """Should return 404 for another customer's rental."""
        response = other_client.get(status_url(rental.id))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "RENTAL_NOT_FOUND"


# =============================================================================
# Staff Endpoints
# =============================================================================


class TestPendingCashPaymentsView:
    """Tests for GET /api/v1/admin/payments/pending-cash/."""

    def test_lists_pending_cash_with_customer(self, staff_client, pending_cash_rental, user):
        """Should list pending cash payments with the customer."""
        PaymentFactory(paid=True)

        response = staff_client.get(PENDING_CASH_URL)

        assert response.status_code == status.HTTP_200_OK
        pending = response.data["pending_payments"]
        assert len(pending) == 1
        assert pending[0]["rental"]["id"] == pending_cash_rental.id
        assert pending[0]["rental"]["user"]["id"] == user.id
        assert pending[0]["rental"]["user"]["email"] == user.email

    def test_customers_are_forbidden(self, authenticated_client):
        """Should return 403 for non-staff users."""
        response = authenticated_client.get(PENDING_CASH_URL)

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestCashPaymentConfirmView:
    """Tests for POST /api/v1/admin/payments/confirm-cash/{rental_id}/."""

    def test_confirms(self, staff_client, pending_cash_rental):
        """Should confirm the cash payment and the rental."""
        response = staff_client.post(
            confirm_url(pending_cash_rental.id),
            {"amount_received": "500.00", "notes": "Counter 2"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Cash payment confirmed successfully"
        assert response.data["payment"]["status"] == "paid"
        assert response.data["payment"]["transaction_reference"].startswith("CASH-")
        assert response.data["payment"]["payment_details"]["confirmation_notes"] == "Counter 2"
        assert response.data["rental"]["status"] == "confirmed"
        assert response.data["rental"]["is_paid"] is True

    def test_already_confirmed(self, staff_client, pending_cash_rental):
        """Should return 400 for an already confirmed payment."""
        staff_client.post(
            confirm_url(pending_cash_rental.id), {"amount_received": "500.00"}, format="json"
        )

        response = staff_client.post(
            confirm_url(pending_cash_rental.id), {"amount_received": "500.00"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error"] == "Payment already confirmed"

    def test_no_cash_payment(self, staff_client, rental):
        """Should return 404 when the rental has no cash payment."""
        response = staff_client.post(
            confirm_url(rental.id), {"amount_received": "500.00"}, format="json"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error"] == "No cash payment found for this rental"

    def test_notes_too_long(self, staff_client, pending_cash_rental):
        """Should return 400 for notes over 500 characters."""
        response = staff_client.post(
            confirm_url(pending_cash_rental.id),
            {"amount_received": "500.00", "notes": "x" * 501},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_customers_are_forbidden(self, authenticated_client, pending_cash_rental):
        """Should return 403 for non-staff users."""
        response = authenticated_client.post(
            confirm_url(pending_cash_rental.id), {"amount_received": "500.00"}, format="json"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Payment.objects.get().status == PaymentStatus.PENDING


class TestPaymentFailView:
    """Tests for POST /api/v1/admin/payments/fail/{rental_id}/."""

    def test_fails_pending_payment(self, staff_client, pending_cash_rental):
        """Should mark the pending payment failed."""
        response = staff_client.post(
            fail_url(pending_cash_rental.id), {"reason": "No show"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["payment"]["status"] == "failed"
        assert response.data["payment"]["payment_details"]["failure_reason"] == "No show"
        assert Rental.objects.get().payment_status == PaymentStatus.FAILED

    def test_paid_payment_cannot_fail(self, staff_client, rental):
        """Should return 400 for a paid payment."""
        PaymentFactory(rental=rental, paid=True, method=PaymentMethod.CARD)

        response = staff_client.post(fail_url(rental.id), {}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
def test_full_cash_flow(authenticated_client, staff_client, rental):
    """Should create, pay in cash and confirm a rental end to end."""
    created = authenticated_client.post(
        CASH_URL, {"rental_id": rental.id, "amount": "500.00"}, format="json"
    )
    assert created.status_code == status.HTTP_201_CREATED

    pending = staff_client.get(PENDING_CASH_URL)
    assert [p["rental"]["id"] for p in pending.data["pending_payments"]] == [rental.id]

    confirmed = staff_client.post(
        confirm_url(rental.id), {"amount_received": Decimal("500.00")}, format="json"
    )
    assert confirmed.status_code == status.HTTP_200_OK

    projection = authenticated_client.get(status_url(rental.id))
    assert projection.data["is_paid"] is True
    assert projection.data["is_confirmed"] is True
    assert projection.data["payment_status"] == projection.data["payment"]["status"] == "paid"
