"""
DRF views for rental payments.

Customer endpoints (/api/v1/payments/):
    POST   ""                     Record a settled payment (confirms the rental)
    POST   cash/                  Create a pending cash payment
    POST   card/                  Record an authorized card payment
    GET    status/{rental_id}/    Payment projection of a rental

Staff endpoints (/api/v1/admin/payments/):
    GET    pending-cash/                  Pending cash payments, newest first
    POST   confirm-cash/{rental_id}/      Confirm cash received
    POST   fail/{rental_id}/              Mark a pending payment failed

Security:
    - Customers can only act on their own rentals; other rentals are 404
    - Staff endpoints require is_staff
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from payments.serializers import (
    CardPaymentSerializer,
    CashPaymentConfirmSerializer,
    CashPaymentCreateSerializer,
    PaymentFailSerializer,
    PaymentSerializer,
    PaymentStatusSerializer,
    PendingCashPaymentSerializer,
    RecordPaymentSerializer,
)
from payments.services import RentalOrchestrator
from rentals.serializers import RentalSerializer


def _failure_response(result):
    return Response(result.to_response(), status=result.status_code)


def _outcome_response(message, outcome, http_status=status.HTTP_200_OK):
    body = {
        "message": message,
        "payment": PaymentSerializer(outcome.payment).data,
        "rental": RentalSerializer(outcome.rental).data,
    }
    if outcome.payment_reference:
        body["payment_reference"] = outcome.payment_reference
    return Response(body, status=http_status)


# =============================================================================
# Customer Endpoints
# =============================================================================


class RecordPaymentView(APIView):
    """
    Record a payment that was settled outside the system.

    POST /api/v1/payments/

    The payment is stored as paid and the rental confirmed.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="record_payment",
        summary="Record payment",
        request=RecordPaymentSerializer,
        responses={
            201: OpenApiResponse(description="Payment recorded successfully"),
            400: OpenApiResponse(description="Validation error"),
            404: OpenApiResponse(description="Rental not found"),
            409: OpenApiResponse(description="Rental already has a payment"),
        },
        tags=["Payments"],
    )
    def post(self, request):
        serializer = RecordPaymentSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        result = RentalOrchestrator.record_generic_payment(
            actor=request.user,
            rental_id=data["rental_id"],
            amount=data["amount"],
            method=data["method"],
            reference=data.get("transaction_reference") or None,
        )
        if not result.success:
            return _failure_response(result)
        return _outcome_response(
            "Payment recorded successfully",
            result.data,
            http_status=status.HTTP_201_CREATED,
        )


class CashPaymentCreateView(APIView):
    """
    Create a pending cash payment.

    POST /api/v1/payments/cash/

    Response carries the PAY- reference the customer quotes when paying.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="create_cash_payment",
        summary="Create cash payment",
        request=CashPaymentCreateSerializer,
        responses={
            201: OpenApiResponse(description="Cash payment created successfully"),
            400: OpenApiResponse(description="Validation error"),
            404: OpenApiResponse(description="Rental not found"),
            409: OpenApiResponse(description="Rental already has a payment"),
        },
        tags=["Payments"],
    )
    def post(self, request):
        serializer = CashPaymentCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = RentalOrchestrator.create_cash_payment(
            actor=request.user,
            rental_id=serializer.validated_data["rental_id"],
            amount=serializer.validated_data["amount"],
        )
        if not result.success:
            return _failure_response(result)
        return _outcome_response(
            "Cash payment created successfully",
            result.data,
            http_status=status.HTTP_201_CREATED,
        )


class CardPaymentView(APIView):
    """
    Record a card payment authorized upstream.

    POST /api/v1/payments/card/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="process_card_payment",
        summary="Process card payment",
        description=(
            "Store an already-authorized card payment as paid and confirm the "
            "rental in the same transaction."
        ),
        request=CardPaymentSerializer,
        responses={
            200: OpenApiResponse(description="Card payment processed successfully"),
            400: OpenApiResponse(description="Validation error"),
            404: OpenApiResponse(description="Rental not found"),
            409: OpenApiResponse(description="Rental already has a payment"),
        },
        tags=["Payments"],
    )
    def post(self, request):
        serializer = CardPaymentSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        result = RentalOrchestrator.process_card_payment(
            actor=request.user,
            rental_id=data["rental_id"],
            amount=data["amount"],
            gateway_charge_id=data["stripe_payment_id"],
            payment_intent_id=data["payment_intent_id"],
        )
        if not result.success:
            return _failure_response(result)
        return _outcome_response("Card payment processed successfully", result.data)


class RentalPaymentStatusView(APIView):
    """
    Payment projection of a rental.

    GET /api/v1/payments/status/{rental_id}/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_payment_status",
        summary="Get payment status",
        responses={
            200: PaymentStatusSerializer,
            404: OpenApiResponse(description="Rental not found"),
        },
        tags=["Payments"],
    )
    def get(self, request, rental_id):
        result = RentalOrchestrator.get_payment_status(request.user, rental_id)
        if not result.success:
            return _failure_response(result)
        return Response(PaymentStatusSerializer(result.data).data)


# =============================================================================
# Staff Endpoints
# =============================================================================


class PendingCashPaymentsView(APIView):
    """
    Pending cash payments awaiting confirmation.

    GET /api/v1/admin/payments/pending-cash/
    """

    permission_classes = [IsAdminUser]

    @extend_schema(
        operation_id="list_pending_cash_payments",
        summary="List pending cash payments",
        responses={200: PendingCashPaymentSerializer(many=True)},
        tags=["Payments - Admin"],
    )
    def get(self, request):
        result = RentalOrchestrator.list_pending_cash_payments()
        if not result.success:
            return _failure_response(result)
        return Response(
            {"pending_payments": PendingCashPaymentSerializer(result.data, many=True).data}
        )


class CashPaymentConfirmView(APIView):
    """
    Confirm that cash was received for a rental.

    POST /api/v1/admin/payments/confirm-cash/{rental_id}/

    Response:
        200 OK: Payment paid, rental confirmed
        400 Bad Request: Payment already confirmed
        404 Not Found: Rental has no cash payment
    """

    permission_classes = [IsAdminUser]

    @extend_schema(
        operation_id="confirm_cash_payment",
        summary="Confirm cash payment",
        request=CashPaymentConfirmSerializer,
        responses={
            200: OpenApiResponse(description="Cash payment confirmed successfully"),
            400: OpenApiResponse(description="Validation error or payment already confirmed"),
            404: OpenApiResponse(description="No cash payment found for this rental"),
        },
        tags=["Payments - Admin"],
    )
    def post(self, request, rental_id):
        serializer = CashPaymentConfirmSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = RentalOrchestrator.confirm_cash_payment(
            actor=request.user,
            rental_id=rental_id,
            amount_received=serializer.validated_data["amount_received"],
            notes=serializer.validated_data.get("notes") or None,
        )
        if not result.success:
            return _failure_response(result)
        return _outcome_response("Cash payment confirmed successfully", result.data)


class PaymentFailView(APIView):
    """
    Mark a rental's pending payment as failed.

    POST /api/v1/admin/payments/fail/{rental_id}/
    """

    permission_classes = [IsAdminUser]

    @extend_schema(
        operation_id="fail_payment",
        summary="Mark payment failed",
        request=PaymentFailSerializer,
        responses={
            200: OpenApiResponse(description="Payment marked as failed"),
            400: OpenApiResponse(description="Payment is not pending"),
            404: OpenApiResponse(description="Rental or payment not found"),
        },
        tags=["Payments - Admin"],
    )
    def post(self, request, rental_id):
        serializer = PaymentFailSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = RentalOrchestrator.fail_payment(
            actor=request.user,
            rental_id=rental_id,
            reason=serializer.validated_data.get("reason") or None,
        )
        if not result.success:
            return _failure_response(result)
        return _outcome_response("Payment marked as failed", result.data)
