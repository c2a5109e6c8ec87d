"""
API views for rentals.

Endpoints:
    POST /api/v1/rentals/      Create a rental for the current user
    GET  /api/v1/rentals/my/   Current user's rentals, latest rental_date first

Both endpoints require a valid JWT.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from payments.services import RentalOrchestrator
from rentals.serializers import RentalCreateSerializer, RentalSerializer


class RentalCreateView(APIView):
    """
    Create a rental.

    POST /api/v1/rentals/

    Request:
        {
            "rental_date": "2025-01-01",
            "return_date": "2025-01-03",
            "notes": "optional",
            "items": [{"clothing_item_id": 1, "quantity": 2}]
        }

    Response:
        201 Created: {"message": ..., "rental": {...}}
        400 Bad Request: Invalid dates, empty items, unavailable item
        404 Not Found: Unknown clothing item
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="create_rental",
        summary="Create rental",
        description=(
            "Create a pending rental for the authenticated user. Each item's "
            "daily price is frozen onto the rental; the total is price x "
            "quantity x days summed over all items."
        ),
        request=RentalCreateSerializer,
        responses={
            201: OpenApiResponse(
                response=RentalSerializer,
                description="Rental created successfully",
            ),
            400: OpenApiResponse(description="Validation error"),
            401: OpenApiResponse(description="Authentication required"),
            404: OpenApiResponse(description="Clothing item not found"),
        },
        tags=["Rentals"],
    )
    def post(self, request):
        serializer = RentalCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        result = RentalOrchestrator.create_rental(
            actor=request.user,
            rental_date=data["rental_date"],
            return_date=data["return_date"],
            items=data["items"],
            notes=data.get("notes"),
        )
        if not result.success:
            return Response(result.to_response(), status=result.status_code)

        return Response(
            {
                "message": "Rental created successfully",
                "rental": RentalSerializer(result.data).data,
            },
            status=status.HTTP_201_CREATED,
        )


class MyRentalsView(APIView):
    """
    List the current user's rentals.

    GET /api/v1/rentals/my/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="list_my_rentals",
        summary="List my rentals",
        responses={200: RentalSerializer(many=True)},
        tags=["Rentals"],
    )
    def get(self, request):
        result = RentalOrchestrator.list_my_rentals(request.user)
        if not result.success:
            return Response(result.to_response(), status=result.status_code)
        return Response(RentalSerializer(result.data, many=True).data)
