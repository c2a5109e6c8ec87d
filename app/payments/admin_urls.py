"""
URL configuration for staff payment endpoints.

Routes (prefixed with /api/v1/admin/payments/):
    - GET  pending-cash/               - Pending cash payments
    - POST confirm-cash/<rental_id>/   - Confirm cash received
    - POST fail/<rental_id>/           - Mark pending payment failed
"""

from django.urls import path

from payments.views import (
    CashPaymentConfirmView,
    PaymentFailView,
    PendingCashPaymentsView,
)

app_name = "payments_admin"

urlpatterns = [
    path("pending-cash/", PendingCashPaymentsView.as_view(), name="pending_cash"),
    path(
        "confirm-cash/<int:rental_id>/",
        CashPaymentConfirmView.as_view(),
        name="confirm_cash",
    ),
    path("fail/<int:rental_id>/", PaymentFailView.as_view(), name="fail"),
]
