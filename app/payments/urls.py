"""
URL configuration for customer payment endpoints.

Routes (prefixed with /api/v1/payments/):
    - POST ""                    - Record a settled payment
    - POST cash/                 - Create pending cash payment
    - POST card/                 - Process card payment
    - GET  status/<rental_id>/   - Payment status of a rental

Staff routes live in payments.admin_urls.
"""

from django.urls import path

from payments.views import (
    CardPaymentView,
    CashPaymentCreateView,
    RecordPaymentView,
    RentalPaymentStatusView,
)

app_name = "payments"

urlpatterns = [
    path("", RecordPaymentView.as_view(), name="record"),
    path("cash/", CashPaymentCreateView.as_view(), name="cash_create"),
    path("card/", CardPaymentView.as_view(), name="card"),
    path("status/<int:rental_id>/", RentalPaymentStatusView.as_view(), name="status"),
]
