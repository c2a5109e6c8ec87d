"""
Payment admin configuration.

Payments are read-only in the admin. Cash confirmation and failure go
through the staff API so the rental projection is updated with them.
"""

from django.contrib import admin

from payments.models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """Admin view of rental payments."""

    list_display = [
        "id",
        "rental",
        "amount",
        "method",
        "status",
        "transaction_reference",
        "paid_at",
        "created_at",
    ]
    list_filter = ["method", "status"]
    search_fields = ["id", "transaction_reference", "stripe_payment_id", "rental__payment_reference"]
    list_select_related = ["rental"]
    ordering = ["-created_at"]

    def get_readonly_fields(self, request, obj=None):
        return [field.name for field in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
