"""
Rental admin configuration.

Rentals are read-only here: every change must go through RentalService or
the payment ledger so that the payment projection stays consistent.
"""

from django.contrib import admin

from rentals.models import Rental, RentalItem


class RentalItemInline(admin.TabularInline):
    model = RentalItem
    extra = 0
    can_delete = False
    readonly_fields = ["clothing_item", "quantity", "price_per_day", "subtotal"]

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Rental)
class RentalAdmin(admin.ModelAdmin):
    """Admin view of rentals and their payment projection."""

    list_display = [
        "id",
        "user",
        "rental_date",
        "return_date",
        "total_amount",
        "status",
        "payment_method",
        "payment_status",
        "created_at",
    ]
    list_filter = ["status", "payment_method", "payment_status"]
    search_fields = ["id", "payment_reference", "user__username", "user__email"]
    ordering = ["-rental_date"]
    inlines = [RentalItemInline]

    fieldsets = (
        (
            None,
            {
                "fields": ("user", "rental_date", "return_date", "total_amount", "notes"),
            },
        ),
        (
            "Status",
            {
                "fields": ("status", "confirmed_at"),
            },
        ),
        (
            "Payment",
            {
                "fields": ("payment_method", "payment_status", "payment_reference"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def get_readonly_fields(self, request, obj=None):
        return [field.name for field in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
