"""
Catalog admin configuration.

The admin is the only place catalog entries are created or edited.
"""

from django.contrib import admin

from catalog.models import Category, ClothingItem


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "created_at"]
    search_fields = ["name"]
    ordering = ["name"]


@admin.register(ClothingItem)
class ClothingItemAdmin(admin.ModelAdmin):
    """
    Admin configuration for ClothingItem.

    Status is editable from the list so staff can move items through
    cleaning and maintenance quickly.
    """

    list_display = [
        "id",
        "name",
        "category",
        "size",
        "price_per_day",
        "status",
        "condition",
    ]
    list_editable = ["status"]
    list_filter = ["status", "condition", "size", "category"]
    search_fields = ["name", "description", "brand"]
    readonly_fields = ["created_at", "updated_at"]
    ordering = ["-created_at"]

    fieldsets = (
        (
            None,
            {
                "fields": ("name", "description", "category"),
            },
        ),
        (
            "Garment",
            {
                "fields": ("size", "color", "brand", "condition"),
            },
        ),
        (
            "Pricing & Stock",
            {
                "fields": ("price_per_day", "deposit_amount", "status"),
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
