from decimal import Decimal

import django.db.models.deletion
import django_fsm
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Rental",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, help_text="Timestamp when this record was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Timestamp when this record was last modified")),
                ("rental_date", models.DateField(help_text="First day of the rental")),
                ("return_date", models.DateField(help_text="Day the items are returned")),
                ("total_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), help_text="Sum of item subtotals, fixed at creation", max_digits=12)),
                ("notes", models.TextField(blank=True, default="")),
                ("status", django_fsm.FSMField(choices=[("pending", "Pending"), ("confirmed", "Confirmed")], db_index=True, default="pending", help_text="Current state of the rental (managed by FSM)", max_length=50)),
                ("confirmed_at", models.DateTimeField(blank=True, help_text="When the rental was confirmed", null=True)),
                ("payment_method", models.CharField(choices=[("none", "None"), ("card", "Card"), ("cash", "Cash")], default="none", max_length=10)),
                ("payment_status", models.CharField(choices=[("pending", "Pending"), ("paid", "Paid"), ("failed", "Failed"), ("refunded", "Refunded")], db_index=True, default="pending", help_text="Mirrors the status of the rental's payment", max_length=10)),
                ("payment_reference", models.CharField(blank=True, help_text="Customer-facing payment reference (PAY-...)", max_length=64, null=True, unique=True)),
                ("user", models.ForeignKey(help_text="Customer who owns the rental", on_delete=django.db.models.deletion.PROTECT, related_name="rentals", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Rental",
                "verbose_name_plural": "Rentals",
                "ordering": ["-rental_date", "-created_at"],
                "indexes": [models.Index(fields=["user", "rental_date"], name="rental_user_rental_date")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("return_date__gt", models.F("rental_date"))), name="rental_return_after_rental"),
                    models.CheckConstraint(condition=models.Q(("total_amount__gte", 0)), name="rental_total_non_negative"),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("confirmed_at__isnull", False), ("status", "confirmed")),
                            models.Q(models.Q(("status", "confirmed"), _negated=True), ("confirmed_at__isnull", True)),
                            _connector="OR",
                        ),
                        name="rental_confirmed_at_matches_status",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="RentalItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, help_text="Timestamp when this record was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Timestamp when this record was last modified")),
                ("quantity", models.PositiveIntegerField(default=1)),
                ("price_per_day", models.DecimalField(decimal_places=2, help_text="Daily price frozen from the catalog", max_digits=10)),
                ("subtotal", models.DecimalField(decimal_places=2, max_digits=12)),
                ("clothing_item", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="rental_items", to="catalog.clothingitem")),
                ("rental", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="items", to="rentals.rental")),
            ],
            options={
                "verbose_name": "Rental Item",
                "verbose_name_plural": "Rental Items",
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("quantity__gte", 1)), name="rental_item_quantity_positive"),
                    models.CheckConstraint(condition=models.Q(("price_per_day__gte", 0)), name="rental_item_price_non_negative"),
                ],
            },
        ),
    ]
