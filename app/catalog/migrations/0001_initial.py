from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, help_text="Timestamp when this record was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Timestamp when this record was last modified")),
                ("name", models.CharField(help_text="Display name of the category", max_length=255, unique=True)),
                ("description", models.TextField(blank=True, default="", help_text="Optional longer description")),
            ],
            options={
                "verbose_name": "Category",
                "verbose_name_plural": "Categories",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="ClothingItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, help_text="Timestamp when this record was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Timestamp when this record was last modified")),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("size", models.CharField(choices=[("XS", "XS"), ("S", "S"), ("M", "M"), ("L", "L"), ("XL", "XL"), ("XXL", "XXL")], max_length=3)),
                ("color", models.CharField(blank=True, default="", max_length=100)),
                ("brand", models.CharField(blank=True, default="", max_length=100)),
                ("price_per_day", models.DecimalField(decimal_places=2, help_text="Daily rental price", max_digits=10)),
                ("deposit_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), help_text="Refundable deposit", max_digits=10)),
                ("status", models.CharField(choices=[("available", "Available"), ("rented", "Rented"), ("maintenance", "Maintenance"), ("cleaning", "Cleaning")], db_index=True, default="available", max_length=20)),
                ("condition", models.CharField(choices=[("new", "New"), ("excellent", "Excellent"), ("good", "Good"), ("fair", "Fair")], default="good", max_length=20)),
                ("category", models.ForeignKey(help_text="Category the item is listed under", on_delete=django.db.models.deletion.PROTECT, related_name="items", to="catalog.category")),
            ],
            options={
                "verbose_name": "Clothing Item",
                "verbose_name_plural": "Clothing Items",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["category", "status"], name="clothing_item_category_status")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("price_per_day__gte", 0)), name="clothing_item_price_non_negative"),
                    models.CheckConstraint(condition=models.Q(("deposit_amount__gte", 0)), name="clothing_item_deposit_non_negative"),
                ],
            },
        ),
    ]
