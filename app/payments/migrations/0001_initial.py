import django.db.models.deletion
import django_fsm
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("rentals", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, help_text="Timestamp when this record was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Timestamp when this record was last modified")),
                ("amount", models.DecimalField(decimal_places=2, help_text="Amount charged", max_digits=12)),
                ("method", models.CharField(choices=[("cash", "Cash"), ("card", "Card"), ("online", "Online")], help_text="How the customer pays", max_length=10)),
                ("status", django_fsm.FSMField(choices=[("pending", "Pending"), ("paid", "Paid"), ("failed", "Failed"), ("refunded", "Refunded")], db_index=True, default="pending", help_text="Current state of the payment (managed by FSM)", max_length=50)),
                ("paid_at", models.DateTimeField(blank=True, help_text="When the payment was completed", null=True)),
                ("transaction_reference", models.CharField(blank=True, help_text="Payment reference (PAY-..., CASH-...) or gateway intent id", max_length=255, null=True)),
                ("stripe_payment_id", models.CharField(blank=True, help_text="Gateway charge id (card payments)", max_length=255, null=True)),
                ("payment_details", models.JSONField(blank=True, default=dict, help_text="Append-only metadata (confirmation, gateway ids, failure reason)")),
                ("rental", models.OneToOneField(help_text="Rental settled by this payment", on_delete=django.db.models.deletion.CASCADE, related_name="payment", to="rentals.rental")),
            ],
            options={
                "verbose_name": "Payment",
                "verbose_name_plural": "Payments",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["method", "status"], name="payment_method_status")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("amount__gte", 0)), name="payment_amount_non_negative"),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("paid_at__isnull", False), ("status", "paid")),
                            models.Q(models.Q(("status", "paid"), _negated=True), ("paid_at__isnull", True)),
                            _connector="OR",
                        ),
                        name="payment_paid_at_matches_status",
                    ),
                ],
            },
        ),
    ]
