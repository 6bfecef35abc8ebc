import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


def _timestamp():
    return models.DateTimeField(blank=True, null=True)


def _latitude():
    return models.DecimalField(blank=True, decimal_places=8, max_digits=10, null=True)


def _longitude():
    return models.DecimalField(blank=True, decimal_places=8, max_digits=11, null=True)


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="InvoiceCounter",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("current_number", models.PositiveIntegerField(default=6000)),
                ("last_updated", models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name="Load",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "number",
                    models.CharField(
                        help_text="Human-readable load number (109 number)",
                        max_length=50,
                        unique=True,
                    ),
                ),
                (
                    "destination_name",
                    models.CharField(
                        blank=True,
                        help_text="Receiver / destination location name",
                        max_length=200,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("created", "Created"),
                            ("confirmed", "Confirmed by Driver"),
                            ("en_route_pickup", "En Route to Pickup"),
                            ("at_shipper", "At Shipper"),
                            ("left_shipper", "Left Shipper"),
                            ("en_route_receiver", "En Route to Receiver"),
                            ("at_receiver", "At Receiver"),
                            ("delivered", "Delivered"),
                            ("awaiting_invoicing", "Awaiting Invoicing"),
                            ("awaiting_payment", "Awaiting Payment"),
                            ("completed", "Completed"),
                            ("paid", "Paid"),
                        ],
                        default="created",
                        max_length=30,
                    ),
                ),
                ("driver_confirmed", models.BooleanField(default=False)),
                ("driver_confirmed_at", _timestamp()),
                ("tracking_enabled", models.BooleanField(default=False)),
                (
                    "tracking_started_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When driver accepted load and started tracking",
                        null=True,
                    ),
                ),
                ("current_latitude", _latitude()),
                ("current_longitude", _longitude()),
                ("last_location_update", _timestamp()),
                ("shipper_latitude", _latitude()),
                ("shipper_longitude", _longitude()),
                ("receiver_latitude", _latitude()),
                ("receiver_longitude", _longitude()),
                ("shipper_entered_at", _timestamp()),
                ("shipper_exited_at", _timestamp()),
                ("receiver_entered_at", _timestamp()),
                ("receiver_exited_at", _timestamp()),
                ("confirmed_at", _timestamp()),
                ("en_route_pickup_at", _timestamp()),
                ("at_shipper_at", _timestamp()),
                ("left_shipper_at", _timestamp()),
                ("en_route_receiver_at", _timestamp()),
                ("at_receiver_at", _timestamp()),
                ("delivered_at", _timestamp()),
                ("awaiting_invoicing_at", _timestamp()),
                ("awaiting_payment_at", _timestamp()),
                ("completed_at", _timestamp()),
                ("paid_at", _timestamp()),
                (
                    "payment_method",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("check", "Check"),
                            ("wire", "Wire"),
                            ("ach", "ACH"),
                            ("cash", "Cash"),
                            ("other", "Other"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "payment_reference",
                    models.CharField(
                        blank=True,
                        help_text="Check number, wire confirmation, etc.",
                        max_length=100,
                    ),
                ),
                ("payment_notes", models.TextField(blank=True)),
                (
                    "driver",
                    models.ForeignKey(
                        blank=True,
                        limit_choices_to={"role": "driver"},
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="loads",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Invoice",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("invoice_number", models.CharField(max_length=20, unique=True)),
                (
                    "total_amount",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=10, null=True
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("awaiting_pod", "Awaiting POD"),
                            ("finalized", "Finalized"),
                            ("printed", "Printed"),
                            ("emailed", "Emailed"),
                        ],
                        default="draft",
                        max_length=20,
                    ),
                ),
                (
                    "generated_at",
                    models.DateTimeField(default=django.utils.timezone.now),
                ),
                ("finalized_at", _timestamp()),
                (
                    "load",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="invoices",
                        to="loads.load",
                    ),
                ),
            ],
            options={
                "ordering": ["-generated_at"],
            },
        ),
        migrations.CreateModel(
            name="LoadStatusHistory",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("status", models.CharField(max_length=30)),
                (
                    "timestamp",
                    models.DateTimeField(default=django.utils.timezone.now),
                ),
                ("notes", models.TextField(blank=True)),
                (
                    "load",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="status_history",
                        to="loads.load",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "load status history",
                "ordering": ["-timestamp", "-id"],
            },
        ),
    ]
