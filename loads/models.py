from django.contrib.auth import get_user_model
from django.db import models
from django.utils import timezone

from loads.services.geo import GeoPoint

User = get_user_model()


class BaseModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


def _position(latitude, longitude):
    """GeoPoint for a stored coordinate pair, or None when either half is missing."""
    if latitude is None or longitude is None:
        return None
    return GeoPoint(lat=float(latitude), lon=float(longitude))


class Load(BaseModel):
    """
    Freight load - the core business entity.

    Status moves forward through pickup and delivery either from driver GPS
    pings (see LoadStatusService.update_from_location) or from explicit
    actions taken by office staff.
    """

    class Status(models.TextChoices):
        CREATED = "created", "Created"
        CONFIRMED = "confirmed", "Confirmed by Driver"
        EN_ROUTE_PICKUP = "en_route_pickup", "En Route to Pickup"
        AT_SHIPPER = "at_shipper", "At Shipper"
        LEFT_SHIPPER = "left_shipper", "Left Shipper"
        EN_ROUTE_RECEIVER = "en_route_receiver", "En Route to Receiver"
        AT_RECEIVER = "at_receiver", "At Receiver"
        DELIVERED = "delivered", "Delivered"
        AWAITING_INVOICING = "awaiting_invoicing", "Awaiting Invoicing"
        AWAITING_PAYMENT = "awaiting_payment", "Awaiting Payment"
        COMPLETED = "completed", "Completed"
        PAID = "paid", "Paid"

        @property
        def timestamp_field(self):
            """Name of the Load column stamped when this status is written."""
            return STATUS_TIMESTAMP_FIELDS[self]

    class PaymentMethod(models.TextChoices):
        CHECK = "check", "Check"
        WIRE = "wire", "Wire"
        ACH = "ach", "ACH"
        CASH = "cash", "Cash"
        OTHER = "other", "Other"

    # Identification
    number = models.CharField(
        max_length=50,
        unique=True,
        help_text="Human-readable load number (109 number)",
    )

    # Relationships
    driver = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="loads",
        limit_choices_to={"role": "driver"},
    )
    destination_name = models.CharField(
        max_length=200,
        blank=True,
        help_text="Receiver / destination location name",
    )

    # Status
    status = models.CharField(
        max_length=30, choices=Status.choices, default=Status.CREATED
    )

    # Driver confirmation
    driver_confirmed = models.BooleanField(default=False)
    driver_confirmed_at = models.DateTimeField(null=True, blank=True)

    # GPS tracking
    tracking_enabled = models.BooleanField(default=False)
    tracking_started_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When driver accepted load and started tracking",
    )
    # unchecked GPS input, same width as longitude
    current_latitude = models.DecimalField(
        max_digits=11, decimal_places=8, null=True, blank=True
    )
    current_longitude = models.DecimalField(
        max_digits=11, decimal_places=8, null=True, blank=True
    )
    last_location_update = models.DateTimeField(null=True, blank=True)

    # Geofence centers
    shipper_latitude = models.DecimalField(
        max_digits=10, decimal_places=8, null=True, blank=True
    )
    shipper_longitude = models.DecimalField(
        max_digits=11, decimal_places=8, null=True, blank=True
    )
    receiver_latitude = models.DecimalField(
        max_digits=10, decimal_places=8, null=True, blank=True
    )
    receiver_longitude = models.DecimalField(
        max_digits=11, decimal_places=8, null=True, blank=True
    )

    # Geofence entry/exit
    shipper_entered_at = models.DateTimeField(null=True, blank=True)
    shipper_exited_at = models.DateTimeField(null=True, blank=True)
    receiver_entered_at = models.DateTimeField(null=True, blank=True)
    receiver_exited_at = models.DateTimeField(null=True, blank=True)

    # Milestone Timestamps (one per status, see STATUS_TIMESTAMP_FIELDS)
    confirmed_at = models.DateTimeField(null=True, blank=True)
    en_route_pickup_at = models.DateTimeField(null=True, blank=True)
    at_shipper_at = models.DateTimeField(null=True, blank=True)
    left_shipper_at = models.DateTimeField(null=True, blank=True)
    en_route_receiver_at = models.DateTimeField(null=True, blank=True)
    at_receiver_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    awaiting_invoicing_at = models.DateTimeField(null=True, blank=True)
    awaiting_payment_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)

    # Payment
    payment_method = models.CharField(
        max_length=20, choices=PaymentMethod.choices, blank=True
    )
    payment_reference = models.CharField(
        max_length=100, blank=True, help_text="Check number, wire confirmation, etc."
    )
    payment_notes = models.TextField(blank=True)

    def __str__(self):
        return f"{self.number} - {self.get_status_display()}"  # type: ignore

    @property
    def current_position(self):
        return _position(self.current_latitude, self.current_longitude)

    @property
    def shipper_position(self):
        return _position(self.shipper_latitude, self.shipper_longitude)

    @property
    def receiver_position(self):
        return _position(self.receiver_latitude, self.receiver_longitude)


# Every Load.Status member must appear here.
STATUS_TIMESTAMP_FIELDS = {
    Load.Status.CREATED: None,
    Load.Status.CONFIRMED: "confirmed_at",
    Load.Status.EN_ROUTE_PICKUP: "en_route_pickup_at",
    Load.Status.AT_SHIPPER: "at_shipper_at",
    Load.Status.LEFT_SHIPPER: "left_shipper_at",
    Load.Status.EN_ROUTE_RECEIVER: "en_route_receiver_at",
    Load.Status.AT_RECEIVER: "at_receiver_at",
    Load.Status.DELIVERED: "delivered_at",
    Load.Status.AWAITING_INVOICING: "awaiting_invoicing_at",
    Load.Status.AWAITING_PAYMENT: "awaiting_payment_at",
    Load.Status.COMPLETED: "completed_at",
    Load.Status.PAID: "paid_at",
}


class LoadStatusHistory(models.Model):
    """
    Append-only audit trail of status changes.

    Rows go away only when their load is deleted.
    """

    load = models.ForeignKey(
        Load, on_delete=models.CASCADE, related_name="status_history"
    )
    status = models.CharField(max_length=30)
    timestamp = models.DateTimeField(default=timezone.now)
    notes = models.TextField(blank=True)

    class Meta:
        ordering = ["-timestamp", "-id"]  # Show newest entries first
        verbose_name_plural = "load status history"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Status history entries cannot be modified.")
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.load.number} -> {self.status} @ {self.timestamp:%Y-%m-%d %H:%M}"


class InvoiceCounter(models.Model):
    """Single-row counter for sequential invoice numbers."""

    STARTING_NUMBER = 6000

    current_number = models.PositiveIntegerField(default=STARTING_NUMBER)
    last_updated = models.DateTimeField(auto_now=True)


class Invoice(models.Model):
    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        AWAITING_POD = "awaiting_pod", "Awaiting POD"
        FINALIZED = "finalized", "Finalized"
        PRINTED = "printed", "Printed"
        EMAILED = "emailed", "Emailed"

    load = models.ForeignKey(Load, on_delete=models.CASCADE, related_name="invoices")
    invoice_number = models.CharField(max_length=20, unique=True)
    total_amount = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True
    )
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.DRAFT
    )
    generated_at = models.DateTimeField(default=timezone.now)
    finalized_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-generated_at"]

    def __str__(self):
        return f"{self.invoice_number} ({self.get_status_display()})"  # type: ignore

    @property
    def is_finalized(self):
        return self.status in [
            self.Status.FINALIZED,
            self.Status.PRINTED,
            self.Status.EMAILED,
        ]
