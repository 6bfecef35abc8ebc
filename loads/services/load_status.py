"""
Load status write path.

Two kinds of callers, two error contracts:

- update_from_location() is fed by driver GPS pings. It is frequent and
  lossy, so it never raises for a missing load, disabled tracking or a
  failed write; it logs and the next ping tries again.
- set_status() / force_set_status() / confirm_load() / mark_paid() are
  explicit actions. They raise ServiceError subclasses the caller shows
  to the user.

Every status change goes through _write_status(), which stamps the
status timestamp column and appends a LoadStatusHistory row.
"""

import logging

from django.db import DatabaseError, transaction
from django.utils import timezone

from loads.models import Load
from loads.policies.invoice_gate import InvoiceGate
from loads.policies.status_transitions import geofence_events, next_status
from loads.repositories import DjangoLoadRecordStore
from loads.services.exceptions import InvalidStatus, LoadNotFound, ServiceError
from loads.services.geo import GeoPoint, is_within_geofence

logger = logging.getLogger(__name__)

FORCED_OVERRIDE_MARKER = "FORCED OVERRIDE"


class LoadStatusService:
    def __init__(self, store=None, invoice_gate=None):
        self.store = store or DjangoLoadRecordStore()
        self.invoice_gate = invoice_gate or InvoiceGate(self.store)

    # ------------------------------------------------------------------
    # GPS path (best effort)
    # ------------------------------------------------------------------

    def update_from_location(self, load_id, latitude: float, longitude: float) -> None:
        """
        Record a driver position and advance the load status from geofences.

        Read failures propagate. Missing loads, disabled tracking and write
        failures are logged and swallowed.
        """
        load = self.store.get_load_by_id(load_id)
        if load is None:
            logger.info("Location update ignored: load %s not found", load_id)
            return
        if not load.tracking_enabled:
            logger.info(
                "Location update ignored: tracking disabled for load %s", load.number
            )
            return

        now = timezone.now()
        current = GeoPoint(lat=latitude, lon=longitude)
        shipper = load.shipper_position
        receiver = load.receiver_position

        fields = {
            "current_latitude": latitude,
            "current_longitude": longitude,
            "last_location_update": now,
        }
        new_status = load.status

        if shipper is None and receiver is None:
            logger.debug("Load %s has no geofences; recording position only", load.number)
        else:
            near_shipper = is_within_geofence(current, shipper)
            near_receiver = is_within_geofence(current, receiver)
            new_status = next_status(
                load.status,
                near_shipper,
                near_receiver,
                has_shipper=shipper is not None,
                has_receiver=receiver is not None,
            )
            for field in geofence_events(
                load.status,
                near_shipper,
                near_receiver,
                has_shipper=shipper is not None,
                has_receiver=receiver is not None,
            ):
                fields[field] = now

        try:
            if new_status != load.status:
                self._write_status(
                    load,
                    new_status,
                    now,
                    notes=f"GPS: {latitude:.6f}, {longitude:.6f}",
                    extra_fields=fields,
                )
            else:
                self.store.update_load(load.pk, **fields)
        except DatabaseError:
            logger.exception("Failed to record location for load %s", load.number)

    # ------------------------------------------------------------------
    # Explicit paths (raise on failure)
    # ------------------------------------------------------------------

    def set_status(self, load_id, status, timestamp=None, notes=""):
        """
        Set a load status on behalf of a user or another service.

        Raises:
            InvalidStatus: `status` is not a Load.Status value
            LoadNotFound: no such load
            InvoiceGateViolation: AWAITING_PAYMENT requested with no invoice
        """
        status = self._coerce_status(status)
        load = self._get_load(load_id)
        self.invoice_gate.check(load.pk, status)
        return self._write_status(load, status, timestamp or timezone.now(), notes=notes)

    def force_set_status(self, load_id, status, timestamp=None, actor_id=None):
        """
        Administrative override: same write as set_status() without the invoice gate.

        The history entry records who bypassed the rules.
        """
        status = self._coerce_status(status)
        load = self._get_load(load_id)
        actor = f"user {actor_id}" if actor_id is not None else "unknown user"
        logger.warning(
            "Forced status change for load %s: %s -> %s by %s",
            load.number,
            load.status,
            status,
            actor,
        )
        return self._write_status(
            load,
            status,
            timestamp or timezone.now(),
            notes=f"{FORCED_OVERRIDE_MARKER}: business rules bypassed by {actor}",
        )

    def on_invoice_finalized(self, load_id):
        """
        Advance AWAITING_INVOICING -> AWAITING_PAYMENT once an invoice is finalized.

        Returns the updated load, or None when the load was in another status.
        """
        load = self._get_load(load_id)
        if not self.invoice_gate.should_auto_advance(load):
            return None
        return self.set_status(
            load.pk, Load.Status.AWAITING_PAYMENT, notes="Invoice finalized"
        )

    def confirm_load(self, load_id, driver_id=None):
        """
        Driver accepts the load: CONFIRMED, and GPS tracking starts.
        """
        load = self._get_load(load_id)
        if driver_id is not None and load.driver_id != driver_id:
            raise ServiceError("Load is not assigned to this driver.")

        now = timezone.now()
        return self._write_status(
            load,
            Load.Status.CONFIRMED,
            now,
            notes="Driver confirmed load",
            extra_fields={
                "driver_confirmed": True,
                "driver_confirmed_at": now,
                "tracking_enabled": True,
                "tracking_started_at": now,
            },
        )

    def mark_paid(
        self, load_id, payment_method, payment_reference="", payment_notes=""
    ):
        load = self._get_load(load_id)
        if load.status not in [Load.Status.AWAITING_PAYMENT, Load.Status.COMPLETED]:
            raise ServiceError("Load is not awaiting payment.")
        if payment_method not in Load.PaymentMethod.values:
            raise ServiceError(f"Unknown payment method: {payment_method!r}.")

        return self._write_status(
            load,
            Load.Status.PAID,
            timezone.now(),
            notes=f"Paid by {payment_method}",
            extra_fields={
                "payment_method": payment_method,
                "payment_reference": payment_reference,
                "payment_notes": payment_notes,
            },
        )

    # ------------------------------------------------------------------

    def _get_load(self, load_id):
        load = self.store.get_load_by_id(load_id)
        if load is None:
            raise LoadNotFound(load_id)
        return load

    @staticmethod
    def _coerce_status(status):
        try:
            return Load.Status(status)
        except ValueError:
            raise InvalidStatus(status) from None

    def _write_status(self, load, status, timestamp, notes="", extra_fields=None):
        fields = dict(extra_fields or {})
        fields["status"] = status
        timestamp_field = Load.Status(status).timestamp_field
        if timestamp_field:
            fields[timestamp_field] = timestamp

        # status and its history row commit together
        with transaction.atomic():
            updated = self.store.update_load(load.pk, **fields)
            self.store.append_status_history(load.pk, status, notes)
        logger.info("Load %s status: %s -> %s", load.number, load.status, status)
        return updated
