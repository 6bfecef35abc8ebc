from django.db import transaction

from loads.models import Load
from loads.repositories import DjangoLoadRecordStore
from loads.services.exceptions import ServiceError


def _validate_geofences(cleaned_data):
    """
    Geofence centers come in pairs: a latitude without its longitude
    would silently disable that geofence.
    """
    for prefix in ("shipper", "receiver"):
        lat = cleaned_data.get(f"{prefix}_latitude")
        lon = cleaned_data.get(f"{prefix}_longitude")
        if (lat is None) != (lon is None):
            raise ServiceError(
                f"Provide both {prefix} latitude and longitude, or neither."
            )


def create_load(*, load_form, store=None):
    """
    Atomic create: Load + its first status history row.
    Assumes: load_form.is_valid() already True.
    """
    _validate_geofences(load_form.cleaned_data)
    store = store or DjangoLoadRecordStore()

    with transaction.atomic():
        load = load_form.save(commit=False)
        load.status = Load.Status.CREATED
        load.save()
        store.append_status_history(
            load.pk, Load.Status.CREATED, "Load created by office staff"
        )

    return load
