"""
Record store used by the load status services.

Services take a store object instead of reaching for the ORM directly so
tests can hand in a fake. DjangoLoadRecordStore is the real one.

Known limitation: there is no locking, versioning or compare-and-swap on
the load row. Two updates for the same load race and the last write wins.
"""

from typing import Optional, Protocol

from django.utils import timezone

from loads.models import Invoice, Load, LoadStatusHistory


class LoadRecordStore(Protocol):
    def get_load_by_id(self, load_id) -> Optional[Load]: ...

    def update_load(self, load_id, **fields) -> Load: ...

    def append_status_history(self, load_id, status: str, notes: str = "") -> None: ...

    def has_any_invoice_for_load(self, load_id) -> bool: ...


class DjangoLoadRecordStore:
    def get_load_by_id(self, load_id) -> Optional[Load]:
        return Load.objects.filter(pk=load_id).first()

    def update_load(self, load_id, **fields) -> Load:
        """Partial update of a load row; always bumps updated_at."""
        fields.setdefault("updated_at", timezone.now())
        Load.objects.filter(pk=load_id).update(**fields)
        return Load.objects.get(pk=load_id)

    def append_status_history(self, load_id, status: str, notes: str = "") -> None:
        LoadStatusHistory.objects.create(load_id=load_id, status=status, notes=notes or "")

    def has_any_invoice_for_load(self, load_id) -> bool:
        return Invoice.objects.filter(load_id=load_id).exists()
