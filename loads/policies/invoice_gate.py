from loads.models import Load
from loads.services.exceptions import InvoiceGateViolation


class InvoiceGate:
    """
    Billing rules enforced on the load status write path.

    - A load may only move to AWAITING_PAYMENT once an invoice exists.
    - Finalizing an invoice pulls an AWAITING_INVOICING load forward.
    """

    def __init__(self, store):
        self.store = store

    def check(self, load_id, status):
        """Raise InvoiceGateViolation if `status` needs an invoice the load doesn't have."""
        if status != Load.Status.AWAITING_PAYMENT:
            return
        if not self.store.has_any_invoice_for_load(load_id):
            raise InvoiceGateViolation(load_id)

    @staticmethod
    def should_auto_advance(load: Load) -> bool:
        return load.status == Load.Status.AWAITING_INVOICING
