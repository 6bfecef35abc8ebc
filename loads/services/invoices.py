import logging

from django.db import transaction
from django.utils import timezone

from loads.models import Invoice, InvoiceCounter, Load
from loads.services.exceptions import LoadNotFound, ServiceError
from loads.services.load_status import LoadStatusService

logger = logging.getLogger(__name__)

INVOICE_PREFIX = "GO"


def next_invoice_number():
    """Sequential invoice numbers: GO6000, GO6001, ..."""
    with transaction.atomic():
        counter = InvoiceCounter.objects.select_for_update().order_by("pk").first()
        if counter is None:
            counter = InvoiceCounter.objects.create()
        else:
            counter.current_number += 1
            counter.save(update_fields=["current_number", "last_updated"])
    return f"{INVOICE_PREFIX}{counter.current_number}"


def find_or_create_invoice_for_load(load_id, total_amount=None):
    """Return the load's latest invoice, creating a draft if it has none."""
    if not Load.objects.filter(pk=load_id).exists():
        raise LoadNotFound(load_id)

    invoice = Invoice.objects.filter(load_id=load_id).first()
    if invoice is not None:
        return invoice

    invoice = Invoice.objects.create(
        load_id=load_id,
        invoice_number=next_invoice_number(),
        total_amount=total_amount,
    )
    logger.info("Created invoice %s for load %s", invoice.invoice_number, load_id)
    return invoice


def finalize_invoice(invoice_id, status_service=None):
    """
    Finalize an invoice and advance its load to AWAITING_PAYMENT.

    Both writes commit in one transaction. When called inside an outer
    atomic block (ATOMIC_REQUESTS included) that block becomes a savepoint
    and an error later in the outer block rolls both back. Call it outside
    one, as finalize_invoice_view does, so later steps (printing, emailing)
    cannot undo the load status.
    """
    status_service = status_service or LoadStatusService()

    with transaction.atomic():
        invoice = Invoice.objects.select_for_update().filter(pk=invoice_id).first()
        if invoice is None:
            raise ServiceError(f"Invoice {invoice_id} not found.")
        if invoice.is_finalized:
            raise ServiceError(f"Invoice {invoice.invoice_number} is already finalized.")

        invoice.status = Invoice.Status.FINALIZED
        invoice.finalized_at = timezone.now()
        invoice.save(update_fields=["status", "finalized_at"])

        status_service.on_invoice_finalized(invoice.load_id)

    logger.info("Finalized invoice %s", invoice.invoice_number)
    return invoice
