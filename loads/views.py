"""
JSON endpoints for driver devices and office staff.

WHY thin views: business rules live in loads.services. Views only:
1. Parse and validate the request body with a form
2. Call the service
3. Translate ServiceError subclasses into HTTP status codes
"""

import json
import logging

from django.contrib.auth.decorators import login_required
from django.db import transaction
from django.http import JsonResponse
from django.middleware.csrf import get_token
from django.shortcuts import get_object_or_404
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_http_methods

from .forms import LoadForm, LocationUpdateForm, PaymentForm, StatusUpdateForm
from .models import Load
from .services.exceptions import (
    InvalidStatus,
    InvoiceGateViolation,
    LoadNotFound,
    ServiceError,
)
from .services.invoices import finalize_invoice, find_or_create_invoice_for_load
from .services.load_creation import create_load
from .services.load_status import LoadStatusService

logger = logging.getLogger(__name__)


def _json_body(request):
    """Decoded JSON object from the request body, or None if it isn't one."""
    try:
        data = json.loads(request.body or b"{}")
    except (ValueError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


def _error(message, status, **extra):
    return JsonResponse({"message": message, **extra}, status=status)


def _form_error(form):
    return _error("Invalid request data", 400, errors=form.errors.get_json_data())


def _service_error(exc):
    """
    Map service exceptions to responses.

    InvoiceGateViolation gets its own code so clients can tell "generate an
    invoice first" apart from a server fault.
    """
    if isinstance(exc, LoadNotFound):
        return _error(str(exc), 404)
    if isinstance(exc, InvoiceGateViolation):
        return _error(str(exc), 409, code="invoice_required")
    if isinstance(exc, InvalidStatus):
        return _error(str(exc), 400, code="invalid_status")
    return _error(str(exc), 400)


def _timestamp(value):
    return value.isoformat() if value else None


def load_payload(load):
    return {
        "id": load.pk,
        "number": load.number,
        "status": load.status,
        "driver_id": load.driver_id,
        "destination_name": load.destination_name,
        "tracking_enabled": load.tracking_enabled,
        "current_latitude": (
            float(load.current_latitude) if load.current_latitude is not None else None
        ),
        "current_longitude": (
            float(load.current_longitude)
            if load.current_longitude is not None
            else None
        ),
        "last_location_update": _timestamp(load.last_location_update),
        "timestamps": {
            field: _timestamp(getattr(load, field))
            for field in (
                Load.Status(status).timestamp_field for status in Load.Status.values
            )
            if field
        },
        "updated_at": _timestamp(load.updated_at),
    }


@ensure_csrf_cookie
@require_http_methods(["GET"])
def csrf_token(request):
    """
    CSRF token for non-browser clients.

    Unsafe requests must echo it back in the X-CSRFToken header.
    """
    return JsonResponse({"csrfToken": get_token(request)})


@login_required
@require_http_methods(["POST"])
def create_load_view(request):
    data = _json_body(request)
    if data is None:
        return _error("Request body must be a JSON object", 400)

    form = LoadForm(data)
    if not form.is_valid():
        return _form_error(form)
    try:
        load = create_load(load_form=form)
    except ServiceError as e:
        return _service_error(e)
    return JsonResponse(load_payload(load), status=201)


@login_required
@require_http_methods(["GET"])
def load_detail(request, load_id):
    load = get_object_or_404(Load, pk=load_id)
    return JsonResponse(load_payload(load))


@login_required
@require_http_methods(["PUT", "POST"])
def update_location(request, load_id):
    """
    Driver GPS ping.

    Always answers success for valid input: a missing load or a failed
    write is logged by the service, and the next ping retries.
    """
    data = _json_body(request)
    if data is None:
        return _error("Request body must be a JSON object", 400)

    form = LocationUpdateForm(data)
    if not form.is_valid():
        return _error("Latitude and longitude required", 400)

    LoadStatusService().update_from_location(
        load_id,
        form.cleaned_data["latitude"],
        form.cleaned_data["longitude"],
    )
    return JsonResponse({"success": True, "message": "Location updated"})


@login_required
@require_http_methods(["POST"])
def confirm_load(request, load_id):
    driver_id = request.user.pk if request.user.is_driver else None
    try:
        load = LoadStatusService().confirm_load(load_id, driver_id=driver_id)
    except ServiceError as e:
        return _service_error(e)
    return JsonResponse(load_payload(load))


@login_required
@require_http_methods(["PATCH", "POST"])
def update_status(request, load_id):
    data = _json_body(request)
    if data is None:
        return _error("Request body must be a JSON object", 400)

    form = StatusUpdateForm(data)
    if not form.is_valid():
        return _error("Status is required", 400, errors=form.errors.get_json_data())

    try:
        load = LoadStatusService().set_status(
            load_id, form.cleaned_data["status"], form.cleaned_data["timestamp"]
        )
    except ServiceError as e:
        return _service_error(e)
    return JsonResponse(load_payload(load))


@login_required
@require_http_methods(["PATCH", "POST"])
def force_update_status(request, load_id):
    """Admin override that skips the invoice gate."""
    if not request.user.can_force_status:
        return _error("Only admins can force a status change.", 403)

    data = _json_body(request)
    if data is None:
        return _error("Request body must be a JSON object", 400)

    form = StatusUpdateForm(data)
    if not form.is_valid():
        return _error("Status is required", 400, errors=form.errors.get_json_data())

    try:
        load = LoadStatusService().force_set_status(
            load_id,
            form.cleaned_data["status"],
            form.cleaned_data["timestamp"],
            actor_id=request.user.pk,
        )
    except ServiceError as e:
        return _service_error(e)
    return JsonResponse(load_payload(load))


@login_required
@require_http_methods(["POST"])
def mark_paid(request, load_id):
    data = _json_body(request)
    if data is None:
        return _error("Request body must be a JSON object", 400)

    form = PaymentForm(data)
    if not form.is_valid():
        return _form_error(form)

    try:
        load = LoadStatusService().mark_paid(load_id, **form.cleaned_data)
    except ServiceError as e:
        return _service_error(e)
    return JsonResponse(load_payload(load))


@login_required
@require_http_methods(["GET"])
def status_history(request, load_id):
    load = get_object_or_404(Load, pk=load_id)
    entries = [
        {
            "status": entry.status,
            "timestamp": _timestamp(entry.timestamp),
            "notes": entry.notes,
        }
        for entry in load.status_history.all()  # type: ignore
    ]
    return JsonResponse({"load": load.number, "history": entries})


@login_required
@require_http_methods(["POST"])
def create_invoice(request, load_id):
    try:
        invoice = find_or_create_invoice_for_load(load_id)
    except ServiceError as e:
        return _service_error(e)
    return JsonResponse(
        {
            "id": invoice.pk,
            "invoice_number": invoice.invoice_number,
            "status": invoice.status,
        },
        status=201,
    )


@transaction.non_atomic_requests
@login_required
@require_http_methods(["POST"])
def finalize_invoice_view(request, invoice_id):
    try:
        invoice = finalize_invoice(invoice_id)
    except ServiceError as e:
        return _service_error(e)

    load = Load.objects.get(pk=invoice.load_id)
    return JsonResponse(
        {
            "invoice_number": invoice.invoice_number,
            "status": invoice.status,
            "finalized_at": _timestamp(invoice.finalized_at),
            "load": load_payload(load),
        }
    )
