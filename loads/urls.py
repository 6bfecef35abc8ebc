"""
URL routing for the loads app.

URL Design Philosophy:
- /api/csrf/ → CSRF token for device clients (send back as X-CSRFToken)
- /api/loads/ → create a load
- /api/loads/42/ → view load 42
- /api/loads/42/location/ → driver GPS ping for load 42
- /api/loads/42/status/ → explicit status change on load 42
"""

from django.urls import path

from .views import (
    confirm_load,
    create_invoice,
    create_load_view,
    csrf_token,
    finalize_invoice_view,
    force_update_status,
    load_detail,
    mark_paid,
    status_history,
    update_location,
    update_status,
)

urlpatterns = [
    path("api/csrf/", csrf_token, name="csrf_token"),
    path("api/loads/", create_load_view, name="create_load"),
    path("api/loads/<int:load_id>/", load_detail, name="load_detail"),
    path("api/loads/<int:load_id>/location/", update_location, name="update_location"),
    path("api/loads/<int:load_id>/confirm/", confirm_load, name="confirm_load"),
    path("api/loads/<int:load_id>/status/", update_status, name="update_status"),
    path(
        "api/loads/<int:load_id>/status/force/",
        force_update_status,
        name="force_update_status",
    ),
    path("api/loads/<int:load_id>/paid/", mark_paid, name="mark_paid"),
    path("api/loads/<int:load_id>/history/", status_history, name="status_history"),
    path("api/loads/<int:load_id>/invoice/", create_invoice, name="create_invoice"),
    path(
        "api/invoices/<int:invoice_id>/finalize/",
        finalize_invoice_view,
        name="finalize_invoice",
    ),
]
