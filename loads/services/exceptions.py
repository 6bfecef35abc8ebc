class ServiceError(Exception):
    """Business rule failure with a message safe to show the user."""


class LoadNotFound(ServiceError):
    def __init__(self, load_id):
        self.load_id = load_id
        super().__init__(f"Load {load_id} not found.")


class InvalidStatus(ServiceError, ValueError):
    def __init__(self, status):
        self.status = status
        super().__init__(f"Unknown load status: {status!r}.")


class InvoiceGateViolation(ServiceError):
    """Load cannot await payment until an invoice exists for it."""

    def __init__(self, load_id):
        self.load_id = load_id
        super().__init__(
            "Cannot move load to Awaiting Payment: no invoice exists for this load. "
            "Generate an invoice first."
        )
