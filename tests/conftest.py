import pytest
from django.db import DatabaseError

from loads import factories
from loads.repositories import DjangoLoadRecordStore
from loads.services.load_status import LoadStatusService


class FailingWriteStore(DjangoLoadRecordStore):
    """Reads work, every load write fails like a dropped DB connection."""

    def update_load(self, load_id, **fields):
        raise DatabaseError("connection lost")


class FailingHistoryStore(DjangoLoadRecordStore):
    """Load writes work, the history insert fails."""

    def append_status_history(self, load_id, status, notes=""):
        raise DatabaseError("connection lost")


@pytest.fixture
def user_factory():
    return factories.UserFactory


@pytest.fixture
def driver_factory():
    return factories.DriverFactory


@pytest.fixture
def load_factory():
    return factories.LoadFactory


@pytest.fixture
def invoice_factory():
    return factories.InvoiceFactory


@pytest.fixture
def status_service():
    return LoadStatusService()


@pytest.fixture
def failing_write_service():
    return LoadStatusService(store=FailingWriteStore())


@pytest.fixture
def office_user(user_factory):
    return user_factory(role="office_staff")


@pytest.fixture
def admin_user(user_factory):
    return user_factory(role="admin")


@pytest.fixture
def failing_history_service():
    return LoadStatusService(store=FailingHistoryStore())
