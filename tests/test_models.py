from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from loads.models import Invoice, Load, LoadStatusHistory
from loads.services.geo import GeoPoint

pytestmark = pytest.mark.django_db


def test_load_str(load_factory):
    load = load_factory(number="109-12345", status=Load.Status.AT_SHIPPER)
    assert str(load) == "109-12345 - At Shipper"


def test_positions_from_coordinates(load_factory):
    load = load_factory(
        current_latitude=Decimal("32.5"), current_longitude=Decimal("-96.5")
    )

    assert load.current_position == GeoPoint(32.5, -96.5)
    assert load.shipper_position == GeoPoint(32.7767, -96.797)
    assert isinstance(load.receiver_position.lat, float)


def test_half_a_coordinate_is_no_position(load_factory):
    load = load_factory(shipper_longitude=None, receiver_latitude=None)

    assert load.current_position is None
    assert load.shipper_position is None
    assert load.receiver_position is None


def test_history_rows_cannot_be_edited(load_factory):
    entry = LoadStatusHistory.objects.create(
        load=load_factory(), status="created", notes="first"
    )

    entry.notes = "rewritten"
    with pytest.raises(ValueError, match="cannot be modified"):
        entry.save()

    entry.refresh_from_db()
    assert entry.notes == "first"


def test_history_is_deleted_with_its_load(load_factory):
    load = load_factory()
    LoadStatusHistory.objects.create(load=load, status="created")

    load.delete()

    assert not LoadStatusHistory.objects.exists()


def test_history_str(load_factory):
    entry = LoadStatusHistory.objects.create(
        load=load_factory(number="109-777"), status="delivered"
    )
    assert str(entry).startswith("109-777 -> delivered @ ")


@pytest.mark.parametrize(
    "status, expected",
    [
        (Invoice.Status.DRAFT, False),
        (Invoice.Status.AWAITING_POD, False),
        (Invoice.Status.FINALIZED, True),
        (Invoice.Status.PRINTED, True),
        (Invoice.Status.EMAILED, True),
    ],
)
def test_invoice_is_finalized(invoice_factory, status, expected):
    assert invoice_factory(status=status).is_finalized is expected


def test_invoice_str(invoice_factory):
    invoice = invoice_factory(invoice_number="GO6010")
    assert str(invoice) == "GO6010 (Draft)"


def test_driver_phone_format(driver_factory):
    driver = driver_factory()
    driver.full_clean()

    driver.phone = "214-555-0100"
    with pytest.raises(ValidationError):
        driver.full_clean()


def test_user_roles(user_factory, driver_factory, admin_user):
    assert driver_factory().is_driver is True
    assert user_factory().is_driver is False
    assert admin_user.can_force_status is True
    assert user_factory(role="office_staff").can_force_status is False
    assert user_factory(is_superuser=True).can_force_status is True


def test_current_latitude_holds_out_of_range_ping(load_factory):
    load = load_factory()
    field = Load._meta.get_field("current_latitude")

    assert field.clean(Decimal("120.12345678"), load) == Decimal("120.12345678")
    assert field.max_digits == Load._meta.get_field("current_longitude").max_digits


def test_out_of_range_ping_is_stored(load_factory, status_service):
    load = load_factory(tracking=True)

    status_service.update_from_location(load.pk, 120.5, -96.797)

    load.refresh_from_db()
    assert float(load.current_latitude) == pytest.approx(120.5)
    assert load.status == Load.Status.EN_ROUTE_PICKUP
