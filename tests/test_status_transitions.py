import pytest

from loads.models import STATUS_TIMESTAMP_FIELDS, Load
from loads.policies.status_transitions import geofence_events, next_status

S = Load.Status


@pytest.mark.parametrize(
    "status, near_shipper, near_receiver, expected",
    [
        (S.CONFIRMED, True, False, S.AT_SHIPPER),
        (S.CONFIRMED, False, False, S.EN_ROUTE_PICKUP),
        (S.EN_ROUTE_PICKUP, True, False, S.AT_SHIPPER),
        (S.EN_ROUTE_PICKUP, False, False, S.EN_ROUTE_PICKUP),
        (S.AT_SHIPPER, True, False, S.AT_SHIPPER),
        (S.AT_SHIPPER, False, False, S.LEFT_SHIPPER),
        (S.LEFT_SHIPPER, False, True, S.AT_RECEIVER),
        (S.LEFT_SHIPPER, False, False, S.EN_ROUTE_RECEIVER),
        (S.EN_ROUTE_RECEIVER, False, True, S.AT_RECEIVER),
        (S.EN_ROUTE_RECEIVER, False, False, S.EN_ROUTE_RECEIVER),
        (S.AT_RECEIVER, False, False, S.AT_RECEIVER),
        (S.AT_RECEIVER, False, True, S.AT_RECEIVER),
    ],
)
def test_transition_table(status, near_shipper, near_receiver, expected):
    assert next_status(status, near_shipper, near_receiver) == expected


@pytest.mark.parametrize("near_shipper", [True, False])
@pytest.mark.parametrize("near_receiver", [True, False])
@pytest.mark.parametrize(
    "status",
    [
        S.CREATED,
        S.DELIVERED,
        S.AWAITING_INVOICING,
        S.AWAITING_PAYMENT,
        S.COMPLETED,
        S.PAID,
    ],
)
def test_gps_never_moves_loads_outside_the_route(status, near_shipper, near_receiver):
    assert next_status(status, near_shipper, near_receiver) == status


def test_confirmed_load_sitting_on_both_fences_goes_to_shipper():
    assert next_status(S.CONFIRMED, True, True) == S.AT_SHIPPER


def test_leaving_shipper_straight_into_receiver_fence():
    # at_shipper only ever steps to left_shipper, even when already at the receiver
    assert next_status(S.AT_SHIPPER, False, True) == S.LEFT_SHIPPER


def test_left_shipper_back_inside_shipper_fence_still_en_route():
    assert next_status(S.LEFT_SHIPPER, True, False) == S.EN_ROUTE_RECEIVER


def test_accepts_plain_strings():
    assert next_status("confirmed", True, False) == "at_shipper"


def test_every_status_has_a_timestamp_mapping():
    assert set(STATUS_TIMESTAMP_FIELDS) == set(Load.Status)
    for status in Load.Status:
        field = status.timestamp_field
        if field is not None:
            Load._meta.get_field(field)


def test_timestamp_mapping():
    assert S.AT_SHIPPER.timestamp_field == "at_shipper_at"
    assert S.AWAITING_PAYMENT.timestamp_field == "awaiting_payment_at"
    assert S.CREATED.timestamp_field is None
    assert Load.Status("paid").timestamp_field == "paid_at"


@pytest.mark.parametrize(
    "status, near_shipper, near_receiver, expected",
    [
        (S.CONFIRMED, True, False, ["shipper_entered_at"]),
        (S.EN_ROUTE_PICKUP, True, False, ["shipper_entered_at"]),
        (S.AT_SHIPPER, False, False, ["shipper_exited_at"]),
        (S.AT_SHIPPER, True, False, []),
        (S.LEFT_SHIPPER, False, True, ["receiver_entered_at"]),
        (S.AT_RECEIVER, False, False, ["receiver_exited_at"]),
        (S.EN_ROUTE_RECEIVER, False, False, []),
    ],
)
def test_geofence_events(status, near_shipper, near_receiver, expected):
    assert geofence_events(status, near_shipper, near_receiver) == expected


def test_geofence_events_skip_missing_fences():
    assert (
        geofence_events(S.AT_RECEIVER, False, False, has_shipper=True, has_receiver=False)
        == []
    )
    assert (
        geofence_events(S.AT_SHIPPER, False, False, has_shipper=False, has_receiver=True)
        == []
    )


@pytest.mark.parametrize(
    "status, near_shipper, near_receiver, has_shipper, has_receiver, expected",
    [
        # rules keyed on a missing fence never fire
        (S.AT_SHIPPER, False, False, False, True, S.AT_SHIPPER),
        (S.EN_ROUTE_PICKUP, True, False, False, True, S.EN_ROUTE_PICKUP),
        (S.EN_ROUTE_RECEIVER, False, True, True, False, S.EN_ROUTE_RECEIVER),
        # the en-route steps don't depend on a fence
        (S.CONFIRMED, False, False, False, True, S.EN_ROUTE_PICKUP),
        (S.LEFT_SHIPPER, False, False, True, False, S.EN_ROUTE_RECEIVER),
        # the fence that is present still works
        (S.AT_SHIPPER, False, False, True, False, S.LEFT_SHIPPER),
        (S.LEFT_SHIPPER, False, True, False, True, S.AT_RECEIVER),
    ],
)
def test_missing_geofence_disables_its_rules(
    status, near_shipper, near_receiver, has_shipper, has_receiver, expected
):
    assert (
        next_status(
            status,
            near_shipper,
            near_receiver,
            has_shipper=has_shipper,
            has_receiver=has_receiver,
        )
        == expected
    )
