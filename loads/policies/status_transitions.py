"""
GPS status progression rules.

Pure functions. No request. No DB writes. Safe to test.

The rules are applied in order to a single candidate status, and a later
rule that applies overwrites an earlier one. Keep them as an ordered list:
rewriting this as a lookup table changes behaviour where rules overlap.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from loads.models import Load

Status = Load.Status

# (current status, candidate so far, near shipper, near receiver) -> applies?
Predicate = Callable[[str, str, bool, bool], bool]


@dataclass(frozen=True)
class TransitionRule:
    name: str
    applies: Predicate
    result: str
    # "shipper" / "receiver": rule is skipped when that geofence has no center
    geofence: Optional[str] = None


TRANSITION_RULES: list[TransitionRule] = [
    TransitionRule(
        name="arrived_at_shipper",
        applies=lambda status, candidate, near_shipper, near_receiver: (
            near_shipper and status in [Status.CONFIRMED, Status.EN_ROUTE_PICKUP]
        ),
        result=Status.AT_SHIPPER,
        geofence="shipper",
    ),
    TransitionRule(
        # No movement threshold: leaving the geofence is departure.
        name="left_shipper",
        applies=lambda status, candidate, near_shipper, near_receiver: (
            not near_shipper and status == Status.AT_SHIPPER
        ),
        result=Status.LEFT_SHIPPER,
        geofence="shipper",
    ),
    TransitionRule(
        name="arrived_at_receiver",
        applies=lambda status, candidate, near_shipper, near_receiver: (
            near_receiver
            and status in [Status.LEFT_SHIPPER, Status.EN_ROUTE_RECEIVER]
        ),
        result=Status.AT_RECEIVER,
        geofence="receiver",
    ),
    TransitionRule(
        name="en_route_pickup",
        applies=lambda status, candidate, near_shipper, near_receiver: (
            candidate == status and status == Status.CONFIRMED and not near_shipper
        ),
        result=Status.EN_ROUTE_PICKUP,
    ),
    TransitionRule(
        name="en_route_receiver",
        applies=lambda status, candidate, near_shipper, near_receiver: (
            candidate == status and status == Status.LEFT_SHIPPER
        ),
        result=Status.EN_ROUTE_RECEIVER,
    ),
]


def next_status(
    status: str,
    near_shipper: bool,
    near_receiver: bool,
    has_shipper: bool = True,
    has_receiver: bool = True,
) -> str:
    """
    Status a load should move to after a GPS ping.

    Rules keyed on a geofence the load doesn't have never fire. Returns
    `status` itself when no rule applies.
    """
    missing = set()
    if not has_shipper:
        missing.add("shipper")
    if not has_receiver:
        missing.add("receiver")

    candidate = status
    for rule in TRANSITION_RULES:
        if rule.geofence in missing:
            continue
        if rule.applies(status, candidate, near_shipper, near_receiver):
            candidate = rule.result
    return candidate


def geofence_events(
    status: str,
    near_shipper: bool,
    near_receiver: bool,
    has_shipper: bool = True,
    has_receiver: bool = True,
) -> list[str]:
    """
    Load timestamp fields to stamp for geofence entries/exits on this ping.

    Entry into the shipper fence only counts while heading to pickup, entry
    into the receiver fence only after leaving the shipper. Exits are
    relative to the at_shipper / at_receiver statuses.
    """
    events: list[str] = []

    if has_shipper:
        if near_shipper and status in [Status.CONFIRMED, Status.EN_ROUTE_PICKUP]:
            events.append("shipper_entered_at")
        elif not near_shipper and status == Status.AT_SHIPPER:
            events.append("shipper_exited_at")

    if has_receiver:
        if near_receiver and status in [Status.LEFT_SHIPPER, Status.EN_ROUTE_RECEIVER]:
            events.append("receiver_entered_at")
        elif not near_receiver and status == Status.AT_RECEIVER:
            events.append("receiver_exited_at")

    return events
