"""
Geospatial helpers for GPS tracking.

Distances are great-circle (Haversine) in meters. Coordinates are decimal
degrees and are not range-checked: out-of-range values give a defined but
meaningless distance.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import atan2, cos, radians, sin, sqrt
from typing import Optional

EARTH_RADIUS_M = 6_371_000

# Drivers within this many meters of a shipper/receiver are "at" it.
GEOFENCE_RADIUS_METERS = 150


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float


def haversine_m(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in meters between two points."""
    lat1 = radians(a.lat)
    lat2 = radians(b.lat)
    dlat = radians(b.lat - a.lat)
    dlon = radians(b.lon - a.lon)

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # out-of-range latitudes can push h just outside [0, 1]
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_M * 2 * atan2(sqrt(h), sqrt(1 - h))


def is_within_geofence(
    current: GeoPoint,
    target: Optional[GeoPoint],
    radius_m: float = GEOFENCE_RADIUS_METERS,
) -> bool:
    """True when `current` is at most `radius_m` from `target`; a missing target is never near."""
    if target is None:
        return False
    return haversine_m(current, target) <= radius_m
