"""Great-circle geometry for geofence checks.

Pure functions: no state, no I/O, safe to call from any thread.
"""

from __future__ import annotations

import math

from ..common.validators import require_finite
from ..core.constants import EARTH_RADIUS_M
from .model import Coordinate, Geofence, LocationCheck


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance between two points, in meters.

    Raises InvalidCoordinate for NaN/inf components instead of letting NaN leak
    into comparisons downstream.
    """
    lat1 = math.radians(require_finite(a.latitude, "latitude"))
    lon1 = math.radians(require_finite(a.longitude, "longitude"))
    lat2 = math.radians(require_finite(b.latitude, "latitude"))
    lon2 = math.radians(require_finite(b.longitude, "longitude"))

    d_lat = lat2 - lat1
    d_lon = lon2 - lon1
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    # Rounding can push h a hair past 1 for antipodal points.
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def _inside(distance: float, radius_meters: float) -> bool:
    return distance <= require_finite(radius_meters, "radius")


def is_within(point: Coordinate, center: Coordinate, radius_meters: float) -> bool:
    """Inclusive containment test."""
    return _inside(distance_meters(point, center), radius_meters)


def check_geofence(point: Coordinate, fence: Geofence) -> LocationCheck:
    """Containment plus the measured distance, for callers that report it."""
    distance = distance_meters(point, fence.center)
    return LocationCheck(
        valid=_inside(distance, fence.radius_meters),
        distance_meters=distance,
        required_radius=fence.radius_meters,
    )
