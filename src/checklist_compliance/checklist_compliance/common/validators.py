from __future__ import annotations

import math

from ..core.exceptions import InvalidCoordinate


def require_finite(value: float, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidCoordinate(f"{field_name} must be a number") from None
    if not math.isfinite(number):
        raise InvalidCoordinate(f"{field_name} must be finite")
    return number


def require_latitude(value: float) -> float:
    lat = require_finite(value, "latitude")
    if not -90.0 <= lat <= 90.0:
        raise InvalidCoordinate("latitude must be within [-90, 90]")
    return lat


def require_longitude(value: float) -> float:
    lon = require_finite(value, "longitude")
    if not -180.0 <= lon <= 180.0:
        raise InvalidCoordinate("longitude must be within [-180, 180]")
    return lon
