from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role of an actor."""

    ADMIN = "admin"
    USER = "user"


class TrendPeriod(str, Enum):
    """Trailing window for compliance trends."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def days(self) -> int:
        return {
            TrendPeriod.DAY: 1,
            TrendPeriod.WEEK: 7,
            TrendPeriod.MONTH: 30,
            TrendPeriod.YEAR: 365,
        }[self]

    @classmethod
    def parse(cls, value: "str | TrendPeriod | None") -> "TrendPeriod":
        """Unknown or missing values fall back to MONTH."""
        if isinstance(value, TrendPeriod):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.MONTH


class RejectionKind(str, Enum):
    """Why a location check or a completion was refused."""

    INVALID_COORDINATE = "InvalidCoordinate"
    UNKNOWN_CHECKLIST = "UnknownChecklist"
    UNKNOWN_ACTIVITY = "UnknownActivity"
    UNKNOWN_ACTOR = "UnknownActor"
    LOCATION_REQUIRED = "LocationRequired"
    OUT_OF_GEOFENCE = "OutOfGeofence"
    PHOTO_REQUIRED = "PhotoRequired"
