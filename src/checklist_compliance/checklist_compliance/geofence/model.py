from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import require_latitude, require_longitude
from ..core.constants import DEFAULT_GEOFENCE_RADIUS_M


@dataclass(frozen=True)
class Coordinate:
    """WGS84 point in degrees."""

    latitude: float
    longitude: float

    @classmethod
    def parse(cls, latitude, longitude) -> "Coordinate":
        """Build from untrusted input; raises InvalidCoordinate."""
        return cls(latitude=require_latitude(latitude), longitude=require_longitude(longitude))

    def validated(self) -> "Coordinate":
        """Re-check a point built without parse(); raises InvalidCoordinate."""
        return self.parse(self.latitude, self.longitude)

    @classmethod
    def parse_optional(cls, latitude, longitude) -> Optional["Coordinate"]:
        if latitude is None and longitude is None:
            return None
        return cls.parse(latitude, longitude)


@dataclass(frozen=True)
class Geofence:
    center: Coordinate
    radius_meters: float = DEFAULT_GEOFENCE_RADIUS_M
    address: Optional[str] = None


@dataclass(frozen=True)
class LocationCheck:
    """Result of validating a point against a checklist's geofence."""

    valid: bool
    distance_meters: Optional[float] = None
    required_radius: Optional[float] = None

    @property
    def meters_outside(self) -> float:
        if self.valid or self.distance_meters is None or self.required_radius is None:
            return 0.0
        return self.distance_meters - self.required_radius

    def to_dict(self) -> dict:
        data: dict = {"valid": self.valid}
        if self.distance_meters is not None:
            data["distance_meters"] = round(self.distance_meters)
        if self.required_radius is not None:
            data["required_radius"] = self.required_radius
        if self.valid:
            data["message"] = "Location validated successfully"
        else:
            data["message"] = f"You are {round(self.distance_meters or 0)}m away from the required location"
        return data
