from __future__ import annotations

from .enums import RejectionKind


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ComplianceRejection(ValidationError):
    """A caller input defect. Never retried."""

    kind: RejectionKind

    def to_dict(self) -> dict:
        return {"error": self.kind.value, "message": str(self)}


class InvalidCoordinate(ComplianceRejection):
    kind = RejectionKind.INVALID_COORDINATE


class UnknownChecklist(ComplianceRejection):
    kind = RejectionKind.UNKNOWN_CHECKLIST


class UnknownActivity(ComplianceRejection):
    kind = RejectionKind.UNKNOWN_ACTIVITY


class UnknownActor(ComplianceRejection):
    kind = RejectionKind.UNKNOWN_ACTOR


class LocationRequired(ComplianceRejection):
    kind = RejectionKind.LOCATION_REQUIRED


class PhotoRequired(ComplianceRejection):
    kind = RejectionKind.PHOTO_REQUIRED


class OutOfGeofence(ComplianceRejection):
    kind = RejectionKind.OUT_OF_GEOFENCE

    def __init__(self, *, distance_meters: float, required_radius: float):
        super().__init__(f"You are {round(distance_meters)}m away from the required location")
        self.distance_meters = float(distance_meters)
        self.required_radius = float(required_radius)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["distance_meters"] = round(self.distance_meters)
        data["required_radius"] = self.required_radius
        return data
