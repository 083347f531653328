from __future__ import annotations

import logging

from ..checklists.repository import ChecklistRepository
from ..core.exceptions import UnknownChecklist
from .model import Coordinate, LocationCheck
from .validator import check_geofence

logger = logging.getLogger(__name__)


class GeofenceService:
    """Use case: ad-hoc location check against a checklist's geofence."""

    def __init__(self, checklists: ChecklistRepository):
        self._checklists = checklists

    def validate_location(self, checklist_id: int, point: Coordinate) -> LocationCheck:
        point = point.validated()

        checklist = self._checklists.get_by_id(checklist_id)
        if not checklist:
            raise UnknownChecklist(f"Checklist {checklist_id} not found")

        if checklist.geofence is None:
            return LocationCheck(valid=True)

        check = check_geofence(point, checklist.geofence)
        if not check.valid:
            logger.info(
                "location %.0fm outside geofence of checklist %s", check.meters_outside, checklist_id
            )
        return check
