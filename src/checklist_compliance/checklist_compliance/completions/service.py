from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..actors.repository import ActorRepository
from ..checklists.repository import ChecklistRepository
from ..common.datetime_utils import now_local
from ..compliance.score_service import ScoreService
from ..core.exceptions import (
    LocationRequired,
    OutOfGeofence,
    PhotoRequired,
    UnknownActivity,
    UnknownActor,
    UnknownChecklist,
)
from ..geofence.model import Coordinate
from ..geofence.validator import check_geofence
from .model import CompletionEvent
from .repository import CompletionRepository

logger = logging.getLogger(__name__)


class CompletionService:
    """Use case: accept an activity completion and refresh the actor's score."""

    def __init__(
        self,
        checklists: ChecklistRepository,
        completions: CompletionRepository,
        actors: ActorRepository,
        scores: ScoreService,
    ):
        self._checklists = checklists
        self._completions = completions
        self._actors = actors
        self._scores = scores

    def record_completion(
        self,
        checklist_id: int,
        activity_id: int,
        actor_id: int,
        point: Optional[Coordinate] = None,
        photo_ref: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> CompletionEvent:
        now = now or now_local()
        if point is not None:
            point = point.validated()

        checklist = self._checklists.get_by_id(checklist_id)
        if not checklist:
            raise UnknownChecklist(f"Checklist {checklist_id} not found")

        activity = checklist.get_activity(activity_id)
        if not activity:
            raise UnknownActivity(f"Activity {activity_id} is not part of checklist {checklist_id}")

        if not self._actors.get_by_id(actor_id):
            raise UnknownActor(f"Actor {actor_id} not found")

        if checklist.requires_location and point is None:
            raise LocationRequired("Location is required for this checklist")

        if checklist.geofence is not None and point is not None:
            check = check_geofence(point, checklist.geofence)
            if not check.valid:
                logger.info(
                    "rejected completion checklist=%s actor=%s: %.0fm from center (radius %.0fm)",
                    checklist_id, actor_id, check.distance_meters, check.required_radius,
                )
                raise OutOfGeofence(
                    distance_meters=check.distance_meters, required_radius=check.required_radius
                )

        if activity.requires_photo and not photo_ref:
            raise PhotoRequired("Photo is required for this activity")

        event = self._completions.add(
            checklist_id=checklist.checklist_id,
            activity_id=activity.activity_id,
            actor_id=actor_id,
            completed_at=now,
            location=point,
            photo_ref=photo_ref or None,
        )
        logger.info(
            "completion %s recorded: checklist=%s activity=%s actor=%s",
            event.event_id, checklist_id, activity_id, actor_id,
        )

        self._scores.recompute_actor_score(actor_id, now=now)
        return event
