from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..actors.model import Actor
from ..actors.repository import ActorRepository
from ..checklists.model import ChecklistDefinition
from ..checklists.repository import ChecklistRepository
from ..common.datetime_utils import day_bounds, now_local
from ..common.percent import rounded_mean
from ..completions.model import CompletionEvent
from ..completions.repository import CompletionRepository
from ..core.exceptions import UnknownActor
from .assignment import assigned_checklists
from .calculator.base import BucketCalculator
from .calculator.standard_calculator import StandardBucketCalculator

logger = logging.getLogger(__name__)


class ActorLocks:
    """One lock per actor id; the score of an actor has a single writer at a time."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[int, threading.Lock] = {}

    def for_actor(self, actor_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(actor_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[actor_id] = lock
            return lock


@dataclass(frozen=True)
class ChecklistStatus:
    """Today's progress of one assigned checklist (actor view)."""

    checklist: ChecklistDefinition
    completed_activities: int
    total_activities: int
    completion_percentage: int

    def to_dict(self) -> dict:
        c = self.checklist
        return {
            "checklist_id": c.checklist_id,
            "site_id": c.site_id,
            "name": c.name,
            "lane": c.lane,
            "requires_location": c.requires_location,
            "activities": [
                {
                    "activity_id": a.activity_id,
                    "name": a.name,
                    "requires_photo": a.requires_photo,
                    "recurrence": a.recurrence,
                }
                for a in c.activities
            ],
            "completed_activities": self.completed_activities,
            "total_activities": self.total_activities,
            "completion_percentage": self.completion_percentage,
        }


def actor_bucket_score(
    checklists: Sequence[ChecklistDefinition],
    completions: Iterable[CompletionEvent],
    calculator: BucketCalculator,
) -> int:
    """Mean of per-checklist bucket compliance, 0 with no checklists."""
    by_checklist: dict[int, list[CompletionEvent]] = defaultdict(list)
    for event in completions:
        by_checklist[event.checklist_id].append(event)
    return rounded_mean(
        calculator.bucket_compliance(c, by_checklist.get(c.checklist_id, ())) for c in checklists
    )


class ScoreService:
    """Use case: keep each actor's rolling compliance score up to date."""

    def __init__(
        self,
        actors: ActorRepository,
        checklists: ChecklistRepository,
        completions: CompletionRepository,
        *,
        calculator: Optional[BucketCalculator] = None,
        locks: Optional[ActorLocks] = None,
    ):
        self._actors = actors
        self._checklists = checklists
        self._completions = completions
        self._calculator = calculator or StandardBucketCalculator()
        self._locks = locks or ActorLocks()

    def assigned_checklists(self, actor: Actor) -> list[ChecklistDefinition]:
        if actor.lane is None or actor.sub_area is None or actor.role_name is None:
            return []
        candidates = self._checklists.list(
            site_id=actor.site_id,
            lane=actor.lane,
            sub_area=actor.sub_area,
            role=actor.role_name,
        )
        return assigned_checklists(actor, candidates)

    def _get_actor(self, actor_id: int) -> Actor:
        actor = self._actors.get_by_id(actor_id)
        if not actor:
            raise UnknownActor(f"Actor {actor_id} not found")
        return actor

    def recompute_actor_score(self, actor_id: int, *, now: Optional[datetime] = None) -> int:
        """Recompute and store the actor's score for the day bucket containing `now`.

        Idempotent for a fixed event set; serialized per actor.
        """
        now = now or now_local()
        start, end = day_bounds(now.date())

        with self._locks.for_actor(actor_id):
            actor = self._get_actor(actor_id)
            checklists = self.assigned_checklists(actor)
            events: Sequence[CompletionEvent] = []
            if checklists:
                events = self._completions.list_in_range(
                    checklist_ids=[c.checklist_id for c in checklists],
                    start=start,
                    end=end,
                    actor_id=actor_id,
                )

            score = actor_bucket_score(checklists, events, self._calculator)
            self._actors.set_compliance(actor_id, score)

        logger.debug("actor %s compliance=%s over %d checklists", actor_id, score, len(checklists))
        return score

    def checklist_statuses(self, actor_id: int, *, now: Optional[datetime] = None) -> list[ChecklistStatus]:
        now = now or now_local()
        start, end = day_bounds(now.date())

        actor = self._get_actor(actor_id)
        checklists = self.assigned_checklists(actor)
        if not checklists:
            return []

        events = self._completions.list_in_range(
            checklist_ids=[c.checklist_id for c in checklists],
            start=start,
            end=end,
            actor_id=actor_id,
        )
        by_checklist: dict[int, list[CompletionEvent]] = defaultdict(list)
        for event in events:
            by_checklist[event.checklist_id].append(event)

        statuses = []
        for c in checklists:
            mine = by_checklist.get(c.checklist_id, [])
            statuses.append(
                ChecklistStatus(
                    checklist=c,
                    completed_activities=self._calculator.completed_count(c, mine),
                    total_activities=c.total_activities,
                    completion_percentage=self._calculator.bucket_compliance(c, mine),
                )
            )
        return statuses
