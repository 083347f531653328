"""In-memory repositories and builders shared by the test suite."""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional

from src.checklist_compliance.checklist_compliance.actors.model import Actor
from src.checklist_compliance.checklist_compliance.checklists.model import Activity, ChecklistDefinition, Selector
from src.checklist_compliance.checklist_compliance.completions.model import CompletionEvent
from src.checklist_compliance.checklist_compliance.geofence.model import Coordinate, Geofence
from src.checklist_compliance.checklist_compliance.sites.model import Site


def make_checklist(
    checklist_id: int,
    *,
    lane: str = "Operations",
    activities: int = 4,
    site_id: int = 1,
    sub_area="Reception",
    role="Hosts",
    name: Optional[str] = None,
    requires_location: bool = False,
    geofence: Optional[Geofence] = None,
    photo_activity_ids: Iterable[int] = (),
) -> ChecklistDefinition:
    """Activity ids are checklist_id * 100 + 1..N."""
    photo = set(photo_activity_ids)
    acts = tuple(
        Activity(
            activity_id=checklist_id * 100 + i,
            name=f"Activity {i}",
            requires_photo=(checklist_id * 100 + i) in photo,
            position=i,
        )
        for i in range(1, activities + 1)
    )
    return ChecklistDefinition(
        checklist_id=checklist_id,
        site_id=site_id,
        name=name or f"Checklist {checklist_id}",
        lane=lane,
        sub_area=Selector.parse(sub_area),
        role=Selector.parse(role),
        activities=acts,
        requires_location=requires_location,
        geofence=geofence,
    )


def make_actor(actor_id: int, **kwargs) -> Actor:
    defaults = dict(
        name=f"Actor {actor_id}",
        lane="Operations",
        sub_area="Reception",
        role_name="Hosts",
        site_id=1,
    )
    defaults.update(kwargs)
    return Actor(actor_id=actor_id, **defaults)


class InMemorySites:
    def __init__(self, sites: Iterable[Site] = ()):
        self._sites = list(sites)

    def list_all(self):
        return list(self._sites)


class InMemoryActors:
    def __init__(self, actors: Iterable[Actor] = ()):
        self._by_id = {a.actor_id: a for a in actors}
        self.writes: list[tuple[int, int]] = []
        self._lock = threading.Lock()

    def get_by_id(self, actor_id: int) -> Optional[Actor]:
        return self._by_id.get(actor_id)

    def list(self, *, site_id: Optional[int] = None):
        actors = sorted(self._by_id.values(), key=lambda a: a.actor_id)
        if site_id is None:
            return actors
        return [a for a in actors if a.site_id == site_id]

    def set_compliance(self, actor_id: int, score: int) -> bool:
        with self._lock:
            actor = self._by_id.get(actor_id)
            if not actor:
                return False
            self._by_id[actor_id] = replace(actor, compliance=int(score))
            self.writes.append((actor_id, int(score)))
            return True


class InMemoryChecklists:
    def __init__(self, checklists: Iterable[ChecklistDefinition] = ()):
        self._checklists = list(checklists)

    def get_by_id(self, checklist_id: int) -> Optional[ChecklistDefinition]:
        for c in self._checklists:
            if c.checklist_id == checklist_id:
                return c
        return None

    def list(self, *, site_id=None, lane=None, sub_area=None, role=None):
        out = []
        for c in self._checklists:
            if site_id is not None and c.site_id != site_id:
                continue
            if lane is not None and c.lane != lane:
                continue
            if sub_area is not None and not c.sub_area.matches(sub_area):
                continue
            if role is not None and not c.role.matches(role):
                continue
            out.append(c)
        return out


class InMemoryCompletions:
    def __init__(self, events: Iterable[CompletionEvent] = ()):
        self._events = list(events)
        self._lock = threading.Lock()

    def record(self, checklist_id: int, activity_id: int, actor_id: int, completed_at: datetime) -> CompletionEvent:
        return self.add(
            checklist_id=checklist_id,
            activity_id=activity_id,
            actor_id=actor_id,
            completed_at=completed_at,
        )

    def add(
        self,
        *,
        checklist_id: int,
        activity_id: int,
        actor_id: int,
        completed_at: datetime,
        location: Optional[Coordinate] = None,
        photo_ref: Optional[str] = None,
    ) -> CompletionEvent:
        with self._lock:
            event = CompletionEvent(
                event_id=len(self._events) + 1,
                checklist_id=checklist_id,
                activity_id=activity_id,
                actor_id=actor_id,
                completed_at=completed_at,
                location=location,
                photo_ref=photo_ref,
            )
            self._events.append(event)
            return event

    @property
    def events(self) -> list[CompletionEvent]:
        return list(self._events)

    def list_in_range(self, *, checklist_ids, start, end, actor_id=None):
        ids = set(checklist_ids)
        return [
            e
            for e in self._events
            if e.checklist_id in ids
            and start <= e.completed_at < end
            and (actor_id is None or e.actor_id == actor_id)
        ]
