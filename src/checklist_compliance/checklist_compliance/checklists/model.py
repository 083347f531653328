from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..geofence.model import Geofence


@dataclass(frozen=True)
class Selector:
    """Sub-area / role selector on a checklist.

    Stored upstream as either a single string or a list of strings; resolved
    once here so matching never re-inspects the raw shape.
    """

    values: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def one(cls, value: str) -> "Selector":
        return cls(frozenset({value}))

    @classmethod
    def any_of(cls, values: Iterable[str]) -> "Selector":
        return cls(frozenset(v for v in values if v))

    @classmethod
    def parse(cls, raw) -> "Selector":
        if raw is None:
            return cls()
        if isinstance(raw, Selector):
            return raw
        if isinstance(raw, (list, tuple, set, frozenset)):
            return cls.any_of(str(v).strip() for v in raw)
        text = str(raw).strip()
        if text.startswith("["):
            try:
                decoded = json.loads(text)
            except ValueError:
                return cls.one(text)
            return cls.any_of(str(v).strip() for v in decoded)
        return cls.one(text) if text else cls()

    def matches(self, value: Optional[str]) -> bool:
        return value is not None and value in self.values


@dataclass(frozen=True)
class Activity:
    """A checkable task. `activity_id` is stable across edits of its siblings."""

    activity_id: int
    name: str
    requires_photo: bool = False
    recurrence: Optional[str] = None
    position: int = 0


@dataclass(frozen=True)
class ChecklistDefinition:
    checklist_id: int
    site_id: int
    name: str
    lane: str
    sub_area: Selector
    role: Selector
    activities: tuple[Activity, ...] = ()
    requires_location: bool = False
    geofence: Optional[Geofence] = None
    general_recurrence: Optional[str] = None

    @property
    def total_activities(self) -> int:
        return len(self.activities)

    @property
    def activity_ids(self) -> frozenset[int]:
        return frozenset(a.activity_id for a in self.activities)

    def get_activity(self, activity_id: int) -> Optional[Activity]:
        for activity in self.activities:
            if activity.activity_id == activity_id:
                return activity
        return None
