from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..geofence.model import Coordinate


@dataclass(frozen=True)
class CompletionEvent:
    """Append-only fact: an actor finished one activity of one checklist."""

    event_id: int
    checklist_id: int
    activity_id: int
    actor_id: int
    completed_at: datetime
    location: Optional[Coordinate] = None
    photo_ref: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "checklist_id": self.checklist_id,
            "activity_id": self.activity_id,
            "actor_id": self.actor_id,
            "completed_at": self.completed_at.isoformat(),
            "latitude": self.location.latitude if self.location else None,
            "longitude": self.location.longitude if self.location else None,
            "photo": self.photo_ref,
        }
