from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..geofence.model import Coordinate
from .model import CompletionEvent


class CompletionRepository(Protocol):
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
        raise NotImplementedError

    def list_in_range(
        self,
        *,
        checklist_ids: Iterable[int],
        start: datetime,
        end: datetime,
        actor_id: Optional[int] = None,
    ) -> Sequence[CompletionEvent]:
        """Events of the given checklists with start <= completed_at < end."""

        raise NotImplementedError
