from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Actor


class ActorRepository(Protocol):
    def get_by_id(self, actor_id: int) -> Optional[Actor]:
        raise NotImplementedError

    def list(self, *, site_id: Optional[int] = None) -> Sequence[Actor]:
        """All actors, or only those whose site reference equals site_id."""

        raise NotImplementedError

    def set_compliance(self, actor_id: int, score: int) -> bool:
        raise NotImplementedError
