from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ChecklistDefinition


class ChecklistRepository(Protocol):
    """Read-only access to checklist definitions (snapshot reads)."""

    def get_by_id(self, checklist_id: int) -> Optional[ChecklistDefinition]:
        raise NotImplementedError

    def list(
        self,
        *,
        site_id: Optional[int] = None,
        lane: Optional[str] = None,
        sub_area: Optional[str] = None,
        role: Optional[str] = None,
    ) -> Sequence[ChecklistDefinition]:
        """Filter on any subset of fields; sub_area/role match selector membership."""

        raise NotImplementedError
