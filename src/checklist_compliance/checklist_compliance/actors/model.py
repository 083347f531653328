from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Actor:
    """Operational staff member as seen by the compliance engine.

    `compliance` is the last rolling score written by ScoreService (0-100).
    """

    actor_id: int
    name: str
    role: Role = Role.USER
    lane: Optional[str] = None
    sub_area: Optional[str] = None
    role_name: Optional[str] = None
    site_id: Optional[int] = None
    compliance: int = 0
