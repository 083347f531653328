from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Site:
    """A physical facility grouping lanes."""

    site_id: int
    name: str
