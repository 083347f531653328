from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..actors.model import Actor
from ..actors.repository import ActorRepository
from ..checklists.model import ChecklistDefinition
from ..common.percent import rounded_mean
from ..core.constants import DEFAULT_TREND_MAX_WORKERS
from ..core.enums import Role
from ..sites.repository import SiteRepository
from .assignment import is_assigned


@dataclass(frozen=True)
class HeadlineMetrics:
    operational_compliance: int
    active_users: int
    users_without_checklist: int

    def to_dict(self) -> dict:
        return {
            "operational_compliance": self.operational_compliance,
            "active_users": self.active_users,
            "users_without_checklist": self.users_without_checklist,
        }


def mean_compliance(actors: Iterable[Actor]) -> int:
    return rounded_mean(a.compliance for a in actors)


def headline_metrics(actors: Sequence[Actor], checklists: Sequence[ChecklistDefinition]) -> HeadlineMetrics:
    without = sum(1 for a in actors if not any(is_assigned(a, c) for c in checklists))
    return HeadlineMetrics(
        operational_compliance=mean_compliance(actors),
        active_users=sum(1 for a in actors if a.role == Role.USER),
        users_without_checklist=without,
    )


def lowest_scoring(actors: Iterable[Actor], limit: int, *, below: Optional[int] = None) -> list[Actor]:
    """The `limit` lowest scores, ties broken by actor id ascending."""
    pool = [a for a in actors if below is None or a.compliance < below]
    pool.sort(key=lambda a: (a.compliance, a.actor_id))
    return pool[: max(0, int(limit))]


class SiteAggregator:
    """Rolls stored actor scores up per site. Never recomputes buckets."""

    def __init__(self, sites: SiteRepository, actors: ActorRepository, *, max_workers: int = DEFAULT_TREND_MAX_WORKERS):
        self._sites = sites
        self._actors = actors
        self._max_workers = max(1, int(max_workers))

    def compliance_by_site(self) -> dict[str, int]:
        sites = list(self._sites.list_all())
        if not sites:
            return {}

        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(sites))) as pool:
            # map() yields in submission order, i.e. site order.
            scores = list(pool.map(lambda s: mean_compliance(self._actors.list(site_id=s.site_id)), sites))

        return {site.name: score for site, score in zip(sites, scores)}
