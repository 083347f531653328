from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..actors.model import Actor
from ..actors.repository import ActorRepository
from ..checklists.repository import ChecklistRepository
from ..compliance.site_aggregator import HeadlineMetrics, SiteAggregator, headline_metrics, lowest_scoring
from ..compliance.trend import ComplianceTrendPoint, TrendAggregator
from ..core.constants import DEFAULT_LOW_COMPLIANCE_LIMIT, DEFAULT_LOW_COMPLIANCE_THRESHOLD
from ..core.enums import TrendPeriod


@dataclass(frozen=True)
class Insights:
    headline: HeadlineMetrics
    low_compliance: list[Actor]
    trend: list[ComplianceTrendPoint]
    compliance_by_site: dict[str, int]

    def to_dict(self) -> dict:
        return {
            "kpis": self.headline.to_dict(),
            "low_compliance_users": [
                {
                    "actor_id": a.actor_id,
                    "name": a.name,
                    "lane": a.lane,
                    "sub_area": a.sub_area,
                    "role_name": a.role_name,
                    "site_id": a.site_id,
                    "compliance": a.compliance,
                }
                for a in self.low_compliance
            ],
            "compliance_trends": [p.to_dict() for p in self.trend],
            "compliance_by_site": [
                {"site": name, "compliance": score} for name, score in self.compliance_by_site.items()
            ],
        }


class InsightsService:
    """Dashboard read model: headline figures, laggards, trend and per-site scores."""

    def __init__(
        self,
        actors: ActorRepository,
        checklists: ChecklistRepository,
        trend: TrendAggregator,
        sites: SiteAggregator,
        *,
        low_threshold: Optional[int] = DEFAULT_LOW_COMPLIANCE_THRESHOLD,
        low_limit: int = DEFAULT_LOW_COMPLIANCE_LIMIT,
    ):
        self._actors = actors
        self._checklists = checklists
        self._trend = trend
        self._sites = sites
        self._low_threshold = low_threshold
        self._low_limit = int(low_limit)

    def get_insights(
        self,
        site_id: Optional[int] = None,
        period: "TrendPeriod | str" = TrendPeriod.MONTH,
        *,
        today: Optional[date] = None,
    ) -> Insights:
        actors = list(self._actors.list(site_id=site_id))
        checklists = list(self._checklists.list(site_id=site_id))

        return Insights(
            headline=headline_metrics(actors, checklists),
            low_compliance=lowest_scoring(actors, self._low_limit, below=self._low_threshold),
            trend=self._trend.build_trend(period, site_id, today=today),
            compliance_by_site=self._sites.compliance_by_site(),
        )
