from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .actors.mysql_actor_repository import MySQLActorRepository
from .actors.repository import ActorRepository
from .checklists.mysql_checklist_repository import MySQLChecklistRepository
from .checklists.repository import ChecklistRepository
from .completions.mysql_completion_repository import MySQLCompletionRepository
from .completions.repository import CompletionRepository
from .completions.service import CompletionService
from .compliance.score_service import ScoreService
from .compliance.site_aggregator import SiteAggregator
from .compliance.trend import TrendAggregator
from .core.constants import (
    DEFAULT_GEOFENCE_RADIUS_M,
    DEFAULT_LOW_COMPLIANCE_LIMIT,
    DEFAULT_LOW_COMPLIANCE_THRESHOLD,
    DEFAULT_TREND_MAX_WORKERS,
)
from .database.connection import DBConfig, DatabaseConnection
from .geofence.service import GeofenceService
from .insights.service import InsightsService
from .sites.mysql_site_repository import MySQLSiteRepository
from .sites.repository import SiteRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    sites_repo: SiteRepository
    actors_repo: ActorRepository
    checklists_repo: ChecklistRepository
    completions_repo: CompletionRepository

    geofence_service: GeofenceService
    score_service: ScoreService
    completion_service: CompletionService
    trend_aggregator: TrendAggregator
    site_aggregator: SiteAggregator
    insights_service: InsightsService

    def close(self) -> None:
        if self.conn is not None and self.conn.is_open:
            self.conn.close()


def assemble(
    *,
    sites_repo: SiteRepository,
    actors_repo: ActorRepository,
    checklists_repo: ChecklistRepository,
    completions_repo: CompletionRepository,
    conn: Optional[DatabaseConnection] = None,
    max_workers: int = DEFAULT_TREND_MAX_WORKERS,
    low_threshold: Optional[int] = DEFAULT_LOW_COMPLIANCE_THRESHOLD,
    low_limit: int = DEFAULT_LOW_COMPLIANCE_LIMIT,
) -> Container:
    """Wire services on top of any repository implementations."""

    geofence_service = GeofenceService(checklists_repo)
    score_service = ScoreService(actors_repo, checklists_repo, completions_repo)
    completion_service = CompletionService(checklists_repo, completions_repo, actors_repo, score_service)
    trend_aggregator = TrendAggregator(checklists_repo, completions_repo, max_workers=max_workers)
    site_aggregator = SiteAggregator(sites_repo, actors_repo, max_workers=max_workers)
    insights_service = InsightsService(
        actors_repo,
        checklists_repo,
        trend_aggregator,
        site_aggregator,
        low_threshold=low_threshold,
        low_limit=low_limit,
    )

    return Container(
        conn=conn,
        sites_repo=sites_repo,
        actors_repo=actors_repo,
        checklists_repo=checklists_repo,
        completions_repo=completions_repo,
        geofence_service=geofence_service,
        score_service=score_service,
        completion_service=completion_service,
        trend_aggregator=trend_aggregator,
        site_aggregator=site_aggregator,
        insights_service=insights_service,
    )


def build_container(*, db_config: dict, engine_config: Optional[dict] = None) -> Container:
    """MySQL-backed container with an open connection; release it with `Container.close()`."""

    engine_config = engine_config or {}
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).open()

    return assemble(
        conn=conn,
        sites_repo=MySQLSiteRepository(conn),
        actors_repo=MySQLActorRepository(conn),
        checklists_repo=MySQLChecklistRepository(
            conn,
            default_radius=float(engine_config.get("default_geofence_radius", DEFAULT_GEOFENCE_RADIUS_M)),
        ),
        completions_repo=MySQLCompletionRepository(conn),
        max_workers=int(engine_config.get("max_workers", DEFAULT_TREND_MAX_WORKERS)),
        low_threshold=engine_config.get("low_threshold", DEFAULT_LOW_COMPLIANCE_THRESHOLD),
        low_limit=int(engine_config.get("low_limit", DEFAULT_LOW_COMPLIANCE_LIMIT)),
    )
