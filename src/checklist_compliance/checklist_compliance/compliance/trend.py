"""Daily lane-pooled compliance series for dashboards.

Unlike an actor's score (mean over that actor's checklists), a lane's figure
pools every checklist of the lane: distinct (checklist, activity) completions
by anyone that day over the lane's total activity count.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from ..checklists.model import ChecklistDefinition
from ..checklists.repository import ChecklistRepository
from ..common.datetime_utils import day_bounds, now_local, trailing_days
from ..common.percent import percentage, rounded_mean
from ..completions.model import CompletionEvent
from ..completions.repository import CompletionRepository
from ..core.constants import DEFAULT_TREND_MAX_WORKERS
from ..core.enums import TrendPeriod
from .calculator.base import BucketCalculator
from .calculator.standard_calculator import StandardBucketCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Lane:
    key: str
    name: str
    checklists: tuple[ChecklistDefinition, ...]

    @property
    def total_activities(self) -> int:
        return sum(c.total_activities for c in self.checklists)


@dataclass(frozen=True)
class ComplianceTrendPoint:
    day: date
    lanes: dict[str, int] = field(default_factory=dict)
    general: int = 0

    def to_dict(self) -> dict:
        data: dict = {"date": self.day.isoformat()}
        data.update(self.lanes)
        data["general"] = self.general
        return data


def group_lanes(checklists: Sequence[ChecklistDefinition]) -> list[Lane]:
    """Lanes in first-seen order, keyed by lower-cased name.

    Names differing only by case collapse into one lane; the first spelling
    seen is kept for display.
    """
    names: dict[str, str] = {}
    members: dict[str, list[ChecklistDefinition]] = defaultdict(list)
    for c in checklists:
        if not c.lane:
            continue
        key = c.lane.lower()
        names.setdefault(key, c.lane)
        members[key].append(c)
    return [Lane(key=key, name=name, checklists=tuple(members[key])) for key, name in names.items()]


class TrendAggregator:
    def __init__(
        self,
        checklists: ChecklistRepository,
        completions: CompletionRepository,
        *,
        calculator: Optional[BucketCalculator] = None,
        max_workers: int = DEFAULT_TREND_MAX_WORKERS,
    ):
        self._checklists = checklists
        self._completions = completions
        self._calculator = calculator or StandardBucketCalculator()
        self._max_workers = max(1, int(max_workers))

    def build_trend(
        self,
        period: "TrendPeriod | str" = TrendPeriod.MONTH,
        site_id: Optional[int] = None,
        *,
        today: Optional[date] = None,
    ) -> list[ComplianceTrendPoint]:
        period = TrendPeriod.parse(period)
        today = today or now_local().date()
        days = trailing_days(today, period.days)

        lanes = group_lanes(self._checklists.list(site_id=site_id))
        if not lanes:
            return [ComplianceTrendPoint(day=d) for d in days]

        checklist_ids = [c.checklist_id for lane in lanes for c in lane.checklists]

        points: dict[date, ComplianceTrendPoint] = {}
        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(days))) as pool:
            futures = {pool.submit(self._point_for_day, d, lanes, checklist_ids): d for d in days}
            for future in as_completed(futures):
                points[futures[future]] = future.result()

        logger.debug("trend period=%s site=%s lanes=%d", period.value, site_id, len(lanes))
        return [points[d] for d in days]

    def _point_for_day(self, day: date, lanes: list[Lane], checklist_ids: list[int]) -> ComplianceTrendPoint:
        start, end = day_bounds(day)
        events = self._completions.list_in_range(checklist_ids=checklist_ids, start=start, end=end)

        by_checklist: dict[int, list[CompletionEvent]] = defaultdict(list)
        for event in events:
            by_checklist[event.checklist_id].append(event)

        per_lane: dict[str, int] = {}
        for lane in lanes:
            done = sum(
                self._calculator.completed_count(c, by_checklist.get(c.checklist_id, ()))
                for c in lane.checklists
            )
            per_lane[lane.key] = percentage(done, lane.total_activities)

        return ComplianceTrendPoint(day=day, lanes=per_lane, general=rounded_mean(per_lane.values()))
