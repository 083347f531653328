from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_GEOFENCE_RADIUS_M
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from ..geofence.model import Coordinate, Geofence
from .model import Activity, ChecklistDefinition, Selector
from .repository import ChecklistRepository

_CHECKLIST_COLUMNS = """
    checklist_id, site_id, name, lane, sub_area, role, requires_location,
    geofence_address, geofence_latitude, geofence_longitude, geofence_radius,
    general_recurrence
"""


class MySQLChecklistRepository(ChecklistRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, default_radius: float = DEFAULT_GEOFENCE_RADIUS_M):
        self._conn_factory = conn_factory
        self._default_radius = float(default_radius)

    def get_by_id(self, checklist_id: int) -> Optional[ChecklistDefinition]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_CHECKLIST_COLUMNS} FROM checklists WHERE checklist_id=%s",
                (int(checklist_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            activities = self._load_activities(cur, [int(r["checklist_id"])])
            return self._to_model(r, activities.get(int(r["checklist_id"]), ()))

    def list(
        self,
        *,
        site_id: Optional[int] = None,
        lane: Optional[str] = None,
        sub_area: Optional[str] = None,
        role: Optional[str] = None,
    ) -> Sequence[ChecklistDefinition]:
        clauses = ["1=1"]
        params: list[object] = []
        if site_id is not None:
            clauses.append("site_id=%s")
            params.append(int(site_id))
        if lane is not None:
            clauses.append("lane=%s")
            params.append(lane)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_CHECKLIST_COLUMNS} FROM checklists WHERE {where} ORDER BY checklist_id ASC",
                tuple(params),
            )
            rows = fetchall(cur)
            if not rows:
                return []
            activities = self._load_activities(cur, [int(r["checklist_id"]) for r in rows])

        checklists = [self._to_model(r, activities.get(int(r["checklist_id"]), ())) for r in rows]
        # Selectors may be JSON lists, so these two filters run after ingestion.
        if sub_area is not None:
            checklists = [c for c in checklists if c.sub_area.matches(sub_area)]
        if role is not None:
            checklists = [c for c in checklists if c.role.matches(role)]
        return checklists

    def _load_activities(self, cur, checklist_ids: list[int]) -> dict[int, tuple[Activity, ...]]:
        cur.execute(
            f"""
            SELECT activity_id, checklist_id, name, requires_photo, recurrence, position
            FROM checklist_activities
            WHERE checklist_id IN ({in_clause(checklist_ids)})
            ORDER BY checklist_id ASC, position ASC, activity_id ASC
            """,
            tuple(checklist_ids),
        )
        grouped: dict[int, list[Activity]] = {}
        for r in fetchall(cur):
            grouped.setdefault(int(r["checklist_id"]), []).append(
                Activity(
                    activity_id=int(r["activity_id"]),
                    name=r["name"],
                    requires_photo=bool(r.get("requires_photo")),
                    recurrence=r.get("recurrence"),
                    position=int(r.get("position") or 0),
                )
            )
        return {k: tuple(v) for k, v in grouped.items()}

    def _radius(self, stored) -> float:
        # NULL means "use the default"; a stored 0 is a real radius.
        return self._default_radius if stored is None else float(stored)

    def _to_model(self, r: dict, activities: tuple[Activity, ...]) -> ChecklistDefinition:
        geofence = None
        if r.get("geofence_latitude") is not None and r.get("geofence_longitude") is not None:
            geofence = Geofence(
                center=Coordinate(float(r["geofence_latitude"]), float(r["geofence_longitude"])),
                radius_meters=self._radius(r.get("geofence_radius")),
                address=r.get("geofence_address"),
            )
        return ChecklistDefinition(
            checklist_id=int(r["checklist_id"]),
            site_id=int(r["site_id"]),
            name=r["name"],
            lane=r["lane"],
            sub_area=Selector.parse(r.get("sub_area")),
            role=Selector.parse(r.get("role")),
            activities=activities,
            requires_location=bool(r.get("requires_location")),
            geofence=geofence,
            general_recurrence=r.get("general_recurrence"),
        )
