from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from ..geofence.model import Coordinate
from .model import CompletionEvent
from .repository import CompletionRepository


class MySQLCompletionRepository(CompletionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO completion_events(checklist_id, activity_id, actor_id, completed_at, latitude, longitude, photo_ref)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(checklist_id),
                    int(activity_id),
                    int(actor_id),
                    completed_at,
                    location.latitude if location else None,
                    location.longitude if location else None,
                    photo_ref,
                ),
            )
            event_id = int(cur.lastrowid)

        return CompletionEvent(
            event_id=event_id,
            checklist_id=int(checklist_id),
            activity_id=int(activity_id),
            actor_id=int(actor_id),
            completed_at=completed_at,
            location=location,
            photo_ref=photo_ref,
        )

    def list_in_range(
        self,
        *,
        checklist_ids: Iterable[int],
        start: datetime,
        end: datetime,
        actor_id: Optional[int] = None,
    ) -> Sequence[CompletionEvent]:
        ids = [int(i) for i in checklist_ids]
        if not ids:
            return []

        clauses = [f"checklist_id IN ({in_clause(ids)})", "completed_at >= %s", "completed_at < %s"]
        params: list[object] = [*ids, start, end]
        if actor_id is not None:
            clauses.append("actor_id=%s")
            params.append(int(actor_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT event_id, checklist_id, activity_id, actor_id, completed_at, latitude, longitude, photo_ref
                FROM completion_events
                WHERE {where}
                ORDER BY completed_at ASC, event_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                CompletionEvent(
                    event_id=int(r["event_id"]),
                    checklist_id=int(r["checklist_id"]),
                    activity_id=int(r["activity_id"]),
                    actor_id=int(r["actor_id"]),
                    completed_at=r["completed_at"],
                    location=(
                        Coordinate(float(r["latitude"]), float(r["longitude"]))
                        if r.get("latitude") is not None and r.get("longitude") is not None
                        else None
                    ),
                    photo_ref=r.get("photo_ref"),
                )
                for r in rows
            ]
