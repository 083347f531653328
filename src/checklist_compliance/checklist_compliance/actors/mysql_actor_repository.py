from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Actor
from .repository import ActorRepository

_ACTOR_COLUMNS = "actor_id, name, role, lane, sub_area, role_name, site_id, compliance"


class MySQLActorRepository(ActorRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, actor_id: int) -> Optional[Actor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_ACTOR_COLUMNS} FROM actors WHERE actor_id=%s", (int(actor_id),))
            r = fetchone(cur)
            return self._to_model(r) if r else None

    def list(self, *, site_id: Optional[int] = None) -> Sequence[Actor]:
        with db_cursor(self._conn_factory) as (_, cur):
            if site_id is None:
                cur.execute(f"SELECT {_ACTOR_COLUMNS} FROM actors ORDER BY actor_id ASC")
            else:
                cur.execute(
                    f"SELECT {_ACTOR_COLUMNS} FROM actors WHERE site_id=%s ORDER BY actor_id ASC",
                    (int(site_id),),
                )
            return [self._to_model(r) for r in fetchall(cur)]

    def set_compliance(self, actor_id: int, score: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE actors SET compliance=%s WHERE actor_id=%s",
                (int(score), int(actor_id)),
            )
            return cur.rowcount > 0

    @staticmethod
    def _to_model(r: dict) -> Actor:
        return Actor(
            actor_id=int(r["actor_id"]),
            name=r["name"],
            role=Role(r["role"]),
            lane=r.get("lane"),
            sub_area=r.get("sub_area"),
            role_name=r.get("role_name"),
            site_id=int(r["site_id"]) if r.get("site_id") is not None else None,
            compliance=int(r.get("compliance") or 0),
        )
