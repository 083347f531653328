from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Site
from .repository import SiteRepository


class MySQLSiteRepository(SiteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Site]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT site_id, name FROM sites ORDER BY site_id ASC")
            return [Site(site_id=int(r["site_id"]), name=r["name"]) for r in fetchall(cur)]
