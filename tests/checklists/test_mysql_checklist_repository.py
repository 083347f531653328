from __future__ import annotations

import pytest

from src.checklist_compliance.checklist_compliance.checklists.mysql_checklist_repository import (
    MySQLChecklistRepository,
)
from src.checklist_compliance.checklist_compliance.container import build_container
from src.checklist_compliance.checklist_compliance.database.connection import DBConfig, DatabaseConnection

DB = {"host": "localhost", "port": 3306, "user": "root", "password": "", "database": "compliance_test_db"}


def _row(**overrides):
    row = {
        "checklist_id": 7,
        "site_id": 1,
        "name": "Opening Checks",
        "lane": "Operations",
        "sub_area": '["Reception", "Lobby"]',
        "role": "Hosts",
        "requires_location": 1,
        "geofence_address": "1 Main St",
        "geofence_latitude": "40.0",
        "geofence_longitude": "-74.0",
        "geofence_radius": None,
        "general_recurrence": None,
    }
    row.update(overrides)
    return row


def _repo(default_radius=50.0):
    return MySQLChecklistRepository(DatabaseConnection(DBConfig.from_dict(DB)), default_radius=default_radius)


def test_zero_radius_is_kept():
    checklist = _repo()._to_model(_row(geofence_radius=0), ())

    assert checklist.geofence.radius_meters == 0.0


def test_missing_radius_uses_configured_default():
    checklist = _repo(default_radius=75)._to_model(_row(), ())

    assert checklist.geofence.radius_meters == 75.0
    assert checklist.geofence.center.latitude == 40.0
    assert checklist.sub_area.matches("Lobby")


def test_no_center_means_no_geofence():
    checklist = _repo()._to_model(_row(geofence_latitude=None, geofence_radius=20), ())

    assert checklist.geofence is None


@pytest.mark.parametrize("engine_config, expected", [({}, 50.0), ({"default_geofence_radius": 30}, 30.0)])
def test_build_container_passes_default_radius(engine_config, expected):
    container = build_container(db_config=DB, engine_config=engine_config)
    try:
        checklist = container.checklists_repo._to_model(_row(), ())
        assert checklist.geofence.radius_meters == expected
    finally:
        container.close()
