from __future__ import annotations

import math

import pytest

from src.checklist_compliance.checklist_compliance.core.exceptions import InvalidCoordinate, UnknownChecklist
from src.checklist_compliance.checklist_compliance.geofence.model import Coordinate, Geofence
from src.checklist_compliance.checklist_compliance.geofence.service import GeofenceService
from tests.fakes import InMemoryChecklists, make_checklist

METER_DEG = math.degrees(1 / 6_371_000)
CENTER = Coordinate(40.0, -74.0)


def _service():
    repo = InMemoryChecklists(
        [
            make_checklist(1, geofence=Geofence(center=CENTER, radius_meters=50), requires_location=True),
            make_checklist(2),
        ]
    )
    return GeofenceService(repo)


def test_checklist_without_geofence_is_trivially_valid():
    check = _service().validate_location(2, Coordinate(10.0, 10.0))

    assert check.valid is True
    assert check.distance_meters is None
    assert check.to_dict() == {"valid": True, "message": "Location validated successfully"}


def test_inside_geofence_reports_distance():
    check = _service().validate_location(1, Coordinate(40.0 + 20 * METER_DEG, -74.0))

    assert check.valid is True
    assert check.distance_meters == pytest.approx(20, abs=0.5)
    assert check.required_radius == 50
    assert check.meters_outside == 0


def test_outside_geofence_reports_distance_and_radius():
    check = _service().validate_location(1, Coordinate(40.0 + 200 * METER_DEG, -74.0))

    assert check.valid is False
    assert check.distance_meters == pytest.approx(200, abs=5)
    assert check.required_radius == 50
    assert check.meters_outside == pytest.approx(150, abs=5)
    assert check.to_dict()["distance_meters"] == 200


def test_unknown_checklist():
    with pytest.raises(UnknownChecklist):
        _service().validate_location(99, CENTER)


@pytest.mark.parametrize("checklist_id", [1, 2])
@pytest.mark.parametrize("point", [Coordinate(float("nan"), 0.0), Coordinate(0.0, float("inf")), Coordinate(-90.5, 0.0)])
def test_bad_point_is_rejected_with_or_without_geofence(checklist_id, point):
    with pytest.raises(InvalidCoordinate):
        _service().validate_location(checklist_id, point)
