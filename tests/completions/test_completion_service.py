from __future__ import annotations

import math
from datetime import datetime

import pytest

from src.checklist_compliance.checklist_compliance.compliance.score_service import ScoreService
from src.checklist_compliance.checklist_compliance.completions.service import CompletionService
from src.checklist_compliance.checklist_compliance.core.enums import RejectionKind
from src.checklist_compliance.checklist_compliance.core.exceptions import (
    InvalidCoordinate,
    LocationRequired,
    OutOfGeofence,
    PhotoRequired,
    UnknownActivity,
    UnknownActor,
    UnknownChecklist,
)
from src.checklist_compliance.checklist_compliance.geofence.model import Coordinate, Geofence
from tests.fakes import InMemoryActors, InMemoryChecklists, InMemoryCompletions, make_actor, make_checklist

METER_DEG = math.degrees(1 / 6_371_000)
CENTER = Coordinate(40.0, -74.0)
INSIDE = Coordinate(40.0 + 10 * METER_DEG, -74.0)
FAR = Coordinate(40.0 + 200 * METER_DEG, -74.0)
NOW = datetime(2026, 3, 2, 7, 45)


def _setup():
    opening = make_checklist(
        1,
        name="Opening Checks",
        activities=4,
        requires_location=True,
        geofence=Geofence(center=CENTER, radius_meters=50),
        photo_activity_ids=[104],
    )
    free = make_checklist(2, activities=2, role="Receptionists")
    actors = InMemoryActors([make_actor(1), make_actor(2, role_name="Receptionists")])
    completions = InMemoryCompletions()
    checklists = InMemoryChecklists([opening, free])
    scores = ScoreService(actors, checklists, completions)
    return CompletionService(checklists, completions, actors, scores), actors, completions


def test_far_location_is_out_of_geofence():
    svc, _, completions = _setup()

    with pytest.raises(OutOfGeofence) as exc:
        svc.record_completion(1, 101, 1, point=FAR, now=NOW)

    assert exc.value.kind == RejectionKind.OUT_OF_GEOFENCE
    assert exc.value.distance_meters == pytest.approx(200, abs=5)
    assert exc.value.required_radius == 50
    assert exc.value.to_dict()["error"] == "OutOfGeofence"
    assert completions.events == []


def test_two_of_four_inside_geofence_scores_fifty():
    svc, actors, completions = _setup()

    svc.record_completion(1, 101, 1, point=INSIDE, now=NOW)
    event = svc.record_completion(1, 102, 1, point=INSIDE, now=NOW.replace(hour=8))
    svc.record_completion(1, 102, 1, point=INSIDE, now=NOW.replace(hour=9))

    assert event.checklist_id == 1 and event.activity_id == 102 and event.location == INSIDE
    assert len(completions.events) == 3
    assert actors.get_by_id(1).compliance == 50


def test_location_required():
    svc, _, _ = _setup()
    with pytest.raises(LocationRequired):
        svc.record_completion(1, 101, 1, now=NOW)


def test_photo_required():
    svc, _, _ = _setup()
    with pytest.raises(PhotoRequired):
        svc.record_completion(1, 104, 1, point=INSIDE, now=NOW)

    event = svc.record_completion(1, 104, 1, point=INSIDE, photo_ref="s3://bucket/lobby.jpg", now=NOW)
    assert event.photo_ref == "s3://bucket/lobby.jpg"


def test_unknown_checklist_activity_and_actor():
    svc, _, _ = _setup()
    with pytest.raises(UnknownChecklist):
        svc.record_completion(99, 101, 1, point=INSIDE, now=NOW)
    with pytest.raises(UnknownActivity):
        svc.record_completion(1, 201, 1, point=INSIDE, now=NOW)
    with pytest.raises(UnknownActor):
        svc.record_completion(1, 101, 77, point=INSIDE, now=NOW)


def test_non_finite_location_is_rejected():
    svc, _, _ = _setup()
    with pytest.raises(InvalidCoordinate):
        svc.record_completion(1, 101, 1, point=Coordinate(float("nan"), -74.0), now=NOW)


def test_checklist_without_location_rules_accepts_bare_completion():
    svc, actors, _ = _setup()

    svc.record_completion(2, 201, 2, now=NOW)

    assert actors.get_by_id(2).compliance == 50


@pytest.mark.parametrize(
    "point",
    [Coordinate(float("nan"), float("inf")), Coordinate(91.0, 0.0), Coordinate(0.0, -180.5)],
)
def test_bad_point_rejected_on_checklist_without_geofence(point):
    checklists = InMemoryChecklists(
        [
            make_checklist(2, activities=2, role="Receptionists"),
            make_checklist(3, activities=2, role="Receptionists", requires_location=True),
        ]
    )
    actors = InMemoryActors([make_actor(2, role_name="Receptionists")])
    completions = InMemoryCompletions()
    svc = CompletionService(checklists, completions, actors, ScoreService(actors, checklists, completions))

    with pytest.raises(InvalidCoordinate):
        svc.record_completion(2, 201, 2, point=point, now=NOW)
    with pytest.raises(InvalidCoordinate):
        svc.record_completion(3, 301, 2, point=point, now=NOW)

    assert completions.events == []
    assert actors.writes == []


def test_point_on_geofence_edge_is_accepted():
    svc, _, completions = _setup()
    edge = Coordinate(40.0 + 49.9 * METER_DEG, -74.0)

    svc.record_completion(1, 101, 1, point=edge, now=NOW)

    assert len(completions.events) == 1
