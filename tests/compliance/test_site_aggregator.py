from __future__ import annotations

from src.checklist_compliance.checklist_compliance.compliance.site_aggregator import (
    SiteAggregator,
    headline_metrics,
    lowest_scoring,
)
from src.checklist_compliance.checklist_compliance.core.enums import Role
from src.checklist_compliance.checklist_compliance.sites.model import Site
from tests.fakes import InMemoryActors, InMemorySites, make_actor, make_checklist


def test_site_without_actors_reports_zero():
    sites = InMemorySites([Site(1, "Plant 1"), Site(2, "Plant 2")])
    actors = InMemoryActors([make_actor(1, site_id=1, compliance=90), make_actor(2, site_id=1, compliance=75)])

    result = SiteAggregator(sites, actors).compliance_by_site()

    assert result == {"Plant 1": 83, "Plant 2": 0}
    assert list(result) == ["Plant 1", "Plant 2"]


def test_no_sites():
    assert SiteAggregator(InMemorySites(), InMemoryActors()).compliance_by_site() == {}


def test_site_order_follows_repository():
    sites = InMemorySites([Site(9, "Zeta"), Site(3, "Alpha"), Site(5, "Mid")])
    actors = InMemoryActors([make_actor(1, site_id=3, compliance=40), make_actor(2, site_id=9, compliance=100)])

    result = SiteAggregator(sites, actors, max_workers=3).compliance_by_site()

    assert list(result.items()) == [("Zeta", 100), ("Alpha", 40), ("Mid", 0)]


def test_lowest_scoring_breaks_ties_by_actor_id():
    actors = [
        make_actor(5, compliance=10),
        make_actor(2, compliance=10),
        make_actor(3, compliance=0),
        make_actor(4, compliance=95),
        make_actor(1, compliance=60),
    ]

    assert [a.actor_id for a in lowest_scoring(actors, 3)] == [3, 2, 5]
    assert [a.actor_id for a in lowest_scoring(actors, 10, below=80)] == [3, 2, 5, 1]
    assert lowest_scoring(actors, 0) == []


def test_headline_metrics():
    actors = [
        make_actor(1, compliance=80),
        make_actor(2, compliance=40, lane="Kitchen"),
        make_actor(3, role=Role.ADMIN, lane=None, sub_area=None, role_name=None, site_id=None),
    ]
    checklists = [make_checklist(1)]

    metrics = headline_metrics(actors, checklists)

    assert metrics.operational_compliance == 40
    assert metrics.active_users == 2
    assert metrics.users_without_checklist == 2
    assert headline_metrics([], []).to_dict() == {
        "operational_compliance": 0,
        "active_users": 0,
        "users_without_checklist": 0,
    }
