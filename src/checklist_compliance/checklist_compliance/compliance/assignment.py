"""Which checklists an actor is responsible for."""

from __future__ import annotations

from typing import Iterable

from ..actors.model import Actor
from ..checklists.model import ChecklistDefinition


def is_assigned(actor: Actor, checklist: ChecklistDefinition) -> bool:
    """Lane, sub-area and role must all match; site must match unless the actor has none.

    A missing lane/sub-area/role on the actor never matches anything. A missing
    site on the actor widens the match; a checklist always belongs to a site.
    """
    if actor.lane is None or actor.sub_area is None or actor.role_name is None:
        return False
    if checklist.lane != actor.lane:
        return False
    if not checklist.sub_area.matches(actor.sub_area):
        return False
    if not checklist.role.matches(actor.role_name):
        return False
    if actor.site_id is not None and checklist.site_id != actor.site_id:
        return False
    return True


def assigned_checklists(actor: Actor, checklists: Iterable[ChecklistDefinition]) -> list[ChecklistDefinition]:
    return [c for c in checklists if is_assigned(actor, c)]
