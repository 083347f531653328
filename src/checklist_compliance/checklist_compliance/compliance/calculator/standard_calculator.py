from __future__ import annotations

from typing import Iterable

from ...checklists.model import ChecklistDefinition
from ...common.percent import percentage
from ...completions.model import CompletionEvent
from .base import BucketCalculator


class StandardBucketCalculator(BucketCalculator):
    """Standard rule: distinct completed activities / total activities.

    Repeated completions of one activity in the bucket count once. Events for
    other checklists or for activities no longer on the checklist are ignored,
    so the result stays within [0, 100].
    """

    def completed_count(self, checklist: ChecklistDefinition, completions: Iterable[CompletionEvent]) -> int:
        known = checklist.activity_ids
        done = {
            c.activity_id
            for c in completions
            if c.checklist_id == checklist.checklist_id and c.activity_id in known
        }
        return len(done)

    def bucket_compliance(self, checklist: ChecklistDefinition, completions: Iterable[CompletionEvent]) -> int:
        return percentage(self.completed_count(checklist, completions), checklist.total_activities)


def compute_bucket_compliance(checklist: ChecklistDefinition, completions_in_bucket: Iterable[CompletionEvent]) -> int:
    return StandardBucketCalculator().bucket_compliance(checklist, completions_in_bucket)
