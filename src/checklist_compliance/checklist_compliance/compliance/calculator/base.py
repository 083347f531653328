from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ...checklists.model import ChecklistDefinition
from ...completions.model import CompletionEvent


class BucketCalculator(ABC):
    """Calculator interface (Strategy Pattern for bucket compliance)."""

    @abstractmethod
    def completed_count(self, checklist: ChecklistDefinition, completions: Iterable[CompletionEvent]) -> int:
        raise NotImplementedError

    @abstractmethod
    def bucket_compliance(self, checklist: ChecklistDefinition, completions: Iterable[CompletionEvent]) -> int:
        raise NotImplementedError
