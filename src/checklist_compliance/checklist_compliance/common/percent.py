from __future__ import annotations

import math
from typing import Iterable


def round_half_up(value: float) -> int:
    """0.5 always rounds up (built-in round() would give banker's rounding)."""
    return int(math.floor(value + 0.5))


def percentage(part: int, total: int) -> int:
    """Rounded 100 * part / total, 0 when total is 0."""
    if total <= 0:
        return 0
    return round_half_up(100 * part / total)


def rounded_mean(values: Iterable[float]) -> int:
    items = list(values)
    if not items:
        return 0
    return round_half_up(sum(items) / len(items))
