from __future__ import annotations

from datetime import date, datetime, time, timedelta


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Half-open local-day bucket: [midnight, next midnight)."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def trailing_days(today: date, count: int) -> list[date]:
    """`count` calendar days ending with `today` (inclusive), oldest first."""
    return [today - timedelta(days=offset) for offset in range(count - 1, -1, -1)]
