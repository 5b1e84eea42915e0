# rental_analyzer/core/finance/rates.py
"""
Rate schedule: a step function of the loan's nominal annual rate over time.

A segment applies from its start year until the next segment's start year.
The active segment for a year is the one with the largest start year not
after that year; years before every segment fall back to the earliest one.

Schedules are small and user-entered, so they are kept as sorted tuples and
searched with `bisect`.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable, Sequence
from typing import Any

from rental_analyzer.schemas.models import RateSegment

from .errors import RateScheduleError

DEFAULT_NEW_SEGMENT_RATE = 6.5
NEW_SEGMENT_GAP_YEARS = 5


def normalize_schedule(segments: Iterable[RateSegment]) -> tuple[RateSegment, ...]:
    """
    Return segments sorted ascending by start year with duplicate start years removed.

    Duplicates keep the later-listed segment. The sort is stable, so among equal
    start years the last one in input order wins.
    """
    ordered = sorted(segments, key=lambda s: s.start_year)
    if not ordered:
        raise RateScheduleError("rate schedule must be non-empty")

    by_start: dict[int, RateSegment] = {}
    for seg in ordered:
        by_start[seg.start_year] = seg
    return tuple(by_start[y] for y in sorted(by_start))


def active_segment(schedule: Sequence[RateSegment], year: int) -> RateSegment:
    """Pick the active segment from an already-normalized schedule."""
    if not schedule:
        raise RateScheduleError("rate schedule must be non-empty")
    starts = [s.start_year for s in schedule]
    idx = bisect_right(starts, year) - 1
    return schedule[max(idx, 0)]


def resolve_rate(segments: Iterable[RateSegment], year: int) -> float:
    """Annual interest rate (percent) in effect for a 1-based projection year."""
    return active_segment(normalize_schedule(segments), year).interest_rate


# -------------------------
# Schedule editing (non-destructive)
# -------------------------


def _sorted(segments: Iterable[RateSegment]) -> tuple[RateSegment, ...]:
    """Stable sort by start year. Duplicates are kept; they collapse only when a schedule is normalized."""
    return tuple(sorted(segments, key=lambda s: s.start_year))


def _pin_first(schedule: tuple[RateSegment, ...]) -> tuple[RateSegment, ...]:
    """The earliest segment always starts at year 1."""
    if not schedule:
        return schedule
    first = schedule[0]
    if first.start_year == 1:
        return schedule
    return (first.model_copy(update={"start_year": 1}),) + schedule[1:]


def add_segment(
    segments: Iterable[RateSegment],
    *,
    interest_rate: float = DEFAULT_NEW_SEGMENT_RATE,
    start_year: int | None = None,
) -> tuple[RateSegment, ...]:
    """
    Append a new period. Without an explicit start year the new segment is
    proposed NEW_SEGMENT_GAP_YEARS after the last existing start.
    """
    current = list(segments)
    if start_year is None:
        last_start = current[-1].start_year if current else 1
        start_year = last_start + NEW_SEGMENT_GAP_YEARS
    current.append(RateSegment(start_year=start_year, interest_rate=interest_rate))
    return _pin_first(_sorted(current))


def update_segment(segments: Iterable[RateSegment], segment_id: str, **changes: Any) -> tuple[RateSegment, ...]:
    """Apply field changes (start_year / interest_rate) to one segment and re-sort."""
    # model_copy would skip validation
    updated = [RateSegment.model_validate({**s.model_dump(), **changes}) if s.id == segment_id else s for s in segments]
    return _pin_first(_sorted(updated))


def remove_segment(segments: Iterable[RateSegment], segment_id: str) -> tuple[RateSegment, ...]:
    """Remove one segment. The base (earliest) segment is never removed."""
    schedule = _sorted(segments)
    if len(schedule) <= 1 or schedule[0].id == segment_id:
        return schedule
    return _pin_first(tuple(s for s in schedule if s.id != segment_id))


__all__ = [
    "normalize_schedule",
    "active_segment",
    "resolve_rate",
    "add_segment",
    "update_segment",
    "remove_segment",
]
