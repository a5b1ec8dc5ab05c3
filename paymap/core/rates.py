"""Rate resolution over effective-from timelines.

Per diem and meal allowance rates change over time. Each timeline entry
applies from its (year, month) until a later entry supersedes it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from paymap.core.config import (
    DEFAULT_MEAL_ALLOWANCE_TIMELINE,
    DEFAULT_PER_DIEM_TIMELINE,
    MealAllowanceTimelineEntry,
    PerDiemTimelineEntry,
)
from paymap.core.models import MealAllowanceRates

_Entry = TypeVar("_Entry", PerDiemTimelineEntry, MealAllowanceTimelineEntry)


def effective_entry(timeline: Sequence[_Entry], year: int, month: int) -> _Entry | None:
    """Latest entry that is in effect for year/month, or None before the first one."""
    applicable = [e for e in timeline if e.year < year or (e.year == year and e.month <= month)]
    if not applicable:
        return None
    return max(applicable, key=lambda e: (e.year, e.month))


class PerDiemRateResolver:
    def __init__(self, timeline: Sequence[PerDiemTimelineEntry] = DEFAULT_PER_DIEM_TIMELINE):
        self.timeline = tuple(timeline)

    def resolve(self, year: int, month: int) -> float:
        """Per diem rate per point for the month (0 before the first entry)."""
        entry = effective_entry(self.timeline, year, month)
        return entry.rate if entry else 0.0


class MealAllowanceRateResolver:
    def __init__(self, timeline: Sequence[MealAllowanceTimelineEntry] = DEFAULT_MEAL_ALLOWANCE_TIMELINE):
        self.timeline = tuple(timeline)

    def resolve(self, year: int, month: int) -> MealAllowanceRates:
        entry = effective_entry(self.timeline, year, month)
        if entry is None:
            return MealAllowanceRates()
        return MealAllowanceRates(small=entry.small, large=entry.large)
