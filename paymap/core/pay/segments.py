"""Shift interval to rate-labeled segments."""

import logging
from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType

from paymap.core.config import MinuteBreakpoints, RatePercentages
from paymap.core.constants import (
    KEY_HOURS20,
    KEY_HOURS50,
    KEY_HOURS100,
    KEY_SHABBAT150,
    KEY_SHABBAT200,
)
from paymap.core.models import LabeledSegmentRange, Point, WorkDayMeta, WorkDayType
from paymap.core.time_utils import DateService

logger = logging.getLogger(__name__)

RateTables = Mapping[WorkDayType, tuple[LabeledSegmentRange, ...]]


def _seg(start: int, end: int, percent: float, key: str) -> LabeledSegmentRange:
    return LabeledSegmentRange(point=Point(start=start, end=end), percent=percent, key=key)


@lru_cache(maxsize=8)
def build_rate_tables(
    special_start: int,
    minutes: MinuteBreakpoints = MinuteBreakpoints(),
    percentages: RatePercentages = RatePercentages(),
) -> RateTables:
    """
    Build the rate interval table of every day type.

    Entries may overlap (the 20% evening window overlaps the 100% window)
    and the last entry of each table runs to 06:00 of the next day. The
    cached result is read-only.

    Args:
        special_start: Minute the special rate starts on a partial day
        minutes: Breakpoints of the rate windows
        percentages: Multiplier per rate key

    Returns:
        Read-only mapping WorkDayType -> ordered tuple of labeled intervals
    """
    m = minutes
    p = percentages
    next_06 = m.min06 + m.full_day

    tables = {
        WorkDayType.Regular: (
            _seg(0, m.min06, p.hours50, KEY_HOURS50),
            _seg(m.min06, m.min17 - 1, p.hours100, KEY_HOURS100),
            _seg(m.min14, m.min22, p.hours20, KEY_HOURS20),
            _seg(m.min22, next_06, p.hours50, KEY_HOURS50),
        ),
        WorkDayType.SpecialPartialStart: (
            _seg(0, m.min06, p.hours50, KEY_HOURS50),
            _seg(m.min06, m.min17 - 1, p.hours100, KEY_HOURS100),
            _seg(m.min14, special_start, p.hours20, KEY_HOURS20),
            _seg(special_start, m.min22, p.hours150, KEY_SHABBAT150),
            _seg(m.min22, next_06, p.hours200, KEY_SHABBAT200),
        ),
        WorkDayType.SpecialFull: (
            _seg(0, m.min06, p.hours200, KEY_SHABBAT200),
            _seg(m.min06, m.min22, p.hours150, KEY_SHABBAT150),
            _seg(m.min22, next_06, p.hours200, KEY_SHABBAT200),
        ),
    }
    return MappingProxyType(tables)


def next_day_type(meta: WorkDayMeta) -> WorkDayType:
    """Day type whose table covers the part of a shift past 06:00 next day."""
    if meta.type_day == WorkDayType.Regular:
        return WorkDayType.Regular
    if meta.type_day == WorkDayType.SpecialPartialStart:
        return WorkDayType.SpecialFull
    if meta.type_day == WorkDayType.SpecialFull:
        return WorkDayType.SpecialFull if meta.cross_day_continuation else WorkDayType.Regular
    raise ValueError(f"Unknown day type: {meta.type_day!r}")


def find_segments(target: Point, table: tuple[LabeledSegmentRange, ...]) -> list[LabeledSegmentRange]:
    """
    Intersect target with a rate table.

    The scan starts at the last entry starting at or before target.start
    and stops at the first entry ending at or after target.end; every
    entry in between is clipped to target.
    """
    if target.is_empty:
        return []

    i = sum(1 for s in table if s.point.start <= target.start) - 1
    j = next((k for k, s in enumerate(table) if s.point.end >= target.end), -1)

    if i == -1 or j == -1 or i > j:
        return []

    result = []
    for entry in table[i : j + 1]:
        seg_start = max(entry.point.start, target.start)
        seg_end = min(entry.point.end, target.end)
        if seg_start < seg_end:
            result.append(_seg(seg_start, seg_end, entry.percent, entry.key))
    return result


class SegmentResolver:
    """Resolve a shift's minute interval into labeled rate segments."""

    def __init__(
        self,
        date_service: DateService,
        minutes: MinuteBreakpoints | None = None,
        percentages: RatePercentages | None = None,
    ):
        self.date_service = date_service
        self.minutes = minutes or date_service.minutes
        self.percentages = percentages or RatePercentages()

    def tables_for(self, meta: WorkDayMeta) -> RateTables:
        special_start = self.date_service.special_start_minutes(meta.date)
        return build_rate_tables(special_start, self.minutes, self.percentages)

    def split_by_day(self, target: Point) -> tuple[Point, Point | None]:
        """
        Split at 06:00 of the next day.

        The second part is expressed in next-day coordinates.
        """
        day_limit = self.minutes.min06 + self.minutes.full_day
        first = Point(start=target.start, end=min(target.end, day_limit))
        if target.end <= day_limit:
            return first, None
        second = Point(start=self.minutes.min06, end=target.end % self.minutes.full_day)
        return first, second

    def resolve(self, target: Point, meta: WorkDayMeta) -> list[LabeledSegmentRange]:
        """
        Args:
            target: Shift interval in minutes from the work day's midnight
            meta: Classification of the work day

        Returns:
            Labeled segments sorted by start minute (empty for an empty target)
        """
        if target.is_empty:
            return []

        tables = self.tables_for(meta)
        first, second = self.split_by_day(target)

        segments = find_segments(first, tables[meta.type_day])
        if second is not None:
            next_table = tables[next_day_type(meta)]
            segments += [s.offset(self.minutes.full_day) for s in find_segments(second, next_table)]
            segments.sort(key=lambda s: s.point.start)

        logger.debug(
            "Resolved %d-%d on %s (%s) into %d segments",
            target.start,
            target.end,
            meta.date,
            meta.type_day.value,
            len(segments),
        )
        return segments
