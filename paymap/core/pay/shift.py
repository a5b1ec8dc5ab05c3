"""Pay map of a single shift."""

import logging

from paymap.core.config import MinuteBreakpoints
from paymap.core.constants import NIGHT_KEYS
from paymap.core.models import LabeledSegmentRange, Shift, ShiftPayMap, WorkDayMeta
from paymap.core.pay.buckets import RateBucketReducer
from paymap.core.pay.per_diem import PerDiemTierResolver
from paymap.core.pay.regular import RegularHoursAllocator
from paymap.core.pay.segments import SegmentResolver

logger = logging.getLogger(__name__)


def has_night_segment(segments: list[LabeledSegmentRange]) -> bool:
    return any(s.key in NIGHT_KEYS for s in segments)


def overlaps_morning(shift: Shift, minutes: MinuteBreakpoints) -> bool:
    """True if the shift overlaps 06:00-14:00 on its own day or the next."""
    for day_offset in (0, minutes.full_day):
        morning_start = minutes.min06 + day_offset
        morning_end = minutes.min14 + day_offset
        if shift.start < morning_end and shift.end > morning_start:
            return True
    return False


class ShiftPayMapBuilder:
    def __init__(
        self,
        segment_resolver: SegmentResolver,
        regular: RegularHoursAllocator,
        extra: RateBucketReducer,
        special: RateBucketReducer,
        per_diem: PerDiemTierResolver,
    ):
        self.segment_resolver = segment_resolver
        self.regular = regular
        self.extra = extra
        self.special = special
        self.per_diem = per_diem

    def build_shift(self, shift: Shift, meta: WorkDayMeta, standard_hours: float) -> ShiftPayMap:
        """
        Resolve a shift into its pay breakdown.

        Regular hours are the shift's hours not already classified as
        evening, night or special; they are tiered by shift.

        Args:
            shift: The shift
            meta: Classification of the shift's work day
            standard_hours: Contractual hours per day

        Returns:
            ShiftPayMap
        """
        segments = self.segment_resolver.resolve(shift.point, meta)

        total_hours = shift.hours
        extra = self.extra.sum_keys(segments)
        special = self.special.sum_keys(segments)
        regular_hours = total_hours - special.total_hours - extra.total_hours
        regular = self.regular.by_shift(regular_hours, standard_hours, meta)

        logger.debug(
            "Shift %s on %s: total=%.2f regular=%.2f extra=%.2f special=%.2f",
            shift.id,
            meta.date,
            total_hours,
            regular.total_hours,
            extra.total_hours,
            special.total_hours,
        )

        return ShiftPayMap(
            regular=regular,
            extra=extra,
            special=special,
            total_hours=total_hours,
            per_diem_shift=self.per_diem.calculate_shift(shift),
            has_morning=overlaps_morning(shift, self.segment_resolver.minutes),
            has_night=has_night_segment(segments),
        )
