"""Overtime tiering of regular hours (100/125/150%)."""

import logging

from paymap.core.config import RegularConfig
from paymap.core.models import RegularBreakdown, WorkDayMeta, WorkDayType
from paymap.core.pay.buckets import RateBucketReducer, regular_reducer

logger = logging.getLogger(__name__)


def collapses_to_special(meta: WorkDayMeta | None) -> bool:
    """A full special day that does not continue into another one pays regular hours at 150%."""
    return meta is not None and meta.type_day == WorkDayType.SpecialFull and not meta.cross_day_continuation


class RegularHoursAllocator:
    """
    Distribute regular hours into overtime tiers.

    Two orders exist. By shift, the tiers are filled from the top: the 150%
    tier takes what exceeds standard + threshold first. By day, an already
    accumulated breakdown is re-capped from the bottom: 100% is capped at
    standard and 125% at the threshold, each pushing its excess up a tier.
    """

    def __init__(self, config: RegularConfig | None = None, reducer: RateBucketReducer | None = None):
        self.config = config or RegularConfig()
        self.reducer = reducer or regular_reducer(self.config)

    def create_empty(self) -> RegularBreakdown:
        return self.reducer.create_empty()

    def collapse(self, total: float) -> RegularBreakdown:
        return self.reducer.from_hours(hours150=max(total, 0.0))

    def by_shift(self, total: float, standard: float, meta: WorkDayMeta | None = None) -> RegularBreakdown:
        """
        Args:
            total: Regular hours of the shift
            standard: Contractual hours per day
            meta: Day classification (None skips the special-day rule)

        Returns:
            RegularBreakdown
        """
        total = max(total, 0.0)
        standard = max(standard, 0.0)
        if collapses_to_special(meta):
            return self.collapse(total)

        remaining = total
        overflow150 = max(remaining - (standard + self.config.mid_tier_threshold), 0.0)
        remaining -= overflow150
        overflow125 = max(remaining - standard, 0.0)
        remaining -= overflow125

        return self.reducer.from_hours(
            hours100=max(remaining, 0.0),
            hours125=overflow125,
            hours150=overflow150,
        )

    def by_day(
        self, breakdown: RegularBreakdown, standard: float, meta: WorkDayMeta | None = None
    ) -> RegularBreakdown:
        """Re-tier an accumulated day breakdown; returns a new record."""
        standard = max(standard, 0.0)
        if collapses_to_special(meta):
            return self.collapse(breakdown.total_hours)

        hours100 = min(breakdown.hours100.hours, standard)
        hours125 = breakdown.hours125.hours + (breakdown.hours100.hours - hours100)
        capped125 = min(hours125, self.config.mid_tier_threshold)
        hours150 = breakdown.hours150.hours + (hours125 - capped125)

        return self.reducer.from_hours(hours100=hours100, hours125=capped125, hours150=hours150)

    def allocate_day_total(self, total: float, standard: float, meta: WorkDayMeta | None = None) -> RegularBreakdown:
        """Cap-then-overflow of a single day total."""
        return self.by_day(self.reducer.from_hours(hours100=max(total, 0.0)), standard, meta)
