"""Per diem tiers for field-duty days."""

import logging
from collections.abc import Sequence

from paymap.core.constants import PER_DIEM_TIERS
from paymap.core.models import DailyPerDiemInfo, PerDiemInfo, PerDiemShiftInfo, Shift

logger = logging.getLogger(__name__)


class PerDiemTierResolver:
    """
    Classify on-duty hours into a per diem tier.

    The tier of a day is taken from its cumulative field-duty hours, never
    from a sum of per-shift tiers.
    """

    def __init__(self, tiers: Sequence[tuple[float, str, int]] = PER_DIEM_TIERS):
        # Highest threshold first
        self.tiers = tuple(sorted(tiers, key=lambda t: t[0], reverse=True))

    def tier_for(self, total_hours: float) -> tuple[str | None, int]:
        for min_hours, tier, points in self.tiers:
            if total_hours >= min_hours:
                return tier, points
        return None, 0

    def calculate(self, is_field_duty_day: bool, total_hours: float, rate: float) -> PerDiemInfo:
        if not is_field_duty_day:
            return PerDiemInfo()
        tier, points = self.tier_for(total_hours)
        return PerDiemInfo(tier=tier, points=points, amount=points * rate)

    def calculate_shift(self, shift: Shift) -> PerDiemShiftInfo:
        return PerDiemShiftInfo(is_field_duty_shift=shift.is_field_duty, hours=shift.hours)

    def calculate_day(self, shifts: Sequence[PerDiemShiftInfo], rate: float) -> DailyPerDiemInfo:
        """
        Args:
            shifts: Per diem info of every shift of the day
            rate: Per diem rate per point for the month

        Returns:
            DailyPerDiemInfo (field duty if any shift is)
        """
        is_field_duty_day = any(s.is_field_duty_shift for s in shifts)
        total_hours = sum(s.hours for s in shifts if s.is_field_duty_shift)

        diem_info = self.calculate(is_field_duty_day, total_hours, rate)
        if is_field_duty_day:
            logger.debug("Field duty day: %.2fh -> tier %s (%d points)", total_hours, diem_info.tier, diem_info.points)
        return DailyPerDiemInfo(is_field_duty_day=is_field_duty_day, diem_info=diem_info)


class PerDiemMonthReducer:
    """Month totals of per diem; the tier is not meaningful across days and is dropped."""

    def create_empty(self) -> PerDiemInfo:
        return PerDiemInfo()

    def accumulate(self, base: PerDiemInfo, add: PerDiemInfo) -> PerDiemInfo:
        return PerDiemInfo(points=base.points + add.points, amount=base.amount + add.amount)

    def subtract(self, base: PerDiemInfo, sub: PerDiemInfo) -> PerDiemInfo:
        return PerDiemInfo(
            points=max(base.points - sub.points, 0),
            amount=max(base.amount - sub.amount, 0.0),
        )
