"""Running month totals built from day pay maps."""

import logging
from collections.abc import Iterable

from paymap.core.models import DayPayMap, MonthPayMap
from paymap.core.pay.buckets import FixedSegmentReducer, RateBucketReducer
from paymap.core.pay.meal_allowance import MealAllowanceMonthReducer
from paymap.core.pay.per_diem import PerDiemMonthReducer

logger = logging.getLogger(__name__)


class MonthlyReducer:
    """
    Accumulate or subtract one day's contribution into a month total.

    Removing a day with subtract() keeps the total correct after an edit
    without recomputing the month. Every bucket is clamped at zero.
    """

    def __init__(
        self,
        regular: RateBucketReducer,
        extra: RateBucketReducer,
        special: RateBucketReducer,
        fixed: FixedSegmentReducer,
        per_diem: PerDiemMonthReducer,
        meal_allowance: MealAllowanceMonthReducer,
    ):
        self.regular = regular
        self.extra = extra
        self.special = special
        self.fixed = fixed
        self.per_diem = per_diem
        self.meal_allowance = meal_allowance

    def create_empty(self, base_rate: float = 0.0) -> MonthPayMap:
        return MonthPayMap(
            regular=self.regular.create_empty(),
            extra=self.extra.create_empty(),
            special=self.special.create_empty(),
            hours100_sick=self.fixed.create_empty(),
            hours100_vacation=self.fixed.create_empty(),
            extra100_shabbat=self.fixed.create_empty(),
            per_diem=self.per_diem.create_empty(),
            meal_allowance=self.meal_allowance.create_empty(),
            total_hours=0.0,
            base_rate=base_rate,
        )

    def accumulate(self, month: MonthPayMap, day: DayPayMap) -> MonthPayMap:
        return MonthPayMap(
            regular=self.regular.accumulate(month.regular, day.work_map.regular),
            extra=self.extra.accumulate(month.extra, day.work_map.extra),
            special=self.special.accumulate(month.special, day.work_map.special),
            hours100_sick=self.fixed.accumulate(month.hours100_sick, day.hours100_sick),
            hours100_vacation=self.fixed.accumulate(month.hours100_vacation, day.hours100_vacation),
            extra100_shabbat=self.fixed.accumulate(month.extra100_shabbat, day.extra100_shabbat),
            per_diem=self.per_diem.accumulate(month.per_diem, day.per_diem.diem_info),
            meal_allowance=self.meal_allowance.accumulate(month.meal_allowance, day.meal_allowance),
            total_hours=month.total_hours + day.total_hours,
            base_rate=month.base_rate,
        )

    def subtract(self, month: MonthPayMap, day: DayPayMap) -> MonthPayMap:
        total_hours = month.total_hours - day.total_hours
        if total_hours < 0:
            logger.debug("Clamped month total hours at zero (%.4f - %.4f)", month.total_hours, day.total_hours)
            total_hours = 0.0

        return MonthPayMap(
            regular=self.regular.subtract(month.regular, day.work_map.regular),
            extra=self.extra.subtract(month.extra, day.work_map.extra),
            special=self.special.subtract(month.special, day.work_map.special),
            hours100_sick=self.fixed.subtract(month.hours100_sick, day.hours100_sick),
            hours100_vacation=self.fixed.subtract(month.hours100_vacation, day.hours100_vacation),
            extra100_shabbat=self.fixed.subtract(month.extra100_shabbat, day.extra100_shabbat),
            per_diem=self.per_diem.subtract(month.per_diem, day.per_diem.diem_info),
            meal_allowance=self.meal_allowance.subtract(month.meal_allowance, day.meal_allowance),
            total_hours=total_hours,
            base_rate=month.base_rate,
        )

    def fold(self, days: Iterable[DayPayMap], base_rate: float = 0.0) -> MonthPayMap:
        month = self.create_empty(base_rate)
        for day in days:
            month = self.accumulate(month, day)
        return month
