"""
Composition root: wires every pay component from one PayMapConfig.

No component reads module-level state; build_pipeline() is the only place
that decides which breakpoints, percentages and rate timelines are used.
"""

import logging

from paymap.core.config import PayMapConfig
from paymap.core.constants import DEFAULT_STANDARD_HOURS
from paymap.core.holidays import HolidayResolver, WorkDaysForMonthBuilder
from paymap.core.logging_config import LogContext
from paymap.core.models import DayPayMap, MonthPayMap, WorkDayMeta, WorkDayStatus
from paymap.core.pay.buckets import FixedSegmentReducer, extra_reducer, special_reducer
from paymap.core.pay.day import DayPayMapBuilder, DayPayMapCalculator
from paymap.core.pay.meal_allowance import MealAllowanceClassifier, MealAllowanceMonthReducer
from paymap.core.pay.month import MonthlyReducer
from paymap.core.pay.per_diem import PerDiemMonthReducer, PerDiemTierResolver
from paymap.core.pay.regular import RegularHoursAllocator
from paymap.core.pay.segments import SegmentResolver
from paymap.core.pay.shift import ShiftPayMapBuilder
from paymap.core.rates import MealAllowanceRateResolver, PerDiemRateResolver
from paymap.core.sentry_config import add_breadcrumb, capture_exception
from paymap.core.time_utils import DateService
from paymap.core.types import EventMap, ShiftsByDate, StatusByDate

logger = logging.getLogger(__name__)


class Pipeline:
    """All pay components, wired together."""

    def __init__(self, config: PayMapConfig):
        self.config = config

        self.date_service = DateService(config.minutes, config.timezone, config.dst_utc_offset_hours)
        self.holiday_resolver = HolidayResolver()
        self.work_days = WorkDaysForMonthBuilder(self.holiday_resolver, self.date_service)
        self.per_diem_rates = PerDiemRateResolver(config.per_diem_timeline)
        self.meal_allowance_rates = MealAllowanceRateResolver(config.meal_allowance_timeline)

        self.segment_resolver = SegmentResolver(self.date_service, config.minutes, config.percentages)
        self.regular = RegularHoursAllocator(config.regular)
        self.extra = extra_reducer(config.percentages)
        self.special = special_reducer(config.percentages)
        self.fixed = FixedSegmentReducer(config.regular.hours100)
        self.per_diem = PerDiemTierResolver()
        self.meal_allowance = MealAllowanceClassifier()

        self.shift_builder = ShiftPayMapBuilder(
            self.segment_resolver, self.regular, self.extra, self.special, self.per_diem
        )
        self.day_calculator = DayPayMapCalculator(
            self.regular,
            self.extra,
            self.special,
            self.fixed,
            self.per_diem,
            self.per_diem_rates,
            self.meal_allowance,
            self.meal_allowance_rates,
        )
        self.month_reducer = MonthlyReducer(
            self.regular.reducer,
            self.extra,
            self.special,
            self.fixed,
            PerDiemMonthReducer(),
            MealAllowanceMonthReducer(),
        )

    def day_builder(self) -> DayPayMapBuilder:
        return DayPayMapBuilder(self.shift_builder, self.day_calculator)

    def compute_day(
        self,
        meta: WorkDayMeta,
        shifts=(),
        status: WorkDayStatus = WorkDayStatus.NORMAL,
        standard_hours: float = DEFAULT_STANDARD_HOURS,
    ) -> DayPayMap:
        return (
            self.day_builder()
            .with_meta(meta)
            .with_shifts(shifts)
            .with_status(status)
            .with_standard_hours(standard_hours)
            .build()
        )

    def compute_month(
        self,
        year: int,
        month: int,
        shifts_by_date: ShiftsByDate | None = None,
        event_map: EventMap | None = None,
        statuses: StatusByDate | None = None,
        standard_hours: float = DEFAULT_STANDARD_HOURS,
        base_rate: float = 0.0,
    ) -> MonthPayMap:
        """
        Compute the pay map of a whole month.

        Args:
            year: Year
            month: Month (1-12)
            shifts_by_date: Shifts per work day (YYYY-MM-DD); missing dates have none
            event_map: Holiday event titles per date
            statuses: Day status per date; missing dates are normal
            standard_hours: Contractual hours per day
            base_rate: Hourly base rate carried on the result

        Returns:
            MonthPayMap

        Raises:
            ValueError: If year/month is not a valid month
        """
        shifts_by_date = shifts_by_date or {}
        statuses = statuses or {}

        with LogContext(year=year, month=month):
            add_breadcrumb(f"compute_month {year:04d}-{month:02d}", data={"days_with_shifts": len(shifts_by_date)})
            try:
                rows = self.work_days.build(year, month, event_map)
                days = [
                    self.compute_day(
                        row.meta,
                        shifts_by_date.get(row.meta.date, ()),
                        statuses.get(row.meta.date, WorkDayStatus.NORMAL),
                        standard_hours,
                    )
                    for row in rows
                ]
                result = self.month_reducer.fold(days, base_rate)
            except Exception as e:
                capture_exception(e, {"pay_month": {"year": year, "month": month}})
                raise

            logger.info(
                "Computed %04d-%02d: %.2fh over %d days, per diem %d points",
                year,
                month,
                result.total_hours,
                sum(1 for d in days if d.total_hours > 0),
                result.per_diem.points,
            )
            return result


def build_pipeline(config: PayMapConfig | None = None) -> Pipeline:
    """Wire a Pipeline; defaults to the built-in configuration."""
    return Pipeline(config or PayMapConfig())
