"""Pay map of a work day."""

import logging
from collections.abc import Sequence

from paymap.core.constants import DEFAULT_STANDARD_HOURS
from paymap.core.exceptions import BuilderStateError
from paymap.core.models import (
    DailyPerDiemInfo,
    DayPayMap,
    MealAllowance,
    MealAllowanceDayInfo,
    Shift,
    ShiftPayMap,
    WorkDayMeta,
    WorkDayStatus,
    WorkPayMap,
)
from paymap.core.pay.buckets import FixedSegmentReducer, RateBucketReducer
from paymap.core.pay.meal_allowance import MealAllowanceClassifier
from paymap.core.pay.per_diem import PerDiemTierResolver
from paymap.core.pay.regular import RegularHoursAllocator
from paymap.core.pay.shift import ShiftPayMapBuilder
from paymap.core.rates import MealAllowanceRateResolver, PerDiemRateResolver

logger = logging.getLogger(__name__)


class DayPayMapCalculator:
    """Combine the shift pay maps of one day into a DayPayMap."""

    def __init__(
        self,
        regular: RegularHoursAllocator,
        extra: RateBucketReducer,
        special: RateBucketReducer,
        fixed: FixedSegmentReducer,
        per_diem: PerDiemTierResolver,
        per_diem_rates: PerDiemRateResolver,
        meal_allowance: MealAllowanceClassifier,
        meal_allowance_rates: MealAllowanceRateResolver,
    ):
        self.regular = regular
        self.extra = extra
        self.special = special
        self.fixed = fixed
        self.per_diem = per_diem
        self.per_diem_rates = per_diem_rates
        self.meal_allowance = meal_allowance
        self.meal_allowance_rates = meal_allowance_rates

    def build_day(
        self,
        shifts: Sequence[ShiftPayMap],
        meta: WorkDayMeta,
        status: WorkDayStatus = WorkDayStatus.NORMAL,
        standard_hours: float = DEFAULT_STANDARD_HOURS,
        year: int | None = None,
        month: int | None = None,
    ) -> DayPayMap:
        """
        Build the pay map of a day.

        A sick or vacation day pays standard hours in its fixed bucket and
        ignores the shifts. A normal day accumulates the shifts, re-tiers
        regular hours by day and derives per diem and meal allowance at the
        month's rates.

        Args:
            shifts: Pay maps of the day's shifts
            meta: Classification of the day
            status: Day status
            standard_hours: Contractual hours per day
            year: Year for rate lookup (defaults to meta.date's year)
            month: Month for rate lookup (defaults to meta.date's month)

        Returns:
            DayPayMap
        """
        if year is None or month is None:
            year, month = int(meta.date[:4]), int(meta.date[5:7])

        if status != WorkDayStatus.NORMAL:
            return self._build_absence(status, standard_hours)

        extra = self.extra.create_empty()
        special = self.special.create_empty()
        regular = self.regular.create_empty()
        total_hours = 0.0
        for shift in shifts:
            extra = self.extra.accumulate(extra, shift.extra)
            special = self.special.accumulate(special, shift.special)
            regular = self.regular.reducer.accumulate(regular, shift.regular)
            total_hours += shift.total_hours

        regular = self.regular.by_day(regular, standard_hours, meta)

        per_diem = self.per_diem.calculate_day(
            [s.per_diem_shift for s in shifts],
            self.per_diem_rates.resolve(year, month),
        )

        meal_day = MealAllowanceDayInfo(
            total_hours=total_hours,
            has_morning=any(s.has_morning for s in shifts),
            has_night=any(s.has_night for s in shifts),
            is_field_duty_day=per_diem.is_field_duty_day,
        )
        meal_allowance = self.meal_allowance.classify(meal_day, self.meal_allowance_rates.resolve(year, month))

        logger.debug(
            "Day %s (%s): %d shifts, %.2fh, per diem %d points",
            meta.date,
            meta.type_day.value,
            len(shifts),
            total_hours,
            per_diem.diem_info.points,
        )

        return DayPayMap(
            work_map=WorkPayMap(regular=regular, extra=extra, special=special, total_hours=total_hours),
            hours100_sick=self.fixed.create_empty(),
            hours100_vacation=self.fixed.create_empty(),
            extra100_shabbat=self.fixed.create(special.total_hours),
            per_diem=per_diem,
            meal_allowance=meal_allowance,
            total_hours=total_hours,
        )

    def _build_absence(self, status: WorkDayStatus, standard_hours: float) -> DayPayMap:
        sick = standard_hours if status == WorkDayStatus.SICK else 0.0
        vacation = standard_hours if status == WorkDayStatus.VACATION else 0.0
        return DayPayMap(
            work_map=WorkPayMap(
                regular=self.regular.create_empty(),
                extra=self.extra.create_empty(),
                special=self.special.create_empty(),
                total_hours=standard_hours,
            ),
            hours100_sick=self.fixed.create(sick),
            hours100_vacation=self.fixed.create(vacation),
            extra100_shabbat=self.fixed.create_empty(),
            per_diem=DailyPerDiemInfo(),
            meal_allowance=MealAllowance(),
            total_hours=standard_hours,
        )


class DayPayMapBuilder:
    """
    Immutable fluent builder over DayPayMapCalculator.

    Every with_* call returns a new builder and leaves the receiver unchanged.

    Usage:
        day = (
            DayPayMapBuilder(shift_builder, day_calculator)
            .with_meta(meta)
            .with_shift(shift)
            .build()
        )
    """

    def __init__(
        self,
        shift_builder: ShiftPayMapBuilder,
        day_calculator: DayPayMapCalculator,
        meta: WorkDayMeta | None = None,
        shifts: tuple[Shift, ...] = (),
        status: WorkDayStatus = WorkDayStatus.NORMAL,
        standard_hours: float = DEFAULT_STANDARD_HOURS,
    ):
        self._shift_builder = shift_builder
        self._day_calculator = day_calculator
        self._meta = meta
        self._shifts = tuple(shifts)
        self._status = status
        self._standard_hours = standard_hours

    def _replace(self, **changes) -> "DayPayMapBuilder":
        state = {
            "meta": self._meta,
            "shifts": self._shifts,
            "status": self._status,
            "standard_hours": self._standard_hours,
        }
        state.update(changes)
        return DayPayMapBuilder(self._shift_builder, self._day_calculator, **state)

    def with_meta(self, meta: WorkDayMeta) -> "DayPayMapBuilder":
        return self._replace(meta=meta)

    def with_shift(self, shift: Shift) -> "DayPayMapBuilder":
        return self._replace(shifts=self._shifts + (shift,))

    def with_shifts(self, shifts: Sequence[Shift]) -> "DayPayMapBuilder":
        return self._replace(shifts=self._shifts + tuple(shifts))

    def with_status(self, status: WorkDayStatus) -> "DayPayMapBuilder":
        return self._replace(status=status)

    def with_standard_hours(self, standard_hours: float) -> "DayPayMapBuilder":
        return self._replace(standard_hours=standard_hours)

    def build(self) -> DayPayMap:
        """
        Raises:
            BuilderStateError: If no meta was supplied
        """
        if self._meta is None:
            raise BuilderStateError("DayPayMapBuilder.build() called without with_meta()")

        shift_maps = [
            self._shift_builder.build_shift(shift, self._meta, self._standard_hours) for shift in self._shifts
        ]
        return self._day_calculator.build_day(
            shift_maps,
            self._meta,
            status=self._status,
            standard_hours=self._standard_hours,
        )
