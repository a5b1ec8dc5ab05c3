# paymap/core/models.py
"""
Immutable value records passed between the pay components.

Every record is a frozen pydantic model; reducers and builders return new
instances instead of mutating their inputs.
"""

import datetime
import enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from paymap.core.constants import MINUTES_PER_DAY, MINUTES_PER_HOUR


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class WorkDayType(str, enum.Enum):
    """How a calendar day is paid."""

    Regular = "Regular"
    SpecialPartialStart = "SpecialPartialStart"
    SpecialFull = "SpecialFull"


class WorkDayStatus(str, enum.Enum):
    NORMAL = "normal"
    SICK = "sick"
    VACATION = "vacation"


PerDiemTier = Literal["A", "B", "C"]


# ==========================
# Intervals
# ==========================


class Point(FrozenModel):
    """Minute interval from a reference midnight. end may exceed 1440."""

    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.start >= self.end

    def offset(self, minutes: int) -> "Point":
        return Point(start=self.start + minutes, end=self.end + minutes)


class LabeledSegmentRange(FrozenModel):
    """A sub-interval of a shift tagged with its rate key and multiplier."""

    point: Point
    percent: float
    key: str

    @property
    def hours(self) -> float:
        return (self.point.end - self.point.start) / MINUTES_PER_HOUR

    def offset(self, minutes: int) -> "LabeledSegmentRange":
        return self.model_copy(update={"point": self.point.offset(minutes)})


# ==========================
# Rate buckets
# ==========================


class RateBucket(FrozenModel):
    """Hours paid at a fixed multiplier."""

    percent: float
    hours: float = 0.0


class _Breakdown(FrozenModel):
    @property
    def total_hours(self) -> float:
        return sum(getattr(self, name).hours for name in type(self).model_fields)


class RegularBreakdown(_Breakdown):
    hours100: RateBucket
    hours125: RateBucket
    hours150: RateBucket


class ExtraBreakdown(_Breakdown):
    hours20: RateBucket
    hours50: RateBucket


class SpecialBreakdown(_Breakdown):
    shabbat150: RateBucket
    shabbat200: RateBucket


# ==========================
# Calendar
# ==========================


class WorkDayMeta(FrozenModel):
    date: str  # YYYY-MM-DD
    type_day: WorkDayType
    cross_day_continuation: bool = False


class WorkDayInfo(FrozenModel):
    meta: WorkDayMeta
    hebrew_day: str


class Shift(FrozenModel):
    """
    One worked shift, in minutes from the work day's midnight.

    end may exceed 1440 when the shift runs past midnight.
    """

    id: str
    start: int
    end: int
    is_field_duty: bool = False

    @property
    def point(self) -> Point:
        return Point(start=self.start, end=self.end)

    @property
    def hours(self) -> float:
        return max(self.end - self.start, 0) / MINUTES_PER_HOUR

    @classmethod
    def from_datetimes(
        cls,
        shift_id: str,
        start: datetime.datetime,
        end: datetime.datetime,
        work_day: datetime.date | None = None,
        is_field_duty: bool = False,
    ) -> "Shift":
        """
        Build a shift from wall-clock datetimes.

        Args:
            shift_id: Identifier of the shift
            start: Start of the shift
            end: End of the shift (an end at or before start is taken as next day)
            work_day: Day the minutes are counted from (defaults to start's date)
            is_field_duty: Whether the shift is field duty

        Returns:
            Shift with start/end relative to work_day's midnight
        """
        day = work_day or start.date()
        midnight = datetime.datetime.combine(day, datetime.time(0, 0), tzinfo=start.tzinfo)

        start_minutes = int((start - midnight).total_seconds() // 60)
        end_minutes = int((end - midnight).total_seconds() // 60)
        if end_minutes <= start_minutes:
            end_minutes += MINUTES_PER_DAY

        return cls(id=shift_id, start=start_minutes, end=end_minutes, is_field_duty=is_field_duty)


# ==========================
# Per diem and meal allowance
# ==========================


class PerDiemInfo(FrozenModel):
    tier: PerDiemTier | None = None
    points: int = 0
    amount: float = 0.0


class PerDiemShiftInfo(FrozenModel):
    is_field_duty_shift: bool = False
    hours: float = 0.0


class DailyPerDiemInfo(FrozenModel):
    is_field_duty_day: bool = False
    diem_info: PerDiemInfo = PerDiemInfo()


class MealAllowanceEntry(FrozenModel):
    points: int = 0
    amount: float = 0.0


class MealAllowance(FrozenModel):
    """Small and large allowances; at most one of them is non-zero per day."""

    small: MealAllowanceEntry = MealAllowanceEntry()
    large: MealAllowanceEntry = MealAllowanceEntry()


class MealAllowanceDayInfo(FrozenModel):
    total_hours: float
    has_morning: bool
    has_night: bool
    is_field_duty_day: bool


class MealAllowanceRates(FrozenModel):
    small: float = 0.0
    large: float = 0.0


# ==========================
# Pay maps
# ==========================


class ShiftPayMap(FrozenModel):
    regular: RegularBreakdown
    extra: ExtraBreakdown
    special: SpecialBreakdown
    total_hours: float
    per_diem_shift: PerDiemShiftInfo
    has_morning: bool = False
    has_night: bool = False


class WorkPayMap(FrozenModel):
    regular: RegularBreakdown
    extra: ExtraBreakdown
    special: SpecialBreakdown
    total_hours: float = 0.0


class DayPayMap(FrozenModel):
    work_map: WorkPayMap
    hours100_sick: RateBucket
    hours100_vacation: RateBucket
    extra100_shabbat: RateBucket
    per_diem: DailyPerDiemInfo
    meal_allowance: MealAllowance
    total_hours: float = 0.0


class MonthPayMap(FrozenModel):
    regular: RegularBreakdown
    extra: ExtraBreakdown
    special: SpecialBreakdown
    hours100_sick: RateBucket
    hours100_vacation: RateBucket
    extra100_shabbat: RateBucket
    per_diem: PerDiemInfo
    meal_allowance: MealAllowance
    total_hours: float = 0.0
    base_rate: float = 0.0
