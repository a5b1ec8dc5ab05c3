"""Meal allowance: large or small, never both on the same day."""

from paymap.core.constants import LARGE_MEAL_MIN_HOURS
from paymap.core.models import MealAllowance, MealAllowanceDayInfo, MealAllowanceEntry, MealAllowanceRates


class MealAllowanceClassifier:
    def __init__(self, large_min_hours: float = LARGE_MEAL_MIN_HOURS):
        self.large_min_hours = large_min_hours

    def large_points(self, day: MealAllowanceDayInfo) -> int:
        """
        Large allowance for long days.

        A day with both morning and night hours only qualifies outside
        field duty; a night-only day always qualifies; a morning-only day
        qualifies outside field duty.
        """
        if day.total_hours < self.large_min_hours:
            return 0

        if day.has_morning and day.has_night:
            return 0 if day.is_field_duty_day else 1

        is_day_shift = day.has_morning and not day.has_night
        if not is_day_shift:
            return 1

        return 0 if day.is_field_duty_day else 1

    def small_points(self, day: MealAllowanceDayInfo) -> int:
        return 1 if day.has_night else 0

    def classify(self, day: MealAllowanceDayInfo, rates: MealAllowanceRates) -> MealAllowance:
        large = self.large_points(day)
        if large > 0:
            return MealAllowance(large=MealAllowanceEntry(points=large, amount=large * rates.large))

        small = self.small_points(day)
        return MealAllowance(small=MealAllowanceEntry(points=small, amount=small * rates.small))


class MealAllowanceMonthReducer:
    def create_empty(self) -> MealAllowance:
        return MealAllowance()

    def accumulate(self, base: MealAllowance, add: MealAllowance) -> MealAllowance:
        return MealAllowance(
            small=_add_entries(base.small, add.small),
            large=_add_entries(base.large, add.large),
        )

    def subtract(self, base: MealAllowance, sub: MealAllowance) -> MealAllowance:
        return MealAllowance(
            small=_subtract_entries(base.small, sub.small),
            large=_subtract_entries(base.large, sub.large),
        )


def _add_entries(base: MealAllowanceEntry, add: MealAllowanceEntry) -> MealAllowanceEntry:
    return MealAllowanceEntry(points=base.points + add.points, amount=base.amount + add.amount)


def _subtract_entries(base: MealAllowanceEntry, sub: MealAllowanceEntry) -> MealAllowanceEntry:
    return MealAllowanceEntry(
        points=max(base.points - sub.points, 0),
        amount=max(base.amount - sub.amount, 0.0),
    )
