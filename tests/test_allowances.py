# tests/test_allowances.py
"""Unit tests for per diem tiers and meal allowance classification."""

import itertools

import pytest

from paymap.core.models import MealAllowanceDayInfo, MealAllowanceRates, PerDiemInfo, PerDiemShiftInfo
from paymap.core.pay.meal_allowance import MealAllowanceClassifier, MealAllowanceMonthReducer
from paymap.core.pay.per_diem import PerDiemMonthReducer, PerDiemTierResolver

RATE = 36.3
RATES = MealAllowanceRates(small=14.5, large=21.1)


class TestPerDiemTiers:
    def setup_method(self):
        self.resolver = PerDiemTierResolver()

    @pytest.mark.parametrize(
        "hours,tier,points",
        [
            (12.0, "C", 3),
            (13.5, "C", 3),
            (11.99, "B", 2),
            (8.0, "B", 2),
            (7.9, "A", 1),
            (4.0, "A", 1),
            (3.9, None, 0),
            (0.0, None, 0),
        ],
    )
    def test_tiers(self, hours, tier, points):
        info = self.resolver.calculate(True, hours, RATE)
        assert (info.tier, info.points) == (tier, points), f"{hours}h: expected {tier}/{points}, got {info}"
        assert info.amount == pytest.approx(points * RATE)

    def test_not_field_duty(self):
        assert self.resolver.calculate(False, 12, RATE) == PerDiemInfo()

    def test_day_tier_from_cumulative_hours(self):
        shifts = [
            PerDiemShiftInfo(is_field_duty_shift=True, hours=5),
            PerDiemShiftInfo(is_field_duty_shift=True, hours=4),
        ]
        day = self.resolver.calculate_day(shifts, RATE)

        assert day.is_field_duty_day is True
        assert day.diem_info.tier == "B", "5h + 4h is tier B, not two tier A shifts"
        assert day.diem_info.points == 2

    def test_day_ignores_hours_of_non_field_shifts(self):
        shifts = [
            PerDiemShiftInfo(is_field_duty_shift=True, hours=5),
            PerDiemShiftInfo(is_field_duty_shift=False, hours=6),
        ]
        assert self.resolver.calculate_day(shifts, RATE).diem_info.tier == "A"

    def test_day_without_field_duty(self):
        day = self.resolver.calculate_day([PerDiemShiftInfo(hours=12)], RATE)
        assert day.is_field_duty_day is False
        assert day.diem_info.points == 0

    def test_shift_info(self, make_shift):
        info = self.resolver.calculate_shift(make_shift("22:00", "06:00", is_field_duty=True))
        assert info.is_field_duty_shift is True
        assert info.hours == 8.0


class TestPerDiemMonthReducer:
    def test_accumulate_drops_tier(self):
        reducer = PerDiemMonthReducer()
        total = reducer.accumulate(reducer.create_empty(), PerDiemInfo(tier="C", points=3, amount=108.9))

        assert total.tier is None
        assert total.points == 3
        assert total.amount == pytest.approx(108.9)

    def test_subtract_clamps(self):
        reducer = PerDiemMonthReducer()
        result = reducer.subtract(PerDiemInfo(points=1, amount=36.3), PerDiemInfo(points=3, amount=108.9))
        assert (result.points, result.amount) == (0, 0.0)


def _day(total_hours, has_morning, has_night, field_duty):
    return MealAllowanceDayInfo(
        total_hours=total_hours,
        has_morning=has_morning,
        has_night=has_night,
        is_field_duty_day=field_duty,
    )


class TestMealAllowance:
    def setup_method(self):
        self.classifier = MealAllowanceClassifier()

    def test_short_day_without_night_gets_nothing(self):
        result = self.classifier.classify(_day(8, True, False, False), RATES)
        assert (result.small.points, result.large.points) == (0, 0)

    def test_short_night_gets_small(self):
        result = self.classifier.classify(_day(8, False, True, False), RATES)
        assert result.small.points == 1
        assert result.small.amount == pytest.approx(14.5)
        assert result.large.points == 0

    def test_long_morning_and_night(self):
        result = self.classifier.classify(_day(12, True, True, False), RATES)
        assert result.large.points == 1
        assert result.large.amount == pytest.approx(21.1)
        assert result.small.points == 0

    def test_long_morning_and_night_on_field_duty_falls_back_to_small(self):
        result = self.classifier.classify(_day(12, True, True, True), RATES)
        assert result.large.points == 0
        assert result.small.points == 1

    def test_long_night_only_always_large(self):
        assert self.classifier.classify(_day(10, False, True, True), RATES).large.points == 1

    def test_long_day_shift(self):
        assert self.classifier.classify(_day(10, True, False, False), RATES).large.points == 1
        field = self.classifier.classify(_day(10, True, False, True), RATES)
        assert (field.large.points, field.small.points) == (0, 0)

    def test_never_both(self):
        for hours, morning, night, field in itertools.product([0, 9.99, 10, 14], *[[True, False]] * 3):
            result = self.classifier.classify(_day(hours, morning, night, field), RATES)
            assert not (result.small.points and result.large.points), (
                f"Both allowances granted for hours={hours} morning={morning} night={night} field={field}"
            )


class TestMealAllowanceMonthReducer:
    def test_accumulate_and_subtract(self):
        reducer = MealAllowanceMonthReducer()
        classifier = MealAllowanceClassifier()
        night = classifier.classify(_day(8, False, True, False), RATES)
        long_day = classifier.classify(_day(12, True, True, False), RATES)

        total = reducer.accumulate(reducer.accumulate(reducer.create_empty(), night), long_day)
        assert (total.small.points, total.large.points) == (1, 1)

        total = reducer.subtract(total, long_day)
        total = reducer.subtract(total, long_day)
        assert total.large.points == 0
        assert total.large.amount == 0.0
        assert total.small.points == 1
