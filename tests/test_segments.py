# tests/test_segments.py
"""
Unit tests for shift interval -> labeled rate segments.

Covers the three day-type tables, the split at 06:00 of the next day and
the choice of the next day's table.
"""

import datetime

import pytest

from paymap.core.models import Point, WorkDayType
from paymap.core.pay.segments import build_rate_tables, find_segments, next_day_type


def _hours_by_key(segments):
    totals = {}
    for seg in segments:
        totals[seg.key] = totals.get(seg.key, 0.0) + seg.hours
    return totals


class TestRateTables:
    def test_regular_table_breakpoints(self):
        tables = build_rate_tables(18 * 60)
        regular = [(s.point.start, s.point.end, s.key) for s in tables[WorkDayType.Regular]]

        assert regular == [
            (0, 360, "hours50"),
            (360, 1019, "hours100"),
            (840, 1320, "hours20"),
            (1320, 1800, "hours50"),
        ]

    def test_partial_start_uses_special_start(self):
        tables = build_rate_tables(17 * 60)
        partial = tables[WorkDayType.SpecialPartialStart]

        evening = [s for s in partial if s.key == "hours20"][0]
        shabbat150 = [s for s in partial if s.key == "shabbat150"][0]
        assert evening.point.end == 17 * 60
        assert shabbat150.point.start == 17 * 60
        assert shabbat150.percent == 1.5

    def test_special_full_percentages(self):
        tables = build_rate_tables(18 * 60)
        percents = [(s.key, s.percent) for s in tables[WorkDayType.SpecialFull]]

        assert percents == [("shabbat200", 2.0), ("shabbat150", 1.5), ("shabbat200", 2.0)]

    def test_cached_tables_are_read_only(self):
        tables = build_rate_tables(18 * 60)

        with pytest.raises(TypeError):
            tables[WorkDayType.Regular] = ()

        assert build_rate_tables(18 * 60)[WorkDayType.Regular][0].key == "hours50"


class TestFindSegments:
    def test_scan_starts_at_last_entry_starting_before_target(self):
        table = build_rate_tables(18 * 60)[WorkDayType.Regular]

        segments = find_segments(Point(start=16 * 60, end=20 * 60), table)

        assert [(s.key, s.point.start, s.point.end) for s in segments] == [("hours20", 960, 1200)]

    def test_target_before_table_start_is_empty(self):
        table = build_rate_tables(18 * 60)[WorkDayType.Regular]
        assert find_segments(Point(start=-10, end=100), table) == []

    def test_empty_target(self):
        table = build_rate_tables(18 * 60)[WorkDayType.Regular]
        assert find_segments(Point(start=600, end=600), table) == []


class TestNextDayType:
    @pytest.mark.parametrize(
        "type_day,cross,expected",
        [
            (WorkDayType.Regular, False, WorkDayType.Regular),
            (WorkDayType.Regular, True, WorkDayType.Regular),
            (WorkDayType.SpecialPartialStart, False, WorkDayType.SpecialFull),
            (WorkDayType.SpecialFull, False, WorkDayType.Regular),
            (WorkDayType.SpecialFull, True, WorkDayType.SpecialFull),
        ],
    )
    def test_next_day_table(self, make_meta, type_day, cross, expected):
        meta = make_meta(type_day=type_day, cross_day_continuation=cross)
        assert next_day_type(meta) == expected

    def test_unknown_day_type_is_rejected(self, make_meta):
        with pytest.raises(ValueError):
            make_meta(type_day="Holiday")


class TestSegmentResolver:
    def test_regular_night_shift(self, pipeline, make_meta, make_shift):
        shift = make_shift("22:00", "06:00")
        segments = pipeline.segment_resolver.resolve(shift.point, make_meta())

        assert _hours_by_key(segments) == {"hours50": 8.0}

    def test_regular_day_with_evening(self, pipeline, make_meta, make_shift):
        shift = make_shift("08:00", "20:00")
        segments = pipeline.segment_resolver.resolve(shift.point, make_meta())

        totals = _hours_by_key(segments)
        assert totals["hours20"] == pytest.approx(6.0)
        assert totals["hours100"] == pytest.approx((1019 - 480) / 60)

    def test_morning_shift_stays_in_100_window(self, pipeline, make_meta, make_shift):
        shift = make_shift("08:00", "16:00")
        segments = pipeline.segment_resolver.resolve(shift.point, make_meta())

        assert [s.key for s in segments] == ["hours100"]

    def test_full_day_on_special_full(self, pipeline, make_meta):
        meta = make_meta(date="2024-09-07", type_day=WorkDayType.SpecialFull)
        segments = pipeline.segment_resolver.resolve(Point(start=0, end=1440), meta)

        totals = _hours_by_key(segments)
        assert totals["shabbat200"] == pytest.approx(8.0), f"Expected shabbat200=8, got {totals}"
        assert totals["shabbat150"] == pytest.approx(16.0), f"Expected shabbat150=16, got {totals}"

    def test_summer_friday_special_starts_at_18(self, pipeline, make_meta, make_shift):
        meta = make_meta(date="2024-09-06", type_day=WorkDayType.SpecialPartialStart)
        segments = pipeline.segment_resolver.resolve(make_shift("14:00", "22:00").point, meta)

        shabbat = [s for s in segments if s.key == "shabbat150"]
        assert shabbat[0].point.start == 18 * 60
        assert _hours_by_key(segments)["shabbat150"] == pytest.approx(4.0)

    def test_winter_friday_special_starts_at_17(self, pipeline, make_meta, make_shift):
        meta = make_meta(date="2024-12-06", type_day=WorkDayType.SpecialPartialStart)
        segments = pipeline.segment_resolver.resolve(make_shift("14:00", "22:00").point, meta)

        assert _hours_by_key(segments)["shabbat150"] == pytest.approx(5.0)

    def test_cross_midnight_regular_continues_on_regular(self, pipeline, make_meta, make_shift):
        segments = pipeline.segment_resolver.resolve(make_shift("22:00", "08:00").point, make_meta())

        assert [(s.key, s.point.start, s.point.end) for s in segments] == [
            ("hours50", 1320, 1800),
            ("hours100", 1800, 1920),
        ]

    def test_friday_night_continues_on_special_full(self, pipeline, make_meta, make_shift):
        meta = make_meta(date="2024-09-06", type_day=WorkDayType.SpecialPartialStart)
        segments = pipeline.segment_resolver.resolve(make_shift("22:00", "08:00").point, meta)

        totals = _hours_by_key(segments)
        assert totals == {"shabbat200": pytest.approx(8.0), "shabbat150": pytest.approx(2.0)}

    def test_saturday_night_without_continuation(self, pipeline, make_meta, make_shift):
        meta = make_meta(date="2024-09-07", type_day=WorkDayType.SpecialFull)
        segments = pipeline.segment_resolver.resolve(make_shift("22:00", "08:00").point, meta)

        assert segments[-1].key == "hours100"
        assert segments[-1].point.start == 1800

    def test_saturday_night_with_continuation(self, pipeline, make_meta, make_shift):
        meta = make_meta(date="2024-09-07", type_day=WorkDayType.SpecialFull, cross_day_continuation=True)
        segments = pipeline.segment_resolver.resolve(make_shift("22:00", "08:00").point, meta)

        assert segments[-1].key == "shabbat150"

    def test_segments_sorted_by_start(self, pipeline, make_meta, make_shift):
        segments = pipeline.segment_resolver.resolve(make_shift("20:00", "10:00").point, make_meta())
        starts = [s.point.start for s in segments]
        assert starts == sorted(starts)

    def test_invalid_interval_is_empty(self, pipeline, make_meta):
        assert pipeline.segment_resolver.resolve(Point(start=600, end=500), make_meta()) == []


class TestDateService:
    def test_special_start_follows_dst(self, pipeline):
        ds = pipeline.date_service
        assert ds.special_start_minutes(datetime.date(2024, 9, 6)) == 18 * 60
        assert ds.special_start_minutes("2024-12-06") == 17 * 60

    def test_minutes_to_time_wraps(self, pipeline):
        assert pipeline.date_service.minutes_to_time(1500) == "01:00"
        assert pipeline.date_service.minutes_to_time(14 * 60 + 5) == "14:05"

    def test_month_arithmetic(self, pipeline):
        ds = pipeline.date_service
        assert ds.days_in_month(2024, 2) == 29
        assert ds.next_month_first_day(2024, 12) == datetime.date(2025, 1, 1)
        assert len(ds.month_date_range(2024, 9)) == 30
        assert ds.day_difference(datetime.date(2024, 9, 1), datetime.date(2024, 9, 3)) == 2
        assert ds.add_days(datetime.date(2024, 9, 30), 1) == datetime.date(2024, 10, 1)

    def test_minutes_from_midnight(self, pipeline):
        assert pipeline.date_service.minutes_from_midnight(datetime.time(6, 30)) == 390

    def test_parse_date_rejects_garbage(self, pipeline):
        with pytest.raises(ValueError):
            pipeline.date_service.parse_date("2024-13-01")
