# paymap/core/holidays.py
"""Day-type classification from weekday and holiday event titles."""

import datetime
import logging

from paymap.core.constants import (
    EREV_PREFIX,
    FRIDAY,
    HEBREW_MONTH_NAMES,
    HEBREW_WEEKDAY_LETTERS,
    PAID_HOLIDAYS,
    PARTIAL_START_EVENTS,
    ROSH_HASHANA_PREFIX,
    SATURDAY,
)
from paymap.core.models import WorkDayInfo, WorkDayMeta, WorkDayType
from paymap.core.time_utils import DateService
from paymap.core.types import EventMap

logger = logging.getLogger(__name__)

# Calendar feeds spell Yom HaAtzma'ut with typographic apostrophes
_APOSTROPHES = str.maketrans({"’": "'", "‘": "'", "`": "'", "׳": "'"})


def normalize_title(title: str) -> str:
    return title.strip().translate(_APOSTROPHES)


class HolidayResolver:
    """
    Resolve the WorkDayType of a date.

    Saturday and paid holidays are full special days; Friday, holiday
    eves and a few memorial days start the special rate in the evening.
    """

    def __init__(
        self,
        paid_holidays: tuple[str, ...] = PAID_HOLIDAYS,
        partial_start_events: tuple[str, ...] = PARTIAL_START_EVENTS,
    ):
        self.paid_holidays = frozenset(normalize_title(t) for t in paid_holidays)
        self.partial_start_events = frozenset(normalize_title(t) for t in partial_start_events)

    def is_paid_holiday(self, titles: list[str]) -> bool:
        return any(t in self.paid_holidays or t.startswith(ROSH_HASHANA_PREFIX) for t in titles)

    def is_partial_start(self, titles: list[str]) -> bool:
        return any(t.startswith(EREV_PREFIX) or t in self.partial_start_events for t in titles)

    def resolve(self, weekday: int, event_titles: list[str] | None = None) -> WorkDayType:
        """
        Args:
            weekday: datetime.weekday() of the date (Monday=0)
            event_titles: Holiday event titles on the date

        Returns:
            WorkDayType of the date
        """
        titles = [normalize_title(t) for t in event_titles or []]

        if weekday == SATURDAY or self.is_paid_holiday(titles):
            return WorkDayType.SpecialFull

        if weekday == FRIDAY or self.is_partial_start(titles):
            return WorkDayType.SpecialPartialStart

        return WorkDayType.Regular

    def resolve_date(self, day: datetime.date, event_map: EventMap) -> WorkDayType:
        return self.resolve(day.weekday(), event_map.get(day.isoformat(), []))


def hebrew_day_letter(day: datetime.date) -> str:
    return HEBREW_WEEKDAY_LETTERS[day.weekday()]


def month_name(index: int) -> str:
    """Hebrew name of a month, index 0 = January."""
    return HEBREW_MONTH_NAMES[index]


class WorkDaysForMonthBuilder:
    """Build the WorkDayInfo rows of a month."""

    def __init__(self, holiday_resolver: HolidayResolver, date_service: DateService):
        self.holiday_resolver = holiday_resolver
        self.date_service = date_service

    def build(self, year: int, month: int, event_map: EventMap | None = None) -> list[WorkDayInfo]:
        """
        One row per date of the month.

        cross_day_continuation of a day is True when the following day is a
        full special day; the last day of the month looks at the first day
        of the next month.
        """
        event_map = event_map or {}
        dates = self.date_service.month_date_range(year, month)
        dates.append(self.date_service.next_month_first_day(year, month))

        types = [self.holiday_resolver.resolve_date(day, event_map) for day in dates]

        rows = []
        for index, day in enumerate(dates[:-1]):
            meta = WorkDayMeta(
                date=self.date_service.format_date(day),
                type_day=types[index],
                cross_day_continuation=types[index + 1] == WorkDayType.SpecialFull,
            )
            rows.append(WorkDayInfo(meta=meta, hebrew_day=hebrew_day_letter(day)))

        logger.debug(
            "Built %d work days for %04d-%02d (%d special)",
            len(rows),
            year,
            month,
            sum(1 for r in rows if r.meta.type_day != WorkDayType.Regular),
        )
        return rows
