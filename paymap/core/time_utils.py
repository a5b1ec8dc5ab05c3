# paymap/core/time_utils.py
"""Calendar arithmetic used by the day-type tables and month builders."""

import calendar
import datetime
import logging
from zoneinfo import ZoneInfo

from paymap.core.config import DATE_FORMAT_ISO, MinuteBreakpoints
from paymap.core.constants import DEFAULT_TIMEZONE, DST_UTC_OFFSET_HOURS, MINUTES_PER_DAY

logger = logging.getLogger(__name__)


class DateService:
    """
    Date helpers bound to the pay timezone.

    Only special_start_minutes() depends on the timezone; the rest is
    plain calendar arithmetic on naive dates.
    """

    def __init__(
        self,
        minutes: MinuteBreakpoints | None = None,
        timezone: str = DEFAULT_TIMEZONE,
        dst_utc_offset_hours: int = DST_UTC_OFFSET_HOURS,
    ):
        self.minutes = minutes or MinuteBreakpoints()
        self.tz = ZoneInfo(timezone)
        self.dst_utc_offset_hours = dst_utc_offset_hours

    @staticmethod
    def minutes_from_midnight(value: datetime.datetime | datetime.time) -> int:
        return value.hour * 60 + value.minute

    @staticmethod
    def day_difference(start: datetime.date, end: datetime.date) -> int:
        """Whole days from start to end (negative when end is earlier)."""
        return (end - start).days

    @staticmethod
    def add_days(day: datetime.date, days: int) -> datetime.date:
        return day + datetime.timedelta(days=days)

    @staticmethod
    def minutes_to_time(minutes: int) -> str:
        """Format minutes as "HH:MM", wrapping past midnight (1500 -> "01:00")."""
        minutes %= MINUTES_PER_DAY
        return f"{minutes // 60:02d}:{minutes % 60:02d}"

    @staticmethod
    def format_date(day: datetime.date) -> str:
        return day.strftime(DATE_FORMAT_ISO)

    @staticmethod
    def parse_date(value: str) -> datetime.date:
        """
        Parse a YYYY-MM-DD string.

        Raises:
            ValueError: If the string is not a valid ISO date
        """
        try:
            return datetime.datetime.strptime(value, DATE_FORMAT_ISO).date()
        except ValueError as e:
            logger.error("Invalid date string: %r", value)
            raise ValueError(f"Invalid date: {value!r}") from e

    @staticmethod
    def next_month_first_day(year: int, month: int) -> datetime.date:
        if month == 12:
            return datetime.date(year + 1, 1, 1)
        return datetime.date(year, month + 1, 1)

    @staticmethod
    def days_in_month(year: int, month: int) -> int:
        return calendar.monthrange(year, month)[1]

    def month_date_range(self, year: int, month: int) -> list[datetime.date]:
        """Every date of the month, in order."""
        return [datetime.date(year, month, day) for day in range(1, self.days_in_month(year, month) + 1)]

    def utc_offset_hours(self, day: datetime.date) -> float:
        noon = datetime.datetime.combine(day, datetime.time(12, 0), tzinfo=self.tz)
        return noon.utcoffset().total_seconds() / 3600

    def special_start_minutes(self, day: datetime.date | str) -> int:
        """
        Minute the special (Sabbath/holiday) rate starts on a partial day.

        18:00 when the date is on daylight-saving time in the pay timezone,
        otherwise 17:00.
        """
        if isinstance(day, str):
            day = self.parse_date(day)
        if self.utc_offset_hours(day) == self.dst_utc_offset_hours:
            return self.minutes.min18
        return self.minutes.min17
