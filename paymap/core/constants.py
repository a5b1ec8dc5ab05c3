# paymap/core/constants.py
from typing import Final

# ==========================
# Minutes / day boundaries
# ==========================

#: Number of minutes in one wall-clock day.
MINUTES_PER_DAY: Final[int] = 1440

#: Number of minutes per hour. Used when converting minute spans to hours.
MINUTES_PER_HOUR: Final[int] = 60

#: 06:00, start of the working day and end of the night window.
#: The day boundary used when splitting a shift is MIN_06 + MINUTES_PER_DAY.
MIN_06: Final[int] = 6 * 60

#: 14:00, start of the evening (20%) window.
MIN_14: Final[int] = 14 * 60

#: 17:00, end of the 100% window and winter Sabbath entry.
MIN_17: Final[int] = 17 * 60

#: 18:00, summer Sabbath entry (daylight-saving time).
MIN_18: Final[int] = 18 * 60

#: 22:00, start of the night window.
MIN_22: Final[int] = 22 * 60

#: UTC offset (hours) that marks daylight-saving time in the pay timezone.
#: When the date's offset equals this value Sabbath starts at 18:00, else 17:00.
DST_UTC_OFFSET_HOURS: Final[int] = 3

#: Timezone whose UTC offset decides the Sabbath entry minute.
DEFAULT_TIMEZONE: Final[str] = "Asia/Jerusalem"


# ==========================
# Percentages
# ==========================

#: Night premium (22:00-06:00 on a regular day).
PERCENT_50: Final[float] = 0.5

#: Evening premium (14:00-22:00 on a regular day).
PERCENT_20: Final[float] = 0.2

#: Base rate.
PERCENT_100: Final[float] = 1.0

#: First overtime tier.
PERCENT_125: Final[float] = 1.25

#: Second overtime tier, and daytime Sabbath rate.
PERCENT_150: Final[float] = 1.5

#: Night Sabbath rate.
PERCENT_200: Final[float] = 2.0


# ==========================
# Rate bucket keys
# ==========================

KEY_HOURS50: Final[str] = "hours50"
KEY_HOURS20: Final[str] = "hours20"
KEY_HOURS100: Final[str] = "hours100"
KEY_HOURS125: Final[str] = "hours125"
KEY_HOURS150: Final[str] = "hours150"
KEY_SHABBAT150: Final[str] = "shabbat150"
KEY_SHABBAT200: Final[str] = "shabbat200"

#: Segment keys that only ever cover the 22:00-06:00 window.
NIGHT_KEYS: Final[tuple[str, ...]] = (KEY_HOURS50, KEY_SHABBAT200)


# ==========================
# Overtime
# ==========================

#: Width of the 125% band before the 150% tier begins.
MID_TIER_THRESHOLD_HOURS: Final[float] = 2.0

#: Default contractual hours per day when the caller supplies none.
DEFAULT_STANDARD_HOURS: Final[float] = 8.0


# ==========================
# Per diem and meal allowance
# ==========================

#: (minimum hours, tier, points), checked top-down.
PER_DIEM_TIERS: Final[tuple[tuple[float, str, int], ...]] = (
    (12.0, "C", 3),
    (8.0, "B", 2),
    (4.0, "A", 1),
)

#: Minimum total hours in a day before a large meal allowance is considered.
LARGE_MEAL_MIN_HOURS: Final[float] = 10.0


# ==========================
# Weekdays (Python weekday(): 0 = Monday)
# ==========================

FRIDAY: Final[int] = 4
SATURDAY: Final[int] = 5

#: Hebrew weekday letters indexed by datetime.weekday() (0=Monday ... 6=Sunday).
HEBREW_WEEKDAY_LETTERS: Final[tuple[str, ...]] = ("ב", "ג", "ד", "ה", "ו", "ש", "א")

#: Hebrew month names, index 0 = January.
HEBREW_MONTH_NAMES: Final[tuple[str, ...]] = (
    "ינואר",
    "פברואר",
    "מרץ",
    "אפריל",
    "מאי",
    "יוני",
    "יולי",
    "אוגוסט",
    "ספטמבר",
    "אוקטובר",
    "נובמבר",
    "דצמבר",
)


# ==========================
# Holidays
# ==========================

#: Event titles that make the whole day a paid holiday (full special day).
PAID_HOLIDAYS: Final[tuple[str, ...]] = (
    "Rosh Hashana",
    "Rosh Hashana II",
    "Yom Kippur",
    "Sukkot I",
    "Shmini Atzeret",
    "Pesach I",
    "Yom HaAtzma'ut",
    "Shavuot I",
)

#: Event titles that start the special period mid-day (like a Friday).
PARTIAL_START_EVENTS: Final[tuple[str, ...]] = (
    "Yom HaZikaron",
    "Sukkot VII (Hoshana Rabba)",
)

#: Title prefixes for holiday eves.
EREV_PREFIX: Final[str] = "Erev"
ROSH_HASHANA_PREFIX: Final[str] = "Rosh Hashana"
