# paymap/core/config.py
"""
Injected configuration for the pay engine.

Every component receives its breakpoints and percentages through these
models instead of reading module-level tables, so a different agreement
(other breakpoints, other tier widths, other rate timelines) is a config
change, not a code change.
"""

from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from paymap.core.constants import (
    DEFAULT_TIMEZONE,
    DST_UTC_OFFSET_HOURS,
    MID_TIER_THRESHOLD_HOURS,
    MIN_06,
    MIN_14,
    MIN_17,
    MIN_18,
    MIN_22,
    MINUTES_PER_DAY,
    PERCENT_20,
    PERCENT_50,
    PERCENT_100,
    PERCENT_125,
    PERCENT_150,
    PERCENT_200,
)
from paymap.core.exceptions import ConfigError

# ==========================
# Date formats
# ==========================

#: ISO format for date strings (WorkDayMeta.date, event map keys).
DATE_FORMAT_ISO: Final[str] = "%Y-%m-%d"


class MinuteBreakpoints(BaseModel):
    """Minute offsets from midnight that bound the rate windows."""

    model_config = ConfigDict(frozen=True)

    full_day: int = MINUTES_PER_DAY
    min06: int = MIN_06
    min14: int = MIN_14
    min17: int = MIN_17
    min18: int = MIN_18
    min22: int = MIN_22


class RatePercentages(BaseModel):
    """Multiplier per rate key (1.0 = 100%)."""

    model_config = ConfigDict(frozen=True)

    hours50: float = PERCENT_50
    hours20: float = PERCENT_20
    hours100: float = PERCENT_100
    hours125: float = PERCENT_125
    hours150: float = PERCENT_150
    hours200: float = PERCENT_200


class RegularConfig(BaseModel):
    """Overtime tiering parameters."""

    model_config = ConfigDict(frozen=True)

    mid_tier_threshold: float = MID_TIER_THRESHOLD_HOURS
    hours100: float = PERCENT_100
    hours125: float = PERCENT_125
    hours150: float = PERCENT_150


class PerDiemTimelineEntry(BaseModel):
    """Per diem rate (tier A, per point) effective from year/month."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(ge=1, le=12)
    rate: float = Field(ge=0)


class MealAllowanceTimelineEntry(BaseModel):
    """Meal allowance rates effective from year/month."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(ge=1, le=12)
    small: float = Field(ge=0)
    large: float = Field(ge=0)


DEFAULT_PER_DIEM_TIMELINE: Final[tuple[PerDiemTimelineEntry, ...]] = (
    PerDiemTimelineEntry(year=2000, month=1, rate=33.9),
    PerDiemTimelineEntry(year=2024, month=9, rate=36.3),
)

DEFAULT_MEAL_ALLOWANCE_TIMELINE: Final[tuple[MealAllowanceTimelineEntry, ...]] = (
    MealAllowanceTimelineEntry(year=2000, month=1, small=13.5, large=19.7),
    MealAllowanceTimelineEntry(year=2024, month=9, small=14.5, large=21.1),
)


class PayMapConfig(BaseModel):
    """Top-level configuration handed to build_pipeline()."""

    model_config = ConfigDict(frozen=True)

    minutes: MinuteBreakpoints = MinuteBreakpoints()
    percentages: RatePercentages = RatePercentages()
    regular: RegularConfig = RegularConfig()
    timezone: str = DEFAULT_TIMEZONE
    dst_utc_offset_hours: int = DST_UTC_OFFSET_HOURS
    per_diem_timeline: tuple[PerDiemTimelineEntry, ...] = DEFAULT_PER_DIEM_TIMELINE
    meal_allowance_timeline: tuple[MealAllowanceTimelineEntry, ...] = DEFAULT_MEAL_ALLOWANCE_TIMELINE


def load_config(data: dict[str, Any] | None = None) -> PayMapConfig:
    """
    Build a PayMapConfig from a plain dict (for example parsed settings).

    Missing sections fall back to the defaults above.

    Raises:
        ConfigError: If the data does not validate
    """
    try:
        return PayMapConfig(**(data or {}))
    except ValidationError as e:
        raise ConfigError(f"Invalid pay map configuration: {e}") from e
