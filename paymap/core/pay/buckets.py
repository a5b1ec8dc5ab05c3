"""Accumulate/subtract over percent-tagged hour buckets."""

import logging
from collections.abc import Iterable
from typing import Generic, TypeVar

from paymap.core.config import RatePercentages, RegularConfig
from paymap.core.constants import (
    KEY_HOURS20,
    KEY_HOURS50,
    KEY_HOURS100,
    KEY_HOURS125,
    KEY_HOURS150,
    KEY_SHABBAT150,
    KEY_SHABBAT200,
    PERCENT_100,
)
from paymap.core.models import (
    ExtraBreakdown,
    LabeledSegmentRange,
    RateBucket,
    RegularBreakdown,
    SpecialBreakdown,
)

logger = logging.getLogger(__name__)

B = TypeVar("B", RegularBreakdown, ExtraBreakdown, SpecialBreakdown)


def add_buckets(base: RateBucket, add: RateBucket) -> RateBucket:
    return RateBucket(percent=base.percent, hours=base.hours + add.hours)


def subtract_buckets(base: RateBucket, sub: RateBucket, name: str = "bucket") -> RateBucket:
    """base - sub, clamped at zero hours."""
    hours = base.hours - sub.hours
    if hours < 0:
        logger.debug("Clamped %s at zero (%.4f - %.4f)", name, base.hours, sub.hours)
        hours = 0.0
    return RateBucket(percent=base.percent, hours=hours)


class RateBucketReducer(Generic[B]):
    """
    Reducer over a fixed set of named buckets.

    The percent of every bucket is fixed when the reducer is built and is
    always taken from the base operand.
    """

    def __init__(self, breakdown_cls: type[B], percents: dict[str, float]):
        self.breakdown_cls = breakdown_cls
        self.fields = tuple(breakdown_cls.model_fields)
        missing = set(self.fields) - set(percents)
        if missing:
            raise ValueError(f"No percent for buckets: {sorted(missing)}")
        self.percents = {name: percents[name] for name in self.fields}

    def create_empty(self) -> B:
        return self.from_hours()

    def from_hours(self, **hours: float) -> B:
        """Breakdown with the given hours per bucket, zero for the rest."""
        unknown = set(hours) - set(self.fields)
        if unknown:
            raise ValueError(f"Unknown buckets for {self.breakdown_cls.__name__}: {sorted(unknown)}")
        return self.breakdown_cls(
            **{
                name: RateBucket(percent=self.percents[name], hours=max(hours.get(name, 0.0), 0.0))
                for name in self.fields
            }
        )

    def accumulate(self, base: B, add: B) -> B:
        return self.breakdown_cls(
            **{name: add_buckets(getattr(base, name), getattr(add, name)) for name in self.fields}
        )

    def subtract(self, base: B, sub: B) -> B:
        return self.breakdown_cls(
            **{name: subtract_buckets(getattr(base, name), getattr(sub, name), name) for name in self.fields}
        )

    def sum_keys(self, segments: Iterable[LabeledSegmentRange]) -> B:
        """Sum segment hours per bucket; segments with other keys are ignored."""
        totals = dict.fromkeys(self.fields, 0.0)
        for seg in segments:
            if seg.key in totals:
                totals[seg.key] += seg.hours
        return self.from_hours(**totals)


def extra_reducer(percentages: RatePercentages | None = None) -> RateBucketReducer[ExtraBreakdown]:
    p = percentages or RatePercentages()
    percents = {KEY_HOURS20: p.hours20, KEY_HOURS50: p.hours50}
    return RateBucketReducer(ExtraBreakdown, percents)


def special_reducer(percentages: RatePercentages | None = None) -> RateBucketReducer[SpecialBreakdown]:
    p = percentages or RatePercentages()
    percents = {KEY_SHABBAT150: p.hours150, KEY_SHABBAT200: p.hours200}
    return RateBucketReducer(SpecialBreakdown, percents)


def regular_reducer(config: RegularConfig | None = None) -> RateBucketReducer[RegularBreakdown]:
    c = config or RegularConfig()
    percents = {KEY_HOURS100: c.hours100, KEY_HOURS125: c.hours125, KEY_HOURS150: c.hours150}
    return RateBucketReducer(RegularBreakdown, percents)


class FixedSegmentReducer:
    """Single 100% bucket (sick, vacation, shabbat extra)."""

    def __init__(self, percent: float = PERCENT_100):
        self.percent = percent

    def create(self, hours: float = 0.0) -> RateBucket:
        return RateBucket(percent=self.percent, hours=max(hours, 0.0))

    def create_empty(self) -> RateBucket:
        return self.create()

    def accumulate(self, base: RateBucket, add: RateBucket) -> RateBucket:
        return add_buckets(base, add)

    def subtract(self, base: RateBucket, sub: RateBucket) -> RateBucket:
        return subtract_buckets(base, sub, "fixed segment")
