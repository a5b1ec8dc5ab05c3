"""
Pytest configuration and shared fixtures for testing.

Provides reusable test fixtures:
- config: Default PayMapConfig
- pipeline: Fully wired Pipeline built from the default config
- make_meta: Factory for WorkDayMeta records
- make_shift: Factory for Shift records from "HH:MM" strings
"""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from paymap.core.config import PayMapConfig
from paymap.core.models import Shift, WorkDayMeta, WorkDayType
from paymap.core.pay import build_pipeline

# Monday, on daylight-saving time in Israel
REGULAR_DATE = "2024-09-02"


def hm(value: str) -> int:
    """Convert HH:MM to minutes from midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


@pytest.fixture
def config():
    return PayMapConfig()


@pytest.fixture
def pipeline(config):
    return build_pipeline(config)


@pytest.fixture
def make_meta():
    def _make(
        date: str = REGULAR_DATE,
        type_day: WorkDayType = WorkDayType.Regular,
        cross_day_continuation: bool = False,
    ) -> WorkDayMeta:
        return WorkDayMeta(date=date, type_day=type_day, cross_day_continuation=cross_day_continuation)

    return _make


@pytest.fixture
def make_shift():
    """Shift from "HH:MM" times; an end at or before the start runs into the next day."""

    def _make(start: str, end: str, is_field_duty: bool = False, shift_id: str = "s1") -> Shift:
        start_min = hm(start)
        end_min = hm(end)
        if end_min <= start_min:
            end_min += 1440
        return Shift(id=shift_id, start=start_min, end=end_min, is_field_duty=is_field_duty)

    return _make
