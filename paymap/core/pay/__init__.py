"""
Pay module - shift, day and month pay-rate breakdowns.

Exports the public components and the build_pipeline() composition root.
"""

from .buckets import FixedSegmentReducer, RateBucketReducer, extra_reducer, regular_reducer, special_reducer
from .day import DayPayMapBuilder, DayPayMapCalculator
from .meal_allowance import MealAllowanceClassifier, MealAllowanceMonthReducer
from .month import MonthlyReducer
from .per_diem import PerDiemMonthReducer, PerDiemTierResolver
from .pipeline import Pipeline, build_pipeline
from .regular import RegularHoursAllocator
from .segments import SegmentResolver, build_rate_tables, find_segments
from .shift import ShiftPayMapBuilder

__all__ = [
    # segments
    "SegmentResolver",
    "build_rate_tables",
    "find_segments",
    # buckets
    "RateBucketReducer",
    "FixedSegmentReducer",
    "extra_reducer",
    "special_reducer",
    "regular_reducer",
    # regular
    "RegularHoursAllocator",
    # per diem
    "PerDiemTierResolver",
    "PerDiemMonthReducer",
    # meal allowance
    "MealAllowanceClassifier",
    "MealAllowanceMonthReducer",
    # builders
    "ShiftPayMapBuilder",
    "DayPayMapCalculator",
    "DayPayMapBuilder",
    # month
    "MonthlyReducer",
    # pipeline
    "Pipeline",
    "build_pipeline",
]
