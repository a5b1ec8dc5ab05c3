# paymap/core/types.py

"""
Type aliases for the calendar inputs of a month computation.

All three maps are keyed by YYYY-MM-DD date strings.
"""

from paymap.core.models import Shift, WorkDayStatus

#: Holiday event titles per date, as delivered by a calendar source.
EventMap = dict[str, list[str]]

#: Shifts grouped by the work day they start on.
ShiftsByDate = dict[str, list[Shift]]

#: Day status per date; dates missing from the map are normal days.
StatusByDate = dict[str, WorkDayStatus]
