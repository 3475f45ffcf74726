"""
Window selector: resolve symbolic ranges into inclusive date-key bounds
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union
from taskboard.models.analytics import DateWindow, RangeRequest, TimeRange
from taskboard.models.task import Task
from taskboard.utils.date_utils import date_key, start_of_week, reference_date
from taskboard.utils.logger import logger

UNBOUNDED = DateWindow()


def resolve_window(request: RangeRequest, now: Optional[Union[date, datetime]] = None) -> DateWindow:
    """
    Resolve a range request into an inclusive window

    Args:
        request: Symbolic range and optional custom bounds
        now: Reference instant, defaults to the current time

    Returns:
        DateWindow; unbounded for "all" and for incomplete custom ranges
    """
    today = reference_date(now)

    if request.range == TimeRange.LAST_7_DAYS:
        return DateWindow(start=date_key(today - timedelta(days=6)), end=date_key(today))

    if request.range == TimeRange.LAST_30_DAYS:
        return DateWindow(start=date_key(today - timedelta(days=29)), end=date_key(today))

    if request.range == TimeRange.CURRENT_WEEK:
        week_start = start_of_week(today)
        return DateWindow(start=date_key(week_start), end=date_key(week_start + timedelta(days=6)))

    if request.range == TimeRange.CUSTOM:
        if not request.custom_start or not request.custom_end:
            logger.debug("Custom range without both bounds, treating as unbounded")
            return UNBOUNDED
        return DateWindow(start=request.custom_start, end=request.custom_end)

    return UNBOUNDED


def filter_tasks(tasks: Iterable[Task], window: DateWindow) -> List[Task]:
    """Tasks whose scheduled date falls inside the window, in source order"""
    if window.is_unbounded:
        return list(tasks)
    return [task for task in tasks if window.contains(task.date)]
