"""
Aggregation engine: per-day counts, KPI rollup, status distribution, time series

All functions are pure and work on an already filtered task collection.
"""

from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple, Union
from taskboard.config.constants import DEFAULT_SERIES_DAYS
from taskboard.models.analytics import (
    KpiRollup,
    PieSegment,
    RangeRequest,
    TimeRange,
    TimeSeriesPoint,
)
from taskboard.models.task import Task, TaskStatus
from taskboard.utils.date_utils import (
    date_key,
    date_key_from_timestamp,
    parse_date_key,
    reference_date,
    start_of_week,
)
from taskboard.utils.formatters import format_display_date
from taskboard.utils.logger import logger

STATUS_ORDER = (TaskStatus.NOT_STARTED, TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED)


def empty_status_counts() -> Dict[TaskStatus, int]:
    return {status: 0 for status in STATUS_ORDER}


def count_by_status(tasks: Iterable[Task]) -> Dict[TaskStatus, int]:
    """Count per status; all three statuses are always present"""
    counts = empty_status_counts()
    for task in tasks:
        counts[task.status] += 1
    return counts


def count_created_by_day(tasks: Iterable[Task]) -> Dict[str, int]:
    """Number of tasks created per day, keyed by the date of createdAt"""
    counts: Dict[str, int] = {}
    for task in tasks:
        key = date_key_from_timestamp(task.created_at)
        counts[key] = counts.get(key, 0) + 1
    return counts


def count_status_by_day(tasks: Iterable[Task]) -> Dict[str, Dict[TaskStatus, int]]:
    """Per scheduled day, number of tasks in each status present that day"""
    counts: Dict[str, Dict[TaskStatus, int]] = {}
    for task in tasks:
        day_counts = counts.setdefault(date_key(task.date), {})
        day_counts[task.status] = day_counts.get(task.status, 0) + 1
    return counts


def compute_kpis(tasks: Iterable[Task], now: Optional[Union[date, datetime]] = None) -> KpiRollup:
    """
    Compute KPI rollup relative to now

    Args:
        tasks: Filtered task collection
        now: Reference instant, defaults to the current time

    Returns:
        KpiRollup with total, by_status, overdue, due_today and this_week
    """
    today = reference_date(now)
    today_key = date_key(today)
    week_start = start_of_week(today)
    week_end = week_start + timedelta(days=6)

    tasks = list(tasks)
    overdue = 0
    due_today = 0
    this_week = 0

    for task in tasks:
        if task.date < today_key and task.status != TaskStatus.COMPLETED:
            overdue += 1

        if task.date == today_key:
            due_today += 1

        scheduled = parse_date_key(task.date)
        if scheduled is not None:
            in_week = week_start <= scheduled <= week_end
        else:
            logger.warning(f"Task {task.id} has unparsable date '{task.date}', comparing as text")
            in_week = date_key(week_start) <= task.date <= date_key(week_end)
        if in_week:
            this_week += 1

    return KpiRollup(
        total=len(tasks),
        by_status=count_by_status(tasks),
        overdue=overdue,
        due_today=due_today,
        this_week=this_week,
    )


def build_pie_data(by_status: Dict[TaskStatus, int]) -> List[PieSegment]:
    """
    Status distribution without empty statuses

    Percentages are relative to the sum of the remaining statuses and are
    zero when there is nothing to distribute.
    """
    present = [(status, by_status.get(status, 0)) for status in STATUS_ORDER]
    present = [(status, value) for status, value in present if value > 0]
    total = sum(value for _, value in present)

    return [
        PieSegment(
            status=status,
            label=status.value,
            value=value,
            percent=(value / total * 100) if total else 0.0,
        )
        for status, value in present
    ]


def series_window(request: RangeRequest, now: Optional[Union[date, datetime]] = None) -> Tuple[date, int]:
    """
    Sampling window of the trend chart: first day and number of days

    This is independent of the filtering window; "all" samples the trailing
    two weeks and a custom range covers every day between its bounds.
    """
    today = reference_date(now)
    trailing_start = today - timedelta(days=DEFAULT_SERIES_DAYS - 1)

    if request.range == TimeRange.LAST_7_DAYS:
        return today - timedelta(days=6), 7

    if request.range == TimeRange.LAST_30_DAYS:
        return today - timedelta(days=29), 30

    if request.range == TimeRange.CURRENT_WEEK:
        return start_of_week(today), 7

    if request.range == TimeRange.CUSTOM:
        start = parse_date_key(request.custom_start)
        end = parse_date_key(request.custom_end)
        if start is not None and end is not None:
            return start, abs((end - start).days) + 1
        logger.debug("Custom series range incomplete, using trailing default")

    return trailing_start, DEFAULT_SERIES_DAYS


def build_time_series(
    tasks: Iterable[Task],
    request: RangeRequest,
    now: Optional[Union[date, datetime]] = None,
) -> List[TimeSeriesPoint]:
    """
    One point per day of the sampling window with created and completed counts

    Args:
        tasks: Filtered task collection
        request: Range request the sampling window derives from
        now: Reference instant

    Returns:
        List of TimeSeriesPoint in chronological order
    """
    tasks = list(tasks)
    created_by_day = count_created_by_day(tasks)
    status_by_day = count_status_by_day(tasks)
    start, days = series_window(request, now)

    points = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        key = date_key(day)
        points.append(TimeSeriesPoint(
            date=format_display_date(day),
            date_key=key,
            created=created_by_day.get(key, 0),
            completed=status_by_day.get(key, {}).get(TaskStatus.COMPLETED, 0),
        ))

    logger.debug(f"Built time series of {len(points)} points from {date_key(start)}")
    return points
