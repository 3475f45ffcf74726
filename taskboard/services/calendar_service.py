"""
Calendar views: occupancy map, month grid, day agenda and admin listing
"""

import calendar
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Union
from taskboard.config.settings import settings
from taskboard.models.analytics import CalendarDay, CalendarMonth, DayOccupancy, TaskPreview
from taskboard.models.task import Task, TaskStatus
from taskboard.utils.date_utils import date_key, reference_date


def active_tasks(tasks: Iterable[Task], include_archived: bool = False) -> List[Task]:
    """Tasks shown in default views (archived ones are hidden unless requested)"""
    if include_archived:
        return list(tasks)
    return [task for task in tasks if not task.archived]


def group_by_day(tasks: Iterable[Task]) -> Dict[str, List[Task]]:
    """Tasks per scheduled day, keeping source order within each day"""
    groups: Dict[str, List[Task]] = {}
    for task in tasks:
        groups.setdefault(date_key(task.date), []).append(task)
    return groups


def _occupancy(key: str, day_tasks: List[Task], preview_limit: int) -> DayOccupancy:
    statuses = {task.status for task in day_tasks}
    previews = [
        TaskPreview(id=task.id, title=task.title, status=task.status, start_time=task.start_time)
        for task in day_tasks[:preview_limit]
    ]
    return DayOccupancy(
        date=key,
        tasks=previews,
        task_count=len(day_tasks),
        hidden_count=max(len(day_tasks) - preview_limit, 0),
        has_not_started=TaskStatus.NOT_STARTED in statuses,
        has_in_progress=TaskStatus.IN_PROGRESS in statuses,
        has_completed=TaskStatus.COMPLETED in statuses,
    )


def build_occupancy_map(tasks: Iterable[Task], preview_limit: Optional[int] = None) -> Dict[str, DayOccupancy]:
    """
    Per-day occupancy for the calendar grid

    Args:
        tasks: Task collection
        preview_limit: Max previews per day, defaults to CALENDAR_PREVIEW_LIMIT

    Returns:
        Mapping of date key to DayOccupancy
    """
    if preview_limit is None:
        preview_limit = settings.CALENDAR_PREVIEW_LIMIT

    return {
        key: _occupancy(key, day_tasks, preview_limit)
        for key, day_tasks in group_by_day(tasks).items()
    }


def build_calendar_month(
    tasks: Iterable[Task],
    year: int,
    month: int,
    now: Optional[Union[date, datetime]] = None,
    include_archived: bool = False,
    preview_limit: Optional[int] = None,
) -> CalendarMonth:
    """
    Month grid with Sunday-first leading blanks and occupancy for every day

    Args:
        tasks: Task collection
        year: Year of the month to render
        month: Month number, 1-12
        now: Reference instant used to flag today
        include_archived: Include archived tasks in the cells
        preview_limit: Max previews per day

    Returns:
        CalendarMonth
    """
    today_key = date_key(reference_date(now))
    occupancy = build_occupancy_map(active_tasks(tasks, include_archived), preview_limit)

    first_day = date(year, month, 1)
    leading_blanks = (first_day.weekday() + 1) % 7
    days_in_month = calendar.monthrange(year, month)[1]

    days = []
    for day_number in range(1, days_in_month + 1):
        key = date_key(date(year, month, day_number))
        days.append(CalendarDay(
            date=key,
            day=day_number,
            is_today=key == today_key,
            occupancy=occupancy.get(key) or DayOccupancy(date=key),
        ))

    return CalendarMonth(year=year, month=month, leading_blanks=leading_blanks, days=days)


def tasks_for_day(tasks: Iterable[Task], day: str, include_archived: bool = False) -> List[Task]:
    """Agenda of one day, ordered by start time"""
    day_tasks = [task for task in active_tasks(tasks, include_archived) if date_key(task.date) == day]
    return sorted(day_tasks, key=lambda task: task.start_time)


def sort_for_admin(tasks: Iterable[Task]) -> List[Task]:
    """All tasks, archived included, ordered by date then start time"""
    return sorted(tasks, key=lambda task: (task.date, task.start_time))
