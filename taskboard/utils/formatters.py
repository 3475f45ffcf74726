"""
Message formatting utilities
"""

from datetime import date
from typing import List
from taskboard.models.analytics import DashboardSnapshot, KpiRollup, TimeSeriesPoint
from taskboard.models.task import Task, TaskStatus

STATUS_ICONS = {
    TaskStatus.NOT_STARTED: "○",
    TaskStatus.IN_PROGRESS: "◐",
    TaskStatus.COMPLETED: "●",
}


def format_display_date(day: date) -> str:
    """
    Short chart label, e.g. "Jun 10"

    Args:
        day: Calendar date

    Returns:
        Abbreviated month name and day without padding
    """
    return f"{day.strftime('%b')} {day.day}"


def format_task_line(task: Task) -> str:
    """
    Format one task as a single listing line

    Args:
        task: Task to format

    Returns:
        Formatted line with status icon, date, time span and subtask progress
    """
    icon = STATUS_ICONS.get(task.status, "?")
    line = f"{icon} {task.date}"

    if task.start_time:
        line += f" {task.start_time}"
        if task.end_time:
            line += f"-{task.end_time}"

    line += f" {task.title}"

    if task.subtasks:
        done = sum(1 for subtask in task.subtasks if subtask.completed)
        line += f" [{done}/{len(task.subtasks)}]"

    if task.archived:
        line += " (archived)"

    return line


def format_kpi_summary(kpis: KpiRollup) -> str:
    """Format KPI rollup as a short multi-line block"""
    by_status = ", ".join(
        f"{status.value}: {count}" for status, count in kpis.by_status.items()
    )
    return (
        f"Total: {kpis.total}\n"
        f"Overdue: {kpis.overdue}\n"
        f"Due today: {kpis.due_today}\n"
        f"This week: {kpis.this_week}\n"
        f"By status: {by_status}"
    )


def format_series(points: List[TimeSeriesPoint]) -> str:
    """Format time series as "label created/completed" rows"""
    return "\n".join(
        f"{point.date:>7}  created {point.created:>3}  completed {point.completed:>3}"
        for point in points
    )


def format_dashboard(snapshot: DashboardSnapshot) -> str:
    """
    Format a dashboard snapshot as a plain-text report

    Args:
        snapshot: Computed dashboard

    Returns:
        Report text
    """
    if snapshot.window.is_unbounded:
        header = f"📊 Dashboard ({snapshot.request.range.value}, all dates)"
    else:
        header = f"📊 Dashboard ({snapshot.request.range.value}, {snapshot.window.start} to {snapshot.window.end})"

    parts = [header, "", format_kpi_summary(snapshot.kpis)]

    if snapshot.pie:
        distribution = ", ".join(f"{segment.label} {segment.percent:.0f}%" for segment in snapshot.pie)
        parts.extend(["", f"Distribution: {distribution}"])
    else:
        parts.extend(["", "Distribution: no tasks"])

    parts.extend(["", format_series(snapshot.series)])
    return "\n".join(parts)
