"""
Tests for text formatters
"""

from datetime import date
from taskboard.models.analytics import RangeRequest, TimeRange
from taskboard.models.task import Subtask, TaskStatus
from taskboard.services.analytics_service import AnalyticsService
from taskboard.services.snapshot import StaticSnapshotProvider
from taskboard.utils.formatters import format_dashboard, format_display_date, format_task_line


def test_format_display_date():
    """Test short chart labels"""
    assert format_display_date(date(2024, 6, 1)) == "Jun 1"
    assert format_display_date(date(2024, 12, 25)) == "Dec 25"


def test_format_task_line(make_task):
    """Test listing line with time span and checklist progress"""
    task = make_task(
        title="Review",
        status=TaskStatus.COMPLETED,
        subtasks=[Subtask(id="s1", title="a", completed=True), Subtask(id="s2", title="b")],
        archived=True,
    )

    line = format_task_line(task)

    assert line == "● 2024-06-10 09:00-11:00 Review [1/2] (archived)"


def test_format_dashboard(make_task, today):
    """Test report contains window, KPIs and distribution"""
    service = AnalyticsService(StaticSnapshotProvider([
        make_task("a", date="2024-06-11", status=TaskStatus.COMPLETED),
        make_task("b", date="2024-06-12"),
    ]))

    report = format_dashboard(service.get_dashboard(RangeRequest(range=TimeRange.LAST_7_DAYS), today))

    assert "2024-06-06 to 2024-06-12" in report
    assert "Total: 2" in report
    assert "Due today: 1" in report
    assert "Not Started 50%" in report
    assert "Jun 12" in report


def test_format_dashboard_without_tasks(today):
    """Test empty distribution wording"""
    report = format_dashboard(AnalyticsService(StaticSnapshotProvider()).get_dashboard(now=today))

    assert "all dates" in report
    assert "Distribution: no tasks" in report
