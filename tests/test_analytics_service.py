"""
Tests for analytics service and task snapshots
"""

from datetime import date
from taskboard.models.analytics import RangeRequest, TimeRange
from taskboard.models.task import TaskStatus
from taskboard.services.analytics_service import AnalyticsService, compute_calendar_month, compute_dashboard
from taskboard.services.snapshot import RepositorySnapshotProvider, StaticSnapshotProvider, TaskSnapshot


def test_snapshot_equality_follows_content(make_task):
    """Test that equal content gives equal, identically hashed snapshots"""
    first = TaskSnapshot([make_task("a"), make_task("b")])
    second = TaskSnapshot([make_task("a"), make_task("b")])
    changed = TaskSnapshot([make_task("a"), make_task("b", status=TaskStatus.COMPLETED)])

    assert first == second
    assert hash(first) == hash(second)
    assert first.fingerprint == second.fingerprint
    assert first != changed


def test_snapshot_is_isolated_from_source(make_task):
    """Test mutating the source list does not change the snapshot"""
    task = make_task("a")
    tasks = [task]
    snapshot = TaskSnapshot(tasks)

    tasks.append(make_task("b"))
    task.title = "Changed"

    assert len(snapshot) == 1
    assert snapshot.tasks[0].title == "Task a"


def test_dashboard_end_to_end(make_task, today):
    """Test dashboard for a one-week window"""
    provider = StaticSnapshotProvider([
        make_task("a", date="2024-06-10", status=TaskStatus.COMPLETED),
        make_task("b", date="2024-06-11", status=TaskStatus.NOT_STARTED),
        make_task("c", date="2024-06-12", status=TaskStatus.IN_PROGRESS),
        make_task("old", date="2024-05-01", status=TaskStatus.NOT_STARTED),
    ])
    service = AnalyticsService(provider)

    dashboard = service.get_dashboard(RangeRequest(range=TimeRange.CURRENT_WEEK), today)

    assert dashboard.window.start == "2024-06-09"
    assert dashboard.window.end == "2024-06-15"
    assert dashboard.today == "2024-06-12"
    assert dashboard.kpis.total == 3
    assert dashboard.kpis.overdue == 1
    assert dashboard.kpis.due_today == 1
    assert dashboard.kpis.this_week == 3
    assert len(dashboard.pie) == 3
    assert len(dashboard.series) == 7
    assert dashboard.chart.max_value == 5


def test_dashboard_defaults_to_all(make_task, today):
    """Test that no request means every task"""
    service = AnalyticsService(StaticSnapshotProvider([make_task("a"), make_task("b", date="2020-01-01")]))

    dashboard = service.get_dashboard(now=today)

    assert dashboard.request.range == TimeRange.ALL
    assert dashboard.window.is_unbounded
    assert dashboard.kpis.total == 2
    assert len(dashboard.series) == 14


def test_dashboard_is_memoized(make_task, today):
    """Test repeated identical requests reuse the computed aggregates"""
    service = AnalyticsService(StaticSnapshotProvider([make_task("a")]))
    request = RangeRequest(range=TimeRange.LAST_7_DAYS)

    service.get_dashboard(request, today)
    service.get_dashboard(request, today)

    info = compute_dashboard.cache_info()
    assert info.misses == 1
    assert info.hits == 1


def test_dashboard_recomputed_when_tasks_change(make_task, today):
    """Test a new snapshot invalidates memoized results"""
    provider = StaticSnapshotProvider([make_task("a")])
    service = AnalyticsService(provider)

    assert service.get_dashboard(now=today).kpis.total == 1

    provider.set_tasks([make_task("a"), make_task("b")])

    assert service.get_dashboard(now=today).kpis.total == 2
    assert compute_dashboard.cache_info().misses == 2


def test_dashboard_recomputed_when_day_changes(make_task):
    """Test results depend on the reference day"""
    service = AnalyticsService(StaticSnapshotProvider([make_task("a", date="2024-06-10")]))

    assert service.get_dashboard(now=date(2024, 6, 10)).kpis.due_today == 1
    assert service.get_dashboard(now=date(2024, 6, 11)).kpis.due_today == 0


def test_dashboard_result_is_a_copy(make_task, today):
    """Test modifying a returned dashboard does not poison the cache"""
    service = AnalyticsService(StaticSnapshotProvider([make_task("a")]))

    first = service.get_dashboard(now=today)
    first.kpis.total = 99
    first.series.clear()

    second = service.get_dashboard(now=today)
    assert second.kpis.total == 1
    assert len(second.series) == 14


def test_calendar_month_memoized(make_task, today):
    """Test month grid memoization and archived flag"""
    service = AnalyticsService(StaticSnapshotProvider([
        make_task("a", date="2024-06-12"),
        make_task("b", date="2024-06-12", archived=True),
    ]))

    month = service.get_calendar_month(2024, 6, today)
    service.get_calendar_month(2024, 6, today)
    with_archived = service.get_calendar_month(2024, 6, today, include_archived=True)

    assert month.days[11].occupancy.task_count == 1
    assert with_archived.days[11].occupancy.task_count == 2
    info = compute_calendar_month.cache_info()
    assert info.hits == 1
    assert info.misses == 2


def test_day_agenda_and_admin_listing(make_task):
    """Test agenda ordering and admin listing"""
    service = AnalyticsService(StaticSnapshotProvider([
        make_task("b", date="2024-06-10", start_time="14:00"),
        make_task("a", date="2024-06-10", start_time="08:00"),
        make_task("c", date="2024-06-09", start_time="20:00", archived=True),
    ]))

    assert [task.id for task in service.get_day_agenda("2024-06-10")] == ["a", "b"]
    assert [task.id for task in service.get_admin_listing()] == ["c", "a", "b"]


def test_repository_snapshot_provider(repository, make_task, today):
    """Test snapshots read from the repository reflect writes"""
    service = AnalyticsService(RepositorySnapshotProvider(repository))
    repository.insert_task(make_task("a", date="2024-06-12"))

    assert service.get_dashboard(now=today).kpis.due_today == 1

    repository.insert_task(make_task("b", date="2024-06-12"))

    assert service.get_dashboard(now=today).kpis.due_today == 2
