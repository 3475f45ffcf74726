"""
Analytics service
"""

from datetime import date, datetime
from functools import lru_cache
from typing import List, Optional, Union
from taskboard.config.settings import settings
from taskboard.models.analytics import CalendarMonth, DashboardSnapshot, RangeRequest
from taskboard.models.task import Task
from taskboard.services.aggregation import build_pie_data, build_time_series, compute_kpis
from taskboard.services.calendar_service import build_calendar_month, sort_for_admin, tasks_for_day
from taskboard.services.chart_geometry import build_chart_geometry, build_pie_arcs
from taskboard.services.snapshot import SnapshotProvider, TaskSnapshot
from taskboard.services.window_selector import filter_tasks, resolve_window
from taskboard.utils.date_utils import date_key, reference_date
from taskboard.utils.logger import logger


@lru_cache(maxsize=settings.ANALYTICS_CACHE_SIZE)
def compute_dashboard(snapshot: TaskSnapshot, request: RangeRequest, today: date) -> DashboardSnapshot:
    """
    Dashboard aggregates for one (snapshot, range, day) combination

    The result only depends on its arguments, so it is memoized on them.
    """
    window = resolve_window(request, today)
    filtered = filter_tasks(snapshot.tasks, window)
    kpis = compute_kpis(filtered, today)
    pie = build_pie_data(kpis.by_status)
    series = build_time_series(filtered, request, today)

    logger.debug(
        f"Computed dashboard for {request.range.value}: "
        f"{len(filtered)}/{len(snapshot)} tasks in window"
    )

    return DashboardSnapshot(
        request=request,
        window=window,
        today=date_key(today),
        kpis=kpis,
        pie=pie,
        pie_arcs=build_pie_arcs(pie),
        series=series,
        chart=build_chart_geometry(series),
    )


@lru_cache(maxsize=settings.ANALYTICS_CACHE_SIZE)
def compute_calendar_month(
    snapshot: TaskSnapshot,
    year: int,
    month: int,
    today: date,
    include_archived: bool = False,
) -> CalendarMonth:
    """Month grid for one snapshot, memoized like compute_dashboard"""
    return build_calendar_month(snapshot.tasks, year, month, today, include_archived)


class AnalyticsService:
    """Service for dashboard and calendar aggregates"""

    def __init__(self, snapshot_provider: SnapshotProvider):
        """
        Initialize analytics service

        Args:
            snapshot_provider: Source of task snapshots
        """
        self.snapshot_provider = snapshot_provider
        self.logger = logger

    def get_dashboard(
        self,
        request: Optional[RangeRequest] = None,
        now: Optional[Union[date, datetime]] = None,
    ) -> DashboardSnapshot:
        """
        Get dashboard aggregates for a range

        Args:
            request: Range request, defaults to all tasks
            now: Reference instant, defaults to the current time

        Returns:
            DashboardSnapshot (a copy, safe to modify)
        """
        request = request or RangeRequest()
        snapshot = self.snapshot_provider.get_snapshot()
        result = compute_dashboard(snapshot, request, reference_date(now))
        return result.model_copy(deep=True)

    def get_calendar_month(
        self,
        year: int,
        month: int,
        now: Optional[Union[date, datetime]] = None,
        include_archived: bool = False,
    ) -> CalendarMonth:
        """
        Get the month grid with per-day occupancy

        Args:
            year: Year
            month: Month number, 1-12
            now: Reference instant used to flag today
            include_archived: Show archived tasks in the cells

        Returns:
            CalendarMonth (a copy, safe to modify)
        """
        snapshot = self.snapshot_provider.get_snapshot()
        result = compute_calendar_month(snapshot, year, month, reference_date(now), include_archived)
        return result.model_copy(deep=True)

    def get_day_agenda(self, day: str, include_archived: bool = False) -> List[Task]:
        """Tasks scheduled on a day, ordered by start time"""
        return tasks_for_day(self.snapshot_provider.get_snapshot(), day, include_archived)

    def get_admin_listing(self) -> List[Task]:
        """Every task ordered by date and start time"""
        return sort_for_admin(self.snapshot_provider.get_snapshot())

    @staticmethod
    def clear_cache():
        """Drop memoized aggregates"""
        compute_dashboard.cache_clear()
        compute_calendar_month.cache_clear()
