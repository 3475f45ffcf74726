"""
Analytics models: window requests and the derived records handed to views
"""

from enum import Enum
from typing import Optional, List, Dict, Tuple
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from taskboard.models.task import TaskStatus


class TimeRange(str, Enum):
    """Symbolic dashboard ranges"""
    ALL = "all"
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    CURRENT_WEEK = "week"
    CUSTOM = "custom"


class AnalyticsModel(BaseModel):
    """Base for derived records, serialized with camelCase keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RangeRequest(AnalyticsModel):
    """Symbolic range plus optional custom bounds (YYYY-MM-DD)"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    range: TimeRange = TimeRange.ALL
    custom_start: Optional[str] = None
    custom_end: Optional[str] = None


class DateWindow(AnalyticsModel):
    """Inclusive [start, end] date-key bounds, unbounded when either is missing"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    start: Optional[str] = None
    end: Optional[str] = None

    @property
    def is_unbounded(self) -> bool:
        return self.start is None or self.end is None

    def contains(self, key: str) -> bool:
        if self.is_unbounded:
            return True
        return self.start <= key <= self.end


class TaskPreview(AnalyticsModel):
    """Identifier-level view of a task for calendar cells"""

    id: str
    title: str
    status: TaskStatus
    start_time: str = ""


class DayOccupancy(AnalyticsModel):
    """Tasks scheduled on one day plus status-presence flags"""

    date: str
    tasks: List[TaskPreview] = []
    task_count: int = 0
    hidden_count: int = 0
    has_not_started: bool = False
    has_in_progress: bool = False
    has_completed: bool = False


class CalendarDay(AnalyticsModel):
    """One cell of the month grid"""

    date: str
    day: int
    is_today: bool = False
    occupancy: DayOccupancy


class CalendarMonth(AnalyticsModel):
    """Month grid: leading blank cells (weeks start on Sunday) then each day"""

    year: int
    month: int
    leading_blanks: int
    days: List[CalendarDay]


class KpiRollup(AnalyticsModel):
    """Summary counts over a filtered task set"""

    total: int = 0
    by_status: Dict[TaskStatus, int]
    overdue: int = 0
    due_today: int = 0
    this_week: int = 0


class PieSegment(AnalyticsModel):
    """Status distribution slice"""

    status: TaskStatus
    label: str
    value: int
    percent: float


class PieArc(AnalyticsModel):
    """Stroke length and offset of a donut slice along the circumference"""

    status: TaskStatus
    percent: float
    length: float
    offset: float


class TimeSeriesPoint(AnalyticsModel):
    """Created vs completed counts for one day"""

    date: str  # display label, e.g. "Jun 10"
    date_key: str
    created: int = 0
    completed: int = 0


class ChartPoint(AnalyticsModel):
    x: float
    y: float


class ChartGeometry(AnalyticsModel):
    """Pixel coordinates for the created/completed line chart"""

    width: int
    height: int
    padding: int
    max_value: int
    y_ticks: List[int]
    created_points: List[ChartPoint]
    completed_points: List[ChartPoint]
    created_polyline: str
    completed_polyline: str
    area_path: str
    forecast_band: Optional[Tuple[float, float]] = None


class DashboardSnapshot(AnalyticsModel):
    """Everything the dashboard view renders for one range request"""

    request: RangeRequest
    window: DateWindow
    today: str
    kpis: KpiRollup
    pie: List[PieSegment]
    pie_arcs: List[PieArc]
    series: List[TimeSeriesPoint]
    chart: ChartGeometry
