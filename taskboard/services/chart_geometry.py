"""
Chart coordinate mapping for the trend line chart and the status donut
"""

import math
from typing import List, Optional, Tuple
from taskboard.config.constants import (
    CHART_WIDTH,
    CHART_HEIGHT,
    CHART_PADDING,
    CHART_MIN_SCALE,
    CHART_TICK_STEPS,
    FORECAST_BAND_SIZE,
    PIE_RADIUS,
)
from taskboard.models.analytics import ChartGeometry, ChartPoint, PieArc, PieSegment, TimeSeriesPoint


def chart_max_value(points: List[TimeSeriesPoint], floor: int = CHART_MIN_SCALE) -> int:
    """Largest created/completed value, never below the minimum scale"""
    values = [point.created for point in points] + [point.completed for point in points]
    return max(values + [floor])


def compute_y_ticks(max_value: int) -> List[int]:
    """Evenly spaced ticks in steps of ceil(max / 4), stopping one step above max"""
    step = max(1, math.ceil(max_value / CHART_TICK_STEPS))
    ticks = [step * index for index in range(CHART_TICK_STEPS + 1)]
    return [tick for tick in ticks if tick <= max_value + step]


def x_coordinate(index: int, count: int, width: int = CHART_WIDTH, padding: int = CHART_PADDING) -> float:
    if count <= 1:
        return width / 2
    return padding + (index / (count - 1)) * (width - padding * 2)


def y_coordinate(value: float, max_value: int, height: int = CHART_HEIGHT, padding: int = CHART_PADDING) -> float:
    return height - padding - (value / max_value) * (height - padding * 2)


def _polyline(points: List[ChartPoint]) -> str:
    return " ".join(f"{point.x:g},{point.y:g}" for point in points)


def _area_path(points: List[ChartPoint], baseline: float) -> str:
    if not points:
        return ""
    start = f"M {points[0].x:g} {baseline:g}"
    line = " ".join(f"L {point.x:g} {point.y:g}" for point in points)
    end = f"L {points[-1].x:g} {baseline:g} Z"
    return f"{start} {line} {end}"


def _forecast_band(count: int, width: int, padding: int) -> Optional[Tuple[float, float]]:
    if count < 2:
        return None
    band_size = min(FORECAST_BAND_SIZE, count - 1)
    start_index = max(count - band_size - 1, 0)
    return (
        x_coordinate(start_index, count, width, padding),
        x_coordinate(count - 1, count, width, padding),
    )


def build_chart_geometry(
    points: List[TimeSeriesPoint],
    width: int = CHART_WIDTH,
    height: int = CHART_HEIGHT,
    padding: int = CHART_PADDING,
) -> ChartGeometry:
    """
    Map time series points to pixel coordinates

    Args:
        points: Time series, one point per day
        width: Chart width in pixels
        height: Chart height in pixels
        padding: Padding on every side

    Returns:
        ChartGeometry with point lists, SVG polyline/path strings and y ticks
    """
    max_value = chart_max_value(points)
    count = len(points)

    created = [
        ChartPoint(x=x_coordinate(i, count, width, padding), y=y_coordinate(p.created, max_value, height, padding))
        for i, p in enumerate(points)
    ]
    completed = [
        ChartPoint(x=x_coordinate(i, count, width, padding), y=y_coordinate(p.completed, max_value, height, padding))
        for i, p in enumerate(points)
    ]

    return ChartGeometry(
        width=width,
        height=height,
        padding=padding,
        max_value=max_value,
        y_ticks=compute_y_ticks(max_value),
        created_points=created,
        completed_points=completed,
        created_polyline=_polyline(created),
        completed_polyline=_polyline(completed),
        area_path=_area_path(created, height - padding),
        forecast_band=_forecast_band(count, width, padding),
    )


def build_pie_arcs(segments: List[PieSegment], radius: float = PIE_RADIUS) -> List[PieArc]:
    """Stroke length and running offset of each donut slice"""
    circumference = 2 * math.pi * radius
    arcs = []
    offset = 0.0
    for segment in segments:
        length = segment.percent / 100 * circumference
        arcs.append(PieArc(status=segment.status, percent=segment.percent, length=length, offset=offset))
        offset += length
    return arcs
