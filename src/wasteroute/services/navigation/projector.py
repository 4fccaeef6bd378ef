"""Turn a tour and its segments into per-step navigation data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ...config import settings
from ...models.domain import FillStatus, ServicePoint
from ..geospatial import bearing_degrees, compass_direction, haversine_km
from ..routing.models import RouteSegment

BEARING_LOOKAHEAD_VERTICES = 5
MAX_STEP_INSTRUCTIONS = 3


@dataclass(slots=True)
class NavigationStep:
    index: int
    bin_id: str
    name: str
    latitude: float
    longitude: float
    fill_percentage: float
    status: str
    distance_km: float
    duration_min: float
    bearing: float
    direction: str
    eta: str
    instructions: List[str] = field(default_factory=list)


@dataclass(slots=True)
class RouteSummary:
    stop_count: int
    total_distance_km: float
    total_duration_min: float
    total_time: str
    critical_count: int
    warning_count: int
    fallback_segments: int


def _clamp_index(tour: Sequence[ServicePoint], index: int) -> int:
    # Playback may advance one past the last stop
    if index < 0 or index > len(tour):
        raise IndexError(f"Step index {index} outside [0, {len(tour)}].")
    return min(index, len(tour) - 1)


def _segment_for(segments: Sequence[RouteSegment], index: int) -> Optional[RouteSegment]:
    if 0 < index <= len(segments):
        return segments[index - 1]
    return None


def step_distance(tour: Sequence[ServicePoint], segments: Sequence[RouteSegment], index: int) -> float:
    index = _clamp_index(tour, index)
    if index <= 0:
        return 0.0
    segment = _segment_for(segments, index)
    if segment is not None:
        return segment.distance_km
    previous, current = tour[index - 1], tour[index]
    return haversine_km(previous.latitude, previous.longitude, current.latitude, current.longitude)


def step_duration(
    tour: Sequence[ServicePoint],
    segments: Sequence[RouteSegment],
    index: int,
    speed_kmh: float | None = None,
) -> float:
    index = _clamp_index(tour, index)
    if index <= 0:
        return 0.0
    segment = _segment_for(segments, index)
    if segment is not None:
        return segment.duration_min
    speed = speed_kmh or settings.fallback_speed_kmh
    return step_distance(tour, segments, index) / speed * 60.0


def step_bearing(tour: Sequence[ServicePoint], segments: Sequence[RouteSegment], index: int) -> float:
    """Heading towards stop ``index``.

    Uses the road geometry a few vertices ahead of the segment start when
    available, which follows the street better than the straight line
    between the two stops.
    """
    index = _clamp_index(tour, index)
    if index <= 0:
        return 0.0
    segment = _segment_for(segments, index)
    if segment is not None and len(segment.geometry) >= 2:
        start = segment.geometry[0]
        ahead = segment.geometry[min(BEARING_LOOKAHEAD_VERTICES, len(segment.geometry) - 1)]
        return bearing_degrees(start[0], start[1], ahead[0], ahead[1])
    previous, current = tour[index - 1], tour[index]
    return bearing_degrees(previous.latitude, previous.longitude, current.latitude, current.longitude)


def step_direction(tour: Sequence[ServicePoint], segments: Sequence[RouteSegment], index: int) -> str:
    return compass_direction(step_bearing(tour, segments, index))


def format_eta(minutes: float) -> str:
    """Render a duration as ``"12 min"`` or ``"1h 5m"``."""
    if minutes < 60:
        return f"{int(minutes + 0.5)} min"
    hours = int(minutes // 60)
    remainder = int(minutes % 60 + 0.5)
    if remainder == 60:
        hours, remainder = hours + 1, 0
    return f"{hours}h {remainder}m"


def build_navigation_steps(
    tour: Sequence[ServicePoint],
    segments: Sequence[RouteSegment],
) -> list[NavigationStep]:
    steps: list[NavigationStep] = []
    for index, point in enumerate(tour):
        duration = step_duration(tour, segments, index)
        bearing = step_bearing(tour, segments, index)
        segment = _segment_for(segments, index)
        steps.append(
            NavigationStep(
                index=index,
                bin_id=point.bin_id,
                name=point.name,
                latitude=point.latitude,
                longitude=point.longitude,
                fill_percentage=point.fill_percentage,
                status=point.status.value,
                distance_km=step_distance(tour, segments, index),
                duration_min=duration,
                bearing=bearing,
                direction=compass_direction(bearing) if index > 0 else "Start",
                eta=format_eta(duration),
                instructions=list(segment.instructions[:MAX_STEP_INSTRUCTIONS]) if segment else [],
            )
        )
    return steps


def summarize_route(
    tour: Sequence[ServicePoint],
    segments: Sequence[RouteSegment],
    speed_kmh: float | None = None,
) -> RouteSummary:
    total_distance = sum(step_distance(tour, segments, index) for index in range(len(tour)))
    total_duration = sum(segment.duration_min for segment in segments)
    if not total_duration:
        speed = speed_kmh or settings.fallback_speed_kmh
        total_duration = total_distance / speed * 60.0
    return RouteSummary(
        stop_count=len(tour),
        total_distance_km=total_distance,
        total_duration_min=total_duration,
        total_time=format_eta(total_duration),
        critical_count=sum(1 for point in tour if point.status is FillStatus.CRITICAL),
        warning_count=sum(1 for point in tour if point.status is FillStatus.WARNING),
        fallback_segments=sum(1 for segment in segments if segment.source == "fallback"),
    )
