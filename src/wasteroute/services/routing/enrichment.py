"""Attach road geometry and timing to each leg of a tour."""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol, Sequence

from ...config import settings
from ...models.domain import ServicePoint
from ..geospatial import haversine_km
from .models import LatLon, RouteSegment

logger = logging.getLogger(__name__)


class SegmentProvider(Protocol):
    def route_segment(self, origin: LatLon, destination: LatLon) -> RouteSegment: ...


def fallback_segment(
    origin: ServicePoint,
    destination: ServicePoint,
    speed_kmh: float | None = None,
) -> RouteSegment:
    """Straight-line segment used whenever road data is unavailable."""
    speed = speed_kmh or settings.fallback_speed_kmh
    distance = haversine_km(origin.latitude, origin.longitude, destination.latitude, destination.longitude)
    return RouteSegment(
        distance_km=distance,
        duration_min=(distance / speed) * 60.0,
        geometry=[origin.coordinates, destination.coordinates],
        instructions=[],
        source="fallback",
    )


def enrich_tour(
    tour: Sequence[ServicePoint],
    client: SegmentProvider | None,
    *,
    pause_seconds: float | None = None,
    sleep: Callable[[float], None] | None = None,
    fallback_speed_kmh: float | None = None,
    budget_seconds: float | None = None,
    clock: Callable[[], float] | None = None,
) -> list[RouteSegment]:
    """Return one segment per consecutive pair of stops, in tour order.

    Legs are requested one at a time with a short pause in between. A failed
    lookup only affects its own leg, which falls back to a straight line.
    With no client every leg falls back and no pause is taken.

    Once ``budget_seconds`` of wall-clock time has elapsed, no further
    requests are made and every remaining leg falls back. A leg already in
    flight can overrun the budget by at most the client's own timeout.
    """
    if len(tour) < 2:
        return []
    pause = settings.enrichment_pause_seconds if pause_seconds is None else pause_seconds
    budget = settings.enrichment_budget_seconds if budget_seconds is None else budget_seconds
    sleep = sleep or time.sleep
    clock = clock or time.monotonic
    deadline = clock() + budget

    segments: list[RouteSegment] = []
    fallbacks = 0
    exhausted = client is None
    for index in range(len(tour) - 1):
        origin, destination = tour[index], tour[index + 1]
        if not exhausted and clock() >= deadline:
            logger.warning(
                f"Enrichment budget of {budget:.1f}s spent; "
                f"{len(tour) - 1 - index} remaining segments use straight lines"
            )
            exhausted = True
        if exhausted:
            segments.append(fallback_segment(origin, destination, fallback_speed_kmh))
            fallbacks += 1
            continue

        if index > 0 and pause > 0:
            sleep(pause)
        try:
            segment = client.route_segment(origin.coordinates, destination.coordinates)
            logger.debug(
                f"Segment {index} {origin.bin_id} -> {destination.bin_id}: "
                f"{segment.distance_km:.2f} km, {segment.duration_min:.1f} min"
            )
        except Exception as exc:
            logger.warning(
                f"Road route for segment {index} ({origin.bin_id} -> {destination.bin_id}) "
                f"unavailable, using straight line: {exc}"
            )
            segment = fallback_segment(origin, destination, fallback_speed_kmh)
            fallbacks += 1
        segments.append(segment)

    logger.info(f"Enriched {len(segments)} segments ({fallbacks} straight-line fallbacks)")
    return segments
