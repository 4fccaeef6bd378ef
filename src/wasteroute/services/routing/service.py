"""Routing orchestration service."""

from __future__ import annotations

import logging
import random
from dataclasses import asdict
from typing import Sequence

from ...config import settings
from ...models.domain import HistoryEntry, ServicePoint
from ...schemas.routing import (
    NavigationStepModel,
    RoutePlanRequest,
    RoutePlanResponse,
    RouteSegmentModel,
    RouteStopModel,
    RouteSummaryModel,
    ServicePointModel,
    SimulationRequest,
)
from ..navigation.projector import build_navigation_steps, summarize_route
from ..simulation import generate_demo_bins
from .enrichment import enrich_tour
from .models import OptimizationResult, RouteSegment
from .osrm_client import OSRMClient
from .solver import optimize_tour

logger = logging.getLogger(__name__)


def _to_service_point(model: ServicePointModel) -> ServicePoint:
    return ServicePoint(
        bin_id=model.bin_id.strip(),
        name=model.name,
        location=model.location,
        latitude=model.latitude,
        longitude=model.longitude,
        fill_percentage=model.fill_percentage,
        capacity=model.capacity,
        last_updated=model.last_updated,
        history=tuple(HistoryEntry(timestamp=h.timestamp, fill_percentage=h.fill_percentage) for h in model.history),
    )


def _validate_points(points: Sequence[ServicePoint]) -> None:
    if len(points) > settings.max_points_per_request:
        raise ValueError(
            f"Too many collection points ({len(points)}); the limit is {settings.max_points_per_request}."
        )
    seen: set[str] = set()
    duplicates: list[str] = []
    for point in points:
        if point.bin_id in seen and point.bin_id not in duplicates:
            duplicates.append(point.bin_id)
        seen.add(point.bin_id)
    if duplicates:
        raise ValueError(f"Duplicate bin ids in request: {', '.join(duplicates)}")


def _build_client(enrich: bool) -> OSRMClient | None:
    if not enrich:
        return None
    try:
        return OSRMClient()
    except ValueError as e:
        logger.warning(f"OSRM client unavailable ({e}); all segments will be straight lines.")
        return None


def _build_response(
    optimization: OptimizationResult,
    segments: list[RouteSegment],
    metadata: dict,
) -> RoutePlanResponse:
    tour = optimization.tour
    summary = summarize_route(tour, segments)
    metadata = {
        **metadata,
        "algorithm": "priority-weighted nearest neighbor + 2-opt + simulated annealing",
        "phases": list(optimization.phases),
        "constructor_cost": optimization.constructor_cost,
        "two_opt_cost": optimization.two_opt_cost,
        "final_cost": optimization.final_cost,
        "enriched": any(segment.source == "osrm" for segment in segments),
    }
    return RoutePlanResponse(
        metadata=metadata,
        stops=[
            RouteStopModel(
                sequence=sequence,
                bin_id=point.bin_id,
                name=point.name,
                location=point.location,
                latitude=point.latitude,
                longitude=point.longitude,
                fill_percentage=point.fill_percentage,
                status=point.status.value,
            )
            for sequence, point in enumerate(tour, start=1)
        ],
        segments=[
            RouteSegmentModel(
                distance_km=segment.distance_km,
                duration_min=segment.duration_min,
                geometry=[[lat, lon] for lat, lon in segment.geometry],
                instructions=list(segment.instructions),
                source=segment.source,
            )
            for segment in segments
        ],
        navigation=[NavigationStepModel(**asdict(step)) for step in build_navigation_steps(tour, segments)],
        summary=RouteSummaryModel(**asdict(summary)),
    )


def plan_collection_route(
    points: Sequence[ServicePoint],
    *,
    enrich: bool = True,
    seed: int | None = None,
    metadata: dict | None = None,
) -> RoutePlanResponse:
    """Optimize the visiting order, attach road segments and project navigation steps."""
    _validate_points(points)
    rng = random.Random(seed)
    optimization = optimize_tour(points, rng=rng)

    segments: list[RouteSegment] = []
    if len(optimization.tour) >= 2:
        segments = enrich_tour(optimization.tour, _build_client(enrich))

    run_metadata = {"point_count": len(points), "seed": seed, **(metadata or {})}
    return _build_response(optimization, segments, run_metadata)


def optimize_route(payload: RoutePlanRequest) -> RoutePlanResponse:
    points = [_to_service_point(model) for model in payload.points]
    return plan_collection_route(points, enrich=payload.enrich, seed=payload.seed)


def simulate_route(payload: SimulationRequest) -> RoutePlanResponse:
    points = generate_demo_bins(payload.count, payload.location_ids, rng=random.Random(payload.seed))
    logger.info(f"Generated {len(points)} demo bins for simulation")
    return plan_collection_route(
        points,
        enrich=payload.enrich,
        seed=payload.seed,
        metadata={"mode": "simulation", "location_ids": list(payload.location_ids)},
    )
