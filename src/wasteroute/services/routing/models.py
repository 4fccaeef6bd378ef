"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

from ...models.domain import ServicePoint

LatLon = tuple[float, float]
SegmentSource = Literal["osrm", "fallback"]


@dataclass(slots=True)
class RouteSegment:
    distance_km: float
    duration_min: float
    geometry: List[LatLon]
    instructions: List[str] = field(default_factory=list)
    source: SegmentSource = "osrm"


@dataclass(slots=True)
class OptimizationResult:
    tour: List[ServicePoint]
    phases: List[str]
    constructor_cost: float
    two_opt_cost: float
    final_cost: float
