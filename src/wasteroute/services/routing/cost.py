"""Tour cost model: travelled distance plus a penalty for visiting full bins late."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ...config import settings
from ...models.domain import ServicePoint
from ..geospatial import haversine_km


@dataclass(slots=True, frozen=True)
class HeuristicWeights:
    urgency_multiplier: float = 2.5
    distance_penalty: float = 0.5
    score_epsilon: float = 0.1
    priority_penalty_weight: float = 0.1

    @classmethod
    def from_settings(cls) -> "HeuristicWeights":
        return cls(
            urgency_multiplier=settings.urgency_multiplier,
            distance_penalty=settings.distance_penalty,
            score_epsilon=settings.score_epsilon,
            priority_penalty_weight=settings.priority_penalty_weight,
        )


DEFAULT_WEIGHTS = HeuristicWeights()


def point_distance_km(a: ServicePoint, b: ServicePoint) -> float:
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def route_distance_km(tour: Sequence[ServicePoint]) -> float:
    return sum(point_distance_km(tour[i - 1], tour[i]) for i in range(1, len(tour)))


def route_cost(tour: Sequence[ServicePoint], weights: HeuristicWeights | None = None) -> float:
    """Score an ordered tour; lower is better.

    Each stop contributes ``(fill / 100) * position`` to the priority penalty,
    so full bins pushed towards the end of the tour cost more.
    """
    if len(tour) <= 1:
        return 0.0
    weights = weights or DEFAULT_WEIGHTS

    priority_penalty = sum(
        (point.fill_percentage / 100.0) * (position + 1) for position, point in enumerate(tour)
    )
    return route_distance_km(tour) + priority_penalty * weights.priority_penalty_weight
