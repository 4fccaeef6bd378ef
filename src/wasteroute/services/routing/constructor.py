"""Priority-weighted nearest-neighbour construction of an initial tour."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import ServicePoint
from .cost import DEFAULT_WEIGHTS, HeuristicWeights, point_distance_km


def priority_score(
    current: ServicePoint,
    candidate: ServicePoint,
    weights: HeuristicWeights | None = None,
) -> float:
    weights = weights or DEFAULT_WEIGHTS
    distance = point_distance_km(current, candidate)
    urgency = candidate.fill_percentage * weights.urgency_multiplier
    return urgency / (distance * weights.distance_penalty + weights.score_epsilon)


def construct_priority_route(
    points: Sequence[ServicePoint],
    weights: HeuristicWeights | None = None,
) -> list[ServicePoint]:
    """Build a tour starting at the fullest bin and greedily chasing the best score.

    Urgency dominates the score while the distance term in the denominator
    favours nearby bins. Ties keep the earliest point in input order.
    """
    if not points:
        raise ValueError("At least one point is required to construct a route.")
    weights = weights or DEFAULT_WEIGHTS

    unvisited = list(points)
    start = max(unvisited, key=lambda point: point.fill_percentage)
    unvisited.remove(start)
    route = [start]

    current = start
    while unvisited:
        best_index = 0
        best_score = float("-inf")
        for index, candidate in enumerate(unvisited):
            score = priority_score(current, candidate, weights)
            if score > best_score:
                best_score = score
                best_index = index
        current = unvisited.pop(best_index)
        route.append(current)

    return route
