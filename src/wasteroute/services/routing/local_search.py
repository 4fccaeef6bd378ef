"""2-opt local search over a tour with a fixed first stop."""

from __future__ import annotations

import logging
from typing import Sequence

from ...models.domain import ServicePoint
from .cost import HeuristicWeights, route_cost

DEFAULT_MAX_ITERATIONS = 100

logger = logging.getLogger(__name__)


def reverse_segment(tour: Sequence[ServicePoint], i: int, j: int) -> list[ServicePoint]:
    """Return a copy of ``tour`` with positions ``i..j`` (inclusive) reversed."""
    return [*tour[:i], *reversed(tour[i : j + 1]), *tour[j + 1 :]]


def two_opt(
    tour: Sequence[ServicePoint],
    weights: HeuristicWeights | None = None,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> list[ServicePoint]:
    """Apply first-improvement 2-opt moves until none helps or the cap is hit."""
    best_route = list(tour)
    if len(best_route) <= 2:
        return best_route

    best_cost = route_cost(best_route, weights)
    n = len(best_route)
    iterations = 0
    improved = True

    while improved and iterations < max_iterations:
        improved = False
        iterations += 1

        for i in range(1, n - 1):
            for j in range(i + 1, n):
                candidate = reverse_segment(best_route, i, j)
                candidate_cost = route_cost(candidate, weights)
                if candidate_cost < best_cost:
                    best_route = candidate
                    best_cost = candidate_cost
                    improved = True
                    break
            if improved:
                break

    logger.debug(f"2-opt finished after {iterations} iterations, cost={best_cost:.4f}")
    return best_route
