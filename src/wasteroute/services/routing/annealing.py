"""Simulated annealing refinement using random pairwise swaps."""

from __future__ import annotations

import logging
import math
import random
from typing import Sequence

from ...models.domain import ServicePoint
from .cost import HeuristicWeights, route_cost

DEFAULT_INITIAL_TEMPERATURE = 100.0
DEFAULT_COOLING_RATE = 0.95
DEFAULT_MIN_TEMPERATURE = 0.1
DEFAULT_MAX_ITERATIONS = 200

logger = logging.getLogger(__name__)


def _acceptance_probability(delta: float, temperature: float) -> float:
    return math.exp(-delta / temperature)


def simulated_annealing(
    tour: Sequence[ServicePoint],
    *,
    initial_temperature: float = DEFAULT_INITIAL_TEMPERATURE,
    cooling_rate: float = DEFAULT_COOLING_RATE,
    min_temperature: float = DEFAULT_MIN_TEMPERATURE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    rng: random.Random | None = None,
    weights: HeuristicWeights | None = None,
) -> list[ServicePoint]:
    """Refine a tour by annealing and return the best tour seen.

    The first stop is never swapped. Worse neighbours are accepted with
    probability ``exp(-delta / T)`` to escape local optima, but the returned
    tour always costs no more than the input.

    Args:
        tour: Starting tour.
        initial_temperature: Temperature at the first iteration.
        cooling_rate: Factor applied to the temperature after every iteration.
        min_temperature: The walk stops once the temperature drops to this value.
        max_iterations: Hard cap on iterations.
        rng: Random source; pass a seeded ``random.Random`` for reproducible runs.
        weights: Cost weights.
    """
    current_route = list(tour)
    n = len(current_route)
    if n <= 2:
        return current_route

    rng = rng or random.Random()
    current_cost = route_cost(current_route, weights)
    best_route, best_cost = list(current_route), current_cost
    temperature = initial_temperature
    iterations = 0
    accepted = 0

    while temperature > min_temperature and iterations < max_iterations:
        iterations += 1

        i = 1 + rng.randrange(n - 1)
        j = i + rng.randrange(n - i)
        candidate = list(current_route)
        candidate[i], candidate[j] = candidate[j], candidate[i]

        candidate_cost = route_cost(candidate, weights)
        delta = candidate_cost - current_cost

        if delta < 0 or rng.random() < _acceptance_probability(delta, temperature):
            current_route, current_cost = candidate, candidate_cost
            accepted += 1
            if current_cost < best_cost:
                best_route, best_cost = current_route, current_cost

        temperature *= cooling_rate

    logger.debug(
        f"Annealing ran {iterations} iterations ({accepted} accepted), best cost={best_cost:.4f}"
    )
    return best_route
