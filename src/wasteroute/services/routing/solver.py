"""Multi-phase tour optimizer: construction, 2-opt and simulated annealing."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Sequence

from ...config import settings
from ...models.domain import ServicePoint
from .annealing import simulated_annealing
from .constructor import construct_priority_route
from .cost import HeuristicWeights, route_cost
from .local_search import two_opt
from .models import OptimizationResult

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class OptimizerConfig:
    weights: HeuristicWeights = field(default_factory=HeuristicWeights.from_settings)
    two_opt_max_iterations: int = field(default_factory=lambda: settings.two_opt_max_iterations)
    annealing_initial_temperature: float = field(
        default_factory=lambda: settings.annealing_initial_temperature
    )
    annealing_cooling_rate: float = field(default_factory=lambda: settings.annealing_cooling_rate)
    annealing_min_temperature: float = field(
        default_factory=lambda: settings.annealing_min_temperature
    )
    annealing_max_iterations: int = field(default_factory=lambda: settings.annealing_max_iterations)
    annealing_min_route_length: int = field(
        default_factory=lambda: settings.annealing_min_route_length
    )


def optimize_tour(
    points: Sequence[ServicePoint],
    *,
    config: OptimizerConfig | None = None,
    rng: random.Random | None = None,
) -> OptimizationResult:
    """Order collection points so that urgent bins come early and travel stays short.

    Empty and single-point inputs are returned as-is without running any phase.
    Annealing only runs for tours of ``annealing_min_route_length`` stops or more.
    """
    if not points:
        return OptimizationResult(tour=[], phases=[], constructor_cost=0.0, two_opt_cost=0.0, final_cost=0.0)
    if len(points) == 1:
        return OptimizationResult(
            tour=[points[0]], phases=[], constructor_cost=0.0, two_opt_cost=0.0, final_cost=0.0
        )

    config = config or OptimizerConfig()
    weights = config.weights

    route = construct_priority_route(points, weights)
    constructor_cost = route_cost(route, weights)
    phases = ["priority_nearest_neighbor"]

    route = two_opt(route, weights, max_iterations=config.two_opt_max_iterations)
    two_opt_cost = route_cost(route, weights)
    phases.append("two_opt")

    if len(route) >= config.annealing_min_route_length:
        route = simulated_annealing(
            route,
            initial_temperature=config.annealing_initial_temperature,
            cooling_rate=config.annealing_cooling_rate,
            min_temperature=config.annealing_min_temperature,
            max_iterations=config.annealing_max_iterations,
            rng=rng,
            weights=weights,
        )
        phases.append("simulated_annealing")

    final_cost = route_cost(route, weights)
    logger.info(
        f"Optimized {len(route)} stops: construction={constructor_cost:.3f}, "
        f"2-opt={two_opt_cost:.3f}, final={final_cost:.3f} (phases: {', '.join(phases)})"
    )
    return OptimizationResult(
        tour=route,
        phases=phases,
        constructor_cost=constructor_cost,
        two_opt_cost=two_opt_cost,
        final_cost=final_cost,
    )
