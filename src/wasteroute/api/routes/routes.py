"""Routing endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from ...schemas.routing import DemoLocationModel, RoutePlanRequest, RoutePlanResponse, SimulationRequest
from ...services.routing.service import optimize_route, simulate_route
from ...services.simulation import PUNE_LOCATIONS

router = APIRouter(prefix="/routes", tags=["routes"])

logger = logging.getLogger(__name__)


@router.post("/optimize", response_model=RoutePlanResponse, status_code=status.HTTP_200_OK)
def optimize(payload: RoutePlanRequest) -> RoutePlanResponse:
    try:
        return optimize_route(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}"
        ) from exc


@router.post("/simulate", response_model=RoutePlanResponse, status_code=status.HTTP_200_OK)
def simulate(payload: SimulationRequest) -> RoutePlanResponse:
    """Optimize a route over randomly generated demo bins."""
    try:
        return simulate_route(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error simulating route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to simulate route: {str(exc)}"
        ) from exc


@router.get("/locations", response_model=List[DemoLocationModel], status_code=status.HTTP_200_OK)
def list_locations() -> List[DemoLocationModel]:
    return [
        DemoLocationModel(
            location_id=location.location_id,
            name=location.name,
            label=location.label,
            latitude=location.latitude,
            longitude=location.longitude,
        )
        for location in PUNE_LOCATIONS
    ]
