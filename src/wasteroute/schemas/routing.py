"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class HistoryEntryModel(BaseModel):
    timestamp: int
    fill_percentage: float = Field(..., ge=0, le=100)


class ServicePointModel(BaseModel):
    bin_id: str = Field(..., min_length=1)
    name: str
    location: Optional[str] = None
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)
    fill_percentage: float = Field(..., ge=0, le=100, allow_inf_nan=False)
    capacity: float = Field(default=100.0, gt=0)
    last_updated: Optional[int] = None
    history: List[HistoryEntryModel] = Field(default_factory=list)


class RoutePlanRequest(BaseModel):
    points: List[ServicePointModel] = Field(default_factory=list)
    enrich: bool = Field(
        default=True,
        description="Fetch road geometry from OSRM. When False every leg is a straight line.",
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for the annealing phase, for reproducible orderings.",
    )


class SimulationRequest(BaseModel):
    count: int = Field(default=5, ge=1, le=50)
    location_ids: List[str] = Field(default_factory=list)
    enrich: bool = True
    seed: Optional[int] = None


class RouteStopModel(BaseModel):
    sequence: int
    bin_id: str
    name: str
    location: Optional[str]
    latitude: float
    longitude: float
    fill_percentage: float
    status: str


class RouteSegmentModel(BaseModel):
    distance_km: float
    duration_min: float
    geometry: List[List[float]]
    instructions: List[str]
    source: str


class NavigationStepModel(BaseModel):
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
    instructions: List[str]


class RouteSummaryModel(BaseModel):
    stop_count: int
    total_distance_km: float
    total_duration_min: float
    total_time: str
    critical_count: int
    warning_count: int
    fallback_segments: int


class RoutePlanResponse(BaseModel):
    metadata: dict
    stops: List[RouteStopModel]
    segments: List[RouteSegmentModel]
    navigation: List[NavigationStepModel]
    summary: RouteSummaryModel


class DemoLocationModel(BaseModel):
    location_id: str
    name: str
    label: str
    latitude: float
    longitude: float
