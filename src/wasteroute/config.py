"""Application configuration and settings management."""

from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="WASTEROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Waste Collection Route Planner API"
    api_prefix: str = "/api"
    osrm_base_url: Optional[str] = Field(
        default="https://router.project-osrm.org",
        description="Base URL for the OSRM routing service. Empty disables road enrichment.",
    )
    osrm_profile: Literal["driving", "driving-hgv"] = Field(
        default="driving",
        description="OSRM profile to use when requesting road geometry.",
    )
    osrm_timeout_seconds: float = Field(default=10.0, gt=0.0)
    osrm_max_retries: int = Field(default=0, ge=0)
    osrm_backoff_seconds: float = Field(default=0.5, ge=0.0)
    enrichment_pause_seconds: float = Field(
        default=0.1,
        ge=0.0,
        description="Pause between consecutive OSRM route requests.",
    )
    enrichment_budget_seconds: float = Field(
        default=20.0,
        gt=0.0,
        description="Wall-clock budget for road enrichment; later legs fall back to straight lines.",
    )
    fallback_speed_kmh: float = Field(
        default=30.0,
        gt=0.0,
        description="Average speed used to estimate durations of straight-line segments.",
    )

    # Heuristic weights; empirically chosen, not tuned.
    urgency_multiplier: float = Field(default=2.5, gt=0.0)
    distance_penalty: float = Field(default=0.5, ge=0.0)
    score_epsilon: float = Field(default=0.1, gt=0.0)
    priority_penalty_weight: float = Field(default=0.1, ge=0.0)

    two_opt_max_iterations: int = Field(default=100, ge=0)
    annealing_initial_temperature: float = Field(default=50.0, gt=0.0)
    annealing_cooling_rate: float = Field(default=0.92, gt=0.0, lt=1.0)
    annealing_min_temperature: float = Field(default=0.1, gt=0.0)
    annealing_max_iterations: int = Field(default=200, ge=0)
    annealing_min_route_length: int = Field(default=4, ge=3)

    max_points_per_request: int = Field(default=200, ge=1)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("osrm_base_url", mode="before")
    @classmethod
    def _strip_base_url(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip().rstrip("/")
        return text or None

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            # Try comma-separated
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            # Single value
            if value.strip():
                return (value.strip(),)
        # Return empty tuple if value is None or empty
        return tuple()


settings = Settings()
