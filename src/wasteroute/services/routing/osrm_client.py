"""HTTP client for interacting with OSRM services."""

from __future__ import annotations

import logging
import time
from typing import Sequence

import httpx

from ...config import settings
from .models import LatLon, RouteSegment

logger = logging.getLogger(__name__)


class OSRMRouteError(ValueError):
    """OSRM answered, but without a usable route."""


class OSRMClient:
    def __init__(
        self,
        base_url: str | None = None,
        profile: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.osrm_base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("OSRM base URL is not configured.")
        self.profile = profile or settings.osrm_profile
        self.timeout = timeout if timeout is not None else settings.osrm_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.osrm_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.osrm_backoff_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 5.0)),
            transport=self._transport,
        )

    def route(self, coordinates: Sequence[LatLon]) -> dict:
        """Get the driving route through ``coordinates`` using the OSRM route endpoint.

        Requests the full overview geometry as GeoJSON and turn-by-turn steps.

        Args:
            coordinates: Sequence of (lat, lon) tuples for the route waypoints

        Returns:
            The decoded OSRM response, guaranteed to have ``code == "Ok"`` and
            at least one entry in ``routes``.
        """
        if len(coordinates) < 2:
            raise ValueError("At least two coordinates are required for OSRM route.")

        # OSRM route endpoint expects coordinates as "lon,lat;lon,lat;..."
        coordinate_str = ";".join(f"{lon},{lat}" for lat, lon in coordinates)

        params = {
            "overview": "full",
            "geometries": "geojson",
            "steps": "true",
        }
        url = f"{self.base_url}/route/v1/{self.profile}/{coordinate_str}"

        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(url, params=params)
                    response.raise_for_status()
                    data = response.json()

                    if data.get("code") != "Ok":
                        error_msg = data.get("message", data.get("code", "Unknown OSRM route error"))
                        raise OSRMRouteError(f"OSRM route request failed: {error_msg}")
                    if not data.get("routes"):
                        raise OSRMRouteError("OSRM route response contains no routes.")

                    return data
                except OSRMRouteError:
                    # Not retried
                    raise
                except httpx.HTTPStatusError as e:
                    # 4xx answers are permanent
                    if e.response.status_code < 500:
                        raise
                    attempt += 1
                    if attempt > self.max_retries:
                        raise
                    time.sleep(self.backoff_seconds * attempt)
                except httpx.TimeoutException as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        logger.warning(f"OSRM route request timed out after {attempt} attempts: {e}")
                        raise
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"OSRM route timeout, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    time.sleep(wait_time)
                except (httpx.NetworkError, OSError) as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise ConnectionError(
                            f"Failed to connect to OSRM service at {self.base_url}: {e}"
                        ) from e
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"OSRM network error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries}): {e}")
                    time.sleep(wait_time)
                except (httpx.HTTPError, ValueError):
                    # Other transport errors and undecodable JSON bodies
                    attempt += 1
                    if attempt > self.max_retries:
                        raise
                    time.sleep(self.backoff_seconds * attempt)
        finally:
            client.close()

    def route_segment(self, origin: LatLon, destination: LatLon) -> RouteSegment:
        """Fetch the road path between two (lat, lon) points as a ``RouteSegment``."""
        data = self.route([origin, destination])
        return parse_route_segment(data)


def parse_route_segment(data: dict) -> RouteSegment:
    """Map the first route of an OSRM response to a ``RouteSegment``.

    OSRM reports metres, seconds and [lon, lat] pairs; segments use
    kilometres, minutes and (lat, lon) tuples.
    """
    try:
        route = data["routes"][0]
        distance_km = float(route["distance"]) / 1000.0
        duration_min = float(route["duration"]) / 60.0
        geometry = [(float(lat), float(lon)) for lon, lat, *_ in route["geometry"]["coordinates"]]

        instructions: list[str] = []
        for leg in route.get("legs") or []:
            for step in leg.get("steps") or []:
                instruction = (step.get("maneuver") or {}).get("instruction")
                if instruction:
                    instructions.append(str(instruction))
    except (KeyError, IndexError, TypeError, ValueError, AttributeError) as exc:
        raise OSRMRouteError(f"Malformed OSRM route payload: {exc!r}") from exc

    if len(geometry) < 2:
        raise OSRMRouteError("OSRM route geometry has fewer than two vertices.")

    return RouteSegment(
        distance_km=distance_km,
        duration_min=duration_min,
        geometry=geometry,
        instructions=instructions,
        source="osrm",
    )


def check_health(base_url: str | None = None) -> bool:
    """Check OSRM service health by requesting a short route.

    Public OSRM endpoints may not have a /health endpoint, so we test
    connectivity with a minimal two-point route request.
    """
    base = (base_url or settings.osrm_base_url or "").rstrip("/")
    if not base:
        return False
    try:
        # Two points in central Pune
        test_coords = "73.8567,18.5204;73.8446,18.5304"
        url = f"{base}/route/v1/{settings.osrm_profile}/{test_coords}"
        response = httpx.get(url, params={"overview": "false"}, timeout=5.0)
        response.raise_for_status()
        return response.json().get("code") == "Ok"
    except (httpx.HTTPError, ValueError):
        return False
