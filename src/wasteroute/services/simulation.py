"""Demo collection points around Pune for route simulations."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Sequence

from ..models.domain import HistoryEntry, ServicePoint

COORDINATE_JITTER_DEGREES = 0.01
DEMO_CAPACITY_LITRES = 100.0


@dataclass(slots=True, frozen=True)
class DemoLocation:
    location_id: str
    name: str
    label: str
    latitude: float
    longitude: float


PUNE_LOCATIONS: tuple[DemoLocation, ...] = (
    DemoLocation("fc-road", "FC Road", "FC Road, Pune", 18.5204, 73.8567),
    DemoLocation("shivajinagar", "Shivajinagar", "Shivajinagar, Pune", 18.5304, 73.8446),
    DemoLocation("koregaon-park", "Koregaon Park", "Koregaon Park, Pune", 18.5362, 73.8958),
    DemoLocation("kothrud", "Kothrud", "Kothrud, Pune", 18.5074, 73.8077),
    DemoLocation("baner", "Baner", "Baner, Pune", 18.5598, 73.7775),
    DemoLocation("hadapsar", "Hadapsar", "Hadapsar, Pune", 18.5089, 73.9260),
    DemoLocation("wakad", "Wakad", "Wakad, Pune", 18.5975, 73.7649),
    DemoLocation("viman-nagar", "Viman Nagar", "Viman Nagar, Pune", 18.5679, 73.9143),
    DemoLocation("hinjewadi", "Hinjewadi", "Hinjewadi, Pune", 18.5916, 73.7309),
    DemoLocation("aundh", "Aundh", "Aundh, Pune", 18.5642, 73.8069),
)

_LOCATIONS_BY_ID = {location.location_id: location for location in PUNE_LOCATIONS}


def resolve_locations(location_ids: Sequence[str] | None, count: int) -> list[DemoLocation]:
    """Known locations for ``location_ids``; unknown ids are skipped.

    With no usable ids the first ``count`` catalogue entries are used.
    """
    selected = [_LOCATIONS_BY_ID[lid] for lid in (location_ids or []) if lid in _LOCATIONS_BY_ID]
    return selected or list(PUNE_LOCATIONS[:count])


def generate_demo_bins(
    count: int,
    location_ids: Sequence[str] | None = None,
    *,
    rng: random.Random | None = None,
    now_ms: int | None = None,
) -> list[ServicePoint]:
    """Create ``count`` bins with random fill levels, cycling through the chosen locations."""
    if count < 0:
        raise ValueError("Bin count must be non-negative.")
    rng = rng or random.Random()
    now = now_ms if now_ms is not None else int(time.time() * 1000)
    locations = resolve_locations(location_ids, count)
    if not locations:
        return []

    bins: list[ServicePoint] = []
    for i in range(count):
        location = locations[i % len(locations)]
        fill = rng.random() * 100
        bins.append(
            ServicePoint(
                bin_id=f"dummy-{i + 1}",
                name=f"{location.name} Dustbin {i + 1}",
                location=location.label,
                latitude=location.latitude + (rng.random() - 0.5) * COORDINATE_JITTER_DEGREES,
                longitude=location.longitude + (rng.random() - 0.5) * COORDINATE_JITTER_DEGREES,
                fill_percentage=round(fill, 1),
                capacity=DEMO_CAPACITY_LITRES,
                last_updated=now,
                history=(
                    HistoryEntry(timestamp=now - 3_600_000, fill_percentage=max(0.0, fill - 10)),
                    HistoryEntry(timestamp=now - 1_800_000, fill_percentage=max(0.0, fill - 5)),
                    HistoryEntry(timestamp=now, fill_percentage=fill),
                ),
            )
        )
    return bins
