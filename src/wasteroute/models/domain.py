"""Domain models for collection points."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

WARNING_FILL_THRESHOLD = 60.0
CRITICAL_FILL_THRESHOLD = 80.0


class FillStatus(str, Enum):
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


def classify_fill(fill_percentage: float) -> FillStatus:
    """Map a fill level to its status band."""

    if fill_percentage >= CRITICAL_FILL_THRESHOLD:
        return FillStatus.CRITICAL
    if fill_percentage >= WARNING_FILL_THRESHOLD:
        return FillStatus.WARNING
    return FillStatus.NORMAL


@dataclass(slots=True, frozen=True)
class HistoryEntry:
    timestamp: int
    fill_percentage: float


@dataclass(slots=True, frozen=True)
class ServicePoint:
    """A waste bin to be visited, with its latest fill reading."""

    bin_id: str
    name: str
    location: Optional[str]
    latitude: float
    longitude: float
    fill_percentage: float
    capacity: float = 100.0
    last_updated: Optional[int] = None
    history: tuple[HistoryEntry, ...] = field(default=(), compare=False)

    @property
    def status(self) -> FillStatus:
        return classify_fill(self.fill_percentage)

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)
