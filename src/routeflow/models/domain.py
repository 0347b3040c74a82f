"""Domain models for delivery stops and routes."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from ..services.routing.models import OptimizationResult


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    @property
    def is_valid(self) -> bool:
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0


class DeliveryStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    DELIVERED = "Delivered"
    FAILED = "Failed"
    SKIPPED = "Skipped"


@dataclass(slots=True)
class Stop:
    """A geocoded delivery location.

    ``sequence_number`` and ``estimated_arrival_time`` are only meaningful on
    stops returned by the route optimizer.
    """

    address: str
    coordinate: Coordinate
    id: str = field(default_factory=_new_id)
    notes: str = ""
    status: DeliveryStatus = DeliveryStatus.PENDING
    sequence_number: int = 0
    estimated_arrival_time: Optional[datetime] = None
    actual_arrival_time: Optional[datetime] = None
    completion_time: Optional[datetime] = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def is_completed(self) -> bool:
        return self.status is DeliveryStatus.DELIVERED

    def update_status(self, status: DeliveryStatus) -> None:
        self.status = status
        self.updated_at = _utcnow()
        if status is DeliveryStatus.DELIVERED:
            self.completion_time = self.updated_at


@dataclass(slots=True)
class Route:
    """A named collection of stops plus the summary of its last optimization."""

    name: str
    stops: List[Stop] = field(default_factory=list)
    id: str = field(default_factory=_new_id)
    is_optimized: bool = False
    total_distance: float = 0.0  # meters
    estimated_duration: float = 0.0  # seconds
    start_location: Optional[Coordinate] = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def completed_stops(self) -> int:
        return sum(1 for stop in self.stops if stop.status is DeliveryStatus.DELIVERED)

    @property
    def total_stops(self) -> int:
        return len(self.stops)

    @property
    def progress_percentage(self) -> float:
        if not self.stops:
            return 0.0
        return self.completed_stops / self.total_stops

    @property
    def next_stop(self) -> Optional[Stop]:
        for stop in self.stops:
            if stop.status in (DeliveryStatus.PENDING, DeliveryStatus.IN_PROGRESS):
                return stop
        return None

    @property
    def formatted_distance(self) -> str:
        return f"{self.total_distance / 1000.0:.1f} km"

    @property
    def formatted_duration(self) -> str:
        return format_duration(self.estimated_duration)

    def apply_optimization(self, result: "OptimizationResult") -> None:
        """Replace the stop list wholesale with an optimizer result."""
        self.stops = list(result.stops)
        self.is_optimized = True
        self.total_distance = result.total_distance_m
        self.estimated_duration = result.total_duration_s
        self.start_location = result.start
        self.updated_at = _utcnow()


def format_duration(seconds: float) -> str:
    hours = int(seconds) // 3600
    minutes = (int(seconds) % 3600) // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
