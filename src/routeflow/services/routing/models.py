"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from ...config import settings
from ...models.domain import Coordinate, Stop


@dataclass(frozen=True, slots=True)
class EtaOptions:
    """Speed and dwell used for ETAs. Defaults are read from ``settings`` at import time."""

    average_speed_meters_per_second: float = settings.average_speed_meters_per_second
    dwell_seconds: float = settings.dwell_seconds


@dataclass(slots=True)
class ImprovementResult:
    tour: List[Stop]
    total_distance_m: float
    passes: int
    swaps: int
    converged: bool


@dataclass(slots=True)
class OptimizationResult:
    stops: List[Stop]
    start: Coordinate
    start_time: datetime
    total_distance_m: float
    total_duration_s: float
    original_distance_m: float
    distance_saved_m: float
    time_saved_s: float
    leg_distances_m: List[float] = field(default_factory=list)
    passes: int = 0
    swaps: int = 0
    converged: bool = True
