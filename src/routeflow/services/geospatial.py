"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from ..models.domain import Coordinate, Stop

EARTH_RADIUS_M = 6371000.0


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance in meters between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # rounding can push a just past 1.0 for near-antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in meters between two coordinates."""

    return haversine_m(a.latitude, a.longitude, b.latitude, b.longitude)


def total_distance(stops: Sequence[Stop], start: Optional[Coordinate]) -> float:
    """Length in meters of the open path start -> stops[0] -> ... -> stops[-1].

    Without a start the path begins at the first stop.
    """

    if not stops:
        return 0.0

    total = 0.0
    previous = start if start is not None else stops[0].coordinate
    for stop in stops:
        total += distance(previous, stop.coordinate)
        previous = stop.coordinate
    return total
