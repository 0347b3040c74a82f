"""Arrival-time estimation along an ordered tour."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Sequence

from ...models.domain import Coordinate, Stop
from ..geospatial import distance
from .models import EtaOptions


def calculate_eta(
    stop: Stop,
    previous: Optional[Coordinate],
    start_time: datetime,
    options: EtaOptions | None = None,
) -> datetime:
    """Estimate the arrival time at ``stop`` when leaving ``previous`` at ``start_time``.

    The estimate covers the drive at the average speed plus the dwell time at
    the stop. Without a previous location the stop is reached at ``start_time``.
    """

    if previous is None:
        return start_time
    options = options or EtaOptions()
    travel_seconds = distance(previous, stop.coordinate) / options.average_speed_meters_per_second
    return start_time + timedelta(seconds=travel_seconds + options.dwell_seconds)


def propagate_etas(
    tour: Sequence[Stop],
    start: Coordinate,
    start_time: datetime,
    options: EtaOptions | None = None,
) -> Sequence[Stop]:
    """Write ``estimated_arrival_time`` on each stop of ``tour`` in order.

    Each leg departs at the previous stop's estimate, so estimates strictly
    increase whenever the dwell time is positive. Returns ``tour`` itself.
    """

    options = options or EtaOptions()
    current_time = start_time
    current_location = start
    for stop in tour:
        stop.estimated_arrival_time = calculate_eta(stop, current_location, current_time, options)
        current_time = stop.estimated_arrival_time
        current_location = stop.coordinate
    return tour
