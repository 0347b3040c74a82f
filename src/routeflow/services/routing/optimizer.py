"""Route optimization orchestration: nearest neighbor, 2-opt, then ETAs."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ...models.domain import Coordinate, Stop
from ..geospatial import distance, total_distance
from .eta import propagate_etas
from .models import EtaOptions, OptimizationResult
from .nearest_neighbor import construct
from .two_opt import two_opt

logger = logging.getLogger(__name__)


def _leg_distances(tour: Sequence[Stop], start: Coordinate) -> list[float]:
    legs: list[float] = []
    previous = start
    for stop in tour:
        legs.append(distance(previous, stop.coordinate))
        previous = stop.coordinate
    return legs


def optimize_route(
    stops: Sequence[Stop],
    start: Coordinate,
    start_time: datetime,
    *,
    options: EtaOptions | None = None,
    max_passes: Optional[int] = None,
) -> OptimizationResult:
    """Order ``stops`` for a single vehicle leaving ``start`` at ``start_time``.

    The caller's stops are not modified: the result holds copies carrying
    ``sequence_number`` 1..n in visiting order and an estimated arrival time.
    ``max_passes`` caps the 2-opt sweeps; ``None`` runs to convergence.
    """

    options = options or EtaOptions()

    working = [replace(stop) for stop in stops]
    original_distance = total_distance(working, start)
    passes = 0
    swaps = 0
    converged = True

    if len(working) <= 1:
        tour = working
    else:
        initial = construct(working, start)
        initial_distance = total_distance(initial, start)
        improvement = two_opt(initial, start, max_passes=max_passes)
        tour = improvement.tour
        passes = improvement.passes
        swaps = improvement.swaps
        converged = improvement.converged
        logger.info(
            "Optimized %d stops: input %.1f m, nearest neighbor %.1f m, 2-opt %.1f m (%d passes, %d swaps)",
            len(tour),
            original_distance,
            initial_distance,
            improvement.total_distance_m,
            passes,
            swaps,
        )

    for sequence, stop in enumerate(tour, start=1):
        stop.sequence_number = sequence
    propagate_etas(tour, start, start_time, options)

    route_distance = total_distance(tour, start)
    total_duration = 0.0
    if tour:
        total_duration = (tour[-1].estimated_arrival_time - start_time).total_seconds()
    distance_saved = max(0.0, original_distance - route_distance)

    return OptimizationResult(
        stops=tour,
        start=start,
        start_time=start_time,
        total_distance_m=route_distance,
        total_duration_s=total_duration,
        original_distance_m=original_distance,
        distance_saved_m=distance_saved,
        time_saved_s=distance_saved / options.average_speed_meters_per_second,
        leg_distances_m=_leg_distances(tour, start),
        passes=passes,
        swaps=swaps,
        converged=converged,
    )


async def optimize_route_async(
    stops: Sequence[Stop],
    start: Coordinate,
    start_time: datetime,
    *,
    options: EtaOptions | None = None,
    max_passes: Optional[int] = None,
) -> OptimizationResult:
    """Run :func:`optimize_route` on a worker thread.

    The search cannot be interrupted once started; callers that lose interest
    should simply discard the result.
    """

    return await asyncio.to_thread(
        optimize_route,
        stops,
        start,
        start_time,
        options=options,
        max_passes=max_passes,
    )
