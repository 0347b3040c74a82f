"""2-opt local search refinement for open delivery tours.

The tour is an open path that begins at a fixed start coordinate and ends at
the last stop; there is no return leg. A move reverses the contiguous segment
``tour[i..j]``. Every candidate is scored by recomputing the full path length
from the start, and a candidate is adopted only when it is strictly shorter
than the current tour (first-improvement). Scanning then continues from the
adopted tour. Passes repeat until a complete sweep adopts nothing.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ...models.domain import Coordinate, Stop
from ..geospatial import total_distance
from .models import ImprovementResult

logger = logging.getLogger(__name__)


def two_opt_swap(tour: Sequence[Stop], i: int, j: int) -> list[Stop]:
    """Return a copy of ``tour`` with the segment ``[i..j]`` reversed."""

    candidate = list(tour)
    candidate[i : j + 1] = reversed(candidate[i : j + 1])
    return candidate


def two_opt(
    tour: Sequence[Stop],
    start: Coordinate,
    *,
    max_passes: Optional[int] = None,
) -> ImprovementResult:
    """Refine ``tour`` until no segment reversal shortens it.

    ``max_passes`` bounds the number of full sweeps. When it is ``None`` the
    search runs to convergence, which has no fixed upper bound on passes.
    """

    best = list(tour)
    best_distance = total_distance(best, start)
    count = len(best)
    passes = 0
    swaps = 0
    improved = True

    while improved:
        if max_passes is not None and passes >= max_passes:
            logger.info(
                "2-opt stopped after %d passes without converging (%d swaps, %.1f m)",
                passes,
                swaps,
                best_distance,
            )
            return ImprovementResult(
                tour=best,
                total_distance_m=best_distance,
                passes=passes,
                swaps=swaps,
                converged=False,
            )

        improved = False
        passes += 1
        for i in range(count - 1):
            for j in range(i + 1, count):
                candidate = two_opt_swap(best, i, j)
                candidate_distance = total_distance(candidate, start)
                if candidate_distance < best_distance:
                    logger.debug(
                        "2-opt pass %d: reversed [%d..%d], %.1f m -> %.1f m",
                        passes,
                        i,
                        j,
                        best_distance,
                        candidate_distance,
                    )
                    best = candidate
                    best_distance = candidate_distance
                    swaps += 1
                    improved = True

    return ImprovementResult(
        tour=best,
        total_distance_m=best_distance,
        passes=passes,
        swaps=swaps,
        converged=True,
    )


def improve(tour: Sequence[Stop], start: Coordinate) -> list[Stop]:
    """Run 2-opt to convergence and return only the refined tour."""

    return two_opt(tour, start).tour
