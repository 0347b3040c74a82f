"""Greedy nearest-neighbor tour construction."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Coordinate, Stop
from ..geospatial import distance


def construct(stops: Sequence[Stop], start: Coordinate) -> list[Stop]:
    """Build a tour by always travelling to the closest unvisited stop.

    Stops are scanned in input order and compared with strict ``<``, so on a
    tie the earliest stop in the input wins. Runs in O(n^2).
    """

    visited = [False] * len(stops)
    tour: list[Stop] = []
    current = start

    for _ in range(len(stops)):
        nearest_index = -1
        shortest = 0.0
        for index, stop in enumerate(stops):
            if visited[index]:
                continue
            candidate = distance(current, stop.coordinate)
            if nearest_index == -1 or candidate < shortest:
                nearest_index = index
                shortest = candidate

        visited[nearest_index] = True
        nearest = stops[nearest_index]
        tour.append(nearest)
        current = nearest.coordinate

    return tour
