"""Serializers for routing outputs."""

from __future__ import annotations

import csv
import io

from ..routing.models import OptimizationResult


def routing_result_to_csv(route_id: str, result: OptimizationResult) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "route_id",
        "sequence",
        "stop_id",
        "address",
        "latitude",
        "longitude",
        "status",
        "estimated_arrival_time",
        "distance_from_prev_m",
        "total_distance_m",
        "total_duration_s",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for stop, leg in zip(result.stops, result.leg_distances_m):
        writer.writerow(
            {
                "route_id": route_id,
                "sequence": stop.sequence_number,
                "stop_id": stop.id,
                "address": stop.address,
                "latitude": stop.coordinate.latitude,
                "longitude": stop.coordinate.longitude,
                "status": stop.status.value,
                "estimated_arrival_time": stop.estimated_arrival_time.isoformat()
                if stop.estimated_arrival_time
                else "",
                "distance_from_prev_m": round(leg, 1),
                "total_distance_m": round(result.total_distance_m, 1),
                "total_duration_s": round(result.total_duration_s, 1),
            }
        )
    return buffer.getvalue()
