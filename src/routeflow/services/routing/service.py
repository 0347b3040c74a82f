"""Routing orchestration service."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

from ...config import settings
from ...models.domain import Coordinate, Route, Stop, format_duration
from ...schemas.routing import (
    CoordinateModel,
    OptimizedStopModel,
    RouteSummaryModel,
    RoutingRequest,
    RoutingResponse,
)
from ..outputs.routing_formatter import routing_result_to_csv
from .models import EtaOptions, OptimizationResult
from .optimizer import optimize_route

logger = logging.getLogger(__name__)


def _build_stops(payload: RoutingRequest) -> list[Stop]:
    stops: list[Stop] = []
    for item in payload.stops:
        stop = Stop(
            address=item.address,
            coordinate=Coordinate(item.latitude, item.longitude),
            notes=item.notes,
            status=item.status,
        )
        stop_id = (item.id or "").strip()
        if stop_id:
            stop.id = stop_id
        stops.append(stop)
    return stops


def _validate_stops(stops: Sequence[Stop], start: Coordinate) -> None:
    if not stops:
        raise ValueError("No stops to optimize.")
    if len(stops) > settings.max_stops_per_route:
        raise ValueError(
            f"Too many stops: {len(stops)} (maximum per route is {settings.max_stops_per_route})."
        )
    if not start.is_valid:
        raise ValueError(f"Invalid start coordinate ({start.latitude}, {start.longitude}).")

    seen: set[str] = set()
    for stop in stops:
        if stop.id in seen:
            raise ValueError(f"Duplicate stop id '{stop.id}'.")
        seen.add(stop.id)
        if not stop.coordinate.is_valid:
            raise ValueError(
                f"Stop '{stop.id}' has an invalid coordinate "
                f"({stop.coordinate.latitude}, {stop.coordinate.longitude})."
            )


def _build_eta_options(payload: RoutingRequest) -> EtaOptions:
    base = EtaOptions()
    return EtaOptions(
        average_speed_meters_per_second=payload.average_speed_meters_per_second
        if payload.average_speed_meters_per_second is not None
        else base.average_speed_meters_per_second,
        dwell_seconds=payload.dwell_seconds
        if payload.dwell_seconds is not None
        else base.dwell_seconds,
    )


def run_optimization(payload: RoutingRequest) -> tuple[Route, OptimizationResult]:
    """Validate the request, optimize its stops and fold the result into a Route."""

    start = Coordinate(payload.start.latitude, payload.start.longitude)
    start_time = payload.start_time or datetime.now(timezone.utc)
    stops = _build_stops(payload)
    _validate_stops(stops, start)

    route = Route(name=payload.name or "Route", stops=stops, start_location=start)
    result = optimize_route(
        stops,
        start,
        start_time,
        options=_build_eta_options(payload),
        max_passes=settings.max_improvement_passes,
    )
    if not result.converged:
        logger.warning(
            "Route '%s' hit the 2-opt pass limit (%d); order may not be locally optimal",
            route.name,
            result.passes,
        )
    route.apply_optimization(result)
    logger.info(
        "Route '%s' optimized: %d stops, %s, %s",
        route.name,
        route.total_stops,
        route.formatted_distance,
        route.formatted_duration,
    )
    return route, result


def optimize_stops(payload: RoutingRequest) -> RoutingResponse:
    route, result = run_optimization(payload)
    options = _build_eta_options(payload)

    return RoutingResponse(
        route_id=route.id,
        name=route.name,
        start=CoordinateModel(latitude=result.start.latitude, longitude=result.start.longitude),
        start_time=result.start_time,
        summary=RouteSummaryModel(
            total_stops=route.total_stops,
            total_distance_m=result.total_distance_m,
            total_duration_s=result.total_duration_s,
            formatted_distance=route.formatted_distance,
            formatted_duration=route.formatted_duration,
            original_distance_m=result.original_distance_m,
            distance_saved_m=result.distance_saved_m,
            time_saved_s=result.time_saved_s,
            passes=result.passes,
            swaps=result.swaps,
            converged=result.converged,
        ),
        stops=[
            OptimizedStopModel(
                id=stop.id,
                address=stop.address,
                latitude=stop.coordinate.latitude,
                longitude=stop.coordinate.longitude,
                notes=stop.notes,
                status=stop.status,
                sequence_number=stop.sequence_number,
                estimated_arrival_time=stop.estimated_arrival_time,
                distance_from_prev_m=leg,
            )
            for stop, leg in zip(route.stops, result.leg_distances_m)
        ],
        metadata={
            "status": "optimized",
            "algorithm": "nearest_neighbor+2opt",
            "average_speed_meters_per_second": options.average_speed_meters_per_second,
            "dwell_seconds": options.dwell_seconds,
            "time_saved": format_duration(result.time_saved_s),
        },
    )


def optimize_stops_csv(payload: RoutingRequest) -> str:
    route, result = run_optimization(payload)
    return routing_result_to_csv(route.id, result)
