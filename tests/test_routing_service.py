import csv
import io
from datetime import datetime, timezone

import pytest

from routeflow.config import settings
from routeflow.schemas.routing import RoutingRequest
from routeflow.services.routing import service as routing_service

START_TIME = datetime(2026, 2, 6, 9, 0, tzinfo=timezone.utc)


def _request(stops: list[dict], **overrides) -> RoutingRequest:
    payload = {
        "name": "Morning run",
        "start": {"latitude": 0.0, "longitude": -1.0},
        "start_time": START_TIME,
        "stops": stops,
    }
    payload.update(overrides)
    return RoutingRequest(**payload)


def _stops() -> list[dict]:
    return [
        {"id": "C", "address": "3 Main St", "latitude": 0.0, "longitude": 2.0},
        {"id": "A", "address": "1 Main St", "latitude": 0.0, "longitude": 0.0},
        {"id": "B", "address": "2 Main St", "latitude": 0.0, "longitude": 1.0, "notes": "Leave at door"},
    ]


def test_optimize_stops_builds_response():
    response = routing_service.optimize_stops(_request(_stops()))

    assert response.name == "Morning run"
    assert [stop.id for stop in response.stops] == ["A", "B", "C"]
    assert [stop.sequence_number for stop in response.stops] == [1, 2, 3]
    assert response.stops[1].notes == "Leave at door"
    assert response.summary.total_stops == 3
    assert response.summary.distance_saved_m > 0
    assert response.summary.converged
    assert response.metadata["status"] == "optimized"
    assert response.start_time == START_TIME


def test_overrides_reach_eta_options():
    response = routing_service.optimize_stops(
        _request(_stops(), average_speed_meters_per_second=20.0, dwell_seconds=0.0)
    )

    first = response.stops[0]
    expected_seconds = first.distance_from_prev_m / 20.0
    assert (first.estimated_arrival_time - START_TIME).total_seconds() == pytest.approx(expected_seconds, abs=1e-3)
    assert response.metadata["dwell_seconds"] == 0.0


def test_missing_ids_are_generated():
    stops = [{"address": "Somewhere", "latitude": 0.0, "longitude": 0.5}]
    response = routing_service.optimize_stops(_request(stops))
    assert response.stops[0].id
    assert response.stops[0].sequence_number == 1


def test_no_stops_is_rejected():
    with pytest.raises(ValueError, match="No stops to optimize"):
        routing_service.optimize_stops(_request([]))


def test_duplicate_ids_are_rejected():
    stops = _stops()
    stops[1]["id"] = "C"
    with pytest.raises(ValueError, match="Duplicate stop id"):
        routing_service.optimize_stops(_request(stops))


def test_stop_limit(monkeypatch):
    monkeypatch.setattr(settings, "max_stops_per_route", 2)
    with pytest.raises(ValueError, match="Too many stops"):
        routing_service.optimize_stops(_request(_stops()))


def test_pass_limit_is_passed_to_optimizer(monkeypatch):
    captured = {}
    original = routing_service.optimize_route

    def _spy(*args, **kwargs):
        captured.update(kwargs)
        return original(*args, **kwargs)

    monkeypatch.setattr(settings, "max_improvement_passes", 3)
    monkeypatch.setattr(routing_service, "optimize_route", _spy)

    routing_service.optimize_stops(_request(_stops()))

    assert captured["max_passes"] == 3


def test_csv_export():
    content = routing_service.optimize_stops_csv(_request(_stops()))

    rows = list(csv.DictReader(io.StringIO(content)))
    assert [row["stop_id"] for row in rows] == ["A", "B", "C"]
    assert [row["sequence"] for row in rows] == ["1", "2", "3"]
    assert rows[0]["status"] == "Pending"
    assert rows[0]["estimated_arrival_time"].startswith("2026-02-06T")


def test_blank_ids_are_replaced():
    stops = [{"id": "   ", "address": "Somewhere", "latitude": 0.0, "longitude": 0.5}]

    response = routing_service.optimize_stops(_request(stops))

    assert response.stops[0].id.strip()
    assert response.stops[0].id != "   "
