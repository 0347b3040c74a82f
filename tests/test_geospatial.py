import math

from routeflow.models.domain import Coordinate, Stop
from routeflow.services.geospatial import EARTH_RADIUS_M, distance, total_distance


def _stop(sid: str, lat: float, lon: float) -> Stop:
    return Stop(id=sid, address=f"{sid} Street", coordinate=Coordinate(lat, lon))


def test_distance_to_self_is_zero():
    point = Coordinate(37.77, -122.42)
    assert distance(point, point) == 0.0


def test_distance_is_symmetric():
    a = Coordinate(37.77, -122.42)
    b = Coordinate(37.80, -122.41)
    assert distance(a, b) == distance(b, a)


def test_one_degree_of_longitude_on_equator():
    expected = EARTH_RADIUS_M * math.pi / 180.0
    assert math.isclose(distance(Coordinate(0.0, 0.0), Coordinate(0.0, 1.0)), expected, rel_tol=1e-9)


def test_distance_accepts_out_of_range_values():
    value = distance(Coordinate(120.0, 0.0), Coordinate(0.0, 400.0))
    assert value >= 0.0


def test_total_distance_empty_is_zero():
    assert total_distance([], Coordinate(0.0, 0.0)) == 0.0
    assert total_distance([], None) == 0.0


def test_total_distance_includes_start_leg():
    start = Coordinate(0.0, -1.0)
    stops = [_stop("A", 0.0, 0.0), _stop("B", 0.0, 1.0)]
    expected = distance(start, stops[0].coordinate) + distance(stops[0].coordinate, stops[1].coordinate)
    assert total_distance(stops, start) == expected


def test_total_distance_without_start_begins_at_first_stop():
    stops = [_stop("A", 0.0, 0.0), _stop("B", 0.0, 1.0)]
    assert total_distance(stops, None) == distance(stops[0].coordinate, stops[1].coordinate)


def test_antipodal_points_do_not_raise():
    a = Coordinate(-74.6, 0.0)
    b = Coordinate(74.6, -180.0)

    value = distance(a, b)

    assert math.isclose(value, EARTH_RADIUS_M * math.pi, rel_tol=1e-6)


def test_distance_is_total_at_globe_edge_cases():
    pairs = [
        (Coordinate(90.0, 0.0), Coordinate(-90.0, 0.0)),
        (Coordinate(90.0, 45.0), Coordinate(90.0, -135.0)),
        (Coordinate(0.0, 180.0), Coordinate(0.0, -180.0)),
        (Coordinate(0.0, 0.0), Coordinate(0.0, 180.0)),
        (Coordinate(10.0, 179.9), Coordinate(-10.0, -0.1)),
    ]
    for lat in (-89.9, -45.0, -0.1, 0.0, 33.3, 60.5, 89.9):
        for lon in (-180.0, -90.0, 0.0, 45.5, 179.0):
            opposite_lon = lon - 180.0 if lon > 0 else lon + 180.0
            pairs.append((Coordinate(lat, lon), Coordinate(-lat, opposite_lon)))

    for a, b in pairs:
        value = distance(a, b)
        assert 0.0 <= value <= EARTH_RADIUS_M * math.pi * (1 + 1e-12)
