import pytest

from src.wasteroute.models.domain import ServicePoint
from src.wasteroute.services.geospatial import bearing_degrees, haversine_km
from src.wasteroute.services.navigation.projector import (
    build_navigation_steps,
    format_eta,
    step_bearing,
    step_direction,
    step_distance,
    step_duration,
    summarize_route,
)
from src.wasteroute.services.routing.enrichment import fallback_segment
from src.wasteroute.services.routing.models import RouteSegment


def _point(bid: str, lat: float, lon: float, fill: float = 50.0) -> ServicePoint:
    return ServicePoint(
        bin_id=bid,
        name=f"Bin {bid}",
        location="Pune",
        latitude=lat,
        longitude=lon,
        fill_percentage=fill,
    )


A = _point("A", 18.52, 73.86, 90)
B = _point("B", 18.54, 73.865, 65)
C = _point("C", 18.53, 73.90, 20)


def _road_segment() -> RouteSegment:
    # Heads due east for five vertices, then turns north towards B
    geometry = [(18.52, 73.860 + 0.001 * k) for k in range(6)]
    geometry += [(18.53, 73.865), (18.54, 73.865)]
    return RouteSegment(
        distance_km=3.4,
        duration_min=9.0,
        geometry=geometry,
        instructions=["Head east", "Turn left", "Continue north", "Arrive"],
        source="osrm",
    )


@pytest.mark.parametrize(
    "minutes, expected",
    [
        (0, "0 min"),
        (12.4, "12 min"),
        (12.5, "13 min"),
        (59.4, "59 min"),
        (60, "1h 0m"),
        (75.6, "1h 16m"),
        (125, "2h 5m"),
        (119.8, "2h 0m"),
    ],
)
def test_format_eta(minutes, expected):
    assert format_eta(minutes) == expected


def test_first_step_is_zero():
    tour = [A, B]
    segments = [_road_segment()]
    assert step_distance(tour, segments, 0) == 0.0
    assert step_duration(tour, segments, 0) == 0.0
    assert step_bearing(tour, segments, 0) == 0.0


def test_step_uses_segment_distance_and_duration():
    tour = [A, B]
    segments = [_road_segment()]
    assert step_distance(tour, segments, 1) == pytest.approx(3.4)
    assert step_duration(tour, segments, 1) == pytest.approx(9.0)


def test_bearing_prefers_road_geometry_lookahead():
    tour = [A, B]
    segments = [_road_segment()]

    bearing = step_bearing(tour, segments, 1)
    straight = bearing_degrees(A.latitude, A.longitude, B.latitude, B.longitude)

    assert bearing == pytest.approx(90.0, abs=0.1)
    assert abs(bearing - straight) > 45
    assert step_direction(tour, segments, 1) == "E"


def test_bearing_clamps_lookahead_to_short_geometry():
    tour = [A, C]
    segments = [fallback_segment(A, C)]
    expected = bearing_degrees(A.latitude, A.longitude, C.latitude, C.longitude)
    assert step_bearing(tour, segments, 1) == pytest.approx(expected)


def test_missing_segments_fall_back_to_straight_line():
    tour = [A, B, C]
    distance = haversine_km(B.latitude, B.longitude, C.latitude, C.longitude)

    assert step_distance(tour, [], 2) == pytest.approx(distance)
    assert step_duration(tour, [], 2, speed_kmh=30) == pytest.approx(distance / 30 * 60)
    assert step_bearing(tour, [], 2) == pytest.approx(
        bearing_degrees(B.latitude, B.longitude, C.latitude, C.longitude)
    )


def test_bearing_in_range_for_every_step():
    tour = [A, B, C, _point("D", 18.50, 73.84), _point("E", 18.51, 73.83)]
    segments = [fallback_segment(x, y) for x, y in zip(tour, tour[1:])]
    for index in range(1, len(tour) + 1):
        assert 0.0 <= step_bearing(tour, segments, index) < 360.0


def test_index_past_last_stop_is_tolerated():
    tour = [A, B, C]
    segments = [_road_segment(), fallback_segment(B, C)]

    assert step_distance(tour, segments, 3) == step_distance(tour, segments, 2)
    assert step_duration(tour, segments, 3) == step_duration(tour, segments, 2)

    with pytest.raises(IndexError):
        step_distance(tour, segments, 4)


def test_singleton_tour_scenario():
    tour = [A]
    assert step_distance(tour, [], 0) == 0.0
    assert step_duration(tour, [], 0) == 0.0
    assert step_distance(tour, [], 1) == 0.0

    steps = build_navigation_steps(tour, [])
    assert len(steps) == 1
    assert steps[0].direction == "Start"
    assert steps[0].eta == "0 min"


def test_empty_tour_queries():
    assert step_distance([], [], 0) == 0.0
    assert build_navigation_steps([], []) == []
    summary = summarize_route([], [])
    assert summary.stop_count == 0
    assert summary.total_time == "0 min"


def test_build_navigation_steps():
    tour = [A, B, C]
    segments = [_road_segment(), fallback_segment(B, C)]

    steps = build_navigation_steps(tour, segments)

    assert [step.bin_id for step in steps] == ["A", "B", "C"]
    assert steps[0].direction == "Start"
    assert steps[0].instructions == []
    assert steps[1].direction == "E"
    assert steps[1].instructions == ["Head east", "Turn left", "Continue north"]
    assert steps[1].eta == "9 min"
    assert steps[2].instructions == []
    assert steps[0].status == "critical"
    assert steps[1].status == "warning"
    assert steps[2].status == "normal"


def test_summarize_route():
    tour = [A, B, C]
    fallback = fallback_segment(B, C)
    segments = [_road_segment(), fallback]

    summary = summarize_route(tour, segments)

    assert summary.stop_count == 3
    assert summary.total_distance_km == pytest.approx(3.4 + fallback.distance_km)
    assert summary.total_duration_min == pytest.approx(9.0 + fallback.duration_min)
    assert summary.critical_count == 1
    assert summary.warning_count == 1
    assert summary.fallback_segments == 1


def test_summarize_route_without_segments_estimates_duration():
    tour = [A, C]
    distance = haversine_km(A.latitude, A.longitude, C.latitude, C.longitude)

    summary = summarize_route(tour, [], speed_kmh=30)

    assert summary.total_distance_km == pytest.approx(distance)
    assert summary.total_duration_min == pytest.approx(distance / 30 * 60)
