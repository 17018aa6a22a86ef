import random

import pytest

from camina_segura.algorithms.routing.route_synthesizer import (
    RouteSynthesizer, calculate_route_safety_score, estimate_time, identify_dangerous_points
)
from camina_segura.algorithms.routing.waypoint_generator import WaypointGenerator
from camina_segura.algorithms.scoring.point_scorer import PointSafetyScorer
from camina_segura.config.routing_config import RoutingConfig
from camina_segura.data.models import GeoPoint, Waypoint
from camina_segura.safe_routing import SafeRoutingEngine

from conftest import END, MIDPOINT, START


def _by_id(routes):
    return {route.id: route for route in routes}


def _point_at(fraction):
    return GeoPoint(
        START.lat + (END.lat - START.lat) * fraction,
        START.lng + (END.lng - START.lng) * fraction
    )


def test_no_data_afternoon_gives_three_perfect_routes(engine):
    routes = engine.calculate_safe_routes(START, END)

    assert [route.id for route in routes] == ['safest', 'fastest', 'balanced']
    assert routes[0].recommended
    assert not any(route.recommended for route in routes[1:])
    for route in routes:
        assert route.safety_score == 100
        assert route.dangerous_points == []
        assert all(wp.safety_score == 100 for wp in route.waypoints)


def test_waypoint_counts_and_endpoints(engine):
    routes = _by_id(engine.calculate_safe_routes(START, END))

    assert len(routes['safest'].waypoints) == 10
    assert len(routes['fastest'].waypoints) == 5
    assert len(routes['balanced'].waypoints) == 7
    for route in routes.values():
        assert (route.waypoints[0].lat, route.waypoints[0].lng) == (START.lat, START.lng)
        assert (route.waypoints[-1].lat, route.waypoints[-1].lng) == (END.lat, END.lng)


def test_route_presentation(engine):
    routes = _by_id(engine.calculate_safe_routes(START, END))
    assert routes['safest'].name == 'Ruta Más Segura'
    assert routes['safest'].color == '#10b981'
    assert routes['fastest'].icon == '⚡'
    assert routes['balanced'].color == '#f59e0b'


def test_distance_and_walking_time(engine):
    for route in engine.calculate_safe_routes(START, END):
        assert route.distance_km > 0.6
        assert route.estimated_time.hours == pytest.approx(route.distance_km / 5.0)
        assert abs(route.estimated_time.minutes - route.distance_km / 5.0 * 60) <= 0.5


def test_waypoints_stay_within_jitter(scorer, config):
    generator = WaypointGenerator(scorer, config, random.Random(3))
    count = 8
    waypoints = generator.generate(START, END, count)
    half_span = config.jitter_degrees / 2

    assert len(waypoints) == count
    for i, wp in enumerate(waypoints, start=1):
        base = _point_at(i / (count + 1))
        assert abs(wp.lat - base.lat) <= half_span + 1e-12
        assert abs(wp.lng - base.lng) <= half_span + 1e-12


def test_negative_waypoint_count_is_rejected(scorer):
    with pytest.raises(ValueError):
        WaypointGenerator(scorer).generate(START, END, -1)


def test_same_seed_same_routes(kv_store, clock, make_report):
    make_report("harassment", MIDPOINT)
    first = SafeRoutingEngine.from_kv_store(kv_store, clock=clock, rng=random.Random(9))
    second = SafeRoutingEngine.from_kv_store(kv_store, clock=clock, rng=random.Random(9))

    routes_a = [route.to_dict() for route in first.calculate_safe_routes(START, END)]
    routes_b = [route.to_dict() for route in second.calculate_safe_routes(START, END)]
    assert routes_a == routes_b


def test_fresh_harassment_at_midpoint(engine, make_report):
    make_report("harassment", MIDPOINT)
    fastest = _by_id(engine.calculate_safe_routes(START, END))['fastest']

    # Middle interior waypoint stays within 0.2 km of the midpoint under jitter
    assert fastest.waypoints[2].safety_score == 70
    assert 2 not in [point.index for point in fastest.dangerous_points]
    assert fastest.waypoints[0].safety_score == 100
    assert fastest.waypoints[-1].safety_score == 100


def test_recommended_route_has_max_score(engine, make_report):
    make_report("suspicious", _point_at(0.3))
    make_report("isolated", _point_at(0.7))
    routes = engine.calculate_safe_routes(START, END)

    assert routes[0].recommended
    assert routes[0].safety_score == max(route.safety_score for route in routes)
    scores = [route.safety_score for route in routes]
    assert scores == sorted(scores, reverse=True)


def test_safest_route_detours_through_safe_zone(report_store, evaluation_store, clock, make_report):
    config = RoutingConfig(jitter_degrees=0.0, report_radius_km=0.05)
    weak_point = _point_at(4 / 9)
    for report_type in ("harassment", "suspicious", "poor_lighting"):
        make_report(report_type, weak_point)
    safe_zone = GeoPoint(weak_point.lat + 0.001, weak_point.lng)
    make_report("safe_zone", safe_zone)

    scorer = PointSafetyScorer(report_store, evaluation_store, config, clock)
    routes = RouteSynthesizer(scorer, config, random.Random(0)).synthesize(START, END)
    by_id = _by_id(routes)

    safest = by_id['safest']
    assert (safest.waypoints[4].lat, safest.waypoints[4].lng) == (safe_zone.lat, safe_zone.lng)
    assert safest.waypoints[4].safety_score == 100
    assert safest.safety_score == 100
    assert safest.dangerous_points == []

    # 35 is above the balanced substitution threshold, so the point is kept
    balanced = by_id['balanced']
    assert balanced.waypoints[3].safety_score == 35
    assert balanced.safety_score == 91
    assert [(p.index, p.severity) for p in balanced.dangerous_points] == [(3, 'medium')]

    fastest = by_id['fastest']
    assert fastest.safety_score == 87
    assert [route.id for route in routes] == ['safest', 'balanced', 'fastest']


def test_dangerous_points_are_tagged_copies(config):
    waypoints = [Waypoint(41.0, 2.0, 100.0), Waypoint(41.1, 2.1, 45.0),
                 Waypoint(41.2, 2.2, 29.9), Waypoint(41.3, 2.3, 50.0)]

    dangers = identify_dangerous_points(waypoints, config)

    assert [(p.index, p.severity) for p in dangers] == [(1, 'medium'), (2, 'high')]
    assert waypoints[1].severity is None
    assert waypoints[1].index is None


def test_route_safety_score_rounds_half_up():
    waypoints = [Waypoint(0, 0, 100.0), Waypoint(0, 0, 85.0)]
    assert calculate_route_safety_score(waypoints) == 93
    assert calculate_route_safety_score([]) == 0


@pytest.mark.parametrize("mode,minutes", [
    ("walking", 12),
    ("transit", 3),
    ("driving", 2),
    ("cycling", 4),
])
def test_estimate_time_by_mode(mode, minutes):
    estimate = estimate_time(1.0, mode)
    assert estimate.minutes == minutes


def test_estimate_time_rejects_unknown_mode():
    with pytest.raises(ValueError):
        estimate_time(1.0, "teleport")
