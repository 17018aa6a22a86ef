import pytest

from camina_segura.data.distance_utils import calculate_route_distance, haversine_distance, haversine_km
from camina_segura.data.models import GeoPoint, Waypoint

from conftest import END, START


def test_distance_to_self_is_zero():
    assert haversine_km(START, START) == 0.0


def test_distance_is_symmetric_and_repeatable():
    first = haversine_km(START, END)
    assert haversine_km(END, START) == pytest.approx(first, abs=1e-12)
    assert haversine_km(START, END) == first


def test_one_degree_of_latitude():
    assert haversine_km(GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0)) == pytest.approx(111.195, rel=1e-4)


def test_meters_and_kilometers_agree():
    meters = haversine_distance(START.lat, START.lng, END.lat, END.lng)
    assert meters == pytest.approx(haversine_km(START, END) * 1000)


def test_barcelona_scenario_length():
    # Plaça de Catalunya area to Arc de Triomf area, roughly 640 m
    assert haversine_km(START, END) == pytest.approx(0.64, abs=0.02)


def test_route_distance_sums_legs():
    a, b, c = GeoPoint(41.0, 2.0), GeoPoint(41.001, 2.0), GeoPoint(41.001, 2.001)
    points = [Waypoint(p.lat, p.lng, 100.0) for p in (a, b, c)]
    assert calculate_route_distance(points) == pytest.approx(haversine_km(a, b) + haversine_km(b, c))


@pytest.mark.parametrize("points", [[], [START]])
def test_route_distance_of_degenerate_paths(points):
    assert calculate_route_distance(points) == 0.0
