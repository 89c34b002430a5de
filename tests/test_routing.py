"""Tests for visit route planning."""

import pytest

from leadgen.geo import haversine_miles, plan_route, travel_minutes
from leadgen.geo.routing import nearest_neighbor_order, two_opt
from leadgen.models import GeoPoint, Prospect

ORIGIN = GeoPoint(0, 0)


def east(degrees):
    """Point on the equator east of the origin."""
    return GeoPoint(0, degrees)


def route_miles(start, points, order):
    path = [start] + [points[i] for i in order]
    return sum(haversine_miles(path[i], path[i + 1]) for i in range(len(path) - 1))


class TestNearestNeighbor:
    """Test greedy ordering."""

    def test_visits_closest_first(self):
        points = [east(0.3), east(0.1), east(0.2)]
        assert nearest_neighbor_order(ORIGIN, points) == [1, 2, 0]

    def test_empty(self):
        assert nearest_neighbor_order(ORIGIN, []) == []

    def test_single_point(self):
        assert nearest_neighbor_order(ORIGIN, [east(1)]) == [0]


class TestTwoOpt:
    """Test route improvement."""

    def test_untangles_route(self):
        points = [east(0.1), east(0.2), east(0.3)]
        assert two_opt(ORIGIN, points, [2, 0, 1]) == [0, 1, 2]

    def test_never_lengthens(self):
        points = [
            GeoPoint(0.1, 0.1), GeoPoint(0.3, 0.0), GeoPoint(0.0, 0.3),
            GeoPoint(0.2, 0.2), GeoPoint(0.05, 0.25), GeoPoint(0.25, 0.05),
        ]
        seed = nearest_neighbor_order(ORIGIN, points)
        improved = two_opt(ORIGIN, points, seed)

        assert sorted(improved) == list(range(len(points)))
        assert route_miles(ORIGIN, points, improved) <= route_miles(ORIGIN, points, seed) + 1e-9

    def test_optimal_route_unchanged(self):
        points = [east(0.1), east(0.2), east(0.3)]
        assert two_opt(ORIGIN, points, [0, 1, 2]) == [0, 1, 2]


class TestPlanRoute:
    """Test full route plans."""

    def test_orders_stops_and_totals(self):
        stops = [
            Prospect("Far", coordinates=east(0.3)),
            Prospect("Near", coordinates=east(0.1)),
            Prospect("Middle", coordinates=east(0.2)),
        ]

        plan = plan_route(ORIGIN, stops, locate=lambda p: p.coordinates, visit_minutes=30)

        assert [s.business_name for s in plan.stops] == ["Near", "Middle", "Far"]
        assert plan.total_miles == pytest.approx(sum(plan.leg_miles))
        assert plan.total_miles == pytest.approx(haversine_miles(ORIGIN, east(0.3)))
        assert plan.total_minutes == sum(travel_minutes(m) + 30 for m in plan.leg_miles)
        assert plan.unrouted == []

    def test_unlocated_stops_are_unrouted(self):
        stops = [Prospect("Known", coordinates=east(0.1)), Prospect("Unknown")]

        plan = plan_route(ORIGIN, stops, locate=lambda p: p.coordinates)

        assert [s.business_name for s in plan.stops] == ["Known"]
        assert [s.business_name for s in plan.unrouted] == ["Unknown"]

    def test_empty(self):
        plan = plan_route(ORIGIN, [], locate=lambda p: p)

        assert plan.stops == []
        assert plan.total_miles == 0
        assert plan.total_minutes == 0

    def test_to_dict(self):
        plan = plan_route(ORIGIN, [east(0.1)], locate=lambda p: p)
        data = plan.to_dict(lambda p: p.to_dict())

        assert data["start"] == {"lat": 0, "lng": 0}
        assert data["stops"] == [{"lat": 0, "lng": 0.1}]
        assert data["total_miles"] == round(haversine_miles(ORIGIN, east(0.1)), 2)
