"""Visit route planning: nearest neighbour seeded, 2-opt improved."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from ..models import GeoPoint
from .distance import haversine_miles, travel_minutes

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class PlannedRoute(Generic[T]):
    """An ordered visit plan starting from a depot."""

    start: GeoPoint
    stops: List[T] = field(default_factory=list)
    leg_miles: List[float] = field(default_factory=list)
    unrouted: List[T] = field(default_factory=list)
    total_miles: float = 0.0
    total_minutes: int = 0

    def to_dict(self, describe: Optional[Callable[[T], dict]] = None) -> dict:
        describe = describe or (lambda stop: stop)
        return {
            "start": self.start.to_dict(),
            "stops": [describe(s) for s in self.stops],
            "leg_miles": [round(m, 2) for m in self.leg_miles],
            "unrouted": [describe(s) for s in self.unrouted],
            "total_miles": round(self.total_miles, 2),
            "total_minutes": self.total_minutes,
        }


def _path_miles(points: Sequence[GeoPoint]) -> float:
    return sum(haversine_miles(points[i], points[i + 1]) for i in range(len(points) - 1))


def nearest_neighbor_order(start: GeoPoint, points: Sequence[GeoPoint]) -> List[int]:
    """
    Greedy visit order: always drive to the closest unvisited point.

    Returns:
        Indices into `points` in visit order
    """
    remaining = list(range(len(points)))
    order = []
    current = start

    while remaining:
        nearest = min(remaining, key=lambda i: haversine_miles(current, points[i]))
        order.append(nearest)
        remaining.remove(nearest)
        current = points[nearest]

    return order


def two_opt(start: GeoPoint, points: Sequence[GeoPoint], order: List[int]) -> List[int]:
    """
    Improve an open route by reversing segments while that shortens it.

    The start point stays fixed at the head of the route.
    """
    route = list(order)
    improved = True

    while improved:
        improved = False
        path = [start] + [points[i] for i in route]
        for i in range(0, len(path) - 2):
            for j in range(i + 2, len(path) - 1):
                current = haversine_miles(path[i], path[i + 1]) + haversine_miles(path[j], path[j + 1])
                swapped = haversine_miles(path[i], path[j]) + haversine_miles(path[i + 1], path[j + 1])
                if swapped + 1e-9 < current:
                    # path index k maps to route index k - 1
                    route[i:j] = reversed(route[i:j])
                    path = [start] + [points[k] for k in route]
                    improved = True

        # Open route: the last stop has no outgoing edge, so tails can flip too
        for i in range(0, len(route) - 1):
            candidate = route[:i] + list(reversed(route[i:]))
            candidate_path = [start] + [points[k] for k in candidate]
            if _path_miles(candidate_path) + 1e-9 < _path_miles(path):
                route = candidate
                path = candidate_path
                improved = True

    return route


def plan_route(
    start: GeoPoint,
    stops: Sequence[T],
    locate: Callable[[T], Optional[GeoPoint]],
    visit_minutes: int = 60,
    minutes_per_mile: float = 3.0,
) -> PlannedRoute[T]:
    """
    Plan a single-technician visit route.

    Args:
        start: Depot the technician leaves from
        stops: Items to visit (prospects, appointments...)
        locate: Returns a stop's coordinates, or None if unknown
        visit_minutes: On-site time per stop
        minutes_per_mile: Drive time estimate

    Returns:
        PlannedRoute; stops without coordinates are listed in `unrouted`
    """
    routable = []
    unrouted = []
    for stop in stops:
        point = locate(stop)
        if point is None:
            unrouted.append(stop)
        else:
            routable.append((stop, point))

    if unrouted:
        logger.info("%d stop(s) have no coordinates and were not routed", len(unrouted))

    points = [p for _, p in routable]
    order = two_opt(start, points, nearest_neighbor_order(start, points))

    plan = PlannedRoute(start=start, unrouted=unrouted)
    current = start
    for i in order:
        stop, point = routable[i]
        miles = haversine_miles(current, point)
        plan.stops.append(stop)
        plan.leg_miles.append(miles)
        plan.total_miles += miles
        plan.total_minutes += travel_minutes(miles, minutes_per_mile) + visit_minutes
        current = point

    return plan
