"""Great-circle distance between coordinates."""

import math

from ..models import GeoPoint

EARTH_RADIUS_MILES = 3958.756


def haversine_miles(a: GeoPoint, b: GeoPoint) -> float:
    """
    Calculate the great-circle distance between two points in miles.

    Coordinates are not range-checked; out-of-range degrees give a
    mathematically defined but meaningless result.

    Args:
        a: First point
        b: Second point

    Returns:
        Non-negative distance in miles
    """
    lat1_rad = math.radians(a.latitude)
    lat2_rad = math.radians(b.latitude)
    delta_lat = math.radians(b.latitude - a.latitude)
    delta_lon = math.radians(b.longitude - a.longitude)

    h = math.sin(delta_lat / 2) ** 2 + \
        math.cos(lat1_rad) * math.cos(lat2_rad) * \
        math.sin(delta_lon / 2) ** 2

    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_MILES * c


def within_radius(center: GeoPoint, point: GeoPoint, radius_miles: float) -> bool:
    """Check whether a point lies inside a service radius."""
    return haversine_miles(center, point) <= radius_miles


def travel_minutes(miles: float, minutes_per_mile: float = 3.0) -> int:
    """Rough drive time for a distance, rounded half-up to whole minutes."""
    return math.floor(miles * minutes_per_mile + 0.5)
