"""Geographic helpers: distance, geocoding and route planning."""

from .distance import EARTH_RADIUS_MILES, haversine_miles, within_radius, travel_minutes
from .geocoding import (
    Geocoder,
    StaticGeocoder,
    NominatimGeocoder,
    GeocodingError,
    RateLimitError,
    build_geocoder,
)
from .routing import PlannedRoute, plan_route

__all__ = [
    "EARTH_RADIUS_MILES",
    "haversine_miles",
    "within_radius",
    "travel_minutes",
    "Geocoder",
    "StaticGeocoder",
    "NominatimGeocoder",
    "GeocodingError",
    "RateLimitError",
    "build_geocoder",
    "PlannedRoute",
    "plan_route",
]
