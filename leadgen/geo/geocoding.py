"""
Address geocoding.

Two implementations of the same interface:
- StaticGeocoder matches known city names in an address (offline)
- NominatimGeocoder queries a Nominatim-compatible search API
"""

import logging
from typing import Mapping, Optional

import httpx
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from ..config import CITY_COORDINATES
from ..models import GeoPoint

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Base exception for geocoding failures."""
    pass


class RateLimitError(GeocodingError):
    """Geocoding service rate limit exceeded."""
    pass


class Geocoder:
    """Resolves a free-text address to coordinates."""

    def resolve(self, address: str) -> Optional[GeoPoint]:
        """
        Resolve an address.

        Returns:
            GeoPoint, or None when the address cannot be located

        Raises:
            GeocodingError: the lookup itself failed
        """
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class StaticGeocoder(Geocoder):
    """
    Lookup against a fixed table of city names.

    The first city (in table order) whose name appears in the address wins.
    """

    def __init__(self, table: Optional[Mapping[str, GeoPoint]] = None):
        self.table = CITY_COORDINATES if table is None else table

    def resolve(self, address: str) -> Optional[GeoPoint]:
        address_lower = (address or "").lower()
        for city, point in self.table.items():
            if city in address_lower:
                return point

        logger.debug("No known city in address: %s", address)
        return None


class NominatimGeocoder(Geocoder):
    """
    Client for a Nominatim-compatible /search endpoint.

    Usage:
        with NominatimGeocoder() as geocoder:
            point = geocoder.resolve("2702 E Main, Puyallup, WA")
    """

    def __init__(
        self,
        base_url: str = "https://nominatim.openstreetmap.org/search",
        user_agent: str = "backflow-leadgen/1.0",
        timeout: int = 10,
        country_codes: str = "us",
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize geocoder client.

        Args:
            base_url: Search endpoint URL
            user_agent: User-Agent header (required by Nominatim usage policy)
            timeout: Request timeout in seconds
            country_codes: Restrict results to these ISO country codes
            client: Pre-built httpx client (for testing)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.country_codes = country_codes

        self._client = client or httpx.Client(
            timeout=self.timeout,
            headers={"User-Agent": user_agent},
        )
        logger.debug("Geocoder initialized (url=%s)", base_url)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=30),
        retry=retry_if_exception_type(RateLimitError),
        reraise=True,
    )
    def resolve(self, address: str) -> Optional[GeoPoint]:
        if not address or not address.strip():
            return None

        params = {
            "q": address,
            "format": "json",
            "limit": 1,
            "countrycodes": self.country_codes,
        }

        try:
            response = self._client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            raise GeocodingError(f"Geocoding request failed: {e}") from e

        self._handle_errors(response)

        try:
            results = response.json()
        except ValueError as e:
            raise GeocodingError(f"Invalid geocoding response: {response.text[:200]!r}") from e

        if not isinstance(results, list):
            raise GeocodingError(f"Unexpected geocoding response: {results!r}")
        if not results:
            logger.debug("Address not found: %s", address)
            return None

        first = results[0]
        try:
            return GeoPoint(float(first["lat"]), float(first["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingError(f"Malformed geocoding result: {first!r}") from e

    def _handle_errors(self, response: httpx.Response) -> None:
        """Handle geocoder error responses."""
        if response.status_code == 429:
            raise RateLimitError("Geocoding rate limit exceeded")
        elif response.status_code >= 500:
            raise GeocodingError(f"Geocoding server error: {response.status_code}")
        elif response.status_code >= 400:
            raise GeocodingError(f"Geocoding error {response.status_code}: {response.text}")

    def close(self):
        """Close the HTTP client."""
        self._client.close()


def build_geocoder(settings, offline: bool = False) -> Geocoder:
    """HTTP geocoder when a URL is configured, otherwise the city table."""
    if settings.geocoder_url and not offline:
        return NominatimGeocoder(
            base_url=settings.geocoder_url,
            user_agent=settings.geocoder_user_agent,
            timeout=settings.geocoder_timeout,
        )
    return StaticGeocoder()
