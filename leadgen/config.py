"""Configuration settings for backflow lead scoring."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

import yaml
from dotenv import load_dotenv

from .models import BusinessType, GeoPoint

load_dotenv()


# Puyallup, WA - centre of the service area
SERVICE_CENTER = GeoPoint(47.1853, -122.2928)
SERVICE_RADIUS_MILES = 20.0

# Average billed amount per tested device
PRICE_PER_DEVICE = 250


@dataclass
class Settings:
    """Unified settings with YAML override support."""

    # Service area
    service_lat: float = SERVICE_CENTER.latitude
    service_lng: float = SERVICE_CENTER.longitude
    service_radius_miles: float = SERVICE_RADIUS_MILES
    enforce_radius: bool = False

    # Pipeline defaults
    min_score: int = 0
    max_results: int = 100
    sort_by: str = "score"

    # Route planning
    minutes_per_mile: float = 3.0
    visit_minutes: int = 60

    # Geocoding (HTTP geocoder is used only when a URL is configured)
    geocoder_url: str = field(default_factory=lambda: os.environ.get("LEADGEN_GEOCODER_URL", ""))
    geocoder_user_agent: str = "backflow-leadgen/1.0"
    geocoder_timeout: int = 10

    @property
    def service_center(self) -> GeoPoint:
        return GeoPoint(self.service_lat, self.service_lng)


def load_config(path: Optional[str] = None) -> Settings:
    """
    Load settings from YAML file with environment overrides.

    Priority: environment > config file > defaults

    Args:
        path: Path to YAML config file (optional)

    Returns:
        Settings instance with merged configuration
    """
    settings = Settings()

    if path:
        config_path = Path(path)
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}

            # Apply config values
            for key, value in data.items():
                if hasattr(settings, key):
                    setattr(settings, key, value)

    # Environment overrides (always win)
    if os.environ.get("LEADGEN_SERVICE_LAT"):
        settings.service_lat = float(os.environ["LEADGEN_SERVICE_LAT"])
    if os.environ.get("LEADGEN_SERVICE_LNG"):
        settings.service_lng = float(os.environ["LEADGEN_SERVICE_LNG"])
    if os.environ.get("LEADGEN_SERVICE_RADIUS"):
        settings.service_radius_miles = float(os.environ["LEADGEN_SERVICE_RADIUS"])
    if os.environ.get("LEADGEN_GEOCODER_URL"):
        settings.geocoder_url = os.environ["LEADGEN_GEOCODER_URL"]
    if os.environ.get("LEADGEN_GEOCODER_USER_AGENT"):
        settings.geocoder_user_agent = os.environ["LEADGEN_GEOCODER_USER_AGENT"]

    return settings


@dataclass(frozen=True)
class TemperatureThresholds:
    """Score cutoffs for temperature tiers."""

    hot: int = 85
    warm: int = 60
    # Reported as the bottom of the cold range but never enforced:
    # anything below `warm` is cold.
    cold_floor: int = 30


@dataclass(frozen=True)
class ScoringConfig:
    """Configuration for scoring weights and bands."""

    # Compliance recency (max 40)
    overdue_days: int = 365
    due_soon_days: int = 270
    overdue_weight: int = 40
    due_soon_weight: int = 30
    current_weight: int = 15
    unknown_test_weight: int = 25

    # Business type priority (max 25)
    business_type_weight: int = 25

    # Distance (max 20) - (max miles, points), checked in order
    distance_bands: tuple = ((5, 20), (10, 16), (15, 12), (20, 8))
    beyond_range_weight: int = 0

    # Revenue potential (max 10) - (value must exceed, points), checked in order
    revenue_bands: tuple = ((3000, 10), (1500, 8), (800, 6))
    min_revenue_weight: int = 4

    # Contact quality (max 5)
    both_contacts_weight: int = 5
    one_contact_weight: int = 3
    no_contact_weight: int = 1

    thresholds: TemperatureThresholds = field(default_factory=TemperatureThresholds)


@dataclass(frozen=True)
class BusinessTypeProfile:
    """Backflow profile for a business category."""

    business_type: BusinessType
    priority: int
    keywords: tuple
    avg_devices: int
    avg_value: int
    compliance_risk: str


# Business type classifications with backflow requirements.
# Order matters: classification returns the first profile with a keyword hit.
DEFAULT_BUSINESS_TYPES = (
    BusinessTypeProfile(
        BusinessType.MEDICAL, 95,
        ("hospital", "clinic", "medical", "dental", "surgery", "health"),
        avg_devices=4, avg_value=2800, compliance_risk="high",
    ),
    BusinessTypeProfile(
        BusinessType.RESTAURANT, 90,
        ("restaurant", "food", "kitchen", "cafe", "dining", "bakery"),
        avg_devices=3, avg_value=2100, compliance_risk="high",
    ),
    BusinessTypeProfile(
        BusinessType.INDUSTRIAL, 85,
        ("manufacturing", "industrial", "factory", "plant", "warehouse"),
        avg_devices=8, avg_value=5600, compliance_risk="medium",
    ),
    BusinessTypeProfile(
        BusinessType.OFFICE, 70,
        ("office", "building", "complex", "center", "plaza"),
        avg_devices=2, avg_value=1400, compliance_risk="medium",
    ),
    BusinessTypeProfile(
        BusinessType.RETAIL, 60,
        ("retail", "store", "shop", "mall", "market"),
        avg_devices=2, avg_value=1200, compliance_risk="low",
    ),
)

# Known cities in the service area for offline geocoding
CITY_COORDINATES: Mapping[str, GeoPoint] = MappingProxyType({
    "puyallup": GeoPoint(47.1853, -122.2928),
    "tacoma": GeoPoint(47.2529, -122.4598),
    "sumner": GeoPoint(47.2029, -122.2351),
    "orting": GeoPoint(47.0979, -122.2045),
    "auburn": GeoPoint(47.3073, -122.2284),
    "federal way": GeoPoint(47.3112, -122.3126),
    "lakewood": GeoPoint(47.1717, -122.5184),
})

# Factor weights as reported by the config endpoint
SCORING_FACTORS = {
    "compliance_status": "40%",
    "business_type": "25%",
    "distance": "20%",
    "revenue_potential": "10%",
    "contact_quality": "5%",
}
