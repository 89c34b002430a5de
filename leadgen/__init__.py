"""
Backflow Lead Generation - prospect scoring for a backflow-testing business.

Score businesses by compliance urgency, facility type, distance from the
service area, revenue potential and contact quality, then bucket them into
hot / warm / cold outreach tiers.

CLI Usage:
    leadgen score prospects.json -f json -q | jq '.'
    leadgen distance 47.1853 -122.2928 47.2529 -122.4598
    leadgen web  # Start the scoring API

Library Usage:
    from leadgen import Prospect, ProspectScorer, temperature_for

    scorer = ProspectScorer()
    score = scorer.score(Prospect("Pierce Regional Medical Center", distance_miles=3))
    print(score, temperature_for(score).value)
"""

__version__ = "1.0.0"

# Semantic versioning
# MAJOR.MINOR.PATCH
VERSION_INFO = {
    "major": 1,
    "minor": 0,
    "patch": 0,
    "release": "stable",  # stable, beta, alpha
}


def get_version() -> str:
    """Get full version string."""
    version = f"{VERSION_INFO['major']}.{VERSION_INFO['minor']}.{VERSION_INFO['patch']}"
    if VERSION_INFO["release"] != "stable":
        version += f"-{VERSION_INFO['release']}"
    return version


from leadgen.models import BusinessType, GeoPoint, Prospect, ScoredProspect, Temperature
from leadgen.geo import haversine_miles
from leadgen.scoring import BusinessClassifier, ProspectScorer, temperature_for
from leadgen.api import score_prospects, ScoringRun

__all__ = [
    "BusinessType",
    "GeoPoint",
    "Prospect",
    "ScoredProspect",
    "Temperature",
    "haversine_miles",
    "BusinessClassifier",
    "ProspectScorer",
    "temperature_for",
    "score_prospects",
    "ScoringRun",
    "__version__",
    "get_version",
    "VERSION_INFO",
]
