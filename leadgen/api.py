"""
Programmatic API for backflow lead scoring.

Usage:
    from leadgen import score_prospects, Prospect

    run = score_prospects([Prospect("Pierce Regional Medical Center", "Lakewood, WA")])
    hot = [p for p in run.prospects if p.temperature.value == "hot"]
"""

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Iterable, List, Optional

from leadgen.config import PRICE_PER_DEVICE, BusinessTypeProfile, Settings
from leadgen.constants import MESSAGES
from leadgen.geo import Geocoder, GeocodingError, haversine_miles
from leadgen.models import Prospect, ScoredProspect, Temperature
from leadgen.scoring import ProspectScorer, next_action, temperature_for

logger = logging.getLogger(__name__)

SORT_KEYS = ("score", "distance", "value")


@dataclass
class ScoringRun:
    """Result of scoring a batch of prospects."""

    prospects: List[ScoredProspect] = field(default_factory=list)
    total_processed: int = 0
    outside_radius: int = 0
    geocode_failures: int = 0

    @property
    def metrics(self) -> dict:
        """Summary counts for the qualified prospects."""
        counts = {t: 0 for t in Temperature}
        for p in self.prospects:
            counts[p.temperature] += 1

        scores = [p.score for p in self.prospects]

        return {
            "total_processed": self.total_processed,
            "qualified_prospects": len(self.prospects),
            "hot_leads": counts[Temperature.HOT],
            "warm_leads": counts[Temperature.WARM],
            "cold_leads": counts[Temperature.COLD],
            "outside_radius": self.outside_radius,
            "geocode_failures": self.geocode_failures,
            "total_estimated_value": sum(p.prospect.estimated_value or 0 for p in self.prospects),
            "average_score": round(sum(scores) / len(scores), 1) if scores else 0.0,
        }

    def to_dict(self) -> dict:
        return {
            "metrics": self.metrics,
            "prospects": [p.to_dict() for p in self.prospects],
        }


def estimate_contract_value(devices: int, profile: Optional[BusinessTypeProfile] = None) -> float:
    """
    Estimate annual testing revenue for a prospect.

    Uses the device count when known, otherwise the business type's average.
    """
    if devices and devices > 0:
        return devices * PRICE_PER_DEVICE
    if profile:
        return profile.avg_value
    return PRICE_PER_DEVICE


def new_lead_id() -> str:
    return f"lead_{uuid.uuid4().hex[:8]}"


def prepare_prospect(
    prospect: Prospect,
    scorer: ProspectScorer,
    geocoder: Optional[Geocoder] = None,
) -> Prospect:
    """
    Fill derived inputs: coordinates, distance, business type and value.

    Returns a new Prospect; the input is never modified.
    """
    updates = {}

    coordinates = prospect.coordinates
    if coordinates is None and geocoder is not None and prospect.address:
        try:
            coordinates = geocoder.resolve(prospect.address)
        except GeocodingError as e:
            logger.warning("Geocoding failed for %s: %s", prospect.business_name, e)
            coordinates = None
        if coordinates is None:
            logger.debug("%s (%s)", MESSAGES["geocode_failed"], prospect.address)
        else:
            updates["coordinates"] = coordinates

    if prospect.distance_miles is None and coordinates and scorer.service_center:
        updates["distance_miles"] = haversine_miles(scorer.service_center, coordinates)

    # Value estimate uses the same type the score uses
    business_type = scorer.classify(prospect)
    if business_type is not prospect.business_type:
        updates["business_type"] = business_type

    if prospect.estimated_value is None:
        profile = scorer.classifier.profile_for(business_type)
        updates["estimated_value"] = estimate_contract_value(prospect.estimated_devices, profile)

    return replace(prospect, **updates) if updates else prospect


def score_prospect(
    prospect: Prospect,
    scorer: ProspectScorer,
    today: Optional[date] = None,
) -> ScoredProspect:
    """Score a single prepared prospect and attach its tier and identity."""
    breakdown = scorer.breakdown(prospect, today)
    temperature = temperature_for(breakdown.score, scorer.config.thresholds)

    return ScoredProspect(
        prospect=prospect,
        score=breakdown.score,
        temperature=temperature,
        business_type=scorer.classify(prospect),
        breakdown=breakdown,
        id=new_lead_id(),
        next_action=next_action(breakdown.score),
        generated_at=datetime.now(),
    )


def sort_scored(prospects: List[ScoredProspect], sort_by: str = "score") -> List[ScoredProspect]:
    """
    Order scored prospects.

    score: highest first; distance: nearest first (unknown last);
    value: largest first.
    """
    if sort_by == "score":
        return sorted(prospects, key=lambda p: p.score, reverse=True)
    if sort_by == "distance":
        return sorted(
            prospects,
            key=lambda p: (p.prospect.distance_miles is None, p.prospect.distance_miles or 0),
        )
    if sort_by == "value":
        return sorted(prospects, key=lambda p: p.prospect.estimated_value or 0, reverse=True)
    raise ValueError(f"Unknown sort key: {sort_by}")


def score_prospects(
    prospects: Iterable[Prospect],
    settings: Optional[Settings] = None,
    scorer: Optional[ProspectScorer] = None,
    geocoder: Optional[Geocoder] = None,
    min_score: Optional[int] = None,
    temperature: Optional[Temperature] = None,
    sort_by: Optional[str] = None,
    limit: Optional[int] = None,
    today: Optional[date] = None,
) -> ScoringRun:
    """
    Score a batch of prospects.

    Each prospect is handled independently; ordering of the input does not
    affect any score.

    Args:
        prospects: Prospects to score
        settings: Service area and defaults (uses defaults if not provided)
        scorer: Scorer to use (built from settings if not provided)
        geocoder: Resolves addresses for prospects without coordinates
        min_score: Drop prospects scoring below this
        temperature: Keep only this tier
        sort_by: "score", "distance" or "value"
        limit: Maximum number of results
        today: Reference date for compliance recency

    Returns:
        ScoringRun with sorted, filtered prospects and counters
    """
    settings = settings or Settings()
    scorer = scorer or ProspectScorer(service_center=settings.service_center)
    min_score = settings.min_score if min_score is None else min_score
    sort_by = sort_by or settings.sort_by
    limit = settings.max_results if limit is None else limit

    if sort_by not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {sort_by}")

    run = ScoringRun()
    scored = []

    for prospect in prospects:
        run.total_processed += 1
        had_location = prospect.coordinates is not None or prospect.distance_miles is not None

        prepared = prepare_prospect(prospect, scorer, geocoder)
        if not had_location and prepared.coordinates is None and geocoder is not None:
            run.geocode_failures += 1

        if (
            settings.enforce_radius
            and prepared.distance_miles is not None
            and prepared.distance_miles > settings.service_radius_miles
        ):
            logger.debug("%s: %s", prepared.business_name, MESSAGES["outside_radius"])
            run.outside_radius += 1
            continue

        result = score_prospect(prepared, scorer, today)

        if result.score < min_score:
            continue
        if temperature is not None and result.temperature is not temperature:
            continue

        scored.append(result)

    run.prospects = sort_scored(scored, sort_by)[:limit]

    logger.info(
        "Scored %d prospects, %d qualified",
        run.total_processed,
        len(run.prospects),
    )
    return run
