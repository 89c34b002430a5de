"""Prospect score calculation - How urgently should we contact this business?"""

import math
from datetime import date
from typing import Optional

from ..config import ScoringConfig
from ..geo.distance import haversine_miles
from ..models import BusinessType, GeoPoint, Prospect, ScoreBreakdown
from .classify import BusinessClassifier


class ProspectScorer:
    """
    Weighted five-factor lead score.

    Factors (default maximums): compliance recency 40, business type 25,
    distance 20, revenue potential 10, contact quality 5. The raw sum is
    rounded half-up and clamped to 0-100.

    Stateless after construction; one instance can score any number of
    prospects, from any thread.
    """

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        classifier: Optional[BusinessClassifier] = None,
        service_center: Optional[GeoPoint] = None,
    ):
        """
        Args:
            config: Scoring weights and bands (uses defaults if not provided)
            classifier: Business type table (uses defaults if not provided)
            service_center: Used to derive distance for prospects that carry
                coordinates but no distance
        """
        self.config = config or ScoringConfig()
        self.classifier = classifier or BusinessClassifier()
        self.service_center = service_center

    def score(self, prospect: Prospect, today: Optional[date] = None) -> int:
        """
        Calculate the score for a prospect.

        Args:
            prospect: The prospect to score
            today: Reference date for compliance recency (defaults to today)

        Returns:
            Score from 0-100
        """
        return self.breakdown(prospect, today).score

    def breakdown(self, prospect: Prospect, today: Optional[date] = None) -> ScoreBreakdown:
        """Score a prospect, keeping each factor's contribution."""
        compliance = self.compliance_points(prospect.last_test_date, today or date.today())
        business_type = self.business_type_points(self.classify(prospect))
        distance = self.distance_points(self.distance_for(prospect))
        revenue = self.revenue_points(prospect.estimated_value)
        contact = self.contact_points(prospect.contact_email, prospect.contact_phone)

        total = compliance + business_type + distance + revenue + contact
        score = max(0, min(100, math.floor(total + 0.5)))

        return ScoreBreakdown(
            compliance=compliance,
            business_type=business_type,
            distance=distance,
            revenue=revenue,
            contact=contact,
            total=total,
            score=score,
        )

    def classify(self, prospect: Prospect) -> BusinessType:
        """Classify by name, description and any declared facility type."""
        hints = [prospect.description]
        if prospect.business_type and prospect.business_type is not BusinessType.OTHER:
            hints.append(prospect.business_type.value)
        description = " ".join(h for h in hints if h) or None
        return self.classifier.classify(prospect.business_name, description)

    def distance_for(self, prospect: Prospect) -> Optional[float]:
        """Distance in miles, derived from coordinates when not given."""
        if prospect.distance_miles is not None:
            return prospect.distance_miles
        if prospect.coordinates and self.service_center:
            return haversine_miles(self.service_center, prospect.coordinates)
        return None

    def compliance_points(self, last_test_date: Optional[date], today: date) -> float:
        config = self.config

        # Never tested, or unknown - worth investigating
        if last_test_date is None:
            return config.unknown_test_weight

        days_since_test = (today - last_test_date).days
        if days_since_test > config.overdue_days:
            return config.overdue_weight
        if days_since_test > config.due_soon_days:
            return config.due_soon_weight
        return config.current_weight

    def business_type_points(self, business_type: BusinessType) -> float:
        profile = self.classifier.profile_for(business_type)
        if profile is None:
            return 0
        return (profile.priority / 100) * self.config.business_type_weight

    def distance_points(self, distance_miles: Optional[float]) -> float:
        if distance_miles is None:
            return self.config.beyond_range_weight

        for max_miles, points in self.config.distance_bands:
            if distance_miles <= max_miles:
                return points
        return self.config.beyond_range_weight

    def revenue_points(self, estimated_value: Optional[float]) -> float:
        value = estimated_value or 0
        for floor, points in self.config.revenue_bands:
            if value > floor:
                return points
        return self.config.min_revenue_weight

    def contact_points(self, email: Optional[str], phone: Optional[str]) -> float:
        if email and phone:
            return self.config.both_contacts_weight
        if email or phone:
            return self.config.one_contact_weight
        return self.config.no_contact_weight


def calculate_prospect_score(
    prospect: Prospect,
    config: Optional[ScoringConfig] = None,
    today: Optional[date] = None,
) -> int:
    """
    Calculate the score for a prospect with the default business type table.

    Args:
        prospect: The prospect to score
        config: Scoring configuration (uses defaults if not provided)
        today: Reference date for compliance recency

    Returns:
        Score from 0-100
    """
    return ProspectScorer(config).score(prospect, today)


def get_score_breakdown(
    prospect: Prospect,
    today: Optional[date] = None,
    scorer: Optional[ProspectScorer] = None,
) -> dict:
    """
    Get a detailed breakdown of score components.

    Args:
        prospect: The prospect to analyse
        today: Reference date for compliance recency
        scorer: Scorer to explain (uses defaults if not provided)

    Returns:
        Dictionary with score components and explanations
    """
    scorer = scorer or ProspectScorer()
    result = scorer.breakdown(prospect, today)
    business_type = scorer.classify(prospect)
    distance = scorer.distance_for(prospect)

    if prospect.last_test_date is None:
        compliance_note = "No test on record - investigate"
    else:
        days = ((today or date.today()) - prospect.last_test_date).days
        compliance_note = f"Last tested {days} days ago"

    contacts = [c for c in (prospect.contact_email, prospect.contact_phone) if c]

    return {
        "total": result.score,
        "components": [
            {"factor": "Compliance recency", "points": result.compliance, "note": compliance_note},
            {"factor": f"Business type ({business_type.value})", "points": result.business_type},
            {
                "factor": "Distance",
                "points": result.distance,
                "note": f"{distance:.1f} miles" if distance is not None else "Distance unknown",
            },
            {"factor": "Revenue potential", "points": result.revenue},
            {"factor": f"Contact quality ({len(contacts)} channel(s))", "points": result.contact},
        ],
    }
