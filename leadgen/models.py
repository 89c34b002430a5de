"""Data models for backflow lead scoring."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


class BusinessType(str, Enum):
    """Facility categories with distinct backflow requirements."""

    MEDICAL = "medical"
    RESTAURANT = "restaurant"
    INDUSTRIAL = "industrial"
    OFFICE = "office"
    RETAIL = "retail"
    OTHER = "other"


class Temperature(str, Enum):
    """Contact-urgency tier derived from a lead score."""

    HOT = "hot"
    WARM = "warm"
    COLD = "cold"


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in degrees."""

    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return {"lat": self.latitude, "lng": self.longitude}


@dataclass(frozen=True)
class Prospect:
    """A candidate business being evaluated for outreach."""

    business_name: str
    address: str = ""
    coordinates: Optional[GeoPoint] = None
    business_type: Optional[BusinessType] = None
    description: Optional[str] = None  # Free text used for classification
    last_test_date: Optional[date] = None
    estimated_devices: int = 0
    estimated_value: Optional[float] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    distance_miles: Optional[float] = None

    # Metadata
    source: str = ""


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-factor contributions behind a score."""

    compliance: float = 0.0
    business_type: float = 0.0
    distance: float = 0.0
    revenue: float = 0.0
    contact: float = 0.0
    total: float = 0.0  # Raw sum before rounding and clamping
    score: int = 0

    def to_dict(self) -> dict:
        return {
            "compliance": self.compliance,
            "business_type": self.business_type,
            "distance": self.distance,
            "revenue": self.revenue,
            "contact": self.contact,
            "total": round(self.total, 2),
            "score": self.score,
        }


@dataclass(frozen=True)
class ScoredProspect:
    """A prospect with its derived score, tier and caller-assigned identity."""

    prospect: Prospect
    score: int
    temperature: Temperature
    business_type: BusinessType
    breakdown: ScoreBreakdown
    id: str
    next_action: str = ""
    generated_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        p = self.prospect
        return {
            "id": self.id,
            "business_name": p.business_name,
            "address": p.address,
            "coordinates": p.coordinates.to_dict() if p.coordinates else None,
            "business_type": self.business_type.value,
            "last_test_date": p.last_test_date.isoformat() if p.last_test_date else None,
            "estimated_devices": p.estimated_devices,
            "estimated_value": p.estimated_value,
            "contact_email": p.contact_email,
            "contact_phone": p.contact_phone,
            "distance_miles": round(p.distance_miles, 2) if p.distance_miles is not None else None,
            "score": self.score,
            "temperature": self.temperature.value,
            "next_action": self.next_action,
            "breakdown": self.breakdown.to_dict(),
            "source": p.source,
            "generated_at": self.generated_at.isoformat(),
        }
