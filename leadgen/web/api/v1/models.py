"""Pydantic models for API v1."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from leadgen.models import BusinessType, GeoPoint, Prospect, Temperature


class Coordinates(BaseModel):
    """Latitude/longitude in degrees."""
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)

    def to_point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lng)


class ProspectIn(BaseModel):
    """A prospect record to score."""
    business_name: str = Field(min_length=1)
    address: str = ""
    coordinates: Optional[Coordinates] = None
    business_type: Optional[BusinessType] = None
    description: Optional[str] = None
    last_test_date: Optional[date] = None
    estimated_devices: int = Field(default=0, ge=0)
    estimated_value: Optional[float] = Field(default=None, ge=0)
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    distance_miles: Optional[float] = Field(default=None, ge=0)
    source: str = "api"

    def to_prospect(self) -> Prospect:
        return Prospect(
            business_name=self.business_name,
            address=self.address,
            coordinates=self.coordinates.to_point() if self.coordinates else None,
            business_type=self.business_type,
            description=self.description,
            last_test_date=self.last_test_date,
            estimated_devices=self.estimated_devices,
            estimated_value=self.estimated_value,
            contact_email=self.contact_email,
            contact_phone=self.contact_phone,
            distance_miles=self.distance_miles,
            source=self.source,
        )


class ScoreOptions(BaseModel):
    """Batch scoring options."""
    min_score: int = Field(default=60, ge=0, le=100)
    max_results: int = Field(default=100, ge=1, le=1000)
    temperature: Optional[Temperature] = None
    sort_by: str = Field(default="score", pattern="^(score|distance|value)$")
    within_radius: bool = False


class ScoreRequest(BaseModel):
    """Batch scoring request payload."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "prospects": [
                    {
                        "business_name": "Pierce Regional Medical Center",
                        "address": "11315 Bridgeport Way SW, Lakewood, WA 98499",
                        "last_test_date": "2022-09-15",
                        "estimated_devices": 6,
                        "contact_email": "facilities@pierceregional.org",
                        "contact_phone": "(253) 555-0123",
                    }
                ],
                "options": {"min_score": 60, "sort_by": "score"},
            }
        }
    )

    prospects: List[ProspectIn] = Field(default_factory=list)
    options: ScoreOptions = Field(default_factory=ScoreOptions)


class ScoreResponse(BaseModel):
    """Batch scoring response."""
    metrics: dict
    prospects: List[dict]


class RouteRequest(BaseModel):
    """Route planning request."""
    start: Optional[Coordinates] = None
    prospects: List[ProspectIn] = Field(default_factory=list)


class DistanceResponse(BaseModel):
    """Distance between two points."""
    start: Coordinates
    end: Coordinates
    miles: float
