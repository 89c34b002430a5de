"""Configuration and health endpoints."""

import time

from fastapi import APIRouter, Request
from pydantic import BaseModel

from leadgen.config import DEFAULT_BUSINESS_TYPES, SCORING_FACTORS, ScoringConfig
from leadgen.scoring import temperature_ranges

router = APIRouter()

_start_time = time.time()


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    geocoder: str
    version: str
    uptime_seconds: int


@router.get("/config")
async def get_config(request: Request):
    """Service area, business types, scoring weights and temperature ranges."""
    settings = request.app.state.settings

    return {
        "service_area": {
            "center": settings.service_center.to_dict(),
            "radius_miles": settings.service_radius_miles,
        },
        "business_types": {
            p.business_type.value: {
                "priority": p.priority,
                "keywords": list(p.keywords),
                "avg_devices": p.avg_devices,
                "avg_value": p.avg_value,
                "compliance_risk": p.compliance_risk,
            }
            for p in DEFAULT_BUSINESS_TYPES
        },
        "scoring_factors": dict(SCORING_FACTORS),
        "temperature_ranges": temperature_ranges(ScoringConfig().thresholds),
    }


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Health check endpoint."""
    from leadgen import __version__

    return HealthResponse(
        status="healthy",
        geocoder=type(request.app.state.geocoder).__name__,
        version=__version__,
        uptime_seconds=int(time.time() - _start_time),
    )
