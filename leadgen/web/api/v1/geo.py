"""Distance and route planning endpoints."""

from fastapi import APIRouter, HTTPException, Query, Request

from leadgen.api import prepare_prospect
from leadgen.geo import haversine_miles, plan_route
from leadgen.scoring import ProspectScorer
from leadgen.web.api.v1.models import Coordinates, DistanceResponse, RouteRequest

router = APIRouter()


@router.get("/distance", response_model=DistanceResponse)
def distance(
    lat1: float = Query(ge=-90, le=90),
    lng1: float = Query(ge=-180, le=180),
    lat2: float = Query(ge=-90, le=90),
    lng2: float = Query(ge=-180, le=180),
):
    """Great-circle distance in miles between two points."""
    start = Coordinates(lat=lat1, lng=lng1)
    end = Coordinates(lat=lat2, lng=lng2)
    miles = haversine_miles(start.to_point(), end.to_point())
    return DistanceResponse(start=start, end=end, miles=round(miles, 2))


@router.post("/route")
def route(payload: RouteRequest, request: Request):
    """
    Plan a visit order for the given prospects.

    Starts at the service centre unless `start` is given. Prospects
    without coordinates are geocoded; those that cannot be located are
    returned under `unrouted`.
    """
    if not payload.prospects:
        raise HTTPException(status_code=400, detail="No prospects to route")

    settings = request.app.state.settings
    scorer = ProspectScorer(service_center=settings.service_center)
    geocoder = request.app.state.geocoder

    prepared = [prepare_prospect(p.to_prospect(), scorer, geocoder) for p in payload.prospects]
    start = payload.start.to_point() if payload.start else settings.service_center

    plan = plan_route(
        start,
        prepared,
        locate=lambda p: p.coordinates,
        visit_minutes=settings.visit_minutes,
        minutes_per_mile=settings.minutes_per_mile,
    )

    return plan.to_dict(lambda p: {
        "business_name": p.business_name,
        "address": p.address,
        "coordinates": p.coordinates.to_dict() if p.coordinates else None,
    })
