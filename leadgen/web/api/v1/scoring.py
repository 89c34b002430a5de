"""Scoring endpoints."""

from dataclasses import replace
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from leadgen.api import prepare_prospect, score_prospect, score_prospects
from leadgen.models import BusinessType, GeoPoint, Prospect
from leadgen.scoring import ProspectScorer, action_plan, get_score_breakdown
from leadgen.web.api.v1.models import ScoreRequest, ScoreResponse

router = APIRouter()


@router.post("/score", response_model=ScoreResponse)
def score_batch(payload: ScoreRequest, request: Request):
    """
    Score a batch of prospects.

    Each prospect is scored independently; results are filtered by the
    options and sorted (score descending by default).
    """
    if not payload.prospects:
        raise HTTPException(status_code=400, detail="Invalid prospects array provided")

    settings = replace(request.app.state.settings, enforce_radius=payload.options.within_radius)
    options = payload.options

    run = score_prospects(
        [p.to_prospect() for p in payload.prospects],
        settings=settings,
        geocoder=request.app.state.geocoder,
        min_score=options.min_score,
        temperature=options.temperature,
        sort_by=options.sort_by,
        limit=options.max_results,
    )

    return run.to_dict()


@router.get("/score")
def score_single(
    request: Request,
    business: Optional[str] = None,
    address: Optional[str] = None,
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lng: Optional[float] = Query(default=None, ge=-180, le=180),
    type: Optional[str] = None,
):
    """Score one prospect from query parameters."""
    if not business or not address or lat is None or lng is None:
        raise HTTPException(
            status_code=400,
            detail="Missing required parameters: business, address, lat, lng",
        )

    try:
        business_type = BusinessType(type.lower()) if type else None
        description = None
    except ValueError:
        business_type, description = None, type

    settings = request.app.state.settings
    scorer = ProspectScorer(service_center=settings.service_center)

    prospect = prepare_prospect(
        Prospect(
            business_name=business,
            address=address,
            coordinates=GeoPoint(lat, lng),
            business_type=business_type,
            description=description,
            source="manual_input",
        ),
        scorer,
    )
    scored = score_prospect(prospect, scorer)

    return {
        "lead": scored.to_dict(),
        "analysis": {
            "temperature": scored.temperature.value,
            "next_action": scored.next_action,
            "action_plan": action_plan(prospect, scored.temperature),
            "breakdown": get_score_breakdown(prospect, scorer=scorer),
        },
    }
