"""API v1 router."""

from fastapi import APIRouter

from leadgen.web.api.v1 import scoring, geo, config

router = APIRouter(prefix="/api/v1")

router.include_router(scoring.router, tags=["scoring"])
router.include_router(geo.router, tags=["geo"])
router.include_router(config.router, tags=["config"])
