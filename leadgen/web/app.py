"""FastAPI application factory."""

import os
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from leadgen import __version__
from leadgen.config import Settings, load_config
from leadgen.geo import Geocoder, build_geocoder

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, geocoder: Optional[Geocoder] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Service settings (loaded from LEADGEN_CONFIG / env if not provided)
        geocoder: Address resolver (built from settings if not provided)
    """
    settings = settings or load_config(os.environ.get("LEADGEN_CONFIG"))

    app = FastAPI(
        title="Backflow Lead Scoring",
        description="Prospect scoring and visit planning for backflow testing",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware for production
    origins = os.environ.get("ALLOWED_ORIGINS", "*")
    if origins != "*":
        origins = [o.strip() for o in origins.split(",")]
    else:
        origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    app.state.settings = settings
    app.state.geocoder = geocoder or build_geocoder(settings)

    from leadgen.web.api.v1 import router as api_router
    app.include_router(api_router)

    logger.info("Scoring API ready (service radius %.0f mi)", settings.service_radius_miles)
    return app


# Create default app instance
app = create_app()
