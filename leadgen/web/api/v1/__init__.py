"""API v1."""

from leadgen.web.api.v1.router import router

__all__ = ["router"]
