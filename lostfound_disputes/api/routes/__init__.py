"""API routes."""

from lostfound_disputes.api.routes.disputes import router as disputes_router

__all__ = ["disputes_router"]
