"""
API v1 Router Aggregator
========================
Collects and exports all v1 API routers.
"""

from fastapi import APIRouter

from agent_core.app.api.v1.agents import router as agents_router
from agent_core.app.api.v1.pipelines import router as pipelines_router

# Main API router - aggregates all v1 routes
api_router = APIRouter()

# Register sub-routers
api_router.include_router(
    agents_router,
    prefix="/agents",
    tags=["Agents"],
)

api_router.include_router(
    pipelines_router,
    prefix="/pipelines",
    tags=["Pipelines"],
)

__all__ = ["api_router"]
