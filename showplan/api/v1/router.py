"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from showplan.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from showplan.api.v1.endpoints import health, schedules, shows, snapshots

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(schedules.router, prefix="/schedules", tags=["schedules"])
api_router.include_router(snapshots.router, prefix="/snapshots", tags=["snapshots"])
api_router.include_router(shows.router, prefix="/shows", tags=["shows"])
