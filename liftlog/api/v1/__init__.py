"""API v1 router aggregation."""

from fastapi import APIRouter

from liftlog.api.v1.endpoints import exercises, health, records, sessions, stats, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(records.router, prefix="/records", tags=["records"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
