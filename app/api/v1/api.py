"""API router aggregating every endpoint module."""
from fastapi import APIRouter

from app.api.v1.endpoints import (
    ai,
    auth,
    study_sessions,
    study_sets,
    users,
    version,
)


api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(study_sets.router)
api_router.include_router(study_sessions.router)
api_router.include_router(ai.router)
api_router.include_router(version.router)
