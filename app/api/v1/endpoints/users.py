"""Current user profile and dashboard statistics."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.api import deps
from app.db.models.user import User
from app.schemas import UserRead, UserStatsResponse
from app.services.stats import StatsService
from app.utils.exceptions import StatsUnavailableError

router = APIRouter(prefix="/user", tags=["users"])


@router.get("/profile", response_model=UserRead)
def read_profile(current_user: User = Depends(deps.get_current_user)) -> User:
    """Return the authenticated user profile."""

    return current_user


@router.get("/profile/stats", response_model=UserStatsResponse)
def read_profile_stats(
    current_user: User = Depends(deps.get_current_user),
    service: StatsService = Depends(deps.get_stats_service),
) -> UserStatsResponse:
    """Return study set, card, streak and accuracy totals for the dashboard."""

    try:
        stats = service.get_user_stats(current_user.id)
    except StatsUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user stats",
        ) from exc
    return UserStatsResponse(data=stats)
