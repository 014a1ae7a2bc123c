"""Pydantic models for the profile statistics endpoint."""
from __future__ import annotations

from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import Field

from app.schemas.common import CamelModel


class RecentSession(CamelModel):
    """A recent session annotated with the practiced set's title."""

    id: UUID
    title: str
    start_time: datetime
    total_count: int
    correct_count: int


class UserStats(CamelModel):
    """Dashboard aggregate computed from a user's session history."""

    total_study_sets: int = 0
    total_cards: int = 0
    study_streak: int = 0
    accuracy: int = 0
    total_study_sessions: int = 0
    recent_sessions: List[RecentSession] = Field(default_factory=list)


class UserStatsResponse(CamelModel):
    data: UserStats
