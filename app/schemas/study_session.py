"""Pydantic models for recording study sessions."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from app.schemas.common import CamelModel


class CardResult(CamelModel):
    """Outcome of a single card within a session."""

    card_id: UUID
    user_answer: str
    is_correct: bool
    answered_at: datetime


class SessionScore(CamelModel):
    correct_count: int = Field(..., ge=0)
    total_count: int = Field(..., ge=1)
    percentage: float = Field(..., ge=0, le=100)

    @model_validator(mode="after")
    def check_counts(self) -> "SessionScore":
        if self.correct_count > self.total_count:
            raise ValueError("correctCount cannot exceed totalCount")
        return self


class StudySessionCreate(CamelModel):
    """Payload sent by the client once a practice run is finished."""

    study_set_id: UUID
    start_time: datetime
    end_time: datetime
    results: List[CardResult]
    score: SessionScore

    @field_validator("start_time", "end_time")
    @classmethod
    def to_utc(cls, value: datetime) -> datetime:
        # Naive timestamps are taken as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @model_validator(mode="after")
    def check_time_order(self) -> "StudySessionCreate":
        if self.end_time < self.start_time:
            raise ValueError("endTime must not precede startTime")
        return self


class StudySessionRead(CamelModel):
    id: UUID
    study_set_id: UUID
    start_time: datetime
    end_time: Optional[datetime] = None
    correct_count: int
    total_count: int
    results: List[Any] = Field(default_factory=list)
