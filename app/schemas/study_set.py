"""Pydantic models for study sets and their flashcards."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, computed_field, field_validator, model_validator

from app.constants import SUPPORTED_LANGUAGE_CODES
from app.schemas.common import CamelModel
from app.schemas.study_session import StudySessionRead
from app.utils.short_uuid import to_short_uuid


class FlashCardInput(CamelModel):
    """Question/answer pair supplied when creating a study set."""

    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)


class FlashCardCreate(CamelModel):
    """Payload for adding one card to an existing set."""

    question: str = Field(..., min_length=1, max_length=1000)
    answer: str = Field(..., min_length=1, max_length=1000)


class FlashCardRead(CamelModel):
    id: UUID
    question: str
    answer: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StudySetCreate(CamelModel):
    """Payload for creating a study set together with its first cards."""

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    language: str = Field("en-US", description="IETF language tag of the set")
    flash_cards: List[FlashCardInput] = Field(..., min_length=1)

    @field_validator("language")
    @classmethod
    def check_language(cls, value: str) -> str:
        if value not in SUPPORTED_LANGUAGE_CODES:
            raise ValueError(f"Unsupported language: {value}")
        return value


class StudySetUpdate(CamelModel):
    """Partial update of a study set's title and description."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)

    @model_validator(mode="after")
    def ensure_payload_not_empty(self) -> "StudySetUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self


class StudySetRead(CamelModel):
    id: UUID
    title: str
    description: Optional[str] = None
    language: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @computed_field(alias="shortId")  # type: ignore[prop-decorator]
    @property
    def short_id(self) -> str:
        return to_short_uuid(self.id)


class StudySetSummary(StudySetRead):
    """List entry with the number of cards in the set."""

    card_count: int = 0


class StudySetDetail(StudySetRead):
    """A study set with its cards and the most recent practice session."""

    flash_cards: List[FlashCardRead] = Field(default_factory=list)
    last_studied_at: Optional[StudySessionRead] = None


class StudySetListResponse(CamelModel):
    success: bool = True
    data: List[StudySetSummary]


class StudySetCreatedResponse(CamelModel):
    success: bool = True
    data: UUID


class StudySetDetailResponse(CamelModel):
    success: bool = True
    data: StudySetDetail


class StudySetResponse(CamelModel):
    success: bool = True
    data: StudySetRead


class FlashCardResponse(CamelModel):
    success: bool = True
    data: FlashCardRead
