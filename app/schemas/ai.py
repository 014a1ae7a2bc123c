"""Pydantic models for the AI assisted endpoints."""
from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator

from app.constants import CEFR_LEVELS, LEARNING_AREA_CODES, SUPPORTED_LANGUAGE_CODES
from app.schemas.common import CamelModel


class FlashcardGenerationRequest(CamelModel):
    """Ask the model for a batch of flashcards on a topic."""

    topic: str = Field(..., min_length=1, max_length=500)
    language: str = Field("en-US", description="Language the questions are written in")
    cefr_language: str = Field(..., description="Language the learner is studying")
    flash_card_count: int = Field(5, ge=1, le=50)
    cefr_level: Optional[str] = Field(None, description="Target CEFR level, A1 to C2")
    learning_area: Optional[str] = Field(None, description="Skill the cards should practise")

    @field_validator("language", "cefr_language")
    @classmethod
    def check_language(cls, value: str) -> str:
        if value not in SUPPORTED_LANGUAGE_CODES:
            raise ValueError(f"Unsupported language: {value}")
        return value

    @field_validator("cefr_level")
    @classmethod
    def check_cefr_level(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in CEFR_LEVELS:
            raise ValueError(f"Unknown CEFR level: {value}")
        return value

    @field_validator("learning_area")
    @classmethod
    def check_learning_area(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in LEARNING_AREA_CODES:
            raise ValueError(f"Unknown learning area: {value}")
        return value


class GeneratedFlashcard(CamelModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)


class FlashcardGenerationResponse(CamelModel):
    success: bool = True
    flashcards: List[GeneratedFlashcard]


class AnswerJudgeRequest(CamelModel):
    question: str = Field(..., min_length=1)
    user_answer: str = Field(..., min_length=1)
    correct_answer: str = Field(..., min_length=1)


class AnswerVerdict(CamelModel):
    """Model verdict on a free-text answer."""

    is_correct: bool
    reasoning: str = Field(..., min_length=1)


class AnswerJudgeResponse(CamelModel):
    success: bool = True
    data: AnswerVerdict
