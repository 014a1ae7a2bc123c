"""Shared API dependencies."""
from __future__ import annotations

import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from loguru import logger
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.core.security import ACCESS_TOKEN, InvalidTokenError, decode_token
from app.db.models.user import User
from app.db.session import get_db
from app.schemas import TokenPayload
from app.services.ai_content import AnswerJudge, FlashcardGenerator
from app.services.llm_service import LLMService
from app.services.stats import SqlSessionHistory, StatsService, StudyCalendar
from app.utils.short_uuid import parse_identifier

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)

_llm_service_singleton: LLMService | None = None


def get_current_user(
    token: str | None = Depends(oauth2_scheme), db: Session = Depends(get_db)
) -> User:
    """Resolve the authenticated user from the Authorization header."""

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not token:
        raise credentials_exception

    try:
        payload = decode_token(token, ACCESS_TOKEN)
        token_data = TokenPayload.model_validate(payload)
    except (InvalidTokenError, ValidationError, ValueError, KeyError) as exc:
        raise credentials_exception from exc

    user = db.get(User, token_data.sub)
    if not user:
        raise credentials_exception
    return user


def resolve_study_set_id(study_set_id: str) -> uuid.UUID:
    """Accept a study set path parameter given as a UUID or short id."""

    try:
        return parse_identifier(study_set_id)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Study set not found"
        ) from exc


def get_study_calendar(settings: Settings = Depends(get_settings)) -> StudyCalendar:
    return StudyCalendar.from_settings(settings)


def get_stats_service(
    db: Session = Depends(get_db),
    calendar: StudyCalendar = Depends(get_study_calendar),
    settings: Settings = Depends(get_settings),
) -> StatsService:
    """Assemble the stats aggregator over the request's database session."""

    return StatsService(
        source=SqlSessionHistory(db),
        calendar=calendar,
        recent_limit=settings.RECENT_SESSIONS_LIMIT,
    )


def require_ai_enabled(settings: Settings = Depends(get_settings)) -> None:
    """Reject AI routes while the feature switch is off."""

    if not settings.AI_ENABLED:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI services are currently disabled.",
        )


def get_optional_llm_service(settings: Settings = Depends(get_settings)) -> LLMService | None:
    """Return the cached LLM service, or ``None`` when no provider has a key."""

    global _llm_service_singleton
    if _llm_service_singleton is None:
        try:
            _llm_service_singleton = LLMService(config=settings)
        except ValueError:
            logger.warning("No LLM provider configured")
            return None
    return _llm_service_singleton


def get_llm_service(
    llm_service: LLMService | None = Depends(get_optional_llm_service),
) -> LLMService:
    """Return the LLM service or raise if no provider is available."""

    if llm_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="LLM providers are not configured",
        )
    return llm_service


def get_flashcard_generator(
    llm_service: LLMService = Depends(get_llm_service),
) -> FlashcardGenerator:
    return FlashcardGenerator(llm_service)


def get_answer_judge(
    llm_service: LLMService | None = Depends(get_optional_llm_service),
) -> AnswerJudge:
    """Build the judge; exact matches are graded even without a provider."""

    return AnswerJudge(llm_service)
