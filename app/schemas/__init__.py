"""Pydantic schemas package."""

from app.schemas.ai import (
    AnswerJudgeRequest,
    AnswerJudgeResponse,
    AnswerVerdict,
    FlashcardGenerationRequest,
    FlashcardGenerationResponse,
    GeneratedFlashcard,
)
from app.schemas.auth import RefreshRequest, Token, TokenPayload
from app.schemas.common import CamelModel, SuccessResponse
from app.schemas.stats import RecentSession, UserStats, UserStatsResponse
from app.schemas.study_session import CardResult, SessionScore, StudySessionCreate, StudySessionRead
from app.schemas.study_set import (
    FlashCardCreate,
    FlashCardInput,
    FlashCardRead,
    FlashCardResponse,
    StudySetCreate,
    StudySetCreatedResponse,
    StudySetDetail,
    StudySetDetailResponse,
    StudySetListResponse,
    StudySetRead,
    StudySetResponse,
    StudySetSummary,
    StudySetUpdate,
)
from app.schemas.user import SignupRequest, UserLogin, UserRead

__all__ = [
    "AnswerJudgeRequest",
    "AnswerJudgeResponse",
    "AnswerVerdict",
    "FlashcardGenerationRequest",
    "FlashcardGenerationResponse",
    "GeneratedFlashcard",
    "RefreshRequest",
    "Token",
    "TokenPayload",
    "CamelModel",
    "SuccessResponse",
    "RecentSession",
    "UserStats",
    "UserStatsResponse",
    "CardResult",
    "SessionScore",
    "StudySessionCreate",
    "StudySessionRead",
    "FlashCardCreate",
    "FlashCardInput",
    "FlashCardRead",
    "FlashCardResponse",
    "StudySetCreate",
    "StudySetCreatedResponse",
    "StudySetDetail",
    "StudySetDetailResponse",
    "StudySetListResponse",
    "StudySetRead",
    "StudySetResponse",
    "StudySetSummary",
    "StudySetUpdate",
    "SignupRequest",
    "UserLogin",
    "UserRead",
]
