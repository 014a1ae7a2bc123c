"""Service layer package."""

from app.services.ai_content import AnswerJudge, FlashcardGenerator
from app.services.auth import AuthService
from app.services.llm_service import LLMService
from app.services.stats import SqlSessionHistory, StatsService, StudyCalendar
from app.services.study_sessions import StudySessionService
from app.services.study_sets import StudySetService

__all__ = [
    "AnswerJudge",
    "AuthService",
    "FlashcardGenerator",
    "LLMService",
    "SqlSessionHistory",
    "StatsService",
    "StudyCalendar",
    "StudySessionService",
    "StudySetService",
]
