"""Database models package."""
from app.db.models.user import User
from app.db.models.study_set import FlashCard, StudySet, study_set_flash_cards
from app.db.models.study_session import StudySession

__all__ = [
    "User",
    "FlashCard",
    "StudySet",
    "study_set_flash_cards",
    "StudySession",
]
