"""Persist completed practice sessions."""
from __future__ import annotations

import uuid

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.models.study_session import StudySession
from app.db.models.study_set import StudySet
from app.schemas import StudySessionCreate
from app.utils.exceptions import StudySetNotFoundError


class StudySessionService:
    def __init__(self, db: Session):
        self.db = db

    def record(self, user_id: uuid.UUID, payload: StudySessionCreate) -> StudySession:
        """Store a finished session for one of the user's study sets."""

        owned = self.db.scalar(
            select(StudySet.id).where(
                StudySet.id == payload.study_set_id, StudySet.user_id == user_id
            )
        )
        if owned is None:
            raise StudySetNotFoundError("Study set not found")

        session = StudySession(
            user_id=user_id,
            study_set_id=payload.study_set_id,
            start_time=payload.start_time,
            end_time=payload.end_time,
            correct_count=payload.score.correct_count,
            total_count=payload.score.total_count,
            results=[
                result.model_dump(mode="json", by_alias=True) for result in payload.results
            ],
        )
        self.db.add(session)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(session)
        logger.info(
            "Recorded study session",
            session_id=str(session.id),
            correct=session.correct_count,
            total=session.total_count,
        )
        return session
