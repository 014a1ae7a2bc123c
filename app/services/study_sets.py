"""Service layer for study sets and the flashcards inside them."""
from __future__ import annotations

import uuid
from typing import Sequence

from loguru import logger
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from app.db.models.study_session import StudySession
from app.db.models.study_set import FlashCard, StudySet, study_set_flash_cards
from app.schemas import (
    FlashCardCreate,
    FlashCardRead,
    StudySessionRead,
    StudySetCreate,
    StudySetDetail,
    StudySetSummary,
    StudySetUpdate,
)
from app.utils.exceptions import StudySetNotFoundError


class StudySetService:
    """CRUD operations scoped to the owning user."""

    def __init__(self, db: Session):
        self.db = db

    def _get_owned(self, user_id: uuid.UUID, study_set_id: uuid.UUID) -> StudySet:
        study_set = self.db.scalar(
            select(StudySet).where(StudySet.id == study_set_id, StudySet.user_id == user_id)
        )
        if study_set is None:
            raise StudySetNotFoundError("Study set not found")
        return study_set

    def list_for_user(self, user_id: uuid.UUID) -> list[StudySetSummary]:
        """Return the user's study sets with card counts, newest first."""

        card_count = func.count(study_set_flash_cards.c.flash_card_id).label("card_count")
        stmt = (
            select(StudySet, card_count)
            .outerjoin(study_set_flash_cards, StudySet.id == study_set_flash_cards.c.study_set_id)
            .where(StudySet.user_id == user_id)
            .group_by(StudySet.id)
            .order_by(StudySet.created_at.desc())
        )
        summaries = []
        for study_set, count in self.db.execute(stmt):
            summary = StudySetSummary.model_validate(study_set)
            summary.card_count = int(count or 0)
            summaries.append(summary)
        return summaries

    def create(self, user_id: uuid.UUID, payload: StudySetCreate) -> StudySet:
        """Create a set together with its initial cards in one transaction."""

        study_set = StudySet(
            user_id=user_id,
            title=payload.title,
            description=payload.description,
            language=payload.language,
        )
        study_set.flash_cards = [
            FlashCard(user_id=user_id, question=card.question, answer=card.answer)
            for card in payload.flash_cards
        ]
        self.db.add(study_set)
        self.db.commit()
        self.db.refresh(study_set)
        logger.info(
            "Created study set",
            study_set_id=str(study_set.id),
            cards=len(payload.flash_cards),
        )
        return study_set

    def get_detail(self, user_id: uuid.UUID, study_set_id: uuid.UUID) -> StudySetDetail:
        """Return a set with its cards and the latest session, if any."""

        study_set = self._get_owned(user_id, study_set_id)
        cards: Sequence[FlashCard] = self.db.scalars(
            select(FlashCard)
            .join(study_set_flash_cards, FlashCard.id == study_set_flash_cards.c.flash_card_id)
            .where(study_set_flash_cards.c.study_set_id == study_set.id)
            .order_by(FlashCard.created_at)
        ).all()
        last_session = self.db.scalar(
            select(StudySession)
            .where(StudySession.study_set_id == study_set.id)
            .order_by(StudySession.start_time.desc())
            .limit(1)
        )

        detail = StudySetDetail.model_validate(study_set)
        detail.flash_cards = [FlashCardRead.model_validate(card) for card in cards]
        detail.last_studied_at = (
            StudySessionRead.model_validate(last_session) if last_session else None
        )
        return detail

    def update(
        self, user_id: uuid.UUID, study_set_id: uuid.UUID, payload: StudySetUpdate
    ) -> StudySet:
        study_set = self._get_owned(user_id, study_set_id)
        update_data = payload.model_dump(exclude_unset=True)
        if update_data.get("title"):
            study_set.title = update_data["title"]
        if "description" in update_data:
            study_set.description = update_data["description"]
        study_set.updated_at = func.now()

        self.db.add(study_set)
        self.db.commit()
        self.db.refresh(study_set)
        return study_set

    def delete(self, user_id: uuid.UUID, study_set_id: uuid.UUID) -> None:
        """Delete a set owned by the user; unknown ids are a no-op."""

        study_set = self.db.scalar(
            select(StudySet).where(StudySet.id == study_set_id, StudySet.user_id == user_id)
        )
        if study_set is None:
            return
        self.db.delete(study_set)
        self.db.commit()
        logger.info("Deleted study set", study_set_id=str(study_set_id))

    def add_card(
        self, user_id: uuid.UUID, study_set_id: uuid.UUID, payload: FlashCardCreate
    ) -> FlashCard:
        study_set = self._get_owned(user_id, study_set_id)
        card = FlashCard(user_id=user_id, question=payload.question, answer=payload.answer)
        study_set.flash_cards.append(card)
        self.db.commit()
        self.db.refresh(card)
        return card

    def delete_card(self, user_id: uuid.UUID, study_set_id: uuid.UUID, card_id: uuid.UUID) -> None:
        """Unlink a card from the set and delete it if the user owns it."""

        study_set = self._get_owned(user_id, study_set_id)
        self.db.execute(
            delete(study_set_flash_cards).where(
                study_set_flash_cards.c.study_set_id == study_set.id,
                study_set_flash_cards.c.flash_card_id == card_id,
            )
        )
        self.db.execute(
            delete(FlashCard).where(FlashCard.id == card_id, FlashCard.user_id == user_id)
        )
        self.db.commit()
