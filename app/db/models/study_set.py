"""Study set and flashcard database models."""
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base


# Cards may in principle be shared between sets, so membership is many-to-many.
study_set_flash_cards = Table(
    "study_set_flash_cards",
    Base.metadata,
    Column(
        "study_set_id",
        UUID(as_uuid=True),
        ForeignKey("study_sets.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "flash_card_id",
        UUID(as_uuid=True),
        ForeignKey("flash_cards.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class FlashCard(Base):
    """A single question/answer pair owned by a user."""

    __tablename__ = "flash_cards"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="flash_cards")
    study_sets = relationship(
        "StudySet", secondary=study_set_flash_cards, back_populates="flash_cards"
    )


class StudySet(Base):
    """A named collection of flashcards."""

    __tablename__ = "study_sets"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(200), nullable=False)
    description = Column(Text)
    # IETF language tag
    language = Column("language_code", String(16), nullable=False, default="en-US")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="study_sets")
    flash_cards = relationship(
        "FlashCard", secondary=study_set_flash_cards, back_populates="study_sets"
    )
    sessions = relationship(
        "StudySession",
        back_populates="study_set",
        cascade="all, delete-orphan",
    )
