"""Study session database model."""
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import JSON

from app.db.base import Base


class StudySession(Base):
    """One completed practice run through a study set."""

    __tablename__ = "study_sessions"
    __table_args__ = (
        Index("ix_study_sessions_user_id_start_time", "user_id", "start_time"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    study_set_id = Column(
        UUID(as_uuid=True),
        ForeignKey("study_sets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    start_time = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    end_time = Column(DateTime(timezone=True))

    correct_count = Column(Integer, nullable=False, default=0)
    total_count = Column(Integer, nullable=False, default=0)

    # [{"cardId", "userAnswer", "isCorrect", "answeredAt"}, ...]
    results = Column(JSONB().with_variant(JSON(), "sqlite"), nullable=False, default=list)

    user = relationship("User", back_populates="study_sessions")
    study_set = relationship("StudySet", back_populates="sessions")
