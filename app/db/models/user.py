"""User database model."""
import uuid

from sqlalchemy import Column, Date, DateTime, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base


class User(Base):
    """Represents an application user."""

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    date_of_birth = Column(Date, nullable=False)

    email_verified_at = Column(DateTime(timezone=True))
    image = Column(String(512))

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    study_sets = relationship("StudySet", back_populates="user", cascade="all, delete-orphan")
    flash_cards = relationship("FlashCard", back_populates="user", cascade="all, delete-orphan")
    study_sessions = relationship(
        "StudySession", back_populates="user", cascade="all, delete-orphan"
    )
