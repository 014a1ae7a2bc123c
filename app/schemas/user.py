"""Pydantic models for user API interactions."""
from __future__ import annotations

import re
import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.common import CamelModel

MINIMUM_AGE_YEARS = 13
PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (
        re.compile(r"[!@#$%^&*(),.?\":{}|<>]"),
        "Password must contain at least one special character",
    ),
)


def age_on(birth_date: date, today: date) -> int:
    """Return completed years between ``birth_date`` and ``today``."""

    before_birthday = (today.month, today.day) < (birth_date.month, birth_date.day)
    return today.year - birth_date.year - int(before_birthday)


class SignupRequest(CamelModel):
    """Schema for user registration input."""

    first_name: str = Field(min_length=1, max_length=120)
    last_name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    password1: str = Field(min_length=8, max_length=50)
    date_of_birth: date

    @field_validator("password1")
    @classmethod
    def check_password_strength(cls, value: str) -> str:
        for pattern, message in PASSWORD_RULES:
            if not pattern.search(value):
                raise ValueError(message)
        return value

    @field_validator("date_of_birth")
    @classmethod
    def check_minimum_age(cls, value: date) -> date:
        if age_on(value, date.today()) < MINIMUM_AGE_YEARS:
            raise ValueError("You must be at least 13 years old to sign up")
        return value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class UserLogin(BaseModel):
    """Schema for user login request."""

    email: EmailStr
    password: str


class UserRead(CamelModel):
    """Public profile of a user."""

    id: uuid.UUID
    email: EmailStr
    name: str
    date_of_birth: date
    image: Optional[str] = None
    email_verified_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
