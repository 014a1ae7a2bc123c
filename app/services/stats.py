"""Profile statistics computed from a user's study session history."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Callable, Iterable, Protocol, Sequence
from zoneinfo import ZoneInfo

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import Settings
from app.db.models.study_session import StudySession
from app.db.models.study_set import StudySet, study_set_flash_cards
from app.schemas.stats import RecentSession, UserStats
from app.utils.exceptions import StatsUnavailableError


class SessionScoreRow(Protocol):
    """Minimal view of a session needed for streak and accuracy."""

    start_time: datetime | None
    correct_count: int | None
    total_count: int | None


class SessionHistorySource(Protocol):
    """Read-only queries the aggregator depends on."""

    def sessions_for_user(self, user_id: uuid.UUID) -> Sequence[SessionScoreRow]:  # pragma: no cover - interface definition
        ...

    def count_study_sets(self, user_id: uuid.UUID) -> int:  # pragma: no cover - interface definition
        ...

    def count_cards(self, user_id: uuid.UUID) -> int:  # pragma: no cover - interface definition
        ...

    def recent_sessions(self, user_id: uuid.UUID, limit: int) -> list[dict[str, Any]]:  # pragma: no cover - interface definition
        ...


class SqlSessionHistory:
    """:class:`SessionHistorySource` backed by the relational store."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def sessions_for_user(self, user_id: uuid.UUID) -> Sequence[SessionScoreRow]:
        stmt = select(
            StudySession.start_time,
            StudySession.correct_count,
            StudySession.total_count,
        ).where(StudySession.user_id == user_id)
        return self.db.execute(stmt).all()

    def count_study_sets(self, user_id: uuid.UUID) -> int:
        stmt = select(func.count(StudySet.id)).where(StudySet.user_id == user_id)
        return int(self.db.scalar(stmt) or 0)

    def count_cards(self, user_id: uuid.UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(StudySet)
            .join(study_set_flash_cards, StudySet.id == study_set_flash_cards.c.study_set_id)
            .where(StudySet.user_id == user_id)
        )
        return int(self.db.scalar(stmt) or 0)

    def recent_sessions(self, user_id: uuid.UUID, limit: int) -> list[dict[str, Any]]:
        stmt = (
            select(
                StudySession.id,
                StudySet.title,
                StudySession.start_time,
                StudySession.total_count,
                StudySession.correct_count,
            )
            .join(StudySet, StudySession.study_set_id == StudySet.id)
            .where(StudySession.user_id == user_id)
            .order_by(StudySession.start_time.desc(), StudySession.id.desc())
            .limit(limit)
        )
        return [dict(row._mapping) for row in self.db.execute(stmt)]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StudyCalendar:
    """Decides which calendar day a timestamp belongs to.

    Naive timestamps (as returned by SQLite) are taken to be UTC. The
    ``clock`` callable is injectable so tests can pin "today".
    """

    def __init__(self, tz: tzinfo = timezone.utc, clock: Callable[[], datetime] = _utc_now) -> None:
        self.tz = tz
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "StudyCalendar":
        name = settings.STATS_TIMEZONE
        tz: tzinfo = timezone.utc if name.upper() == "UTC" else ZoneInfo(name)
        return cls(tz=tz)

    def date_of(self, moment: datetime) -> date:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(self.tz).date()

    def today(self) -> date:
        return self.date_of(self._clock())


def calculate_accuracy(sessions: Iterable[SessionScoreRow]) -> int:
    """Return the overall correct-answer percentage, rounded half up."""

    total_correct = 0
    total_questions = 0
    for session in sessions:
        total_correct += session.correct_count or 0
        total_questions += session.total_count or 0

    if total_questions <= 0:
        return 0
    # Integer form of floor(100 * correct / total + 0.5).
    return (200 * total_correct + total_questions) // (2 * total_questions)


def calculate_study_streak(days: Iterable[date], today: date) -> int:
    """Count consecutive study days ending at the most recent one.

    The streak is broken (``0``) unless the most recent day is today or
    yesterday. Several sessions on one day count once.
    """

    distinct_days = sorted(set(days), reverse=True)
    if not distinct_days:
        return 0
    if distinct_days[0] not in (today, today - timedelta(days=1)):
        return 0

    streak = 0
    expected = distinct_days[0]
    for day in distinct_days:
        if day != expected:
            break
        streak += 1
        expected -= timedelta(days=1)
    return streak


@dataclass
class StatsService:
    """Assemble the dashboard aggregate for one user."""

    source: SessionHistorySource
    calendar: StudyCalendar = field(default_factory=StudyCalendar)
    recent_limit: int = 3

    def get_user_stats(self, user_id: uuid.UUID) -> UserStats:
        try:
            sessions = self.source.sessions_for_user(user_id)
            total_study_sets = self.source.count_study_sets(user_id)
            total_cards = self.source.count_cards(user_id)
            recent = self.source.recent_sessions(user_id, self.recent_limit)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load session history", user_id=str(user_id))
            raise StatsUnavailableError("Failed to fetch user stats") from exc

        study_days = [
            self.calendar.date_of(session.start_time)
            for session in sessions
            if session.start_time is not None
        ]
        stats = UserStats(
            total_study_sets=total_study_sets,
            total_cards=total_cards,
            study_streak=calculate_study_streak(study_days, self.calendar.today()),
            accuracy=calculate_accuracy(sessions),
            total_study_sessions=len(sessions),
            recent_sessions=[RecentSession.model_validate(row) for row in recent],
        )
        logger.debug(
            "Computed profile stats",
            user_id=str(user_id),
            sessions=stats.total_study_sessions,
            streak=stats.study_streak,
        )
        return stats
