"""Tests for the profile statistics aggregate."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.api import deps
from app.services.stats import (
    StatsService,
    StudyCalendar,
    calculate_accuracy,
    calculate_study_streak,
)
from app.utils.exceptions import StatsUnavailableError
from conftest import FIXED_NOW, register_and_login

TODAY = FIXED_NOW.date()


@dataclass
class Row:
    start_time: datetime | None
    correct_count: int | None
    total_count: int | None


class InMemoryHistory:
    def __init__(self, sessions=(), study_sets=0, cards=0, recent=()):
        self.sessions = list(sessions)
        self.study_sets = study_sets
        self.cards = cards
        self.recent = list(recent)
        self.requested_limit = None

    def sessions_for_user(self, user_id):
        return self.sessions

    def count_study_sets(self, user_id):
        return self.study_sets

    def count_cards(self, user_id):
        return self.cards

    def recent_sessions(self, user_id, limit):
        self.requested_limit = limit
        return self.recent[:limit]


class BrokenHistory(InMemoryHistory):
    def sessions_for_user(self, user_id):
        raise OperationalError("SELECT 1", {}, Exception("database is gone"))


def at(days_ago: int, hour: int = 9) -> datetime:
    day = FIXED_NOW - timedelta(days=days_ago)
    return day.replace(hour=hour, minute=0)


def session_payload(study_set_id: str, start: datetime, correct: int, total: int) -> dict:
    return {
        "studySetId": study_set_id,
        "startTime": start.isoformat(),
        "endTime": (start + timedelta(minutes=5)).isoformat(),
        "results": [],
        "score": {
            "correctCount": correct,
            "totalCount": total,
            "percentage": round(100 * correct / total, 2),
        },
    }


# Accuracy


def test_accuracy_is_zero_without_questions() -> None:
    assert calculate_accuracy([]) == 0
    assert calculate_accuracy([Row(at(0), 0, 0)]) == 0


def test_accuracy_pools_all_sessions() -> None:
    sessions = [Row(at(0), 8, 10), Row(at(1), 1, 10)]

    assert calculate_accuracy(sessions) == 45


@pytest.mark.parametrize(
    ("correct", "total", "expected"),
    [(1, 3, 33), (2, 3, 67), (1, 8, 13), (1, 200, 1), (1, 201, 0), (5, 5, 100)],
)
def test_accuracy_rounds_half_up(correct: int, total: int, expected: int) -> None:
    assert calculate_accuracy([Row(at(0), correct, total)]) == expected


def test_accuracy_treats_missing_counts_as_zero() -> None:
    assert calculate_accuracy([Row(at(0), None, 4), Row(at(1), 2, None)]) == 50


# Streak


def test_streak_is_zero_without_sessions() -> None:
    assert calculate_study_streak([], TODAY) == 0


def test_streak_counts_consecutive_days_ending_today() -> None:
    days = [TODAY, TODAY - timedelta(days=1), TODAY - timedelta(days=2)]

    assert calculate_study_streak(days, TODAY) == 3


def test_streak_survives_when_last_study_was_yesterday() -> None:
    days = [TODAY - timedelta(days=1), TODAY - timedelta(days=2)]

    assert calculate_study_streak(days, TODAY) == 2


def test_streak_is_broken_after_a_missed_day() -> None:
    days = [TODAY - timedelta(days=2), TODAY - timedelta(days=3)]

    assert calculate_study_streak(days, TODAY) == 0


def test_streak_counts_each_day_once_and_stops_at_gap() -> None:
    days = [
        TODAY,
        TODAY,
        TODAY - timedelta(days=1),
        TODAY - timedelta(days=3),
        TODAY - timedelta(days=4),
    ]

    assert calculate_study_streak(days, TODAY) == 2


def test_streak_ignores_order_of_input() -> None:
    days = [TODAY - timedelta(days=2), TODAY, TODAY - timedelta(days=1)]

    assert calculate_study_streak(days, TODAY) == 3


# Calendar


def test_calendar_treats_naive_timestamps_as_utc() -> None:
    calendar = StudyCalendar(tz=ZoneInfo("America/New_York"))

    assert calendar.date_of(datetime(2026, 10, 19, 2, 30)) == date(2026, 10, 18)
    assert calendar.date_of(datetime(2026, 10, 19, 2, 30, tzinfo=timezone.utc)) == date(2026, 10, 18)


def test_calendar_today_uses_injected_clock() -> None:
    calendar = StudyCalendar(tz=ZoneInfo("Asia/Tokyo"), clock=lambda: FIXED_NOW)

    assert calendar.today() == date(2026, 10, 19)


# Service


def test_service_returns_zeroed_stats_for_new_user() -> None:
    service = StatsService(InMemoryHistory(), StudyCalendar(clock=lambda: FIXED_NOW))

    stats = service.get_user_stats(uuid.uuid4())

    assert stats.total_study_sets == 0
    assert stats.total_cards == 0
    assert stats.study_streak == 0
    assert stats.accuracy == 0
    assert stats.total_study_sessions == 0
    assert stats.recent_sessions == []


def test_service_combines_counts_streak_and_accuracy() -> None:
    history = InMemoryHistory(
        sessions=[Row(at(0), 3, 4), Row(at(1), 1, 4), Row(None, 0, 0)],
        study_sets=2,
        cards=7,
    )
    service = StatsService(history, StudyCalendar(clock=lambda: FIXED_NOW), recent_limit=5)

    stats = service.get_user_stats(uuid.uuid4())

    assert stats.total_study_sets == 2
    assert stats.total_cards == 7
    assert stats.study_streak == 2
    assert stats.accuracy == 50
    assert stats.total_study_sessions == 3
    assert history.requested_limit == 5


def test_service_wraps_storage_failures() -> None:
    service = StatsService(BrokenHistory(), StudyCalendar(clock=lambda: FIXED_NOW))

    with pytest.raises(StatsUnavailableError) as excinfo:
        service.get_user_stats(uuid.uuid4())

    assert excinfo.value.message == "Failed to fetch user stats"


def test_service_pools_accuracy_across_sessions() -> None:
    history = InMemoryHistory(sessions=[Row(at(0), 8, 10), Row(at(1), 15, 20)])
    service = StatsService(history, StudyCalendar(clock=lambda: FIXED_NOW))

    assert service.get_user_stats(uuid.uuid4()).accuracy == 77


def test_service_skips_empty_sessions_in_accuracy() -> None:
    history = InMemoryHistory(sessions=[Row(at(0), 0, 0), Row(at(1), 3, 4)])
    service = StatsService(history, StudyCalendar(clock=lambda: FIXED_NOW))

    assert service.get_user_stats(uuid.uuid4()).accuracy == 75


@pytest.mark.parametrize(
    ("days_ago", "expected_streak"),
    [([0, 1, 5, 6], 2), ([3], 0), ([0, 0, 0], 1)],
)
def test_service_streak_from_session_times(days_ago: list[int], expected_streak: int) -> None:
    sessions = [Row(at(days, hour=8 + index), 1, 1) for index, days in enumerate(days_ago)]
    service = StatsService(InMemoryHistory(sessions=sessions), StudyCalendar(clock=lambda: FIXED_NOW))

    stats = service.get_user_stats(uuid.uuid4())

    assert stats.study_streak == expected_streak
    assert stats.total_study_sessions == len(days_ago)


def test_service_is_a_pure_read() -> None:
    history = InMemoryHistory(sessions=[Row(at(0), 2, 3), Row(at(1), 1, 3)], study_sets=1, cards=3)
    service = StatsService(history, StudyCalendar(clock=lambda: FIXED_NOW))
    user_id = uuid.uuid4()

    assert service.get_user_stats(user_id) == service.get_user_stats(user_id)


def test_service_late_evening_session_uses_calendar_timezone() -> None:
    late = Row(datetime(2026, 10, 17, 23, 30, tzinfo=timezone.utc), 1, 1)
    utc = StatsService(InMemoryHistory(sessions=[late]), StudyCalendar(clock=lambda: FIXED_NOW))
    berlin = StatsService(
        InMemoryHistory(sessions=[late]),
        StudyCalendar(tz=ZoneInfo("Europe/Berlin"), clock=lambda: FIXED_NOW),
    )

    assert utc.get_user_stats(uuid.uuid4()).study_streak == 0
    assert berlin.get_user_stats(uuid.uuid4()).study_streak == 1


# Endpoint


def test_stats_endpoint_for_new_user(client: TestClient, auth_headers: dict) -> None:
    response = client.get("/api/user/profile/stats", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "data": {
            "totalStudySets": 0,
            "totalCards": 0,
            "studyStreak": 0,
            "accuracy": 0,
            "totalStudySessions": 0,
            "recentSessions": [],
        }
    }


def test_stats_endpoint_aggregates_session_history(
    client: TestClient, auth_headers: dict, create_study_set
) -> None:
    verbs = create_study_set(auth_headers, title="Verbs", cards=3)
    nouns = create_study_set(auth_headers, title="Nouns", cards=2)

    for payload in [
        session_payload(verbs, at(0, hour=8), 3, 3),
        session_payload(nouns, at(0, hour=10), 1, 2),
        session_payload(verbs, at(1), 2, 3),
        session_payload(nouns, at(2), 0, 2),
        session_payload(verbs, at(5), 1, 3),
    ]:
        response = client.post("/api/study-sessions", json=payload, headers=auth_headers)
        assert response.status_code == 201, response.text

    response = client.get("/api/user/profile/stats", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalStudySets"] == 2
    assert data["totalCards"] == 5
    assert data["studyStreak"] == 3
    assert data["accuracy"] == 54  # 7 of 13
    assert data["totalStudySessions"] == 5
    recent = data["recentSessions"]
    assert [item["title"] for item in recent] == ["Nouns", "Verbs", "Verbs"]
    assert [item["correctCount"] for item in recent] == [1, 3, 2]
    assert recent[0]["totalCount"] == 2


def test_stats_endpoint_ignores_other_users(
    client: TestClient, auth_headers: dict, create_study_set
) -> None:
    other_headers = register_and_login(client, "other@example.com")
    other_set = create_study_set(other_headers, cards=4)
    client.post(
        "/api/study-sessions",
        json=session_payload(other_set, at(0), 4, 4),
        headers=other_headers,
    )

    data = client.get("/api/user/profile/stats", headers=auth_headers).json()["data"]

    assert data["totalStudySets"] == 0
    assert data["totalCards"] == 0
    assert data["totalStudySessions"] == 0


def test_stats_endpoint_requires_auth(client: TestClient) -> None:
    response = client.get("/api/user/profile/stats")

    assert response.status_code == 401


def test_stats_endpoint_reports_storage_failure(client: TestClient, auth_headers: dict) -> None:
    client.app.dependency_overrides[deps.get_stats_service] = lambda: StatsService(
        BrokenHistory(), StudyCalendar(clock=lambda: FIXED_NOW)
    )

    response = client.get("/api/user/profile/stats", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"statusCode": 500, "statusMessage": "Failed to fetch user stats"}
