"""API endpoint modules."""

from app.api.v1.endpoints import ai, auth, study_sessions, study_sets, users, version

__all__ = [
    "ai",
    "auth",
    "study_sessions",
    "study_sets",
    "users",
    "version",
]
