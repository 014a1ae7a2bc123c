"""Utility helpers package."""

from app.utils.short_uuid import from_short_uuid, parse_identifier, to_short_uuid
from app.utils.text import answers_match, normalize_answer, remove_diacritics

__all__ = [
    "from_short_uuid",
    "parse_identifier",
    "to_short_uuid",
    "answers_match",
    "normalize_answer",
    "remove_diacritics",
]
