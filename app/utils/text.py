"""Text normalisation helpers used when comparing learner answers."""
from __future__ import annotations

import unicodedata


def remove_diacritics(text: str) -> str:
    """Strip combining accents, e.g. ``"São Paulo"`` -> ``"Sao Paulo"``."""

    decomposed = unicodedata.normalize("NFD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def normalize_answer(text: str) -> str:
    """Case-fold, trim, collapse whitespace and drop accents."""

    return " ".join(remove_diacritics(text).casefold().split())


def answers_match(user_answer: str, correct_answer: str) -> bool:
    """Return ``True`` when both answers are equal after normalisation."""

    return normalize_answer(user_answer) == normalize_answer(correct_answer)
