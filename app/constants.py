"""Static reference data shared by schemas and prompts."""
from __future__ import annotations

SUPPORTED_LANGUAGES: tuple[dict[str, str], ...] = (
    {"code": "en-US", "name": "English (US)"},
    {"code": "es-ES", "name": "Spanish"},
    {"code": "fr-FR", "name": "French"},
    {"code": "it-IT", "name": "Italian"},
    {"code": "nl-NL", "name": "Dutch"},
    {"code": "de-DE", "name": "German"},
    {"code": "pt-PT", "name": "Portuguese (Portugal)"},
    {"code": "pt-BR", "name": "Portuguese (Brazil)"},
)

SUPPORTED_LANGUAGE_CODES = frozenset(language["code"] for language in SUPPORTED_LANGUAGES)

CEFR_LEVELS = ("A1", "A2", "B1", "B2", "C1", "C2")

LANGUAGE_LEARNING_AREAS: tuple[dict[str, str], ...] = (
    {"code": "vocabulary", "name": "Vocabulary"},
    {"code": "grammar", "name": "Grammar"},
    {"code": "reading", "name": "Reading"},
    {"code": "writing", "name": "Writing"},
)

LEARNING_AREA_CODES = frozenset(area["code"] for area in LANGUAGE_LEARNING_AREAS)


def language_name(code: str) -> str:
    """Return the display name for a supported language code."""

    for language in SUPPORTED_LANGUAGES:
        if language["code"] == code:
            return language["name"]
    raise KeyError(code)


def learning_area_name(code: str) -> str:
    for area in LANGUAGE_LEARNING_AREAS:
        if area["code"] == code:
            return area["name"]
    raise KeyError(code)

