"""Custom exception classes and error handling utilities."""
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from loguru import logger


class FlashcardAppException(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class StudySetNotFoundError(FlashcardAppException):
    """Raised when a study set does not exist or belongs to someone else."""


class StatsUnavailableError(FlashcardAppException):
    """Raised when the statistics aggregate cannot be read from storage."""


class AIResponseFormatError(FlashcardAppException):
    """Raised when a model reply cannot be parsed into the expected shape."""


def handle_database_error(error: Exception, message: str) -> HTTPException:
    """Log a persistence failure and return an opaque HTTP 500."""
    logger.error(f"Database error: {error}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=message,
    )


def handle_not_found(error: StudySetNotFoundError) -> HTTPException:
    """Translate a missing study set into HTTP 404."""
    logger.info(f"Not found: {error.message}")
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=error.message,
    )


def handle_llm_service_error(error: Exception, message: str) -> HTTPException:
    """Handle LLM provider failures."""
    logger.error(f"LLM service error: {error}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=message,
    )


def handle_ai_format_error(error: AIResponseFormatError) -> HTTPException:
    """Handle model replies that do not match the expected JSON shape."""
    logger.warning("AI response format error: {}", error.message)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Invalid AI response format.",
    )
