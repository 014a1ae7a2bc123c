"""AI assisted flashcard generation and free-text answer grading."""
from __future__ import annotations

import json
from typing import Any, List

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from app.constants import language_name, learning_area_name
from app.core.prompts.flashcard_prompts import (
    ANSWER_JUDGE_PROMPT,
    CEFR_LEVEL_HINT,
    FLASHCARD_GENERATION_PROMPT,
    LEARNING_AREA_HINT,
)
from app.schemas.ai import AnswerVerdict, GeneratedFlashcard
from app.services.llm_service import LLMProviderError, LLMService
from app.utils.exceptions import AIResponseFormatError
from app.utils.text import answers_match

_flashcard_list = TypeAdapter(List[GeneratedFlashcard])


def parse_json_content(content: str) -> Any:
    """Parse JSON from LLM response, handling markdown code blocks."""

    content = content.strip()
    if content.startswith("```"):
        lines = content.split("\n")
        if lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        content = "\n".join(lines)

    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise AIResponseFormatError(
            f"AI response is not valid JSON: {exc}", {"raw": content[:500]}
        ) from exc


class FlashcardGenerator:
    """Ask the generation model for question/answer pairs on a topic."""

    provider = "gemini"

    def __init__(self, llm_service: LLMService) -> None:
        self.llm_service = llm_service

    def generate(
        self,
        *,
        topic: str,
        target_language: str,
        question_language: str = "en-US",
        count: int = 5,
        cefr_level: str | None = None,
        learning_area: str | None = None,
    ) -> List[GeneratedFlashcard]:
        prompt = FLASHCARD_GENERATION_PROMPT.format(
            count=count,
            topic=topic,
            target_language=language_name(target_language),
            question_language=language_name(question_language),
        )
        if cefr_level:
            prompt += CEFR_LEVEL_HINT.format(cefr_level=cefr_level)
        if learning_area:
            prompt += LEARNING_AREA_HINT.format(learning_area=learning_area_name(learning_area))
        result = self.llm_service.generate(prompt, preferred=self.provider)
        payload = parse_json_content(result.content)
        try:
            cards = _flashcard_list.validate_python(payload)
        except ValidationError as exc:
            raise AIResponseFormatError(
                "Invalid AI response format.", {"issues": exc.errors(include_url=False)}
            ) from exc
        logger.info("Generated flashcards", topic=topic, count=len(cards), provider=result.provider)
        return cards


class AnswerJudge:
    """Grade a free-text answer against the reference answer."""

    provider = "openai"

    def __init__(self, llm_service: LLMService | None) -> None:
        self.llm_service = llm_service

    def judge(self, *, question: str, user_answer: str, correct_answer: str) -> AnswerVerdict:
        if answers_match(user_answer, correct_answer):
            return AnswerVerdict(is_correct=True, reasoning="The answer matches the correct answer.")
        if self.llm_service is None:
            raise LLMProviderError("No LLM providers are configured")

        prompt = ANSWER_JUDGE_PROMPT.format(
            question=question, user_answer=user_answer, correct_answer=correct_answer
        )
        result = self.llm_service.generate(
            prompt, preferred=self.provider, response_format={"type": "json_object"}
        )
        payload = parse_json_content(result.content)
        try:
            return AnswerVerdict.model_validate(payload)
        except ValidationError as exc:
            raise AIResponseFormatError(
                "Invalid AI response format.", {"issues": exc.errors(include_url=False)}
            ) from exc
