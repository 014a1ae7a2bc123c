"""AI assisted endpoints: flashcard generation and answer grading."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api import deps
from app.schemas import (
    AnswerJudgeRequest,
    AnswerJudgeResponse,
    FlashcardGenerationRequest,
    FlashcardGenerationResponse,
)
from app.services.ai_content import AnswerJudge, FlashcardGenerator
from app.services.llm_service import LLMProviderError
from app.utils.exceptions import (
    AIResponseFormatError,
    handle_ai_format_error,
    handle_llm_service_error,
)

router = APIRouter(
    prefix="/ai",
    tags=["ai"],
    dependencies=[Depends(deps.require_ai_enabled), Depends(deps.get_current_user)],
)


@router.post("/flashcards", response_model=FlashcardGenerationResponse)
def generate_flashcards(
    payload: FlashcardGenerationRequest,
    generator: FlashcardGenerator = Depends(deps.get_flashcard_generator),
) -> FlashcardGenerationResponse:
    """Generate flashcards on a topic; non-educational topics yield an empty list."""

    try:
        cards = generator.generate(
            topic=payload.topic,
            target_language=payload.cefr_language,
            question_language=payload.language,
            count=payload.flash_card_count,
            cefr_level=payload.cefr_level,
            learning_area=payload.learning_area,
        )
    except AIResponseFormatError as exc:
        raise handle_ai_format_error(exc) from exc
    except LLMProviderError as exc:
        raise handle_llm_service_error(exc, "Failed to generate flashcards.") from exc
    return FlashcardGenerationResponse(flashcards=cards)


@router.post("/answerjudge", response_model=AnswerJudgeResponse)
def judge_answer(
    payload: AnswerJudgeRequest,
    judge: AnswerJudge = Depends(deps.get_answer_judge),
) -> AnswerJudgeResponse:
    """Grade a free-text answer, tolerating typos and synonyms."""

    try:
        verdict = judge.judge(
            question=payload.question,
            user_answer=payload.user_answer,
            correct_answer=payload.correct_answer,
        )
    except AIResponseFormatError as exc:
        raise handle_ai_format_error(exc) from exc
    except LLMProviderError as exc:
        raise handle_llm_service_error(exc, "Failed to judge answer.") from exc
    return AnswerJudgeResponse(data=verdict)
