"""Study set and flashcard endpoints."""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api import deps
from app.db.models.user import User
from app.schemas import (
    FlashCardCreate,
    FlashCardRead,
    FlashCardResponse,
    StudySetCreate,
    StudySetCreatedResponse,
    StudySetDetailResponse,
    StudySetListResponse,
    StudySetRead,
    StudySetResponse,
    StudySetUpdate,
    SuccessResponse,
)
from app.services.study_sets import StudySetService
from app.utils.exceptions import StudySetNotFoundError, handle_not_found

router = APIRouter(prefix="/studysets", tags=["studysets"])


@router.get("", response_model=StudySetListResponse)
def list_study_sets(
    current_user: User = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db),
) -> StudySetListResponse:
    """Return the user's study sets with card counts."""

    service = StudySetService(db)
    return StudySetListResponse(data=service.list_for_user(current_user.id))


@router.post("", response_model=StudySetCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_study_set(
    payload: StudySetCreate,
    current_user: User = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db),
) -> StudySetCreatedResponse:
    """Create a study set and its initial flashcards."""

    study_set = StudySetService(db).create(current_user.id, payload)
    return StudySetCreatedResponse(data=study_set.id)


@router.get("/{study_set_id}", response_model=StudySetDetailResponse)
def read_study_set(
    current_user: User = Depends(deps.get_current_user),
    study_set_id: uuid.UUID = Depends(deps.resolve_study_set_id),
    db: Session = Depends(deps.get_db),
) -> StudySetDetailResponse:
    try:
        detail = StudySetService(db).get_detail(current_user.id, study_set_id)
    except StudySetNotFoundError as exc:
        raise handle_not_found(exc) from exc
    return StudySetDetailResponse(data=detail)


@router.patch("/{study_set_id}", response_model=StudySetResponse)
def update_study_set(
    payload: StudySetUpdate,
    current_user: User = Depends(deps.get_current_user),
    study_set_id: uuid.UUID = Depends(deps.resolve_study_set_id),
    db: Session = Depends(deps.get_db),
) -> StudySetResponse:
    try:
        study_set = StudySetService(db).update(current_user.id, study_set_id, payload)
    except StudySetNotFoundError as exc:
        raise handle_not_found(exc) from exc
    return StudySetResponse(data=StudySetRead.model_validate(study_set))


@router.delete("/{study_set_id}", response_model=SuccessResponse)
def delete_study_set(
    current_user: User = Depends(deps.get_current_user),
    study_set_id: uuid.UUID = Depends(deps.resolve_study_set_id),
    db: Session = Depends(deps.get_db),
) -> SuccessResponse:
    StudySetService(db).delete(current_user.id, study_set_id)
    return SuccessResponse()


@router.post(
    "/{study_set_id}/cards",
    response_model=FlashCardResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_flash_card(
    payload: FlashCardCreate,
    current_user: User = Depends(deps.get_current_user),
    study_set_id: uuid.UUID = Depends(deps.resolve_study_set_id),
    db: Session = Depends(deps.get_db),
) -> FlashCardResponse:
    try:
        card = StudySetService(db).add_card(current_user.id, study_set_id, payload)
    except StudySetNotFoundError as exc:
        raise handle_not_found(exc) from exc
    return FlashCardResponse(data=FlashCardRead.model_validate(card))


@router.delete("/{study_set_id}/cards/{card_id}", response_model=SuccessResponse)
def delete_flash_card(
    card_id: uuid.UUID,
    current_user: User = Depends(deps.get_current_user),
    study_set_id: uuid.UUID = Depends(deps.resolve_study_set_id),
    db: Session = Depends(deps.get_db),
) -> SuccessResponse:
    try:
        StudySetService(db).delete_card(current_user.id, study_set_id, card_id)
    except StudySetNotFoundError as exc:
        raise handle_not_found(exc) from exc
    return SuccessResponse(message="Flash card deleted successfully")
