"""Study session endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api import deps
from app.db.models.user import User
from app.schemas import StudySessionCreate, SuccessResponse
from app.services.study_sessions import StudySessionService
from app.utils.exceptions import StudySetNotFoundError, handle_database_error, handle_not_found

router = APIRouter(prefix="/study-sessions", tags=["study-sessions"])


@router.post("", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
def create_study_session(
    payload: StudySessionCreate,
    current_user: User = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db),
) -> SuccessResponse:
    """Record the outcome of a finished practice run."""

    try:
        StudySessionService(db).record(current_user.id, payload)
    except StudySetNotFoundError as exc:
        raise handle_not_found(exc) from exc
    except SQLAlchemyError as exc:
        raise handle_database_error(exc, "Failed to create study session") from exc
    return SuccessResponse()
