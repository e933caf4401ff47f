from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from lazynote.core.database import get_db
from lazynote.domain.errors import NotFoundError, PreconditionError, ValidationError
from lazynote.models.user import User
from lazynote.routes.deps import get_current_user, get_quiz_session_registry
from lazynote.schemas.quiz_session import (
    JumpRequest,
    NavigationResponse,
    QuizSessionResponse,
    SelectAnswerRequest,
)
from lazynote.services.quiz_session import QuizSessionRegistry, QuizSessionService

router = APIRouter(prefix="/quiz-sessions", tags=["quiz-session"])


def _service(
    db: Session = Depends(get_db),
    registry: QuizSessionRegistry = Depends(get_quiz_session_registry),
) -> QuizSessionService:
    return QuizSessionService(db, registry)


@router.get("/{session_id}", response_model=QuizSessionResponse)
def get_session(
    session_id: str,
    user: User = Depends(get_current_user),
    service: QuizSessionService = Depends(_service),
):
    try:
        return service.get(user.id, session_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/{session_id}/answer", response_model=QuizSessionResponse)
def select_answer(
    session_id: str,
    request: SelectAnswerRequest,
    user: User = Depends(get_current_user),
    service: QuizSessionService = Depends(_service),
):
    """Select an option for the current question (re-selecting overwrites)"""
    try:
        return service.select_answer(user.id, session_id, request.option_index)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PreconditionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post("/{session_id}/advance", response_model=NavigationResponse)
def advance(
    session_id: str,
    user: User = Depends(get_current_user),
    service: QuizSessionService = Depends(_service),
):
    """Go to the next question; requires the current one to be answered"""
    try:
        return service.advance(user.id, session_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PreconditionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post("/{session_id}/retreat", response_model=NavigationResponse)
def retreat(
    session_id: str,
    user: User = Depends(get_current_user),
    service: QuizSessionService = Depends(_service),
):
    try:
        return service.retreat(user.id, session_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PreconditionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post("/{session_id}/jump", response_model=QuizSessionResponse)
def jump_to(
    session_id: str,
    request: JumpRequest,
    user: User = Depends(get_current_user),
    service: QuizSessionService = Depends(_service),
):
    try:
        return service.jump_to(user.id, session_id, request.index)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PreconditionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post("/{session_id}/submit", response_model=QuizSessionResponse)
def submit(
    session_id: str,
    user: User = Depends(get_current_user),
    service: QuizSessionService = Depends(_service),
):
    """
    Score the session and record the attempt

    Every question must be answered; the session is read-only afterwards.
    """
    try:
        return service.submit(user.id, session_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PreconditionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal server error: {str(e)}",
        )


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def discard_session(
    session_id: str,
    user: User = Depends(get_current_user),
    service: QuizSessionService = Depends(_service),
):
    try:
        service.discard(user.id, session_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
