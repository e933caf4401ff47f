from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from lazynote.core.database import get_db
from lazynote.domain.errors import DomainError, NotFoundError
from lazynote.models.user import User
from lazynote.routes.deps import get_current_user, get_quiz_session_registry
from lazynote.schemas.quiz import (
    QuizAttemptListResponse,
    QuizListResponse,
    QuizQuestionListResponse,
    QuizResponse,
    QuizSortEnum,
)
from lazynote.schemas.quiz_session import QuizSessionResponse
from lazynote.services.quiz import QuizService
from lazynote.services.quiz_session import QuizSessionRegistry, QuizSessionService

router = APIRouter(prefix="/quizzes", tags=["quiz"])


@router.get("", response_model=QuizListResponse)
def list_quizzes(
    q: Optional[str] = Query(None, description="Search in titles and tags"),
    sort: QuizSortEnum = Query(QuizSortEnum.RECENT),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the user's quizzes, filtered by title/tag and sorted"""
    return QuizService(db).list_quizzes(user.id, q, sort)


@router.get("/{quiz_id}", response_model=QuizResponse)
def get_quiz(
    quiz_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    try:
        return QuizService(db).fetch_quiz(user.id, quiz_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{quiz_id}/questions", response_model=QuizQuestionListResponse)
def get_quiz_questions(
    quiz_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    """Questions of a quiz in presentation order, including correct answers"""
    try:
        return QuizService(db).list_questions(user.id, quiz_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{quiz_id}/attempts", response_model=QuizAttemptListResponse)
def get_quiz_attempts(
    quiz_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    try:
        return QuizService(db).list_attempts(user.id, quiz_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "/{quiz_id}/sessions",
    response_model=QuizSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
def start_quiz_session(
    quiz_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    registry: QuizSessionRegistry = Depends(get_quiz_session_registry),
):
    """
    Start taking a quiz

    Every question starts unanswered and the session starts on the first
    question. Quizzes without questions are rejected with 422.
    """
    try:
        return QuizSessionService(db, registry).start(user.id, quiz_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DomainError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        )
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal server error: {str(e)}",
        )
