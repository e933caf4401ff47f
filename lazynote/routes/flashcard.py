from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from lazynote.core.database import get_db
from lazynote.domain.errors import NotFoundError
from lazynote.models.user import User
from lazynote.routes.deps import get_current_user
from lazynote.schemas.flashcard import (
    FlashcardListResponse,
    FlashcardMasteryUpdate,
    FlashcardResponse,
    FlashcardSetListResponse,
    FlashcardSetResponse,
    FlashcardSortEnum,
)
from lazynote.services.flashcard import FlashcardService

router = APIRouter(tags=["flashcard"])


@router.get("/flashcard-sets", response_model=FlashcardSetListResponse)
def list_flashcard_sets(
    q: Optional[str] = Query(None, description="Search in titles and tags"),
    sort: FlashcardSortEnum = Query(FlashcardSortEnum.RECENT),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FlashcardService(db).list_sets(user.id, q, sort)


@router.get("/flashcard-sets/{set_id}", response_model=FlashcardSetResponse)
def get_flashcard_set(
    set_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    try:
        return FlashcardService(db).get_set(user.id, set_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/flashcard-sets/{set_id}/cards", response_model=FlashcardListResponse)
def list_flashcards(
    set_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    try:
        return FlashcardService(db).list_cards(user.id, set_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/flashcards/{card_id}", response_model=FlashcardResponse)
def update_flashcard_mastery(
    card_id: str,
    request: FlashcardMasteryUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Mark a card as mastered (or not) and update its set's mastery count"""
    try:
        return FlashcardService(db).update_mastery(user.id, card_id, request.mastered)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
