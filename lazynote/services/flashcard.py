import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from lazynote.domain.catalog import CatalogDomain
from lazynote.domain.errors import NotFoundError
from lazynote.models.flashcard import FlashcardSet
from lazynote.repositories.flashcard_repository import FlashcardRepository
from lazynote.schemas.flashcard import (
    FlashcardListResponse,
    FlashcardResponse,
    FlashcardSetListResponse,
    FlashcardSetResponse,
    FlashcardSortEnum,
)

logger = logging.getLogger(__name__)


class FlashcardService:
    def __init__(self, db: Session):
        self.db = db
        self.flashcard_repository = FlashcardRepository(db)

    def _get_owned_set(self, user_id: str, set_id: str) -> FlashcardSet:
        flashcard_set = self.flashcard_repository.get_set_by_id(set_id)
        if not flashcard_set or flashcard_set.user_id != user_id:
            raise NotFoundError(f"Flashcard set '{set_id}' not found")
        return flashcard_set

    def list_sets(
        self,
        user_id: str,
        query: Optional[str] = None,
        sort: FlashcardSortEnum = FlashcardSortEnum.RECENT,
    ) -> FlashcardSetListResponse:
        sets = CatalogDomain.filter(
            self.flashcard_repository.get_sets_by_user(user_id), query
        )
        sets = CatalogDomain.sort_flashcard_sets(sets, sort)
        return FlashcardSetListResponse(
            data=[FlashcardSetResponse.model_validate(s) for s in sets]
        )

    def get_set(self, user_id: str, set_id: str) -> FlashcardSetResponse:
        return FlashcardSetResponse.model_validate(self._get_owned_set(user_id, set_id))

    def list_cards(self, user_id: str, set_id: str) -> FlashcardListResponse:
        self._get_owned_set(user_id, set_id)
        cards = self.flashcard_repository.get_cards(set_id)
        return FlashcardListResponse(
            data=[FlashcardResponse.model_validate(c) for c in cards]
        )

    def update_mastery(
        self, user_id: str, card_id: str, mastered: bool
    ) -> FlashcardResponse:
        card = self.flashcard_repository.get_card_by_id(card_id)
        if not card:
            raise NotFoundError(f"Flashcard '{card_id}' not found")
        flashcard_set = self._get_owned_set(user_id, card.set_id)

        now = datetime.now(timezone.utc)
        delta = 0
        if mastered != card.mastered:
            delta = 1 if mastered else -1

        card = self.flashcard_repository.update(
            card, {"mastered": mastered, "last_reviewed": now}
        )
        self.flashcard_repository.update(
            flashcard_set,
            {
                "mastered": max(
                    0, min(flashcard_set.card_count, flashcard_set.mastered + delta)
                ),
                "last_studied_at": now,
            },
        )
        logger.info(f"Card {card_id} mastered={mastered}")
        return FlashcardResponse.model_validate(card)
