from typing import List, Optional

from sqlalchemy.orm import Session

from lazynote.models.flashcard import Flashcard, FlashcardSet


class FlashcardRepository:
    """Repository for FlashcardSet and Flashcard database operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_set_by_id(self, set_id: str) -> Optional[FlashcardSet]:
        """Get a flashcard set by ID"""
        return self.db.query(FlashcardSet).filter(FlashcardSet.id == set_id).first()

    def get_sets_by_user(self, user_id: str) -> List[FlashcardSet]:
        """Get all flashcard sets owned by a user"""
        return self.db.query(FlashcardSet).filter(FlashcardSet.user_id == user_id).all()

    def get_cards(self, set_id: str) -> List[Flashcard]:
        """Get the cards of a set in order"""
        return (
            self.db.query(Flashcard)
            .filter(Flashcard.set_id == set_id)
            .order_by(Flashcard.position)
            .all()
        )

    def get_card_by_id(self, card_id: str) -> Optional[Flashcard]:
        return self.db.query(Flashcard).filter(Flashcard.id == card_id).first()

    def create_set(self, set_data: dict) -> FlashcardSet:
        """Create a new flashcard set"""
        db_set = FlashcardSet(**set_data)
        self.db.add(db_set)
        self.db.commit()
        self.db.refresh(db_set)
        return db_set

    def update(self, entity, update_data: dict):
        """Update a flashcard or flashcard set"""
        for field, value in update_data.items():
            setattr(entity, field, value)
        self.db.commit()
        self.db.refresh(entity)
        return entity
