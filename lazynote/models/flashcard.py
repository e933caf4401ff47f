from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func
from sqlalchemy.types import JSON, DateTime

from lazynote.core.database import Base


class FlashcardSet(Base):
    __tablename__ = "flashcard_sets"

    id = Column(String(64), primary_key=True, index=True)
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    document_id = Column(String(64), nullable=True)
    title = Column(String(500), nullable=False, index=True)
    description = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    card_count = Column(Integer, default=0, nullable=False)
    mastered = Column(Integer, default=0, nullable=False)
    last_studied_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Flashcard(Base):
    __tablename__ = "flashcards"

    id = Column(String(64), primary_key=True, index=True)
    set_id = Column(
        String(64), ForeignKey("flashcard_sets.id"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False, default=0)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    mastered = Column(Boolean, default=False, nullable=False)
    last_reviewed = Column(DateTime(timezone=True), nullable=True)
    difficulty = Column(String(10), nullable=True)
