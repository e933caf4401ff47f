from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from lazynote.schemas.quiz import DifficultyEnum


class FlashcardSortEnum(str, Enum):
    RECENT = "recent"
    MASTERY = "mastery"


class FlashcardSetResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    tags: List[str] = []
    created_at: datetime
    updated_at: datetime
    card_count: int = 0
    mastered: int = 0
    document_id: Optional[str] = None
    last_studied_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FlashcardSetListResponse(BaseModel):
    data: List[FlashcardSetResponse]


class FlashcardResponse(BaseModel):
    id: str
    set_id: str
    question: str
    answer: str
    mastered: bool = False
    last_reviewed: Optional[datetime] = None
    difficulty: Optional[DifficultyEnum] = None

    class Config:
        from_attributes = True


class FlashcardListResponse(BaseModel):
    data: List[FlashcardResponse]


class FlashcardMasteryUpdate(BaseModel):
    mastered: bool = Field(..., description="Whether the card has been learned")
