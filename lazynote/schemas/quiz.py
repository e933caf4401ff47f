from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class DifficultyEnum(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuizSortEnum(str, Enum):
    RECENT = "recent"
    SCORE = "score"


class QuizResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    document_id: Optional[str] = None
    tags: List[str] = []
    created_at: datetime
    updated_at: datetime
    question_count: int = 0
    completed_count: int = 0
    last_attempted_at: Optional[datetime] = None
    average_score: int = Field(0, ge=0, le=100)

    class Config:
        from_attributes = True


class QuizListResponse(BaseModel):
    data: List[QuizResponse] = Field(..., description="Quizzes owned by the user")


class QuizQuestionResponse(BaseModel):
    id: str
    quiz_id: str
    question: str
    options: List[str]
    correct_option_index: int
    explanation: Optional[str] = None
    difficulty: Optional[DifficultyEnum] = None

    class Config:
        from_attributes = True


class QuizQuestionListResponse(BaseModel):
    data: List[QuizQuestionResponse] = Field(
        ..., description="Questions in presentation order"
    )


class QuizAttemptResponse(BaseModel):
    id: Optional[str] = None
    quiz_id: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    score: int = Field(..., ge=0, le=100)
    total_questions: int
    correct_answers: int

    class Config:
        from_attributes = True


class QuizAttemptListResponse(BaseModel):
    data: List[QuizAttemptResponse] = Field(
        ..., description="Attempts for the quiz, newest first"
    )
