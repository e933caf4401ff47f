from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from lazynote.schemas.quiz import DifficultyEnum, QuizAttemptResponse


class SessionStatusEnum(str, Enum):
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"


class SelectAnswerRequest(BaseModel):
    option_index: int = Field(..., description="0-based option index for the current question")


class JumpRequest(BaseModel):
    index: int = Field(..., description="0-based question index to jump to")


class SessionQuestionView(BaseModel):
    id: str
    question: str
    options: List[str]
    difficulty: Optional[DifficultyEnum] = None
    # Only revealed once the session is submitted
    correct_option_index: Optional[int] = None
    explanation: Optional[str] = None


class QuizSessionResponse(BaseModel):
    session_id: str
    quiz_id: str
    quiz_title: str
    status: SessionStatusEnum
    current_index: int
    question_count: int
    current_question: SessionQuestionView
    selections: List[int] = Field(..., description="-1 marks an unanswered question")
    answered_count: int
    progress_percent: int
    elapsed_seconds: int
    elapsed_display: str = Field(..., description="Elapsed time as mm:ss")
    attempt: Optional[QuizAttemptResponse] = None


class NavigationResponse(BaseModel):
    moved: bool
    session: QuizSessionResponse
