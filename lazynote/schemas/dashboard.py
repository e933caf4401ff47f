from pydantic import BaseModel, Field


class UserStatsResponse(BaseModel):
    flashcards_created: int = 0
    flashcards_reviewed: int = 0
    quizzes_completed: int = 0
    average_score: int = Field(0, ge=0, le=100)
    total_study_time: int = Field(0, description="Total study time in minutes")
