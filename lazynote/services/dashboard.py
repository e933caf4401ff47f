from sqlalchemy.orm import Session

from lazynote.domain.quiz_session import round_half_up
from lazynote.repositories.flashcard_repository import FlashcardRepository
from lazynote.repositories.quiz_attempt_repository import QuizAttemptRepository
from lazynote.repositories.quiz_repository import QuizRepository
from lazynote.schemas.dashboard import UserStatsResponse


class DashboardService:
    """Study statistics derived from the user's stored sets, quizzes and attempts"""

    def __init__(self, db: Session):
        self.db = db
        self.flashcard_repository = FlashcardRepository(db)
        self.quiz_repository = QuizRepository(db)
        self.attempt_repository = QuizAttemptRepository(db)

    def get_user_stats(self, user_id: str) -> UserStatsResponse:
        sets = self.flashcard_repository.get_sets_by_user(user_id)
        flashcards_created = sum(s.card_count for s in sets)
        flashcards_reviewed = sum(
            1
            for s in sets
            for card in self.flashcard_repository.get_cards(s.id)
            if card.last_reviewed is not None
        )

        quizzes = self.quiz_repository.get_by_user(user_id)
        attempted = [q for q in quizzes if q.completed_count > 0]
        average_score = 0
        if attempted:
            average_score = round_half_up(
                sum(q.average_score for q in attempted), len(attempted)
            )

        study_seconds = 0
        for attempt in self.attempt_repository.get_by_user(user_id):
            if attempt.completed_at and attempt.started_at:
                study_seconds += max(
                    int((attempt.completed_at - attempt.started_at).total_seconds()), 0
                )

        return UserStatsResponse(
            flashcards_created=flashcards_created,
            flashcards_reviewed=flashcards_reviewed,
            quizzes_completed=sum(q.completed_count for q in quizzes),
            average_score=average_score,
            total_study_time=study_seconds // 60,
        )
