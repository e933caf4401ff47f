import logging
import uuid
from typing import List, Optional

from sqlalchemy.orm import Session

from lazynote.domain.catalog import CatalogDomain
from lazynote.domain.errors import NotFoundError
from lazynote.domain.quiz_session import round_half_up
from lazynote.models.quiz import Quiz
from lazynote.repositories.quiz_attempt_repository import QuizAttemptRepository
from lazynote.repositories.quiz_repository import QuizRepository
from lazynote.schemas.quiz import (
    QuizAttemptListResponse,
    QuizAttemptResponse,
    QuizListResponse,
    QuizQuestionListResponse,
    QuizQuestionResponse,
    QuizResponse,
    QuizSortEnum,
)

logger = logging.getLogger(__name__)


class QuizService:
    def __init__(self, db: Session):
        self.db = db
        self.quiz_repository = QuizRepository(db)
        self.attempt_repository = QuizAttemptRepository(db)

    def _get_owned_quiz(self, user_id: str, quiz_id: str) -> Quiz:
        quiz = self.quiz_repository.get_by_id(quiz_id)
        if not quiz or quiz.user_id != user_id:
            raise NotFoundError(f"Quiz '{quiz_id}' not found")
        return quiz

    def list_quizzes(
        self,
        user_id: str,
        query: Optional[str] = None,
        sort: QuizSortEnum = QuizSortEnum.RECENT,
    ) -> QuizListResponse:
        quizzes = CatalogDomain.filter(self.quiz_repository.get_by_user(user_id), query)
        quizzes = CatalogDomain.sort_quizzes(quizzes, sort)
        return QuizListResponse(data=[QuizResponse.model_validate(q) for q in quizzes])

    def fetch_quiz(self, user_id: str, quiz_id: str) -> QuizResponse:
        return QuizResponse.model_validate(self._get_owned_quiz(user_id, quiz_id))

    def fetch_quiz_questions(
        self, user_id: str, quiz_id: str
    ) -> List[QuizQuestionResponse]:
        """Ordered questions of a quiz (may be empty)"""
        self._get_owned_quiz(user_id, quiz_id)
        return [
            QuizQuestionResponse.model_validate(question)
            for question in self.quiz_repository.get_questions(quiz_id)
        ]

    def list_questions(self, user_id: str, quiz_id: str) -> QuizQuestionListResponse:
        return QuizQuestionListResponse(data=self.fetch_quiz_questions(user_id, quiz_id))

    def list_attempts(self, user_id: str, quiz_id: str) -> QuizAttemptListResponse:
        self._get_owned_quiz(user_id, quiz_id)
        attempts = self.attempt_repository.get_by_quiz(quiz_id)
        return QuizAttemptListResponse(
            data=[QuizAttemptResponse.model_validate(a) for a in attempts]
        )

    def submit_quiz_attempt(
        self, user_id: str, attempt: QuizAttemptResponse
    ) -> QuizAttemptResponse:
        """Record a finished attempt and fold it into the quiz's running stats"""
        quiz = self._get_owned_quiz(user_id, attempt.quiz_id)

        db_attempt = self.attempt_repository.create(
            {
                "id": f"attempt-{uuid.uuid4().hex[:12]}",
                "quiz_id": attempt.quiz_id,
                "user_id": user_id,
                "started_at": attempt.started_at,
                "completed_at": attempt.completed_at,
                "score": attempt.score,
                "total_questions": attempt.total_questions,
                "correct_answers": attempt.correct_answers,
            }
        )

        completed = quiz.completed_count + 1
        self.quiz_repository.update(
            quiz,
            {
                "completed_count": completed,
                "last_attempted_at": attempt.completed_at,
                "average_score": round_half_up(
                    quiz.average_score * quiz.completed_count + attempt.score,
                    completed,
                ),
            },
        )
        logger.info(
            f"📝 Recorded attempt {db_attempt.id} for quiz {quiz.id}: {attempt.score}%"
        )
        return QuizAttemptResponse.model_validate(db_attempt)
