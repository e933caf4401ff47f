from typing import List

from sqlalchemy.orm import Session

from lazynote.models.quiz import QuizAttempt


class QuizAttemptRepository:
    """Repository for QuizAttempt database operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_quiz(self, quiz_id: str) -> List[QuizAttempt]:
        """Get attempts for a quiz, newest first"""
        return (
            self.db.query(QuizAttempt)
            .filter(QuizAttempt.quiz_id == quiz_id)
            .order_by(QuizAttempt.started_at.desc())
            .all()
        )

    def get_by_user(self, user_id: str) -> List[QuizAttempt]:
        return self.db.query(QuizAttempt).filter(QuizAttempt.user_id == user_id).all()

    def create(self, attempt_data: dict) -> QuizAttempt:
        """Create a new attempt entry"""
        db_attempt = QuizAttempt(**attempt_data)
        self.db.add(db_attempt)
        self.db.commit()
        self.db.refresh(db_attempt)
        return db_attempt
