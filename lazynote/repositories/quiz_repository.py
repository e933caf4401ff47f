from typing import List, Optional

from sqlalchemy.orm import Session

from lazynote.models.quiz import Quiz, QuizQuestion


class QuizRepository:
    """Repository for Quiz and QuizQuestion database operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, quiz_id: str) -> Optional[Quiz]:
        """Get a quiz by ID"""
        return self.db.query(Quiz).filter(Quiz.id == quiz_id).first()

    def get_by_user(self, user_id: str) -> List[Quiz]:
        """Get all quizzes owned by a user"""
        return self.db.query(Quiz).filter(Quiz.user_id == user_id).all()

    def get_questions(self, quiz_id: str) -> List[QuizQuestion]:
        """Get the questions of a quiz in presentation order"""
        return (
            self.db.query(QuizQuestion)
            .filter(QuizQuestion.quiz_id == quiz_id)
            .order_by(QuizQuestion.position)
            .all()
        )

    def create(self, quiz_data: dict) -> Quiz:
        """Create a new quiz entry"""
        db_quiz = Quiz(**quiz_data)
        self.db.add(db_quiz)
        self.db.commit()
        self.db.refresh(db_quiz)
        return db_quiz

    def update(self, quiz: Quiz, update_data: dict) -> Quiz:
        """Update a quiz entry"""
        for field, value in update_data.items():
            setattr(quiz, field, value)
        self.db.commit()
        self.db.refresh(quiz)
        return quiz
