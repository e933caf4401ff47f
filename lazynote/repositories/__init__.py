from .document_repository import DocumentRepository
from .flashcard_repository import FlashcardRepository
from .quiz_attempt_repository import QuizAttemptRepository
from .quiz_repository import QuizRepository
from .user_repository import UserRepository

__all__ = [
    "DocumentRepository",
    "FlashcardRepository",
    "QuizAttemptRepository",
    "QuizRepository",
    "UserRepository",
]
