from .document import Document
from .flashcard import Flashcard, FlashcardSet
from .quiz import Quiz, QuizAttempt, QuizQuestion
from .user import AuthToken, User

__all__ = [
    "User",
    "AuthToken",
    "Document",
    "FlashcardSet",
    "Flashcard",
    "Quiz",
    "QuizQuestion",
    "QuizAttempt",
]
