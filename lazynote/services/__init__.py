from .auth import AuthService
from .dashboard import DashboardService
from .document import DocumentService
from .flashcard import FlashcardService
from .ingestion import IngestionService
from .quiz import QuizService
from .quiz_session import QuizSessionService

__all__ = [
    "AuthService",
    "DashboardService",
    "DocumentService",
    "FlashcardService",
    "IngestionService",
    "QuizService",
    "QuizSessionService",
]
