from typing import List, Optional, TypeVar

from lazynote.models.flashcard import FlashcardSet
from lazynote.models.quiz import Quiz
from lazynote.schemas.flashcard import FlashcardSortEnum
from lazynote.schemas.quiz import QuizSortEnum

T = TypeVar("T", Quiz, FlashcardSet)


class CatalogDomain:
    """Search and ordering rules for the quiz and flashcard listings"""

    @staticmethod
    def matches(item, query: Optional[str]) -> bool:
        """Case-insensitive substring match on the title or any tag"""
        if not query:
            return True
        needle = query.lower()
        if needle in item.title.lower():
            return True
        return any(needle in tag.lower() for tag in item.tags or [])

    @staticmethod
    def filter(items: List[T], query: Optional[str]) -> List[T]:
        return [item for item in items if CatalogDomain.matches(item, query)]

    @staticmethod
    def mastery_ratio(flashcard_set: FlashcardSet) -> float:
        if not flashcard_set.card_count:
            return 0.0
        return flashcard_set.mastered / flashcard_set.card_count

    @staticmethod
    def sort_quizzes(quizzes: List[Quiz], sort: QuizSortEnum) -> List[Quiz]:
        if sort == QuizSortEnum.SCORE:
            return sorted(quizzes, key=lambda q: q.average_score, reverse=True)
        return sorted(quizzes, key=lambda q: q.created_at, reverse=True)

    @staticmethod
    def sort_flashcard_sets(
        sets: List[FlashcardSet], sort: FlashcardSortEnum
    ) -> List[FlashcardSet]:
        if sort == FlashcardSortEnum.MASTERY:
            return sorted(sets, key=CatalogDomain.mastery_ratio, reverse=True)
        return sorted(sets, key=lambda s: s.created_at, reverse=True)
