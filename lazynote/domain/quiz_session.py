import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

from lazynote.domain.errors import (
    EmptyQuizError,
    InvalidQuestionError,
    PreconditionError,
    ValidationError,
)
from lazynote.schemas.quiz import QuizAttemptResponse, QuizQuestionResponse
from lazynote.schemas.quiz_session import SessionStatusEnum

logger = logging.getLogger(__name__)

UNANSWERED = -1


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def round_half_up(numerator: int, denominator: int) -> int:
    """numerator / denominator rounded half up, for non-negative integers"""
    return (2 * numerator + denominator) // (2 * denominator)


def score_percentage(correct_count: int, question_count: int) -> int:
    return round_half_up(100 * correct_count, question_count)


def format_elapsed(seconds: int) -> str:
    mins, secs = divmod(max(seconds, 0), 60)
    return f"{mins:02d}:{secs:02d}"


class QuizSession:
    """
    Traversal of a fixed, ordered question list ending in a scored attempt.

    The session starts InProgress. ``submit`` is the only transition to
    Submitted and is terminal: every mutating call afterwards raises
    PreconditionError. ``selections`` always holds exactly one slot per
    question, ``UNANSWERED`` until an option is picked.
    """

    def __init__(
        self,
        quiz_id: str,
        questions: Sequence[QuizQuestionResponse],
        clock: Callable[[], datetime] = utcnow,
    ):
        if not questions:
            raise EmptyQuizError(f"Quiz '{quiz_id}' has no questions")
        for question in questions:
            if not question.options:
                raise InvalidQuestionError(
                    f"Question '{question.id}' has no answer options"
                )
            if not 0 <= question.correct_option_index < len(question.options):
                raise InvalidQuestionError(
                    f"Question '{question.id}' has correct option index "
                    f"{question.correct_option_index} outside 0..{len(question.options) - 1}"
                )

        self.quiz_id = quiz_id
        self.questions = tuple(questions)
        self._clock = clock
        self.selections: List[int] = [UNANSWERED] * len(self.questions)
        self.current_index = 0
        self.started_at = clock()
        self.status = SessionStatusEnum.IN_PROGRESS
        self.completed_at: Optional[datetime] = None
        self.attempt: Optional[QuizAttemptResponse] = None

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def last_index(self) -> int:
        return len(self.questions) - 1

    @property
    def current_question(self) -> QuizQuestionResponse:
        return self.questions[self.current_index]

    @property
    def is_submitted(self) -> bool:
        return self.status == SessionStatusEnum.SUBMITTED

    @property
    def answered_count(self) -> int:
        return sum(1 for selection in self.selections if selection != UNANSWERED)

    @property
    def all_answered(self) -> bool:
        return all(selection != UNANSWERED for selection in self.selections)

    def is_answered(self, index: int) -> bool:
        return self.selections[index] != UNANSWERED

    def _require_in_progress(self) -> None:
        if self.is_submitted:
            raise PreconditionError("Quiz has already been submitted")

    def select_answer(self, option_index: int) -> None:
        self._require_in_progress()
        options = self.current_question.options
        if not 0 <= option_index < len(options):
            raise ValidationError(
                f"Option index {option_index} is out of range for question "
                f"{self.current_index + 1} ({len(options)} options)"
            )
        self.selections[self.current_index] = option_index

    def advance(self) -> bool:
        """Move to the next question; returns False on the last question"""
        self._require_in_progress()
        if self.current_index >= self.last_index:
            return False
        if not self.is_answered(self.current_index):
            raise PreconditionError(
                "Answer the current question before moving to the next one"
            )
        self.current_index += 1
        return True

    def retreat(self) -> bool:
        """Move to the previous question; returns False on the first question"""
        self._require_in_progress()
        if self.current_index <= 0:
            return False
        self.current_index -= 1
        return True

    def jump_to(self, index: int) -> None:
        self._require_in_progress()
        if not 0 <= index < self.question_count:
            raise ValidationError(
                f"Question index {index} is out of range 0..{self.last_index}"
            )
        self.current_index = index

    def elapsed_seconds(self) -> int:
        end = self.completed_at or self._clock()
        return max(int((end - self.started_at).total_seconds()), 0)

    def progress_percent(self) -> int:
        return score_percentage(self.current_index + 1, self.question_count)

    def score(self) -> QuizAttemptResponse:
        """
        Build the attempt for the current selections without ending the session.

        Raises PreconditionError while any question is unanswered.
        """
        self._require_in_progress()
        unanswered = [
            str(index + 1)
            for index, selection in enumerate(self.selections)
            if selection == UNANSWERED
        ]
        if unanswered:
            raise PreconditionError(
                f"Cannot submit with unanswered questions: {', '.join(unanswered)}"
            )

        correct_count = sum(
            1
            for selection, question in zip(self.selections, self.questions)
            if selection == question.correct_option_index
        )
        return QuizAttemptResponse(
            quiz_id=self.quiz_id,
            started_at=self.started_at,
            completed_at=self._clock(),
            score=score_percentage(correct_count, self.question_count),
            total_questions=self.question_count,
            correct_answers=correct_count,
        )

    def mark_submitted(
        self, completed_at: datetime, attempt: QuizAttemptResponse
    ) -> None:
        """Enter the terminal Submitted state with a scored attempt"""
        self._require_in_progress()
        self.completed_at = completed_at
        self.attempt = attempt
        self.status = SessionStatusEnum.SUBMITTED
        logger.info(
            f"Quiz {self.quiz_id} submitted: {attempt.correct_answers}/"
            f"{attempt.total_questions} correct, score {attempt.score}%"
        )

    def submit(self) -> QuizAttemptResponse:
        attempt = self.score()
        self.mark_submitted(attempt.completed_at, attempt)
        return attempt
