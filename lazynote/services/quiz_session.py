import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict

from sqlalchemy.orm import Session

from lazynote.domain.errors import NotFoundError
from lazynote.domain.quiz_session import QuizSession, format_elapsed, utcnow
from lazynote.schemas.quiz_session import (
    NavigationResponse,
    QuizSessionResponse,
    SessionQuestionView,
)
from lazynote.services.quiz import QuizService

logger = logging.getLogger(__name__)


@dataclass
class SessionEntry:
    user_id: str
    quiz_title: str
    session: QuizSession
    lock: threading.Lock = field(default_factory=threading.Lock)


class QuizSessionRegistry:
    """
    In-process store of live quiz sessions, each owned by one user.

    Submitted sessions are kept for ``retention_seconds`` after submission
    so the result can still be read, then evicted. Sessions in progress are
    only removed explicitly.
    """

    def __init__(
        self,
        retention_seconds: float = 3600,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._entries: Dict[str, SessionEntry] = {}
        self._lock = threading.Lock()
        self.retention = timedelta(seconds=retention_seconds)
        self.clock = clock

    def _evict_expired(self) -> int:
        # Caller holds self._lock
        cutoff = self.clock() - self.retention
        expired = [
            session_id
            for session_id, entry in self._entries.items()
            if entry.session.is_submitted and entry.session.completed_at <= cutoff
        ]
        for session_id in expired:
            del self._entries[session_id]
        if expired:
            logger.info(f"Evicted {len(expired)} submitted quiz session(s)")
        return len(expired)

    def evict_expired(self) -> int:
        with self._lock:
            return self._evict_expired()

    def add(self, entry: SessionEntry) -> str:
        session_id = uuid.uuid4().hex
        with self._lock:
            self._evict_expired()
            self._entries[session_id] = entry
        return session_id

    def get(self, user_id: str, session_id: str) -> SessionEntry:
        with self._lock:
            self._evict_expired()
            entry = self._entries.get(session_id)
        if entry is None or entry.user_id != user_id:
            raise NotFoundError(f"Quiz session '{session_id}' not found")
        return entry

    def remove(self, user_id: str, session_id: str) -> None:
        self.get(user_id, session_id)
        with self._lock:
            self._entries.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class QuizSessionService:
    def __init__(
        self,
        db: Session,
        registry: QuizSessionRegistry,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.registry = registry
        self.clock = clock
        self.quiz_service = QuizService(db)

    @staticmethod
    def _to_response(session_id: str, entry: SessionEntry) -> QuizSessionResponse:
        session = entry.session
        question = session.current_question
        revealed = session.is_submitted
        elapsed = session.elapsed_seconds()
        return QuizSessionResponse(
            session_id=session_id,
            quiz_id=session.quiz_id,
            quiz_title=entry.quiz_title,
            status=session.status,
            current_index=session.current_index,
            question_count=session.question_count,
            current_question=SessionQuestionView(
                id=question.id,
                question=question.question,
                options=list(question.options),
                difficulty=question.difficulty,
                correct_option_index=question.correct_option_index if revealed else None,
                explanation=question.explanation if revealed else None,
            ),
            selections=list(session.selections),
            answered_count=session.answered_count,
            progress_percent=session.progress_percent(),
            elapsed_seconds=elapsed,
            elapsed_display=format_elapsed(elapsed),
            attempt=session.attempt,
        )

    def start(self, user_id: str, quiz_id: str) -> QuizSessionResponse:
        quiz = self.quiz_service.fetch_quiz(user_id, quiz_id)
        questions = self.quiz_service.fetch_quiz_questions(user_id, quiz_id)
        session = QuizSession(quiz_id, questions, clock=self.clock)

        entry = SessionEntry(user_id=user_id, quiz_title=quiz.title, session=session)
        session_id = self.registry.add(entry)
        logger.info(
            f"🎯 Quiz session {session_id} started for quiz {quiz_id} "
            f"({session.question_count} questions)"
        )
        return self._to_response(session_id, entry)

    def get(self, user_id: str, session_id: str) -> QuizSessionResponse:
        entry = self.registry.get(user_id, session_id)
        return self._to_response(session_id, entry)

    def select_answer(
        self, user_id: str, session_id: str, option_index: int
    ) -> QuizSessionResponse:
        entry = self.registry.get(user_id, session_id)
        with entry.lock:
            entry.session.select_answer(option_index)
            return self._to_response(session_id, entry)

    def advance(self, user_id: str, session_id: str) -> NavigationResponse:
        entry = self.registry.get(user_id, session_id)
        with entry.lock:
            moved = entry.session.advance()
            return NavigationResponse(
                moved=moved, session=self._to_response(session_id, entry)
            )

    def retreat(self, user_id: str, session_id: str) -> NavigationResponse:
        entry = self.registry.get(user_id, session_id)
        with entry.lock:
            moved = entry.session.retreat()
            return NavigationResponse(
                moved=moved, session=self._to_response(session_id, entry)
            )

    def jump_to(self, user_id: str, session_id: str, index: int) -> QuizSessionResponse:
        entry = self.registry.get(user_id, session_id)
        with entry.lock:
            entry.session.jump_to(index)
            return self._to_response(session_id, entry)

    def submit(self, user_id: str, session_id: str) -> QuizSessionResponse:
        entry = self.registry.get(user_id, session_id)
        with entry.lock:
            scored = entry.session.score()
            # Submitted only once the attempt is recorded
            stored = self.quiz_service.submit_quiz_attempt(user_id, scored)
            entry.session.mark_submitted(scored.completed_at, stored)
            return self._to_response(session_id, entry)

    def discard(self, user_id: str, session_id: str) -> None:
        self.registry.remove(user_id, session_id)
        logger.info(f"🗑️ Quiz session {session_id} discarded")
