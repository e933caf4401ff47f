import asyncio
import logging
import os
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from lazynote.core.config import settings
from lazynote.core.database import SessionLocal
from lazynote.domain.errors import NotFoundError
from lazynote.domain.ingestion import IngestionProgress
from lazynote.domain.quiz_session import utcnow
from lazynote.repositories.document_repository import DocumentRepository
from lazynote.repositories.flashcard_repository import FlashcardRepository
from lazynote.schemas.document import DocumentTypeEnum
from lazynote.schemas.ingestion import (
    IngestionCreate,
    IngestionResponse,
    IngestionStatusEnum,
)

logger = logging.getLogger(__name__)

DOCUMENT_TYPES = {
    ".pdf": DocumentTypeEnum.PDF,
    ".doc": DocumentTypeEnum.DOC,
    ".docx": DocumentTypeEnum.DOC,
    ".ppt": DocumentTypeEnum.PPT,
    ".pptx": DocumentTypeEnum.PPT,
    ".txt": DocumentTypeEnum.TXT,
}


class IngestionRunner:
    """
    Drives one IngestionProgress with a single asyncio task.

    The task is the job's timer handle: it is created on ``start`` and
    released when processing completes or fails, on ``cancel``/``reset``,
    and on ``shutdown``. No tick runs after the handle is released.
    """

    def __init__(
        self,
        progress: IngestionProgress,
        upload_period: float,
        processing_period: float,
        resource_factory: Optional[Callable[[IngestionProgress], str]] = None,
    ):
        self.progress = progress
        self.upload_period = upload_period
        self.processing_period = processing_period
        self.resource_factory = resource_factory
        self._task: Optional[asyncio.Task] = None

    @property
    def has_pending_timer(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, title: str, files: List[str], tags: List[str]) -> None:
        """Validate and enter the upload phase; must be called on the event loop"""
        self.progress.start(title, files, tags)
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _tick(self) -> None:
        if self.resource_factory and self.progress.completes_on_next_tick:
            # The factory does blocking database work
            generated_id = await asyncio.to_thread(self.resource_factory, self.progress)
            self.progress.tick(lambda progress: generated_id)
        else:
            self.progress.tick()

    async def _run(self) -> None:
        try:
            while self.progress.is_active:
                if self.progress.status == IngestionStatusEnum.UPLOADING:
                    await asyncio.sleep(self.upload_period)
                else:
                    await asyncio.sleep(self.processing_period)
                try:
                    await self._tick()
                except Exception as e:
                    logger.exception("Ingestion tick failed")
                    self.progress.fail(f"Processing failed: {e}")
        finally:
            if self._task is asyncio.current_task():
                self._task = None

    async def wait(self) -> None:
        """Wait until the current run finishes or is cancelled"""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    def cancel(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()

    def reset(self) -> None:
        self.cancel()
        self.progress.reset()


@dataclass
class IngestionJob:
    user_id: str
    runner: IngestionRunner


class IngestionRegistry:
    """
    In-process store of ingestion jobs, each owned by one user.

    Completed and failed jobs are evicted ``retention_seconds`` after they
    finish. Idle and running jobs are only removed explicitly.
    """

    def __init__(
        self,
        retention_seconds: float = 3600,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._jobs: Dict[str, IngestionJob] = {}
        self._lock = threading.Lock()
        self.retention = timedelta(seconds=retention_seconds)
        self.clock = clock

    def _evict_expired(self) -> int:
        # Caller holds self._lock
        cutoff = self.clock() - self.retention
        expired = [
            job_id
            for job_id, job in self._jobs.items()
            if job.runner.progress.is_terminal
            and job.runner.progress.finished_at <= cutoff
        ]
        for job_id in expired:
            self._jobs.pop(job_id).runner.cancel()
        if expired:
            logger.info(f"Evicted {len(expired)} finished ingestion job(s)")
        return len(expired)

    def evict_expired(self) -> int:
        with self._lock:
            return self._evict_expired()

    def add(self, job: IngestionJob) -> str:
        job_id = uuid.uuid4().hex
        with self._lock:
            self._evict_expired()
            self._jobs[job_id] = job
        return job_id

    def get(self, user_id: str, job_id: str) -> IngestionJob:
        with self._lock:
            self._evict_expired()
            job = self._jobs.get(job_id)
        if job is None or job.user_id != user_id:
            raise NotFoundError(f"Ingestion job '{job_id}' not found")
        return job

    def remove(self, job_id: str) -> None:
        with self._lock:
            self._jobs.pop(job_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)

    def shutdown(self) -> None:
        """Release every pending timer handle"""
        with self._lock:
            jobs = list(self._jobs.values())
        for job in jobs:
            job.runner.cancel()
        logger.info(f"Ingestion timers released for {len(jobs)} job(s)")


def create_generated_set(user_id: str) -> Callable[[IngestionProgress], str]:
    """Resource factory that records the uploaded document and its flashcard set"""

    def factory(progress: IngestionProgress) -> str:
        extension = os.path.splitext(progress.files[0])[1].lower()
        db = SessionLocal()
        try:
            document = DocumentRepository(db).create(
                {
                    "id": f"doc-{uuid.uuid4().hex[:12]}",
                    "user_id": user_id,
                    "title": progress.title,
                    "type": DOCUMENT_TYPES.get(extension, DocumentTypeEnum.PDF).value,
                }
            )
            flashcard_set = FlashcardRepository(db).create_set(
                {
                    "id": f"set-{uuid.uuid4().hex[:12]}",
                    "user_id": user_id,
                    "title": progress.title,
                    "description": "Automatically generated from your uploaded document",
                    "tags": list(progress.tags),
                    "document_id": document.id,
                }
            )
            logger.info(f"🗂️ Generated flashcard set {flashcard_set.id}")
            return flashcard_set.id
        finally:
            db.close()

    return factory


class IngestionService:
    def __init__(self, registry: IngestionRegistry):
        self.registry = registry

    @staticmethod
    def _to_response(job_id: str, job: IngestionJob) -> IngestionResponse:
        progress = job.runner.progress
        return IngestionResponse(
            job_id=job_id,
            status=progress.status,
            upload_progress=progress.upload_progress,
            processing_progress=progress.processing_progress,
            title=progress.title,
            files=list(progress.files),
            tags=list(progress.tags),
            generated_set_id=progress.generated_set_id,
            error=progress.error,
        )

    @staticmethod
    def _new_runner(user_id: str) -> IngestionRunner:
        return IngestionRunner(
            IngestionProgress(
                upload_step=settings.UPLOAD_STEP,
                processing_step=settings.PROCESSING_STEP,
                allowed_extensions=settings.ALLOWED_UPLOAD_EXTENSIONS,
            ),
            upload_period=settings.UPLOAD_TICK_SECONDS,
            processing_period=settings.PROCESSING_TICK_SECONDS,
            resource_factory=create_generated_set(user_id),
        )

    def create(self, user_id: str, request: IngestionCreate) -> IngestionResponse:
        """Register a job and start it; invalid input leaves nothing behind"""
        job = IngestionJob(user_id=user_id, runner=self._new_runner(user_id))
        job.runner.start(request.title, request.files, request.tags)
        job_id = self.registry.add(job)
        return self._to_response(job_id, job)

    def start(
        self, user_id: str, job_id: str, request: IngestionCreate
    ) -> IngestionResponse:
        """Restart an idle job with new input"""
        job = self.registry.get(user_id, job_id)
        job.runner.start(request.title, request.files, request.tags)
        return self._to_response(job_id, job)

    def get(self, user_id: str, job_id: str) -> IngestionResponse:
        return self._to_response(job_id, self.registry.get(user_id, job_id))

    def reset(self, user_id: str, job_id: str) -> IngestionResponse:
        job = self.registry.get(user_id, job_id)
        job.runner.reset()
        logger.info(f"Ingestion job {job_id} reset")
        return self._to_response(job_id, job)

    def discard(self, user_id: str, job_id: str) -> None:
        job = self.registry.get(user_id, job_id)
        job.runner.cancel()
        self.registry.remove(job_id)
