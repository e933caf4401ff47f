import logging
import os
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from lazynote.domain.errors import PreconditionError, ValidationError
from lazynote.domain.quiz_session import utcnow
from lazynote.schemas.ingestion import IngestionStatusEnum

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (IngestionStatusEnum.UPLOADING, IngestionStatusEnum.PROCESSING)
TERMINAL_STATUSES = (IngestionStatusEnum.COMPLETED, IngestionStatusEnum.ERROR)


class IngestionProgress:
    """
    Two-phase synthetic progress for an upload-then-process workflow.

    idle -> uploading -> processing -> completed, with error reachable from
    any non-terminal state through ``fail``. Each ``tick`` advances the
    counter of the active phase by its step, clamped at 100. Completed and
    error stay put until ``reset``.
    """

    def __init__(
        self,
        upload_step: int = 5,
        processing_step: int = 3,
        allowed_extensions: Optional[Iterable[str]] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        if upload_step <= 0 or processing_step <= 0:
            raise ValueError("Progress steps must be positive")
        self.upload_step = upload_step
        self._clock = clock
        self.processing_step = processing_step
        self.allowed_extensions = (
            {ext.lower() for ext in allowed_extensions} if allowed_extensions else None
        )
        self._clear()

    def _clear(self) -> None:
        self.status = IngestionStatusEnum.IDLE
        self.upload_progress = 0
        self.processing_progress = 0
        self.title = ""
        self.files: List[str] = []
        self.tags: List[str] = []
        self.generated_set_id: Optional[str] = None
        self.error: Optional[str] = None
        self.finished_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def completes_on_next_tick(self) -> bool:
        return (
            self.status == IngestionStatusEnum.PROCESSING
            and self.processing_progress + self.processing_step >= 100
        )

    def start(self, title: str, files: List[str], tags: List[str]) -> None:
        if self.status != IngestionStatusEnum.IDLE:
            raise PreconditionError(
                f"Ingestion can only start from idle (currently {self.status.value})"
            )
        if not files or not title or not title.strip():
            raise ValidationError("Please select at least one file and provide a title.")
        if self.allowed_extensions is not None:
            rejected = [
                name
                for name in files
                if os.path.splitext(name)[1].lower() not in self.allowed_extensions
            ]
            if rejected:
                raise ValidationError(f"Unsupported file type: {', '.join(rejected)}")

        self.title = title.strip()
        self.files = list(files)
        self.tags = list(tags)
        self.error = None
        self.upload_progress = 0
        self.status = IngestionStatusEnum.UPLOADING
        logger.info(f"📤 Upload started for '{self.title}' ({len(self.files)} file(s))")

    def tick(
        self, resource_factory: Optional[Callable[["IngestionProgress"], str]] = None
    ) -> Optional[str]:
        """
        Advance the active phase by one step.

        Returns the generated resource id on the tick that completes
        processing, otherwise None. Ticks outside an active phase do nothing.
        """
        if self.status == IngestionStatusEnum.UPLOADING:
            self.upload_progress = min(100, self.upload_progress + self.upload_step)
            if self.upload_progress >= 100:
                self.status = IngestionStatusEnum.PROCESSING
                self.processing_progress = 0
                logger.info(f"⚙️ Upload finished for '{self.title}', processing")
            return None

        if self.status == IngestionStatusEnum.PROCESSING:
            self.processing_progress = min(
                100, self.processing_progress + self.processing_step
            )
            if self.processing_progress >= 100:
                generated_id = resource_factory(self) if resource_factory else None
                self.generated_set_id = generated_id
                self.status = IngestionStatusEnum.COMPLETED
                self.finished_at = self._clock()
                logger.info(f"✅ Processing complete for '{self.title}'")
                return generated_id
            return None

        return None

    def fail(self, message: str) -> None:
        if self.is_terminal:
            raise PreconditionError(
                f"Ingestion already finished ({self.status.value}); reset first"
            )
        self.status = IngestionStatusEnum.ERROR
        self.error = message
        self.finished_at = self._clock()
        logger.warning(f"❌ Ingestion for '{self.title}' failed: {message}")

    def reset(self) -> None:
        self._clear()
