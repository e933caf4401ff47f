from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, validator


class IngestionStatusEnum(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class IngestionCreate(BaseModel):
    title: str = Field("", description="Title for the generated flashcard set")
    files: List[str] = Field(
        default_factory=list, description="Names of the files selected for upload"
    )
    tags: List[str] = Field(default_factory=list)

    @validator("tags")
    def normalize_tags(cls, v):
        tags = []
        for tag in v:
            tag = tag.strip()
            if tag and tag not in tags:
                tags.append(tag)
        return tags


class IngestionResponse(BaseModel):
    job_id: str
    status: IngestionStatusEnum
    upload_progress: int = Field(..., ge=0, le=100)
    processing_progress: int = Field(..., ge=0, le=100)
    title: str = ""
    files: List[str] = []
    tags: List[str] = []
    generated_set_id: Optional[str] = None
    error: Optional[str] = None
