from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel


class DocumentTypeEnum(str, Enum):
    PDF = "pdf"
    DOC = "doc"
    PPT = "ppt"
    TXT = "txt"


class DocumentResponse(BaseModel):
    id: str
    title: str
    type: DocumentTypeEnum
    created_at: datetime
    flashcard_count: int = 0
    quiz_count: int = 0

    class Config:
        from_attributes = True


class DocumentListResponse(BaseModel):
    data: List[DocumentResponse]
