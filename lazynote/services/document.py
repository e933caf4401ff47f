from sqlalchemy.orm import Session

from lazynote.repositories.document_repository import DocumentRepository
from lazynote.schemas.document import DocumentListResponse, DocumentResponse


class DocumentService:
    def __init__(self, db: Session):
        self.db = db
        self.document_repository = DocumentRepository(db)

    def list_documents(self, user_id: str) -> DocumentListResponse:
        documents = self.document_repository.get_by_user(user_id)
        return DocumentListResponse(
            data=[DocumentResponse.model_validate(d) for d in documents]
        )
