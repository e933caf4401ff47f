from typing import List, Optional

from sqlalchemy.orm import Session

from lazynote.models.document import Document


class DocumentRepository:
    """Repository for Document database operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, document_id: str) -> Optional[Document]:
        return self.db.query(Document).filter(Document.id == document_id).first()

    def get_by_user(self, user_id: str) -> List[Document]:
        """Get a user's documents, newest first"""
        return (
            self.db.query(Document)
            .filter(Document.user_id == user_id)
            .order_by(Document.created_at.desc())
            .all()
        )

    def create(self, document_data: dict) -> Document:
        """Create a new document entry"""
        db_document = Document(**document_data)
        self.db.add(db_document)
        self.db.commit()
        self.db.refresh(db_document)
        return db_document
