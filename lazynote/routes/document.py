from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lazynote.core.database import get_db
from lazynote.models.user import User
from lazynote.routes.deps import get_current_user
from lazynote.schemas.document import DocumentListResponse
from lazynote.services.document import DocumentService

router = APIRouter(tags=["document"])


@router.get("/documents", response_model=DocumentListResponse)
def list_documents(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """List the user's uploaded documents, newest first"""
    return DocumentService(db).list_documents(user.id)
