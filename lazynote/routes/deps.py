from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from lazynote.core.database import get_db
from lazynote.domain.errors import AuthenticationError
from lazynote.models.user import User
from lazynote.services.auth import AuthService
from lazynote.services.ingestion import IngestionRegistry
from lazynote.services.quiz_session import QuizSessionRegistry

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the request's bearer token to a user"""
    token = credentials.credentials if credentials else ""
    try:
        return AuthService(db).verify_token(token)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_quiz_session_registry(request: Request) -> QuizSessionRegistry:
    return request.app.state.quiz_sessions


def get_ingestion_registry(request: Request) -> IngestionRegistry:
    return request.app.state.ingestions
