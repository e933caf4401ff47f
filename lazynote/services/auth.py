import logging
import uuid

from sqlalchemy.orm import Session

from lazynote.core.security import generate_token, hash_password, verify_password
from lazynote.domain.errors import AuthenticationError, ValidationError
from lazynote.models.user import User
from lazynote.repositories.user_repository import UserRepository
from lazynote.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"


class AuthService:
    def __init__(self, db: Session):
        self.db = db
        self.user_repository = UserRepository(db)

    def verify_token(self, token: str) -> User:
        """Resolve a bearer token to its user"""
        if not token:
            raise AuthenticationError("Missing bearer token")
        user = self.user_repository.get_by_token(token)
        if not user:
            raise AuthenticationError("Invalid or expired token")
        return user

    def _issue_token(self, user: User) -> TokenResponse:
        token = generate_token()
        self.user_repository.create_token(user.id, token)
        return TokenResponse(token=token, user=UserResponse.model_validate(user))

    def login(self, request: LoginRequest) -> TokenResponse:
        if not request.email or not request.password:
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        user = self.user_repository.get_by_email(request.email.strip().lower())
        if not user or not verify_password(request.password, user.password_hash):
            logger.warning("Failed login attempt")
            raise AuthenticationError("Invalid email or password")

        logger.info(f"🔑 User {user.id} logged in")
        return self._issue_token(user)

    def register(self, request: RegisterRequest) -> TokenResponse:
        if not request.email or not request.password or not request.name:
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        email = request.email.strip().lower()
        if self.user_repository.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        user = self.user_repository.create(
            {
                "id": f"user-{uuid.uuid4().hex[:12]}",
                "name": request.name.strip(),
                "email": email,
                "password_hash": hash_password(request.password),
            }
        )
        logger.info(f"👤 Registered user {user.id}")
        return self._issue_token(user)
