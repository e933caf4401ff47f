from typing import Optional

from sqlalchemy.orm import Session

from lazynote.models.user import AuthToken, User


class UserRepository:
    """Repository for User and AuthToken database operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_by_token(self, token: str) -> Optional[User]:
        """Resolve the user a bearer token was issued to"""
        return (
            self.db.query(User)
            .join(AuthToken, AuthToken.user_id == User.id)
            .filter(AuthToken.token == token)
            .first()
        )

    def create(self, user_data: dict) -> User:
        db_user = User(**user_data)
        self.db.add(db_user)
        self.db.commit()
        self.db.refresh(db_user)
        return db_user

    def create_token(self, user_id: str, token: str) -> AuthToken:
        db_token = AuthToken(user_id=user_id, token=token)
        self.db.add(db_token)
        self.db.commit()
        return db_token
