# app/repositories/user/user_repository.py
"""
User repository.
"""

from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import UserNotFoundError
from app.models.user.user import User
from app.repositories.base.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """Data access for users."""

    def __init__(self, db: Session):
        super().__init__(User, db)

    def not_found(self, id):
        return UserNotFoundError(id)

    def find_by_email(self, email: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(User.email == email.lower().strip())
            .first()
        )
