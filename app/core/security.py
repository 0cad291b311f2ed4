"""
Security and Authentication Module

Password hashing and JWT bearer tokens. Tokens are issued elsewhere; this
service only verifies them and reads the user id, email and role they
carry.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config.settings import settings
from app.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    InvalidTokenError,
    TokenExpiredError,
)
from app.core.logging import get_logger, user_id as user_id_ctx
from app.models.base.enums import UserRole

logger = get_logger(__name__)

# JWT Security scheme; missing credentials are reported as AuthenticationError
security = HTTPBearer(auto_error=False)


class PasswordManager:
    """Password hashing and verification"""

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password
        """
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.

        Returns:
            True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
        except ValueError as e:
            logger.error(f"Password verification failed: {str(e)}")
            return False


@dataclass(frozen=True)
class CurrentUser:
    """Identity taken from a verified access token."""

    id: int
    email: Optional[str]
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class TokenManager:
    """JWT token management utilities"""

    @staticmethod
    def create_token(
        user_id: int,
        email: Optional[str] = None,
        role: UserRole = UserRole.CUSTOMER,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create an access token.

        Args:
            user_id: Subject of the token
            email: User email claim
            role: User role claim
            expires_delta: Custom expiration time

        Returns:
            Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
        to_encode = {
            "sub": str(user_id),
            "email": email,
            "role": UserRole(role).value,
            "iat": now,
            "exp": expire,
        }
        return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    @staticmethod
    def verify_token(token: str) -> Dict[str, Any]:
        """
        Verify and decode JWT token.

        Raises:
            InvalidTokenError: If token is invalid
            TokenExpiredError: If token has expired
        """
        try:
            return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.warning(f"Token verification failed: {str(e)}")
            raise InvalidTokenError("Invalid token", reason=str(e))

    @staticmethod
    def to_current_user(payload: Dict[str, Any]) -> CurrentUser:
        try:
            return CurrentUser(
                id=int(payload["sub"]),
                email=payload.get("email"),
                role=UserRole(payload.get("role", UserRole.CUSTOMER.value)),
            )
        except (KeyError, TypeError, ValueError):
            raise InvalidTokenError("Invalid token payload")


def hash_password(password: str) -> str:
    """Convenience function for hashing a password"""
    return PasswordManager.hash_password(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return PasswordManager.verify_password(plain_password, hashed_password)


def create_access_token(
    user_id: int,
    email: Optional[str] = None,
    role: UserRole = UserRole.CUSTOMER,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Convenience function for creating access token"""
    return TokenManager.create_token(user_id, email, role, expires_delta)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """
    FastAPI dependency resolving the bearer token to a CurrentUser.

    Runs in the request task, so the user id stored in the logging context
    reaches the endpoint and the services it calls.

    Raises:
        AuthenticationError: If the token is missing, invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")

    payload = TokenManager.verify_token(credentials.credentials)
    current_user = TokenManager.to_current_user(payload)
    user_id_ctx.set(str(current_user.id))
    return current_user


async def require_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """FastAPI dependency allowing admins only."""
    if not current_user.is_admin:
        raise AuthorizationError("Admin access required", required_permission="admin")
    return current_user
