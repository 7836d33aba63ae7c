"""
Security utilities: password hashing and JWT access tokens.
"""

import base64
import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional

import bcrypt
import jwt

from hostelhub.config.settings import settings
from hostelhub.core.exceptions import AuthenticationError
from hostelhub.core.logging import get_logger

logger = get_logger(__name__)

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class TokenType(str, Enum):
    """Token type enumeration"""
    ACCESS = "access"


class PasswordManager:
    """Password hashing and verification"""

    @staticmethod
    def _prepare(password: str) -> bytes:
        raw = password.encode("utf-8")
        if len(raw) > BCRYPT_MAX_BYTES:
            # Pre-hash long passwords so no suffix is silently ignored
            raw = base64.b64encode(hashlib.sha256(raw).digest())
        return raw

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password
        """
        salt = bcrypt.gensalt(rounds=settings.PASSWORD_BCRYPT_ROUNDS)
        return bcrypt.hashpw(PasswordManager._prepare(password), salt).decode("utf-8")

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.

        Returns:
            True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(
                PasswordManager._prepare(plain_password),
                hashed_password.encode("utf-8"),
            )
        except ValueError as e:
            logger.warning(f"Password verification failed: {e}")
            return False


class TokenManager:
    """JWT token management utilities"""

    @staticmethod
    def create_token(
        data: Dict[str, Any],
        token_type: TokenType = TokenType.ACCESS,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create JWT token with specified data and expiration.

        Args:
            data: Claims to encode in the token
            token_type: Type of token to create
            expires_delta: Custom expiration time

        Returns:
            Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

        to_encode = data.copy()
        to_encode.update({
            "exp": expire,
            "iat": now,
            "type": token_type.value,
            "jti": secrets.token_urlsafe(16),
        })
        return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    @staticmethod
    def verify_token(token: str, expected_type: Optional[TokenType] = None) -> Dict[str, Any]:
        """
        Verify and decode JWT token.

        Raises:
            AuthenticationError: If the token is expired, malformed or of the wrong type
        """
        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET_KEY,
                algorithms=[settings.JWT_ALGORITHM],
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.warning(f"Token verification failed: {e}")
            raise AuthenticationError("Invalid token")

        if expected_type and payload.get("type") != expected_type.value:
            raise AuthenticationError("Invalid token type")
        if not payload.get("sub"):
            raise AuthenticationError("Invalid token")
        return payload


# Convenience functions
def hash_password(password: str) -> str:
    return PasswordManager.hash_password(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return PasswordManager.verify_password(plain_password, hashed_password)


def create_access_token(user_id: str, role: str) -> str:
    """Issue an access token for the given user"""
    return TokenManager.create_token({"sub": user_id, "role": role}, TokenType.ACCESS)


def verify_access_token(token: str) -> Dict[str, Any]:
    return TokenManager.verify_token(token, TokenType.ACCESS)


__all__ = [
    "TokenType",
    "PasswordManager",
    "TokenManager",
    "hash_password",
    "verify_password",
    "create_access_token",
    "verify_access_token",
]
