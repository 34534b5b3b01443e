"""
Security utilities for authentication and authorization.

Provides password hashing (bcrypt), one-time token generation and
JWT session token management.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import InvalidTokenError
from passlib.context import CryptContext

from readytowork.core.config import settings

# Password hashing context using bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Collections that can own a session
AUTH_COLLECTIONS = ("users", "candidates", "employers")


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    if not plain_password or not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: The plain text password to hash

    Returns:
        The hashed password string
    """
    return pwd_context.hash(password)


def generate_token() -> str:
    """Random 32-byte hex token for email verification and password reset."""
    return secrets.token_hex(32)


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def session_lifetime(remember_me: bool = False) -> timedelta:
    if remember_me:
        return timedelta(days=settings.REMEMBER_ME_TTL_DAYS)
    return timedelta(hours=settings.SESSION_TTL_HOURS)


def create_session_token(
    subject_id: int,
    collection: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed session token.

    Args:
        subject_id: Primary key of the authenticated record
        collection: Table the record lives in ("users", "candidates", "employers")
        expires_delta: Optional custom expiration time

    Returns:
        The encoded JWT token string
    """
    if collection not in AUTH_COLLECTIONS:
        raise ValueError(f"Unknown auth collection: {collection}")

    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or session_lifetime())

    to_encode = {
        "sub": str(subject_id),
        "col": collection,
        "iat": now,
        "exp": expire,
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def decode_session_token(token: str) -> Optional[dict]:
    """
    Decode and validate a session token.

    Args:
        token: The JWT token string to decode

    Returns:
        The decoded token payload, or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except InvalidTokenError:
        return None

    if payload.get("col") not in AUTH_COLLECTIONS or not payload.get("sub"):
        return None
    return payload
