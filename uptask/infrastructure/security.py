"""Credential Primitives — argon2 password hashing and signed JWT access tokens.

Invariants:
    - Plain-text passwords never leave this module except as argon2 hashes
    - JWTs carry the user id in `sub` and expire after settings.jwt_expires_days
    - decode_access_token returns None for any invalid, expired or malformed token
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from uptask.config import get_settings

logger = logging.getLogger(__name__)

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def create_access_token(user_id: UUID, now: datetime | None = None) -> str:
    """Sign a JWT identifying the user."""
    settings = get_settings()
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expires_days),
    }
    return jwt.encode(
        payload, settings.jwt_secret, algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> UUID | None:
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired access token")
        return None
    except jwt.InvalidTokenError:
        return None
    try:
        return UUID(str(payload.get("sub")))
    except ValueError:
        return None
