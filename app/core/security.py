"""Password hashing and access/refresh token creation and verification."""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings
from app.core.errors import AuthError
from app.schemas.auth import CurrentUser

INVALID_TOKEN_MESSAGE = "token is not valid!"


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def _identity_claims(identity: CurrentUser) -> dict[str, Any]:
    return {
        "username": identity.username,
        "role": identity.role,
        "id": identity.id,
    }


def create_access_token(identity: CurrentUser) -> str:
    """Create a short-lived access token carrying username, role and id."""
    now = datetime.now(UTC)
    payload = _identity_claims(identity)
    payload["iat"] = now
    payload["exp"] = now + timedelta(seconds=settings.ACCESS_TOKEN_EXPIRE_SECONDS)
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def create_refresh_token(identity: CurrentUser) -> str:
    """
    Create a refresh token signed with the refresh secret.

    No exp claim: a refresh token stays valid until the stored copy on the user
    is overwritten (login, rotation) or unset (logout). The jti makes every
    issued token distinct, even within the same second.
    """
    payload = _identity_claims(identity)
    payload["iat"] = datetime.now(UTC)
    payload["jti"] = uuid.uuid4().hex
    return jwt.encode(
        payload,
        settings.JWT_REFRESH_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def _decode(token: str, secret: str) -> CurrentUser:
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        raise AuthError(INVALID_TOKEN_MESSAGE, cause=e) from e
    try:
        return CurrentUser(
            id=int(payload["id"]),
            username=str(payload["username"]),
            role=str(payload.get("role") or "user"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise AuthError(INVALID_TOKEN_MESSAGE, cause=e) from e


def decode_access_token(token: str) -> CurrentUser:
    """
    Verify an access token and return the identity it carries.
    Raises AuthError on a bad signature, expired token or malformed payload.
    """
    return _decode(token, settings.JWT_SECRET.get_secret_value())


def decode_refresh_token(token: str) -> CurrentUser:
    """Verify a refresh token signature and return its identity. Raises AuthError."""
    return _decode(token, settings.JWT_REFRESH_SECRET.get_secret_value())
