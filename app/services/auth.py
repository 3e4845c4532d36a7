"""Signup, login, logout and refresh-token rotation."""

import logging
from dataclasses import dataclass

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import commit
from app.core.errors import AuthError, ValidationError
from app.core.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    hash_password,
    verify_password,
)
from app.models import User
from app.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

USER_NOT_FOUND_MESSAGE = "user does not exist"
BAD_PASSWORD_MESSAGE = "password is incorrect"
INVALID_REFRESH_MESSAGE = "Refresh token is not valid!"


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


def identity_of(user: User) -> CurrentUser:
    return CurrentUser(id=user.id, username=user.username, role=user.role)


def issue_token_pair(user: User) -> TokenPair:
    identity = identity_of(user)
    return TokenPair(
        access_token=create_access_token(identity),
        refresh_token=create_refresh_token(identity),
    )


def signup(db: Session, username: str, email: str, password: str) -> User:
    """
    Create a user with a bcrypt-hashed password.

    Raises ValidationError when the username or email is already taken; the
    store is left unchanged in that case.
    """
    existing = (
        db.query(User)
        .filter(or_(User.username == username, User.email == email))
        .first()
    )
    if existing is not None:
        field = "username" if existing.username == username else "email"
        raise ValidationError(f"{field} already exists")

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent signup for the same username/email.
        db.rollback()
        raise ValidationError("username or email already exists", cause=e) from e
    db.refresh(user)
    logger.info("User signed up: id=%s username=%s", user.id, user.username)
    return user


def login(db: Session, username: str, password: str) -> tuple[User, TokenPair]:
    """
    Check credentials and start a new session.

    The new refresh token replaces whatever was stored on the user, so any
    earlier session can no longer be refreshed.
    """
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        raise AuthError(USER_NOT_FOUND_MESSAGE)
    if not verify_password(password, user.password_hash):
        raise AuthError(BAD_PASSWORD_MESSAGE)

    pair = issue_token_pair(user)
    user.refresh_token = pair.refresh_token
    commit(db)
    db.refresh(user)
    logger.info("User logged in: id=%s", user.id)
    return user, pair


def logout(db: Session, refresh_token: str | None) -> int:
    """
    Unset the refresh token on whichever user holds it.

    Any non-empty token is accepted, whether or not it belongs to a live
    session. Returns the number of users updated (0 or 1).
    """
    if not refresh_token:
        raise ValidationError("logout error")
    updated = (
        db.query(User)
        .filter(User.refresh_token == refresh_token)
        .update({User.refresh_token: None}, synchronize_session=False)
    )
    commit(db)
    logger.info("Logout processed: sessions_revoked=%s", updated)
    return updated


def refresh(db: Session, token: str | None) -> TokenPair:
    """
    Exchange the current refresh token for a new access/refresh pair.

    The presented token must equal the stored one and carry a valid signature.
    The stored token is replaced, so each refresh token works exactly once.
    """
    if not token:
        raise AuthError("You are not authenticated!")

    user = db.query(User).filter(User.refresh_token == token).first()
    if user is None:
        raise AuthError(INVALID_REFRESH_MESSAGE)
    try:
        decode_refresh_token(token)
    except AuthError as e:
        raise AuthError(INVALID_REFRESH_MESSAGE, cause=e) from e

    pair = issue_token_pair(user)
    # Conditional swap: two concurrent refreshes with the same token cannot both win.
    swapped = (
        db.query(User)
        .filter(User.id == user.id, User.refresh_token == token)
        .update({User.refresh_token: pair.refresh_token}, synchronize_session=False)
    )
    if swapped != 1:
        db.rollback()
        raise AuthError(INVALID_REFRESH_MESSAGE)
    commit(db)
    logger.info("Refresh token rotated: user_id=%s", user.id)
    return pair
