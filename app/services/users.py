"""User profile lookups, updates, deletion and search."""

import logging
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import commit
from app.core.errors import AuthorizationError, NotFoundError, ValidationError
from app.core.security import hash_password
from app.models import User
from app.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

USER_NOT_FOUND_MESSAGE = "User not found"

# Profile fields a user may change on their own account.
UPDATABLE_USER_FIELDS = frozenset(
    {"username", "email", "password", "description", "profile_picture", "gender"}
)


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return user


def get_user_by_username(db: Session, username: str) -> User:
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return user


def _can_manage(actor: CurrentUser, user_id: int) -> bool:
    return actor.id == user_id or actor.is_admin


def update_user(
    db: Session, user_id: int, actor: CurrentUser, fields: dict[str, Any]
) -> User:
    """
    Apply a partial profile update.

    Only the account owner (or an admin) may update; keys outside
    UPDATABLE_USER_FIELDS are ignored. A new password is hashed before storage.
    """
    if not _can_manage(actor, user_id):
        raise AuthorizationError("you can't update this account.")
    user = get_user(db, user_id)

    changes = {k: v for k, v in fields.items() if k in UPDATABLE_USER_FIELDS and v is not None}
    new_username = changes.get("username")
    new_email = changes.get("email")
    if new_username or new_email:
        clash = (
            db.query(User)
            .filter(User.id != user.id)
            .filter(or_(User.username == new_username, User.email == new_email))
            .first()
        )
        if clash is not None:
            raise ValidationError("username or email already exists")

    for key, value in changes.items():
        if key == "password":
            user.password_hash = hash_password(value)
        else:
            setattr(user, key, value)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ValidationError("username or email already exists", cause=e) from e
    db.refresh(user)
    logger.info("User updated: id=%s fields=%s", user.id, sorted(changes))
    return user


def delete_user(db: Session, user_id: int, actor: CurrentUser) -> None:
    """Delete an account with its articles, comments, likes and follow edges."""
    if not _can_manage(actor, user_id):
        raise AuthorizationError("you can delete only your account")
    user = get_user(db, user_id)
    db.delete(user)
    commit(db)
    logger.info("User deleted: id=%s by actor_id=%s", user_id, actor.id)


def search_users(db: Session, search: str, limit: int) -> tuple[list[User], int]:
    """
    Case-insensitive username substring search.

    Returns up to `limit` users ordered by username, plus the total match count.
    """
    query = db.query(User)
    term = (search or "").strip()
    if term:
        query = query.filter(func.lower(User.username).contains(term.lower(), autoescape=True))
    total = query.count()
    users = query.order_by(User.username).limit(limit).all()
    return users, total
