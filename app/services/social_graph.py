"""Follow/unfollow: symmetric follower/following edges between users."""

import logging

from sqlalchemy.orm import Session

from app.core.database import commit
from app.core.errors import (
    ConflictError,
    NotFollowingError,
    NotFoundError,
    ValidationError,
)
from app.models import Follow, User
from app.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

ALREADY_FOLLOWING_MESSAGE = "you already follow this user"
NOT_FOLLOWING_MESSAGE = "you don't follow this user"


def _load_pair(db: Session, actor: CurrentUser, target_username: str) -> tuple[User, User]:
    target = db.query(User).filter(User.username == target_username).first()
    if target is None:
        raise NotFoundError("user not found")
    me = db.get(User, actor.id)
    if me is None:
        raise NotFoundError("user not found")
    return me, target


def _edge(db: Session, follower_id: int, followed_id: int) -> Follow | None:
    return db.get(Follow, (follower_id, followed_id))


def is_following(db: Session, follower_id: int, followed_id: int) -> bool:
    return _edge(db, follower_id, followed_id) is not None


def follow(db: Session, actor: CurrentUser, target_username: str) -> None:
    """
    Make actor follow the named user.

    One follow row backs both actor.followings and target.followers.
    """
    me, target = _load_pair(db, actor, target_username)
    if me.id == target.id:
        raise ValidationError("you can't follow yourself")
    if _edge(db, me.id, target.id) is not None:
        raise ConflictError(ALREADY_FOLLOWING_MESSAGE)

    db.add(Follow(follower=me, followed=target))
    commit(db)
    logger.info("Follow edge added: follower_id=%s followed_id=%s", me.id, target.id)


def unfollow(db: Session, actor: CurrentUser, target_username: str) -> None:
    """Remove the actor -> target edge. Raises NotFollowingError when there is none."""
    me, target = _load_pair(db, actor, target_username)
    if me.id == target.id:
        raise ValidationError("you can't unfollow yourself")
    edge = _edge(db, me.id, target.id)
    if edge is None:
        raise NotFollowingError(NOT_FOLLOWING_MESSAGE)

    db.delete(edge)
    commit(db)
    logger.info("Follow edge removed: follower_id=%s followed_id=%s", me.id, target.id)


def followed_ids(db: Session, user_id: int) -> list[int]:
    """Ids the user follows, oldest follow first."""
    rows = (
        db.query(Follow.followed_id)
        .filter(Follow.follower_id == user_id)
        .order_by(Follow.created_at, Follow.followed_id)
        .all()
    )
    return [row[0] for row in rows]
