"""ORM models for application users and the follow graph."""

from datetime import UTC, datetime

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from app.core.config import settings
from app.models.base import Base


def utcnow() -> datetime:
    return datetime.now(UTC)


class Follow(Base):
    """
    One follow edge: follower_id follows followed_id.

    The row is read from both endpoints (User.followings / User.followers), so
    the two sides of the edge cannot disagree.
    """

    __tablename__ = "follows"
    __table_args__ = (
        CheckConstraint("follower_id <> followed_id", name="ck_follows_no_self_follow"),
    )

    follower_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    followed_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    follower = relationship(
        "User", foreign_keys=[follower_id], back_populates="following_edges"
    )
    followed = relationship(
        "User", foreign_keys=[followed_id], back_populates="follower_edges"
    )


class User(Base):
    """
    User account: credentials, profile and the single live refresh token.

    role: 'admin' or 'user'
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    profile_picture = Column(
        String(2048), nullable=False, default=lambda: settings.DEFAULT_PROFILE_PICTURE
    )
    role = Column(String(32), nullable=False, default="user")
    gender = Column(String(32), nullable=True)
    refresh_token = Column(Text, nullable=True, index=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )

    following_edges = relationship(
        Follow,
        foreign_keys=[Follow.follower_id],
        back_populates="follower",
        order_by=[Follow.created_at, Follow.followed_id],
        cascade="all, delete-orphan",
    )
    follower_edges = relationship(
        Follow,
        foreign_keys=[Follow.followed_id],
        back_populates="followed",
        order_by=[Follow.created_at, Follow.follower_id],
        cascade="all, delete-orphan",
    )
    articles = relationship(
        "Article",
        back_populates="owner",
        cascade="all, delete-orphan",
    )
    comments = relationship(
        "Comment",
        back_populates="author",
        cascade="all, delete-orphan",
    )
    liked_articles = relationship(
        "Article",
        secondary="article_likes",
        back_populates="liked_by",
    )

    @property
    def followings(self) -> list[int]:
        """Ids of the users this user follows, in follow order."""
        return [edge.followed_id for edge in self.following_edges]

    @property
    def followers(self) -> list[int]:
        """Ids of the users following this user."""
        return [edge.follower_id for edge in self.follower_edges]
