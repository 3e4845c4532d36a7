"""ORM models for articles, their likes and comments."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, Text, func
from sqlalchemy.orm import relationship

from app.models.base import Base
from app.models.user import utcnow

# Max length of a comment body, in characters.
COMMENT_MAX_LENGTH = 500

article_likes = Table(
    "article_likes",
    Base.metadata,
    Column("article_id", Integer, ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Article(Base):
    """Short text/image post owned by one user."""

    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    description = Column(Text, nullable=False, default="")
    imgurl = Column(String(2048), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )

    owner = relationship("User", back_populates="articles")
    liked_by = relationship(
        "User",
        secondary=article_likes,
        back_populates="liked_articles",
        order_by="User.id",
    )
    comment_rows = relationship(
        "Comment",
        back_populates="article",
        order_by="Comment.id",
        cascade="all, delete-orphan",
    )

    @property
    def likes(self) -> list[int]:
        return [user.id for user in self.liked_by]

    @property
    def comments(self) -> list[int]:
        """Comment ids in insertion order."""
        return [comment.id for comment in self.comment_rows]


class Comment(Base):
    """Comment attached to an article."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    article_id = Column(
        Integer, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    author_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    body = Column(String(COMMENT_MAX_LENGTH), nullable=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    article = relationship("Article", back_populates="comment_rows")
    author = relationship("User", back_populates="comments")
