"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.article import Article, Comment, article_likes
from app.models.user import Follow, User

__all__ = ["Article", "Base", "Comment", "Follow", "User", "article_likes"]
