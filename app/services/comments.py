"""Comments attached to articles."""

import logging

from sqlalchemy.orm import Session

from app.core.database import commit
from app.core.errors import NotFoundError, ValidationError
from app.models import Comment, User
from app.models.article import COMMENT_MAX_LENGTH
from app.schemas.auth import CurrentUser
from app.services.articles import get_article

logger = logging.getLogger(__name__)


def add_comment(db: Session, article_id: int, actor: CurrentUser, body: str) -> Comment:
    """Append a comment by the actor to the article's comment sequence."""
    body = body or ""
    if len(body) > COMMENT_MAX_LENGTH:
        raise ValidationError(
            f"comment must be at most {COMMENT_MAX_LENGTH} characters (got {len(body)})"
        )
    article = get_article(db, article_id)
    author = db.get(User, actor.id)
    if author is None:
        raise NotFoundError("user not found")

    comment = Comment(article=article, author=author, body=body)
    db.add(comment)
    commit(db)
    db.refresh(comment)
    logger.info(
        "Comment created: id=%s article_id=%s author_id=%s",
        comment.id,
        article.id,
        author.id,
    )
    return comment


def list_comments(db: Session, article_id: int) -> list[Comment]:
    """Comments of the article in insertion order."""
    article = get_article(db, article_id)
    return list(article.comment_rows)
