"""Articles: create, update, delete, like toggle, lookups and timeline assembly."""

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

from sqlalchemy.orm import Session, selectinload

from app.core.database import commit
from app.core.errors import AuthorizationError, NotFoundError
from app.models import Article, Comment, User
from app.schemas.auth import CurrentUser
from app.services.social_graph import followed_ids

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

# Only these fields are copied from an update request; everything else is ignored.
UPDATABLE_ARTICLE_FIELDS = ("description", "imgurl")

NOT_AUTHORIZED_MESSAGE = "you are not authorized"

LIKED = "liked"
DISLIKED = "disliked"


def create_article(
    db: Session, actor: CurrentUser, description: str = "", imgurl: str | None = None
) -> Article:
    owner = db.get(User, actor.id)
    if owner is None:
        raise NotFoundError("user not found")
    article = Article(owner=owner, description=description or "", imgurl=imgurl)
    db.add(article)
    commit(db)
    db.refresh(article)
    logger.info("Article created: id=%s owner_id=%s", article.id, owner.id)
    return article


def get_article(db: Session, article_id: int) -> Article:
    article = db.get(Article, article_id)
    if article is None:
        raise NotFoundError("article not found")
    return article


def list_articles_for_user(db: Session, username: str) -> list[Article]:
    """All articles of the named user, oldest first."""
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        raise NotFoundError("user not found")
    return (
        db.query(Article)
        .filter(Article.owner_id == user.id)
        .order_by(Article.created_at, Article.id)
        .all()
    )


def update_article(
    db: Session, article_id: int, actor: CurrentUser, fields: dict[str, Any]
) -> Article:
    """
    Update description/imgurl of an article the actor owns.

    Empty values are skipped, so a blank field in the request keeps the stored
    value.
    """
    article = get_article(db, article_id)
    if article.owner_id != actor.id:
        raise AuthorizationError(NOT_AUTHORIZED_MESSAGE)

    changed = []
    for name in UPDATABLE_ARTICLE_FIELDS:
        value = fields.get(name)
        if value:
            setattr(article, name, value)
            changed.append(name)
    commit(db)
    db.refresh(article)
    logger.info("Article updated: id=%s fields=%s", article.id, changed)
    return article


def delete_article(db: Session, article_id: int, actor: CurrentUser) -> int:
    """
    Delete an article (owner or admin).

    Also deletes every comment written by the acting user, on any article.
    Returns the number of such comments removed.
    """
    article = get_article(db, article_id)
    if article.owner_id != actor.id and not actor.is_admin:
        raise AuthorizationError(NOT_AUTHORIZED_MESSAGE)

    # TODO: limit this to comments on the deleted article once clients stop relying on the wider purge.
    comments_deleted = (
        db.query(Comment)
        .filter(Comment.author_id == actor.id)
        .delete(synchronize_session="fetch")
    )
    db.delete(article)
    commit(db)
    logger.info(
        "Article deleted: id=%s actor_id=%s actor_comments_deleted=%s",
        article_id,
        actor.id,
        comments_deleted,
    )
    return comments_deleted


def toggle_like(db: Session, article_id: int, actor: CurrentUser) -> str:
    """Like the article if the actor has not, otherwise remove the like."""
    article = get_article(db, article_id)
    liker = db.get(User, actor.id)
    if liker is None:
        raise NotFoundError("user not found")

    if liker in article.liked_by:
        article.liked_by.remove(liker)
        outcome = DISLIKED
    else:
        article.liked_by.append(liker)
        outcome = LIKED
    commit(db)
    logger.info("Article %s: id=%s user_id=%s", outcome, article.id, liker.id)
    return outcome


def _page(query, page: int, limit: int) -> list[Article]:
    return (
        query.order_by(Article.created_at.desc(), Article.id.desc())
        .offset(page * limit)
        .limit(limit)
        .all()
    )


def timeline(
    db: Session,
    actor: CurrentUser,
    page: int,
    limit: int,
    settings: "Settings",
    now: datetime | None = None,
) -> list[Article]:
    """
    Actor's own page of articles followed by one page per followed user.

    `page` is 1-based; values below 1 fall back to the first page and a limit
    below 1 falls back to 1. Each source (the actor, then each followed user in
    follow order) is paged on its own, newest first, and followed users only
    contribute articles from the last TIMELINE_WINDOW_HOURS. The slices are
    concatenated as-is; the merged list is not re-sorted.
    """
    page_index = max(page - 1, 0)
    limit = limit if limit >= 1 else 1
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(hours=settings.TIMELINE_WINDOW_HOURS)

    base = db.query(Article).options(
        selectinload(Article.owner),
        selectinload(Article.liked_by),
        selectinload(Article.comment_rows),
    )
    articles = _page(base.filter(Article.owner_id == actor.id), page_index, limit)
    for followed_id in followed_ids(db, actor.id):
        recent = base.filter(
            Article.owner_id == followed_id,
            Article.created_at >= cutoff,
        )
        articles.extend(_page(recent, page_index, limit))
    return articles
