"""Article routes: CRUD, like toggle, per-user listing and the timeline."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.api.responses import failure
from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import AuthorizationError
from app.schemas.article import (
    ArticleCreate,
    ArticleRead,
    ArticleUpdate,
    TimelineArticle,
    TimelineResponse,
)
from app.schemas.auth import CurrentUser
from app.schemas.common import StatusMessage
from app.services import articles as article_service

router = APIRouter()


def _int_or(value: str | None, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


@router.post("", response_model=StatusMessage)
def create_article(
    body: ArticleCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> StatusMessage:
    article_service.create_article(db, current_user, body.description, body.imgurl)
    return StatusMessage(message="article has been created")


@router.get("/timeline", response_model=TimelineResponse)
def get_timeline(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    page: str | None = None,
    limit: str | None = None,
) -> TimelineResponse:
    """
    Own articles plus recent articles of followed users.

    Each source is paged separately with the same page/limit (own articles
    first, then followed users in follow order); the combined list is not
    re-sorted. `limit` in the response is the number of articles returned.
    Missing or non-numeric page/limit fall back to 1.
    """
    articles = article_service.timeline(
        db, current_user, _int_or(page, 1), _int_or(limit, 1), get_settings()
    )
    return TimelineResponse(
        articles=[TimelineArticle.model_validate(a) for a in articles],
        limit=len(articles),
    )


@router.get("/user/{username}", response_model=list[ArticleRead])
def get_articles_for_user(
    username: str,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[ArticleRead]:
    articles = article_service.list_articles_for_user(db, username)
    return [ArticleRead.model_validate(a) for a in articles]


@router.put("/like/{article_id}", response_model=StatusMessage)
def like_article(
    article_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> StatusMessage:
    """Toggle the caller's like on the article."""
    outcome = article_service.toggle_like(db, article_id, current_user)
    return StatusMessage(message=f"the article has been {outcome}")


@router.get("/{article_id}", response_model=ArticleRead)
def get_article(
    article_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ArticleRead:
    return ArticleRead.model_validate(article_service.get_article(db, article_id))


@router.put("/{article_id}", response_model=StatusMessage)
def update_article(
    article_id: int,
    body: ArticleUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> StatusMessage:
    """Owner-only update of description and imgurl. Other users: 401."""
    try:
        article_service.update_article(
            db, article_id, current_user, body.model_dump(exclude_unset=True)
        )
    except AuthorizationError as e:
        raise failure(status.HTTP_401_UNAUTHORIZED, e.message) from e
    return StatusMessage(message="article has been updated")


@router.delete("/{article_id}", response_model=StatusMessage)
def delete_article(
    article_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> StatusMessage:
    """
    Delete an article (owner or admin; others get 401). All comments written
    by the caller are deleted along with it.
    """
    try:
        article_service.delete_article(db, article_id, current_user)
    except AuthorizationError as e:
        raise failure(status.HTTP_401_UNAUTHORIZED, e.message) from e
    return StatusMessage(message="article has been deleted")
