"""Comment routes: add a comment and list an article's comments."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.database import get_db
from app.schemas.article import CommentCreate, CommentListResponse, CommentRead
from app.schemas.auth import CurrentUser
from app.schemas.common import StatusMessage
from app.services import comments as comment_service

router = APIRouter()


@router.post("", response_model=StatusMessage)
def add_comment(
    body: CommentCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> StatusMessage:
    comment_service.add_comment(db, body.article_id, current_user, body.description)
    return StatusMessage(message="Comment has been created")


@router.get("/{article_id}", response_model=CommentListResponse)
def get_comments(
    article_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CommentListResponse:
    comments = comment_service.list_comments(db, article_id)
    return CommentListResponse(comments=[CommentRead.model_validate(c) for c in comments])
