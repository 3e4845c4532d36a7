"""Pydantic request/response schemas."""

from app.schemas.article import (
    ArticleCreate,
    ArticleOwner,
    ArticleRead,
    ArticleUpdate,
    CommentCreate,
    CommentListResponse,
    CommentRead,
    TimelineArticle,
    TimelineResponse,
)
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    RefreshFailure,
    RefreshRequest,
    SignupRequest,
    SignupResponse,
    TokenPairResponse,
)
from app.schemas.common import HealthResponse, StatusMessage
from app.schemas.user import (
    UserRead,
    UserResponse,
    UserSearchItem,
    UserSearchResponse,
    UserUpdate,
)

__all__ = [
    "ArticleCreate",
    "ArticleOwner",
    "ArticleRead",
    "ArticleUpdate",
    "CommentCreate",
    "CommentListResponse",
    "CommentRead",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "LogoutRequest",
    "RefreshFailure",
    "RefreshRequest",
    "SignupRequest",
    "SignupResponse",
    "StatusMessage",
    "TimelineArticle",
    "TimelineResponse",
    "TokenPairResponse",
    "UserRead",
    "UserResponse",
    "UserSearchItem",
    "UserSearchResponse",
    "UserUpdate",
]
