"""Schemas for articles, timeline and comments."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.schemas.common import StatusMessage


class ArticleCreate(BaseModel):
    """Body for POST /article."""

    description: str = ""
    imgurl: str | None = Field(default=None, max_length=2048)


class ArticleUpdate(BaseModel):
    """Body for PUT /article/{id}. Empty values leave the field unchanged."""

    description: str | None = None
    imgurl: str | None = Field(default=None, max_length=2048)


class ArticleRead(BaseModel):
    """Article with owner id, liker ids and comment ids (insertion order)."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    owner: int = Field(validation_alias="owner_id")
    description: str = ""
    imgurl: str | None = None
    likes: list[int] = Field(default_factory=list)
    comments: list[int] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ArticleOwner(BaseModel):
    """Owner summary embedded in timeline entries."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    username: str
    profile_picture: str


class TimelineArticle(ArticleRead):
    owner: ArticleOwner  # type: ignore[assignment]


class TimelineResponse(BaseModel):
    """Concatenated per-source pages; limit is the number of entries returned."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = "success"
    articles: list[TimelineArticle] = Field(default_factory=list, alias="Articles")
    limit: int


class CommentCreate(BaseModel):
    """Body for POST /comment. Length is checked by the comment service."""

    model_config = ConfigDict(populate_by_name=True)

    article_id: int = Field(..., alias="articleId")
    description: str = ""


class CommentRead(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    article_id: int
    author: int = Field(validation_alias="author_id")
    description: str = Field(validation_alias="body")
    created_at: datetime | None = None


class CommentListResponse(StatusMessage):
    comments: list[CommentRead] = Field(default_factory=list)
