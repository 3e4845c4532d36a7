"""Schemas for user profiles, profile updates and user search."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.schemas.common import StatusMessage


class UserRead(BaseModel):
    """Public view of a user. Never carries the password hash or refresh token."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    username: str
    email: str
    description: str = ""
    profile_picture: str
    followers: list[int] = Field(default_factory=list)
    followings: list[int] = Field(default_factory=list)
    role: str
    gender: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserResponse(StatusMessage):
    user: UserRead


class UserUpdate(BaseModel):
    """Partial profile update; only these fields can be changed through the API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, min_length=3, max_length=255)
    password: str | None = Field(default=None, min_length=1, max_length=128)
    description: str | None = None
    profile_picture: str | None = Field(default=None, max_length=2048)
    gender: str | None = Field(default=None, max_length=32)


class UserSearchItem(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    username: str
    profile_picture: str


class UserSearchResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str = "success"
    users: list[UserSearchItem]
    total_users: int
    limit: int
