"""Request/response schemas for auth endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import StatusMessage
from app.schemas.user import UserRead


class CurrentUser(BaseModel):
    """Authenticated identity (id, username, role) carried by access tokens."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class SignupRequest(BaseModel):
    """Fields required to create an account."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    email: str = Field(..., min_length=3, max_length=255, description="Email address")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class SignupData(BaseModel):
    user: str = Field(..., description="Username of the created account")


class SignupResponse(StatusMessage):
    """Response after creating an account; never contains the password hash."""

    data: SignupData


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(default="", max_length=255, description="Username")
    password: str = Field(default="", max_length=128, description="Password")


class LoginResponse(StatusMessage):
    """User view plus the freshly issued access/refresh pair."""

    model_config = ConfigDict(populate_by_name=True)

    data: UserRead
    access_token: str = Field(..., alias="accessToken")
    refresh_token: str = Field(..., alias="refreshToken")


class LogoutRequest(BaseModel):
    """Missing token is reported by the endpoint itself (400 logout error)."""

    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str | None = Field(default=None, alias="refreshToken")


class RefreshRequest(BaseModel):
    """Refresh token to exchange; missing token is reported as 401 by the endpoint."""

    token: str | None = None


class TokenPairResponse(BaseModel):
    """Rotated access/refresh pair."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken")
    refresh_token: str = Field(..., alias="refreshToken")


class RefreshFailure(BaseModel):
    status: Literal["failure"] = "failure"
    message: str
