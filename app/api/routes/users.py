"""User routes: signup/login/logout/refresh, profiles, search and follow edges."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.api.responses import failure
from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import (
    AuthError,
    AuthorizationError,
    ConflictError,
    NotFollowingError,
    NotFoundError,
    ValidationError,
)
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    RefreshFailure,
    RefreshRequest,
    SignupData,
    SignupRequest,
    SignupResponse,
    TokenPairResponse,
)
from app.schemas.common import STATUS_FAIL, STATUS_SUCCESS, StatusMessage
from app.schemas.user import (
    UserRead,
    UserResponse,
    UserSearchItem,
    UserSearchResponse,
    UserUpdate,
)
from app.services import auth as auth_service
from app.services import social_graph
from app.services import users as user_service

router = APIRouter()


@router.post("/signup", response_model=SignupResponse)
def signup(
    body: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
) -> SignupResponse:
    """
    Create an account. The password is stored as a bcrypt hash.
    A taken username or email is reported as a 500 failure.
    """
    user = auth_service.signup(db, body.username, body.email, body.password)
    return SignupResponse(
        status=STATUS_SUCCESS,
        message="user saved successfully",
        data=SignupData(user=user.username),
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns the user view plus an
    access token and a refresh token. Send the access token as
    Authorization: Bearer <accessToken>. Logging in revokes any previous
    refresh token of the same user.
    """
    try:
        user, pair = auth_service.login(db, body.username, body.password)
    except AuthError as e:
        raise failure(status.HTTP_401_UNAUTHORIZED, e.message) from e
    return LoginResponse(
        status=STATUS_SUCCESS,
        message="logged in successfully",
        data=UserRead.model_validate(user),
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
    )


@router.post("/logout", response_model=StatusMessage)
def logout(
    body: LogoutRequest,
    db: Annotated[Session, Depends(get_db)],
) -> StatusMessage:
    """Forget the given refresh token. Missing token: 400 logout error."""
    try:
        auth_service.logout(db, body.refresh_token)
    except ValidationError as e:
        raise failure(status.HTTP_400_BAD_REQUEST, e.message) from e
    return StatusMessage(status=STATUS_SUCCESS, message="You've been logged out")


@router.post("/refresh", response_model=TokenPairResponse)
def refresh(
    body: RefreshRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Rotate the refresh token. Missing token: 401. A token that is not the
    user's current one (or has a bad signature) gets a 200 with a failure body.
    """
    try:
        pair = auth_service.refresh(db, body.token)
    except AuthError as e:
        if e.message == auth_service.INVALID_REFRESH_MESSAGE:
            return JSONResponse(
                status_code=status.HTTP_200_OK,
                content=RefreshFailure(message=e.message).model_dump(),
            )
        raise failure(status.HTTP_401_UNAUTHORIZED, e.message) from e
    return TokenPairResponse(access_token=pair.access_token, refresh_token=pair.refresh_token)


@router.get("/search", response_model=UserSearchResponse)
def search_users(
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    search: str = "",
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> UserSearchResponse:
    """Case-insensitive username search; totalUsers counts every match."""
    limit = limit or get_settings().USER_SEARCH_DEFAULT_LIMIT
    users, total = user_service.search_users(db, search, limit)
    return UserSearchResponse(
        users=[UserSearchItem.model_validate(u) for u in users],
        total_users=total,
        limit=limit,
    )


@router.get("/username/{username}", response_model=UserResponse)
def get_user_by_username(
    username: str,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserResponse:
    try:
        user = user_service.get_user_by_username(db, username)
    except NotFoundError as e:
        raise failure(status.HTTP_404_NOT_FOUND, e.message, status=STATUS_FAIL) from e
    return UserResponse(message="user info", user=UserRead.model_validate(user))


@router.put("/follow/{username}", response_model=StatusMessage)
def follow_user(
    username: str,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> StatusMessage:
    """Follow the named user. Already following: 403 with status 'fail'."""
    try:
        social_graph.follow(db, current_user, username)
    except NotFoundError as e:
        raise failure(status.HTTP_404_NOT_FOUND, e.message) from e
    except ValidationError as e:
        raise failure(status.HTTP_403_FORBIDDEN, e.message) from e
    except ConflictError as e:
        raise failure(status.HTTP_403_FORBIDDEN, e.message, status=STATUS_FAIL) from e
    return StatusMessage(message="user has been followed")


@router.put("/unfollow/{username}", response_model=StatusMessage)
def unfollow_user(
    username: str,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
):
    """
    Unfollow the named user. When the actor does not follow them the response
    is HTTP 400 with a success-shaped body, as existing clients expect.
    """
    try:
        social_graph.unfollow(db, current_user, username)
    except NotFollowingError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=StatusMessage(status=STATUS_SUCCESS, message=e.message).model_dump(),
        )
    except NotFoundError as e:
        raise failure(status.HTTP_404_NOT_FOUND, e.message) from e
    except ValidationError as e:
        raise failure(status.HTTP_403_FORBIDDEN, e.message) from e
    return StatusMessage(message="user has been unfollowed")


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserResponse:
    try:
        user = user_service.get_user(db, user_id)
    except NotFoundError as e:
        raise failure(status.HTTP_404_NOT_FOUND, e.message, status=STATUS_FAIL) from e
    return UserResponse(message="user info", user=UserRead.model_validate(user))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    body: UserUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserResponse:
    """Update own profile (admins may update any). Other users: 403."""
    try:
        user = user_service.update_user(
            db, user_id, current_user, body.model_dump(exclude_unset=True)
        )
    except AuthorizationError as e:
        raise failure(status.HTTP_403_FORBIDDEN, e.message) from e
    return UserResponse(
        message="Account has been updated successfully",
        user=UserRead.model_validate(user),
    )


@router.delete("/{user_id}", response_model=StatusMessage)
def delete_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> StatusMessage:
    """Delete own account (admins may delete any) with everything it owns."""
    try:
        user_service.delete_user(db, user_id, current_user)
    except AuthorizationError as e:
        raise failure(status.HTTP_403_FORBIDDEN, e.message) from e
    return StatusMessage(message="User has been deleted successfully")
