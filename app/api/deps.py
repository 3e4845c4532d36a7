"""Auth dependency: bearer access-token verification (get_current_user)."""

from typing import Annotated

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.responses import failure
from app.core.errors import AuthError
from app.core.security import decode_access_token
from app.schemas.auth import CurrentUser

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer access token and return its identity.

    Stateless: the identity comes from the signed token, not from the database.
    Raises 403 when the header is missing and 401 when the token is invalid or expired.
    """
    if credentials is None or not credentials.credentials:
        raise failure(status.HTTP_403_FORBIDDEN, "You are not authorized")
    try:
        return decode_access_token(credentials.credentials)
    except AuthError as e:
        raise failure(
            status.HTTP_401_UNAUTHORIZED,
            e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
