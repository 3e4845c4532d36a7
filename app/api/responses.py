"""Helpers for the {status, message} failure envelope."""

from fastapi import HTTPException

from app.schemas.common import STATUS_FAILURE


def failure(
    status_code: int,
    message: str,
    status: str = STATUS_FAILURE,
    headers: dict[str, str] | None = None,
) -> HTTPException:
    """Build an HTTPException whose body is rendered as {status, message}."""
    return HTTPException(
        status_code=status_code,
        detail={"status": status, "message": message},
        headers=headers,
    )
