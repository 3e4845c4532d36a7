"""Shared response envelope."""

from typing import Literal

from pydantic import BaseModel, Field

STATUS_SUCCESS = "success"
STATUS_FAILURE = "failure"
# Follow conflicts and missing users answer with "fail" rather than "failure".
STATUS_FAIL = "fail"


class StatusMessage(BaseModel):
    """{status, message} envelope used by every endpoint."""

    status: Literal["success", "failure", "fail"] = Field(
        default=STATUS_SUCCESS, description="Outcome label"
    )
    message: str = Field(default="", description="Human-readable outcome")


class HealthResponse(BaseModel):
    """GET /api/health body. database is omitted when no check was run."""

    status: Literal["ok"] = "ok"
    environment: Literal["dev", "prod"]
    database: Literal["connected", "disconnected"] | None = None
