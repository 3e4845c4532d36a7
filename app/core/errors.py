"""Service-level error taxonomy. Routes map these onto HTTP status codes."""


class ServiceError(Exception):
    """Base class for failures raised by the service layer."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class ValidationError(ServiceError):
    """Missing, malformed or duplicate required field."""


class AuthError(ServiceError):
    """Missing, invalid or expired token, or bad credentials."""


class AuthorizationError(ServiceError):
    """The authenticated actor lacks permission on the resource."""


class ConflictError(ServiceError):
    """The requested state already holds (e.g. already following)."""


class NotFollowingError(ConflictError):
    """Unfollow requested for a user the actor does not follow."""


class NotFoundError(ServiceError):
    """The referenced resource does not exist."""


class StoreError(ServiceError):
    """The underlying database operation failed."""
