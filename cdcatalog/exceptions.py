"""Custom exception hierarchy for the CD catalog application."""

from fastapi import HTTPException
from starlette import status


class CatalogError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(CatalogError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class CDNotFoundError(NotFoundError):
    """CD not found error."""

    def __init__(self, cd_id: int | None = None, *, message: str | None = None) -> None:
        """Initialize with CD ID or custom message."""
        self.cd_id = cd_id
        if message:
            super().__init__(message)
        elif cd_id is not None:
            super().__init__(f"no CD with id {cd_id}")
        else:
            super().__init__("CD not found")


class InvalidSearchCriteriaError(NotFoundError):
    """A search used a key that is not a searchable CD attribute."""

    def __init__(self, invalid_keys: list[str]) -> None:
        """Initialize with the rejected keys."""
        self.invalid_keys = invalid_keys
        super().__init__("invalid search criteria")


class NotificationError(CatalogError):
    """The notification channel could not be reached."""

    def __init__(self, reason: str) -> None:
        """Initialize with the reason the delivery failed."""
        self.reason = reason
        super().__init__(f"Notification failed: {reason}", status_code=503)


CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)

ForbiddenException = HTTPException(
    status_code=status.HTTP_403_FORBIDDEN,
    detail="Missing a role that allows this operation",
)
