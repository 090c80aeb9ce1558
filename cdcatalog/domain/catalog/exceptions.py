"""Catalog domain exceptions."""

from cdcatalog.domain.common.exceptions import DomainError


class DuplicateCatalogCodeError(DomainError):
    """Raised when a CD with the same catalog code already exists."""

    def __init__(self, catalog_code: str) -> None:
        super().__init__(
            f"Catalog code {catalog_code} already exists", {"catalog_code": catalog_code}
        )
        self.catalog_code = catalog_code


class InvalidVersionTokenError(DomainError):
    """Raised when a version token is not a quoted integer such as "3"."""

    def __init__(self, token: str | None) -> None:
        super().__init__(f"Invalid version token: {token!r}", {"token": token})
        self.token = token


class VersionOutdatedError(DomainError):
    """Raised when an update is based on an older version than the stored one."""

    def __init__(self, version: int) -> None:
        super().__init__(f"Version {version} is outdated", {"version": version})
        self.version = version
