"""Value objects of the catalog domain."""

import re
from dataclasses import dataclass
from enum import StrEnum

from cdcatalog.domain.catalog.exceptions import InvalidVersionTokenError
from cdcatalog.domain.common.value_object import ValueObject

# ISRC layout: country, registrant, year, designation (hyphens optional)
CATALOG_CODE_PATTERN = r"^[A-Z]{2}-?[A-Z0-9]{3}-?\d{2}-?\d{5}$"

_VERSION_TOKEN_RE = re.compile(r'"(\d+)"')


class Genre(StrEnum):
    """The two genres a CD can belong to."""

    RAP = "RAP"
    POP = "POP"


@dataclass(frozen=True)
class VersionToken(ValueObject):
    """
    Optimistic-concurrency marker exchanged with clients.

    On the wire a token is the version number in double quotes, the same
    form used for ETag / If-Match headers: ``"3"``.
    """

    version: int

    def __str__(self) -> str:
        return f'"{self.version}"'

    @classmethod
    def parse(cls, raw: str | None) -> "VersionToken":
        """
        Parse a quoted integer token.

        Raises:
            InvalidVersionTokenError: If the token is missing or malformed
        """
        match = _VERSION_TOKEN_RE.fullmatch(raw) if raw is not None else None
        if match is None:
            raise InvalidVersionTokenError(raw)
        return cls(int(match.group(1)))

    def is_older_than(self, stored_version: int) -> bool:
        """
        Whether the client saw an older version than the stored one.

        A token ahead of the stored version is not considered outdated.
        """
        return self.version < stored_version
