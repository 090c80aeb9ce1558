"""Token creation and verification service."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from jwt import InvalidTokenError
from pydantic import BaseModel

from cdcatalog.config import get_settings

ALGORITHM = "HS256"


@dataclass(frozen=True)
class Principal:
    """The authenticated caller as described by its access token."""

    username: str
    roles: frozenset[str]

    def has_any_role(self, roles: Iterable[str]) -> bool:
        """Check whether the caller holds at least one of the given roles."""
        return not self.roles.isdisjoint(roles)


class TokenResponse(BaseModel):
    """DTO for an issued access token."""

    access_token: str
    token_type: str
    expires_in: int
    roles: list[str]


def create_access_token(username: str, roles: Iterable[str]) -> str:
    """Create an access token carrying the caller's roles."""
    settings = get_settings()
    expire = datetime.now(UTC) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {"sub": username, "roles": sorted(roles), "exp": expire, "type": "access"}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_access_token(token: str) -> Principal | None:
    """Verify an access token and return the principal if valid."""
    try:
        payload = jwt.decode(token, get_settings().SECRET_KEY, algorithms=[ALGORITHM])
    except InvalidTokenError:
        return None

    if payload.get("type") != "access":
        return None
    username = payload.get("sub")
    roles = payload.get("roles", [])
    if not username or not isinstance(roles, list):
        return None
    return Principal(username=username, roles=frozenset(str(role) for role in roles))


def create_token_response(username: str, roles: Iterable[str]) -> TokenResponse:
    """Create the login response for a user."""
    role_list = sorted(roles)
    return TokenResponse(
        access_token=create_access_token(username, role_list),
        token_type="bearer",  # noqa: S106
        expires_in=get_settings().ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        roles=role_list,
    )
