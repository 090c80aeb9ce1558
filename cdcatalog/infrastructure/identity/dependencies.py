"""FastAPI dependencies for authentication and role checks."""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from cdcatalog.config import get_settings
from cdcatalog.exceptions import CredentialsException, ForbiddenException
from cdcatalog.infrastructure.identity.auth.token_service import Principal, verify_access_token

# Roles allowed to create and update CDs
WRITE_ROLES = ("admin", "department")

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{get_settings().API_V1_PREFIX}/auth/login", auto_error=False
)


async def get_optional_principal(
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> Principal | None:
    """Resolve the bearer token if one was sent; invalid tokens count as anonymous."""
    if token is None:
        return None
    return verify_access_token(token)


async def get_current_principal(
    principal: Annotated[Principal | None, Depends(get_optional_principal)],
) -> Principal:
    """
    Get the authenticated caller.

    Raises:
        CredentialsException: If no valid access token was sent
    """
    if principal is None:
        raise CredentialsException
    return principal


def require_roles(*roles: str) -> Callable[[Principal], Awaitable[Principal]]:
    """
    Create a dependency that only lets callers with one of ``roles`` through.

    Usage:
        @router.post("")
        def create(principal: Annotated[Principal, Depends(require_roles("admin"))]):
            ...
    """

    async def dependency(
        principal: Annotated[Principal, Depends(get_current_principal)],
    ) -> Principal:
        if not principal.has_any_role(roles):
            raise ForbiddenException
        return principal

    return dependency


WriterPrincipal = Annotated[Principal, Depends(require_roles(*WRITE_ROLES))]
