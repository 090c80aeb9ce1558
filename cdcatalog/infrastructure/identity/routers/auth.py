import logging
import secrets
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.security import OAuth2PasswordRequestForm
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette import status

from cdcatalog.config import get_settings
from cdcatalog.infrastructure.identity.auth.token_service import (
    TokenResponse,
    create_token_response,
)
from cdcatalog.infrastructure.identity.dependencies import WRITE_ROLES

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])
limiter = Limiter(key_func=get_remote_address)


def _is_admin(username: str, password: str) -> bool:
    settings = get_settings()
    return secrets.compare_digest(username, settings.ADMIN_USERNAME) and secrets.compare_digest(
        password, settings.ADMIN_PASSWORD
    )


@router.post("/login")
@limiter.limit("5/minute")  # type: ignore[misc]
async def login(
    request: Request,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
) -> TokenResponse:
    """
    Exchange username and password for a bearer token.

    The configured admin account receives every role that may write CDs.
    """
    if not _is_admin(form_data.username, form_data.password):
        logger.info("Rejected login for %s", form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return create_token_response(form_data.username, WRITE_ROLES)
