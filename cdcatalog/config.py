"""Settings and logging setup for the CD catalog service."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import structlog
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).parent.parent.resolve()


class Settings(BaseSettings):
    """Service settings, read from the environment and an optional .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = f"sqlite:///{PROJECT_ROOT / 'cdcatalog.db'}"

    SECRET_KEY: str = "change-me"  # noqa: S105

    # API (constants, not from env)
    API_V1_PREFIX: str = "/api/v1"
    GRAPHQL_PATH: str = "/graphql"
    PROJECT_NAME: str = "CD catalog API"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Admin account, gets every write role
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin"  # noqa: S105

    # Auth
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Notification mail sent for every new CD
    MAIL_ENABLED: bool = False
    MAIL_HOST: str = "localhost"
    MAIL_PORT: int = 25
    MAIL_FROM: str = "cdcatalog@localhost"
    MAIL_TO: str = "catalog-team@localhost"
    MAIL_TIMEOUT_SECONDS: float = 5.0

    @field_validator("ADMIN_PASSWORD", mode="after")
    @classmethod
    def strip_admin_password(cls, value: str) -> str:
        """Strip whitespace from admin password."""
        return value.strip()

    @model_validator(mode="after")
    def validate_secret_key(self) -> "Settings":
        """Refuse to run production with the default signing key."""
        if self.ENVIRONMENT == "production" and self.SECRET_KEY == "change-me":  # noqa: S105
            msg = "SECRET_KEY must be set in production"
            raise ValueError(msg)
        return self


def configure_logging(environment: str = "development") -> None:
    """
    Send structlog events through stdlib logging.

    Production writes one JSON object per line, other environments write
    colored console lines. Only development logs at DEBUG, which includes the
    SQL of every CD search.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if environment == "development" else logging.INFO,
    )

    renderer: Callable[..., Any] = (
        structlog.processors.JSONRenderer()
        if environment == "production"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            # Request-scoped values bound by the HTTP middleware
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Settings are read once per process."""
    return Settings()
