"""FastAPI application entry point."""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from cdcatalog.config import configure_logging, get_settings
from cdcatalog.database import dispose_engine, initialize_database
from cdcatalog.domain.catalog.exceptions import (
    DuplicateCatalogCodeError,
    InvalidVersionTokenError,
    VersionOutdatedError,
)
from cdcatalog.domain.common.exceptions import DomainError
from cdcatalog.exceptions import CatalogError
from cdcatalog.infrastructure.catalog.graphql_api import graphql_router
from cdcatalog.infrastructure.catalog.routers import cd_read, cd_write
from cdcatalog.infrastructure.identity.routers import auth

settings = get_settings()
configure_logging(settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

# Status codes for domain errors; anything else is a plain 400
DOMAIN_ERROR_STATUS: dict[type[DomainError], int] = {
    DuplicateCatalogCodeError: 422,
    InvalidVersionTokenError: status.HTTP_412_PRECONDITION_FAILED,
    VersionOutdatedError: status.HTTP_412_PRECONDITION_FAILED,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    initialize_database(settings)
    logger.info("application_started", environment=settings.ENVIRONMENT)
    yield
    dispose_engine()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.state.limiter = auth.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["ETag", "Location"],
)


@app.middleware("http")
async def bind_request_context(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Tag every log event of a request with its method and path."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(method=request.method, path=request.url.path)
    return await call_next(request)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Translate application errors to their status code."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Translate domain rule violations to HTTP errors."""
    status_code = next(
        (code for error_type, code in DOMAIN_ERROR_STATUS.items() if isinstance(exc, error_type)),
        status.HTTP_400_BAD_REQUEST,
    )
    logger.info("domain_error", error=type(exc).__name__, detail=exc.message, **exc.details)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


app.include_router(auth.router, prefix=settings.API_V1_PREFIX)
app.include_router(cd_read.router, prefix=settings.API_V1_PREFIX)
app.include_router(cd_write.router, prefix=settings.API_V1_PREFIX)
app.include_router(graphql_router, prefix=settings.GRAPHQL_PATH)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get(f"{settings.API_V1_PREFIX}/")
async def api_root() -> dict[str, str]:
    """API v1 root endpoint."""
    return {
        "message": f"{settings.PROJECT_NAME} v1",
        "version": settings.VERSION,
        "docs": f"{settings.API_V1_PREFIX}/docs",
        "graphql": settings.GRAPHQL_PATH,
    }
