"""Pytest configuration and fixtures."""

from collections.abc import Generator
from datetime import date
from decimal import Decimal
from typing import Any

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cdcatalog import models
from cdcatalog.core import container
from cdcatalog.database import Base, get_db
from cdcatalog.infrastructure.identity.auth.token_service import create_access_token
from cdcatalog.infrastructure.identity.dependencies import WRITE_ROLES
from cdcatalog.infrastructure.identity.routers.auth import limiter
from cdcatalog.main import app
from tests.fakes import FakeNotificationService

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

# One shared connection so the app's worker thread sees the test tables
test_engine = create_engine(
    TEST_DATABASE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool
)

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def session_factory(db_session: Session) -> sessionmaker[Session]:
    """Open further sessions on the test database, e.g. for a concurrent writer."""
    return TestSessionLocal


@pytest.fixture
def notifications() -> Generator[FakeNotificationService, None, None]:
    """Replace the mail service with a recorder."""
    fake = FakeNotificationService()
    container.mail_service.override(providers.Object(fake))
    yield fake
    container.mail_service.reset_override()


@pytest.fixture
def client(
    db_session: Session, notifications: FakeNotificationService
) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    limiter.reset()


def bearer(username: str, roles: tuple[str, ...] | list[str]) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(username, roles)}"}


@pytest.fixture
def writer_headers() -> dict[str, str]:
    """Headers of a caller holding every write role."""
    return bearer("admin", WRITE_ROLES)


@pytest.fixture
def department_headers() -> dict[str, str]:
    """Headers of a caller holding only the department role."""
    return bearer("clerk", ["department"])


@pytest.fixture
def reader_headers() -> dict[str, str]:
    """Headers of an authenticated caller without write roles."""
    return bearer("guest", [])


@pytest.fixture
def test_cd(db_session: Session) -> models.CD:
    """DAMN by Kendrick Lamar, with two tracks."""
    cd = models.CD(
        catalog_code="DEEGM7234823",
        title="DAMN",
        rating=5,
        price=Decimal("12.99"),
        available=True,
        genre="RAP",
        duration=Decimal("54.54"),
        release_date=date(2017, 4, 14),
        performer="Kendrick Lamar",
        tracks=[
            models.Track(title="BLOOD.", duration=Decimal("1.58")),
            models.Track(title="DNA.", duration=Decimal("3.05")),
        ],
    )
    db_session.add(cd)
    db_session.commit()
    db_session.refresh(cd)
    return cd


@pytest.fixture
def test_cds(db_session: Session, test_cd: models.CD) -> list[models.CD]:
    """Three CDs: two rap albums and one pop album."""
    others = [
        models.CD(
            catalog_code="USUM71502498",
            title="To Pimp a Butterfly",
            rating=5,
            price=Decimal("14.99"),
            available=False,
            genre="RAP",
            performer="Kendrick Lamar",
            tracks=[models.Track(title="Alright", duration=Decimal("3.39"))],
        ),
        models.CD(
            catalog_code="USSM19902990",
            title="Thriller",
            rating=4,
            price=Decimal("9.99"),
            available=True,
            genre="POP",
            performer="Michael Jackson",
            tracks=[models.Track(title="Billie Jean", duration=Decimal("4.54"))],
        ),
    ]
    db_session.add_all(others)
    db_session.commit()
    for cd in others:
        db_session.refresh(cd)
    return [test_cd, *others]
