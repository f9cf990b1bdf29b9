"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator
from datetime import date
from typing import Any

# Disable rate limiting and keep the app's own engine off PostgreSQL in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["APP_ENV"] = "test"
os.environ["MAILBOXLAYER_API_KEY"] = ""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from domain.entities.email_verification import EmailVerificationVerdict
from infrastructure.database.models import Base

# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed "today" so age/date-of-birth agreement is deterministic
TODAY = date(2024, 1, 2)


def deliverable_verdict(email: str, **overrides: Any) -> EmailVerificationVerdict:
    """A verdict that passes every deliverability check."""
    values: dict[str, Any] = {
        "format_valid": True,
        "mx_found": True,
        "smtp_check": True,
        "score": 0.8,
    }
    values.update(overrides)
    return EmailVerificationVerdict(email=email, **values)


class FakeEmailVerifier:
    """In-memory email verifier: deliverable unless told otherwise."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.verdicts: dict[str, EmailVerificationVerdict] = {}
        self.error: Exception | None = None

    async def verify(self, email: str) -> EmailVerificationVerdict:
        self.calls.append(email)
        if self.error:
            raise self.error
        return self.verdicts.get(email, deliverable_verdict(email))


def profile_payload(**overrides: Any) -> dict[str, Any]:
    """A valid create/update body relative to TODAY."""
    payload: dict[str, Any] = {
        "name": "Ann Lee",
        "age": 30,
        "email": "ann@example.com",
        "phone_number": "1234567890",
        "date_of_birth": "1994-01-01",
        "gender": "Female",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def email_verifier() -> FakeEmailVerifier:
    return FakeEmailVerifier()


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(
    engine: AsyncEngine,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create session factory."""
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    yield factory


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client against the default app."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def api_client(
    session_factory: async_sessionmaker[AsyncSession],
    email_verifier: FakeEmailVerifier,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the test database and fake verifier.

    This client:
    - Uses an in-memory SQLite database
    - Replaces the MailboxLayer client with FakeEmailVerifier
    - Pins the service clock to TODAY
    """
    from api.dependencies import get_profile_service
    from domain.services.profile_service import ProfileService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    def override_get_profile_service() -> ProfileService:
        return ProfileService(
            test_uow_factory,
            email_verifier=email_verifier,
            clock=lambda: TODAY,
        )

    app.dependency_overrides[get_profile_service] = override_get_profile_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
