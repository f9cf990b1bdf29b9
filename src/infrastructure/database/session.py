"""Database session management."""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import Settings, settings


def build_engine(config: Settings) -> AsyncEngine:
    """Create the process-wide async engine from settings."""
    url = config.async_database_url
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=config.debug)

    connect_args: dict[str, Any] = {"timeout": config.db_connect_timeout}
    if config.db_ssl:
        connect_args["ssl"] = "require"

    return create_async_engine(
        url,
        echo=config.debug,
        pool_pre_ping=True,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_timeout=config.db_pool_timeout,
        connect_args=connect_args,
    )


# Create async engine
engine = build_engine(settings)

# Create async session factory
async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
