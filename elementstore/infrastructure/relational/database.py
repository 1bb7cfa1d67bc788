"""Async database engine and session factory construction."""

import structlog
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool, StaticPool

logger = structlog.get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all database models."""


def is_memory_url(url: str | URL) -> bool:
    """True for SQLite URLs naming a private in-memory database."""
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


def create_engine(url: str, *, echo: bool = False, pooled: bool = True) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    Args:
        url: SQLAlchemy URL with an async driver
            (``postgresql+asyncpg://``, ``sqlite+aiosqlite://``)
        echo: Log emitted SQL
        pooled: Keep a connection pool. Short-lived engines (migrations,
            one-off commands) pass False.
    """
    parsed = make_url(url)

    # Connection pool configuration
    if parsed.get_backend_name() == "sqlite":
        if is_memory_url(parsed):
            # A single shared connection, otherwise every checkout sees an empty database
            engine = create_async_engine(url, echo=echo, poolclass=StaticPool)
        else:
            engine = create_async_engine(url, echo=echo, poolclass=NullPool)
    elif not pooled:
        engine = create_async_engine(url, echo=echo, poolclass=NullPool)
    else:
        engine = create_async_engine(
            url,
            echo=echo,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,  # Verify connections before use
            pool_recycle=3600,  # Recycle connections after 1 hour
        )

    logger.debug("engine_created", url=parsed.render_as_string(hide_password=True))
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build the session factory used by repositories."""
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
