"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from mongomock_motor import AsyncMongoMockClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from elementstore.domain.common.auditing import AuditStamper
from elementstore.domain.common.identity import SequentialIdentityGenerator
from elementstore.infrastructure.document.context import ElementDocumentContext
from elementstore.infrastructure.document.element_repository import MongoElementRepository
from elementstore.infrastructure.relational import models  # noqa: F401
from elementstore.infrastructure.relational.database import (
    Base,
    create_engine,
    create_session_factory,
)
from elementstore.infrastructure.relational.element_repository import (
    SqlAlchemyElementRepository,
)

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def sql_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with all tables created."""
    engine = create_engine(TEST_DATABASE_URL)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(sql_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(sql_engine)


@pytest.fixture
def document_context() -> ElementDocumentContext:
    """Document context over an in-process mock database."""
    return ElementDocumentContext(AsyncMongoMockClient()["elementstore_test"])


@pytest.fixture
def audit_stamper() -> AuditStamper:
    return AuditStamper()


@pytest.fixture
def identity_generator() -> SequentialIdentityGenerator:
    return SequentialIdentityGenerator()


@pytest.fixture
def relational_repository(
    session_factory: async_sessionmaker[AsyncSession], audit_stamper: AuditStamper
) -> SqlAlchemyElementRepository:
    return SqlAlchemyElementRepository(session_factory, audit_stamper)


@pytest.fixture
def document_repository(
    document_context: ElementDocumentContext, audit_stamper: AuditStamper
) -> MongoElementRepository:
    return MongoElementRepository(document_context, audit_stamper)


@pytest.fixture(params=["relational", "document"])
def element_repository(
    request: pytest.FixtureRequest,
    relational_repository: SqlAlchemyElementRepository,
    document_repository: MongoElementRepository,
) -> SqlAlchemyElementRepository | MongoElementRepository:
    """Each test using this fixture runs once per backend."""
    if request.param == "relational":
        return relational_repository
    return document_repository
