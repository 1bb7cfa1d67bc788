"""
Relational repository for the Element aggregate.

Returns domain entities instead of ORM models.
Uses ElementMapper internally for conversions.
"""

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

import structlog
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from elementstore.domain.common.auditing import AuditStamper
from elementstore.domain.common.exceptions import DuplicateEntityError, EntityNotFoundError
from elementstore.domain.common.value_objects import ElementId
from elementstore.domain.elements.entities.element import Element
from elementstore.infrastructure.relational.errors import (
    connecting,
    is_disconnect,
    store_unavailable,
)
from elementstore.infrastructure.relational.mappers.element_mapper import ElementMapper
from elementstore.infrastructure.relational.models import Element as ElementORM

logger = structlog.get_logger(__name__)


class SqlAlchemyElementQuery:
    """Query handle over live elements with sub-elements eagerly loaded."""

    def __init__(self, repository: "SqlAlchemyElementRepository", criteria: tuple = ()) -> None:
        self._repository = repository
        self._criteria = criteria

    def where_id(self, element_id: ElementId) -> "SqlAlchemyElementQuery":
        return SqlAlchemyElementQuery(
            self._repository, (*self._criteria, ElementORM.id == element_id.value)
        )

    def where_name(self, name: str) -> "SqlAlchemyElementQuery":
        return SqlAlchemyElementQuery(self._repository, (*self._criteria, ElementORM.name == name))

    def _statement(self) -> Select[tuple[ElementORM]]:
        return (
            self._repository.live_elements(include_details=True)
            .where(*self._criteria)
            .order_by(ElementORM.created_at, ElementORM.id)
        )

    async def first(self) -> Element | None:
        async with self._repository.session() as session:
            orm_model = (await session.execute(self._statement().limit(1))).scalars().first()
            if orm_model is None:
                return None
            return self._repository.mapper.to_domain(orm_model)

    async def to_list(self) -> list[Element]:
        async with self._repository.session() as session:
            orm_models = (await session.execute(self._statement())).scalars().all()
            return [self._repository.mapper.to_domain(orm) for orm in orm_models]


class SqlAlchemyElementRepository:
    """Repository for Element persistence in a relational store."""

    supports_transactions = True

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        audit_stamper: AuditStamper | None = None,
    ) -> None:
        """
        Initialize repository.

        Args:
            session_factory: Factory for async sessions bound to the target database
            audit_stamper: Stamps audit metadata on writes
        """
        self.session_factory = session_factory
        self.audit_stamper = audit_stamper or AuditStamper()
        self.mapper = ElementMapper()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session for a single repository operation.

        Commits on success and rolls back on error. Failing to connect, or
        losing the connection, is re-raised as StoreUnavailableError;
        everything else propagates unchanged.
        """
        async with self.session_factory() as session:
            with connecting():
                await session.connection()
            try:
                yield session
                await session.commit()
            except Exception as e:
                await session.rollback()
                if is_disconnect(e):
                    raise store_unavailable(e) from e
                raise

    def live_elements(self, include_details: bool) -> Select[tuple[ElementORM]]:
        """Select non-deleted elements, optionally loading children."""
        stmt = select(ElementORM).where(ElementORM.is_deleted.is_(False))
        if include_details:
            stmt = stmt.options(selectinload(ElementORM.sub_elements))
        return stmt

    async def _find_row(
        self, session: AsyncSession, element_id: ElementId, include_details: bool
    ) -> ElementORM | None:
        stmt = self.live_elements(include_details).where(ElementORM.id == element_id.value)
        return (await session.execute(stmt)).scalar_one_or_none()

    async def get_count(self) -> int:
        """Count live elements."""
        stmt = select(func.count()).select_from(ElementORM).where(ElementORM.is_deleted.is_(False))
        async with self.session() as session:
            return (await session.execute(stmt)).scalar_one()

    async def insert(self, element: Element) -> Element:
        """
        Persist a new element and its sub-elements in one transaction.

        Raises:
            DuplicateEntityError: If the id is already stored
        """
        staged = element.with_audit(self.audit_stamper.created(element.audit))
        async with self.session() as session:
            stmt = select(ElementORM.id).where(ElementORM.id == element.id.value)
            if (await session.execute(stmt)).first() is not None:
                raise DuplicateEntityError("Element", element.id)

            session.add(self.mapper.to_orm(staged))

        element.audit = staged.audit
        logger.debug("element_inserted", element_id=str(element.id))
        return element

    async def insert_many(self, elements: Sequence[Element]) -> None:
        """
        Persist several new elements in a single transaction.

        Raises:
            DuplicateEntityError: If any id is already stored or repeated in the batch
        """
        if not elements:
            return

        seen: set[ElementId] = set()
        for element in elements:
            if element.id in seen:
                raise DuplicateEntityError("Element", element.id)
            seen.add(element.id)

        staged = [e.with_audit(self.audit_stamper.created(e.audit)) for e in elements]
        async with self.session() as session:
            stmt = select(ElementORM.id).where(ElementORM.id.in_([e.id.value for e in elements]))
            existing = (await session.execute(stmt)).scalars().first()
            if existing is not None:
                raise DuplicateEntityError("Element", ElementId(existing))

            session.add_all([self.mapper.to_orm(element) for element in staged])

        for element, stored in zip(elements, staged, strict=True):
            element.audit = stored.audit
        logger.debug("elements_inserted", count=len(elements))

    def with_details(self) -> SqlAlchemyElementQuery:
        """Query handle that eagerly loads sub-elements."""
        return SqlAlchemyElementQuery(self)

    async def update(self, element: Element) -> Element:
        """
        Overwrite a stored element, replacing its sub-elements.

        An element loaded without details only has its own columns
        written; the stored sub-elements are left untouched.

        Raises:
            EntityNotFoundError: If no live element has this id
        """
        staged = element.with_audit(self.audit_stamper.modified(element.audit))
        async with self.session() as session:
            orm_model = await self._find_row(
                session, element.id, include_details=element.details_loaded
            )
            if orm_model is None:
                raise EntityNotFoundError("Element", element.id)

            self.mapper.to_orm(staged, orm_model)

        element.audit = staged.audit
        logger.debug("element_updated", element_id=str(element.id))
        return element

    async def find(self, element_id: ElementId, include_details: bool = True) -> Element | None:
        """Load a live element by id, or None."""
        async with self.session() as session:
            orm_model = await self._find_row(session, element_id, include_details)
            if orm_model is None:
                return None
            return self.mapper.to_domain(orm_model, include_details=include_details)

    async def get(self, element_id: ElementId, include_details: bool = True) -> Element:
        """
        Load a live element by id.

        Raises:
            EntityNotFoundError: If no live element has this id
        """
        element = await self.find(element_id, include_details)
        if element is None:
            raise EntityNotFoundError("Element", element_id)
        return element

    async def get_list(self, include_details: bool = False) -> list[Element]:
        """Load all live elements."""
        stmt = self.live_elements(include_details).order_by(ElementORM.created_at, ElementORM.id)
        async with self.session() as session:
            orm_models = (await session.execute(stmt)).scalars().all()
            return [
                self.mapper.to_domain(orm, include_details=include_details) for orm in orm_models
            ]

    async def delete(self, element_id: ElementId) -> None:
        """
        Soft-delete an element. The row and its children stay in place.

        Raises:
            EntityNotFoundError: If no live element has this id
        """
        async with self.session() as session:
            orm_model = await self._find_row(session, element_id, include_details=False)
            if orm_model is None:
                raise EntityNotFoundError("Element", element_id)

            audit = self.mapper.to_domain(orm_model, include_details=False).audit
            self.mapper.audit_to_orm(self.audit_stamper.deleted(audit), orm_model)

        logger.info("element_deleted", element_id=str(element_id))
