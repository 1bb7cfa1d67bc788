"""
Document repository for the Element aggregate.

Each Element is one document with its sub-elements embedded, so every read
already carries the children. No transactions or sessions are used: each
single-document write is atomic on its own and nothing here joins a wider
unit of work.
"""

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

import structlog
from pymongo.errors import BulkWriteError, ConnectionFailure, DuplicateKeyError

from elementstore.domain.common.auditing import AuditStamper
from elementstore.domain.common.exceptions import DuplicateEntityError, EntityNotFoundError
from elementstore.domain.common.value_objects import ElementId
from elementstore.domain.elements.entities.element import Element
from elementstore.exceptions import StoreUnavailableError
from elementstore.infrastructure.document.context import ElementDocumentContext
from elementstore.infrastructure.document.mappers.element_document_mapper import (
    ElementDocumentMapper,
)

logger = structlog.get_logger(__name__)

LIVE = {"is_deleted": False}
WITHOUT_DETAILS = {"sub_elements": 0}
DUPLICATE_KEY_CODE = 11000


@contextmanager
def _store_errors() -> Iterator[None]:
    """Re-raise connectivity failures as StoreUnavailableError."""
    try:
        yield
    except ConnectionFailure as e:
        logger.error("document_store_unavailable", error=str(e))
        raise StoreUnavailableError("document", message=str(e)) from e


def _duplicate_key(error: BulkWriteError) -> ElementId | None:
    """Id of the first document rejected for a duplicate key, if any."""
    for write_error in error.details.get("writeErrors", []):
        if write_error.get("code") == DUPLICATE_KEY_CODE:
            return ElementId.parse(write_error["op"]["_id"])
    return None


class MongoElementQuery:
    """Query handle over live element documents."""

    def __init__(
        self, repository: "MongoElementRepository", filters: dict[str, Any] | None = None
    ) -> None:
        self._repository = repository
        self._filters = filters or {}

    def where_id(self, element_id: ElementId) -> "MongoElementQuery":
        return MongoElementQuery(
            self._repository, {**self._filters, "_id": element_id.to_primitive()}
        )

    def where_name(self, name: str) -> "MongoElementQuery":
        return MongoElementQuery(self._repository, {**self._filters, "name": name})

    def _filter(self) -> dict[str, Any]:
        return {**self._filters, **LIVE}

    async def first(self) -> Element | None:
        with _store_errors():
            document = await self._repository.collection.find_one(self._filter())
        if document is None:
            return None
        return self._repository.mapper.to_domain(document)

    async def to_list(self) -> list[Element]:
        with _store_errors():
            documents = await self._repository.collection.find(self._filter()).to_list(None)
        return [self._repository.mapper.to_domain(document) for document in documents]


class MongoElementRepository:
    """Repository for Element persistence in a document collection."""

    supports_transactions = False

    def __init__(
        self,
        context: ElementDocumentContext,
        audit_stamper: AuditStamper | None = None,
    ) -> None:
        """
        Initialize repository.

        Args:
            context: Document context owning the elements collection
            audit_stamper: Stamps audit metadata on writes
        """
        self.context = context
        self.audit_stamper = audit_stamper or AuditStamper()
        self.mapper = ElementDocumentMapper()

    @property
    def collection(self) -> Any:
        return self.context.elements

    async def _find_document(
        self, element_id: ElementId, include_details: bool = True
    ) -> dict[str, Any] | None:
        projection = None if include_details else WITHOUT_DETAILS
        with _store_errors():
            return await self.collection.find_one(
                {"_id": element_id.to_primitive(), **LIVE}, projection
            )

    async def get_count(self) -> int:
        """Count live element documents."""
        with _store_errors():
            return await self.collection.count_documents(LIVE)

    async def insert(self, element: Element) -> Element:
        """
        Store a new element document.

        Raises:
            DuplicateEntityError: If the id is already stored
        """
        key = element.id.to_primitive()
        staged = element.with_audit(self.audit_stamper.created(element.audit))
        with _store_errors():
            if await self.collection.count_documents({"_id": key}) > 0:
                raise DuplicateEntityError("Element", element.id)

            try:
                await self.collection.insert_one(self.mapper.to_document(staged))
            except DuplicateKeyError as e:
                raise DuplicateEntityError("Element", element.id) from e

        element.audit = staged.audit
        logger.debug("element_inserted", element_id=str(element.id))
        return element

    async def insert_many(self, elements: Sequence[Element]) -> None:
        """
        Store several element documents with one ordered bulk insert.

        Each document is written atomically; the batch is not. Duplicate ids
        are rejected before anything is written.

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

        keys = [element.id.to_primitive() for element in elements]
        staged = [e.with_audit(self.audit_stamper.created(e.audit)) for e in elements]
        with _store_errors():
            existing = await self.collection.find_one({"_id": {"$in": keys}}, {"_id": 1})
            if existing is not None:
                raise DuplicateEntityError("Element", ElementId.parse(existing["_id"]))

            try:
                await self.collection.insert_many(
                    [self.mapper.to_document(element) for element in staged], ordered=True
                )
            except BulkWriteError as e:
                duplicate = _duplicate_key(e)
                if duplicate is None:
                    raise
                raise DuplicateEntityError("Element", duplicate) from e

        for element, stored in zip(elements, staged, strict=True):
            element.audit = stored.audit
        logger.debug("elements_inserted", count=len(elements))

    def with_details(self) -> MongoElementQuery:
        """Query handle; documents always embed their sub-elements."""
        return MongoElementQuery(self)

    async def update(self, element: Element) -> Element:
        """
        Replace a stored element document.

        An element loaded without details only has its own fields written;
        the embedded sub-elements are left untouched.

        Raises:
            EntityNotFoundError: If no live element has this id
        """
        stored = await self._find_document(element.id, include_details=False)
        if stored is None:
            raise EntityNotFoundError("Element", element.id)

        audit = element.audit
        if audit.created_at is None:
            # Keep the stored creation stamp
            stored_audit = self.mapper.to_domain(stored).audit
            audit = audit.with_creation(stored_audit.created_at, stored_audit.creator_id)
        staged = element.with_audit(self.audit_stamper.modified(audit))

        live_filter = {"_id": element.id.to_primitive(), **LIVE}
        with _store_errors():
            if staged.details_loaded:
                result = await self.collection.replace_one(
                    live_filter, self.mapper.to_document(staged)
                )
            else:
                result = await self.collection.update_one(
                    live_filter, {"$set": self.mapper.fields_to_document(staged)}
                )
        if result.matched_count == 0:
            # Deleted between the read and the write
            raise EntityNotFoundError("Element", element.id)

        element.audit = staged.audit
        logger.debug("element_updated", element_id=str(element.id))
        return element

    async def find(self, element_id: ElementId, include_details: bool = True) -> Element | None:
        """Load a live element by id, or None."""
        document = await self._find_document(element_id, include_details)
        if document is None:
            return None
        return self.mapper.to_domain(document)

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
        projection = None if include_details else WITHOUT_DETAILS
        with _store_errors():
            documents = await self.collection.find(LIVE, projection).to_list(None)
        return [self.mapper.to_domain(document) for document in documents]

    async def delete(self, element_id: ElementId) -> None:
        """
        Soft-delete an element document.

        Raises:
            EntityNotFoundError: If no live element has this id
        """
        stored = await self._find_document(element_id, include_details=False)
        if stored is None:
            raise EntityNotFoundError("Element", element_id)

        audit = self.audit_stamper.deleted(self.mapper.to_domain(stored).audit)
        fields = self.mapper.audit_to_document(audit)

        with _store_errors():
            await self.collection.update_one(
                {"_id": element_id.to_primitive()},
                {"$set": {key: fields[key] for key in ("is_deleted", "deleted_at", "deleter_id")}},
            )

        logger.info("element_deleted", element_id=str(element_id))
