"""Protocol for Element repository operations."""

from collections.abc import Sequence
from typing import Protocol, Self

from elementstore.domain.common.value_objects import ElementId
from elementstore.domain.elements.entities.element import Element


class ElementQueryProtocol(Protocol):
    """
    Query handle over non-deleted elements with sub-elements loaded.

    Filters narrow the handle and return it for chaining; nothing touches
    the store until a terminal coroutine is awaited.
    """

    def where_id(self, element_id: ElementId) -> Self: ...

    def where_name(self, name: str) -> Self: ...

    async def first(self) -> Element | None: ...

    async def to_list(self) -> list[Element]: ...


class ElementRepositoryProtocol(Protocol):
    """
    Storage-agnostic contract for the Element aggregate.

    Every backend must behave identically against this interface.
    """

    # True if the backend can join a transaction spanning several aggregates
    supports_transactions: bool

    async def get_count(self) -> int:
        """
        Count elements that are not soft-deleted.

        Returns:
            Number of live elements
        """
        ...

    async def insert(self, element: Element) -> Element:
        """
        Persist a new element together with its sub-elements.

        Args:
            element: The aggregate to store

        Returns:
            The stored aggregate (audit fields stamped)

        Raises:
            DuplicateEntityError: If an element with the same id exists
        """
        ...

    async def insert_many(self, elements: Sequence[Element]) -> None:
        """
        Persist several new elements.

        Each element is written atomically. Whether the batch as a whole is
        atomic depends on the backend (see supports_transactions).

        Raises:
            DuplicateEntityError: If any id is already stored or repeated
                within the batch; raised before anything is written
        """
        ...

    def with_details(self) -> ElementQueryProtocol:
        """Return a query handle that eagerly loads sub-elements."""
        ...

    async def update(self, element: Element) -> Element:
        """
        Overwrite a stored element, replacing its sub-elements.

        Raises:
            EntityNotFoundError: If no live element has this id
        """
        ...

    async def find(self, element_id: ElementId, include_details: bool = True) -> Element | None:
        """Load a live element by id, or None."""
        ...

    async def get(self, element_id: ElementId, include_details: bool = True) -> Element:
        """
        Load a live element by id.

        Raises:
            EntityNotFoundError: If no live element has this id
        """
        ...

    async def get_list(self, include_details: bool = False) -> list[Element]:
        """Load all live elements. Sub-elements are omitted unless requested."""
        ...

    async def delete(self, element_id: ElementId) -> None:
        """
        Soft-delete an element.

        Raises:
            EntityNotFoundError: If no live element has this id
        """
        ...
