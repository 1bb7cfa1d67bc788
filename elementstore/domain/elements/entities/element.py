"""
Element aggregate root.

Owns an ordered collection of SubElements and keeps it free of duplicates.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from elementstore.domain.common.auditing import AuditInfo
from elementstore.domain.common.entity import Entity
from elementstore.domain.common.exceptions import DetailsNotLoadedError, check_not_none
from elementstore.domain.common.value_objects import ElementId
from elementstore.domain.elements.value_objects.sub_element import SubElement


@dataclass(eq=False)
class Element(Entity[ElementId]):
    """
    Element aggregate root.

    Business Rules:
    - Name and description are required (None is rejected)
    - Sub-elements keep insertion order
    - No two sub-elements are equal under case-insensitive name+value
    - Sub-elements are only changed through the methods below
    - An element loaded without details has no sub-elements to change;
      repositories leave its stored children as they are
    - Soft deletion is recorded in the audit record, never by removal
    """

    # Identity
    id: ElementId

    # Content
    name: str
    description: str

    # Metadata
    audit: AuditInfo = field(default_factory=AuditInfo)
    details_loaded: bool = True

    # Children
    _sub_elements: list[SubElement] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        check_not_none(self.id, "id")
        check_not_none(self.name, "name")
        check_not_none(self.description, "description")

    # Query methods

    @property
    def sub_elements(self) -> tuple[SubElement, ...]:
        """Read-only view of the children, in insertion order."""
        return tuple(self._sub_elements)

    @property
    def is_deleted(self) -> bool:
        return self.audit.is_deleted

    def has_sub_element(self, sub_element: SubElement) -> bool:
        """Check membership using the case-insensitive equality rule."""
        return any(existing == sub_element for existing in self._sub_elements)

    # Command methods (state changes)

    def update_details(self, name: str, description: str) -> None:
        """
        Replace the name and description.

        Raises:
            ValidationError: If either argument is None
        """
        check_not_none(name, "name")
        check_not_none(description, "description")
        self.name = name
        self.description = description

    def add_sub_element(self, sub_element: SubElement) -> None:
        """
        Append a sub-element unless an equal one is already present.

        Raises:
            ValidationError: If sub_element is None
            DetailsNotLoadedError: If the element was loaded without details
        """
        check_not_none(sub_element, "sub_element")
        self._require_details()

        if self.has_sub_element(sub_element):
            return

        self._sub_elements.append(sub_element)

    def remove_sub_element(self, sub_element: SubElement) -> None:
        """
        Remove every sub-element equal to the given one.

        There is at most one match while the invariant holds, but all
        matches are removed regardless.

        Raises:
            ValidationError: If sub_element is None
            DetailsNotLoadedError: If the element was loaded without details
        """
        check_not_none(sub_element, "sub_element")
        self._require_details()

        if not self.has_sub_element(sub_element):
            return

        self._sub_elements[:] = [
            existing for existing in self._sub_elements if existing != sub_element
        ]

    def remove_all_sub_elements(self) -> None:
        """
        Clear the collection.

        Raises:
            DetailsNotLoadedError: If the element was loaded without details
        """
        self._require_details()
        self._sub_elements.clear()

    def with_audit(self, audit: AuditInfo) -> Element:
        """Copy of this element carrying a different audit record."""
        return replace(self, audit=audit, _sub_elements=list(self._sub_elements))

    def _require_details(self) -> None:
        if not self.details_loaded:
            raise DetailsNotLoadedError("Element", self.id)

    # Factory methods

    @classmethod
    def create(cls, id: ElementId, name: str, description: str) -> Element:
        """
        Factory method for creating a new element.

        Args:
            id: Identity, normally produced by an IdentityGenerator
            name: Element name
            description: Element description

        Returns:
            New Element with no sub-elements
        """
        return cls(id=id, name=name, description=description)

    @classmethod
    def create_with_id(
        cls,
        id: ElementId,
        name: str,
        description: str,
        sub_elements: Iterable[SubElement] = (),
        audit: AuditInfo | None = None,
        details_loaded: bool = True,
    ) -> Element:
        """
        Factory for reconstituting an element from persistence.

        Pass details_loaded=False when the children were not read; the
        result then has no sub-elements and refuses to change them.
        """
        element = cls(
            id=id,
            name=name,
            description=description,
            audit=audit or AuditInfo(),
        )
        for sub_element in sub_elements:
            element.add_sub_element(sub_element)
        element.details_loaded = details_loaded
        return element
