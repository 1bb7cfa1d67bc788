"""
Element manager.

Domain service for creating and updating elements. Identity assignment and
argument checks happen here, before anything reaches the repository.
"""

from collections.abc import Iterable

import structlog

from elementstore.application.elements.protocols.element_repository import (
    ElementRepositoryProtocol,
)
from elementstore.domain.common.exceptions import EntityNotFoundError, check_not_none
from elementstore.domain.common.identity import IdentityGenerator
from elementstore.domain.common.value_objects import ElementId
from elementstore.domain.elements.entities.element import Element
from elementstore.domain.elements.value_objects.sub_element import SubElement

logger = structlog.get_logger(__name__)


class ElementManager:
    """Creates and updates Element aggregates through the repository."""

    def __init__(
        self,
        element_repository: ElementRepositoryProtocol,
        identity_generator: IdentityGenerator,
    ) -> None:
        self.element_repository = element_repository
        self.identity_generator = identity_generator

    async def create(
        self,
        name: str,
        description: str,
        sub_elements: Iterable[SubElement] | None = None,
    ) -> Element:
        """
        Create and persist a new element.

        Args:
            name: Element name
            description: Element description
            sub_elements: Optional children; duplicates are dropped by the aggregate

        Returns:
            The stored element

        Raises:
            ValidationError: If name or description is None
        """
        check_not_none(name, "name")
        check_not_none(description, "description")

        element = Element.create(
            id=ElementId(self.identity_generator.create()),
            name=name,
            description=description,
        )
        for sub_element in sub_elements or ():
            element.add_sub_element(sub_element)

        element = await self.element_repository.insert(element)
        logger.info(
            "element_created",
            element_id=str(element.id),
            sub_elements=len(element.sub_elements),
        )
        return element

    async def update(
        self,
        element_id: ElementId,
        name: str,
        description: str,
        sub_elements: Iterable[SubElement] | None = None,
    ) -> Element:
        """
        Update an element's details and, optionally, its children.

        When sub_elements is given the existing children are replaced by it
        (duplicates dropped). When it is None the children are left as they are.

        Raises:
            ValidationError: If name or description is None
            EntityNotFoundError: If the element does not exist
        """
        check_not_none(name, "name")
        check_not_none(description, "description")

        element = await self.element_repository.with_details().where_id(element_id).first()
        if element is None:
            raise EntityNotFoundError("Element", element_id)

        element.update_details(name, description)

        if sub_elements is not None:
            element.remove_all_sub_elements()
            for sub_element in sub_elements:
                element.add_sub_element(sub_element)

        element = await self.element_repository.update(element)
        logger.info("element_updated", element_id=str(element.id))
        return element
