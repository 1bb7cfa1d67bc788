"""
Seed data for a fresh store.

Seeding runs at bootstrap and only writes when the store holds no live
elements, so repeated runs are harmless.
"""

import structlog

from elementstore.application.elements.protocols.element_repository import (
    ElementRepositoryProtocol,
)
from elementstore.domain.common.identity import IdentityGenerator
from elementstore.domain.common.value_objects import ElementId
from elementstore.domain.elements.entities.element import Element
from elementstore.domain.elements.value_objects.sub_element import SubElement

logger = structlog.get_logger(__name__)

# (name, description, [(sub-element name, value), ...])
ELEMENT_FIXTURES: list[tuple[str, str, list[tuple[str, str]]]] = [
    (
        "DataElement1",
        "The first Data Element",
        [("DE1SE1", "Test Data 1"), ("DE1SE2", "Test Data 2")],
    ),
    (
        "DataElement2",
        "The second Data Element",
        [("DE2SE1", "Test Data 1")],
    ),
    (
        "DataElement3",
        "The third Data Element",
        [
            ("DE3SE1", "Test Data 1"),
            ("DE3SE2", "Test Data 2"),
            ("DE3SE3", "Test Data 3"),
            ("DE3SE4", "Test Data 4"),
        ],
    ),
    (
        "DataElement4",
        "The fourth Data Element",
        [],
    ),
]


class ElementDataSeeder:
    """Populates an empty store with the fixture elements."""

    def __init__(
        self,
        element_repository: ElementRepositoryProtocol,
        identity_generator: IdentityGenerator,
    ) -> None:
        self.element_repository = element_repository
        self.identity_generator = identity_generator

    def build_fixtures(self) -> list[Element]:
        """Build fresh fixture aggregates with newly generated ids."""
        elements: list[Element] = []
        for name, description, children in ELEMENT_FIXTURES:
            element = Element.create(
                id=ElementId(self.identity_generator.create()),
                name=name,
                description=description,
            )
            for child_name, child_value in children:
                element.add_sub_element(SubElement(child_name, child_value))
            elements.append(element)
        return elements

    async def seed(self) -> int:
        """
        Insert the fixture set if the store is empty.

        Returns:
            Number of elements inserted (0 when the store already had data)
        """
        existing = await self.element_repository.get_count()
        if existing != 0:
            logger.debug("element_seed_skipped", existing=existing)
            return 0

        elements = self.build_fixtures()
        await self.element_repository.insert_many(elements)

        logger.info("elements_seeded", count=len(elements))
        return len(elements)
