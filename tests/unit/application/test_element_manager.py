"""Tests for ElementManager against both repository backends."""

from uuid import uuid4

import pytest

from elementstore.application.elements.services.element_manager import ElementManager
from elementstore.domain.common.exceptions import EntityNotFoundError, ValidationError
from elementstore.domain.common.value_objects import ElementId
from elementstore.domain.elements.value_objects.sub_element import SubElement


@pytest.fixture
def manager(element_repository, identity_generator) -> ElementManager:
    return ElementManager(element_repository, identity_generator)


class TestElementManagerCreate:
    """Test suite for ElementManager.create."""

    @pytest.mark.asyncio
    async def test_create_persists_element(self, manager, element_repository) -> None:
        element = await manager.create(
            "DataElement1",
            "The first Data Element",
            [SubElement("DE1SE1", "Test Data 1"), SubElement("DE1SE2", "Test Data 2")],
        )

        stored = await element_repository.with_details().where_id(element.id).first()
        assert stored is not None
        assert stored.name == "DataElement1"
        assert stored.sub_elements == (
            SubElement("DE1SE1", "Test Data 1"),
            SubElement("DE1SE2", "Test Data 2"),
        )
        assert stored.audit.created_at is not None

    @pytest.mark.asyncio
    async def test_create_without_sub_elements(self, manager) -> None:
        element = await manager.create("DataElement4", "The fourth Data Element")
        assert element.sub_elements == ()

    @pytest.mark.asyncio
    async def test_create_drops_duplicate_sub_elements(self, manager) -> None:
        element = await manager.create(
            "n", "d", [SubElement("k", "v"), SubElement("K", "V"), SubElement("k", "v")]
        )
        assert element.sub_elements == (SubElement("k", "v"),)

    @pytest.mark.asyncio
    async def test_create_assigns_distinct_ids(self, manager) -> None:
        first = await manager.create("a", "a")
        second = await manager.create("b", "b")
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_create_with_none_name_writes_nothing(self, manager, element_repository) -> None:
        with pytest.raises(ValidationError):
            await manager.create(None, "d")  # type: ignore[arg-type]
        assert await element_repository.get_count() == 0


class TestElementManagerUpdate:
    """Test suite for ElementManager.update."""

    @pytest.mark.asyncio
    async def test_update_replaces_sub_elements(self, manager, element_repository) -> None:
        created = await manager.create(
            "DataElement3",
            "The third Data Element",
            [SubElement("DE3SE1", "Test Data 1"), SubElement("DE3SE2", "Test Data 2")],
        )

        await manager.update(
            created.id,
            "DataElement3",
            "Changed",
            [SubElement("NEW", "x"), SubElement("new", "X")],
        )

        stored = await element_repository.with_details().where_id(created.id).first()
        assert stored is not None
        assert stored.description == "Changed"
        assert stored.sub_elements == (SubElement("NEW", "x"),)

    @pytest.mark.asyncio
    async def test_update_with_empty_list_clears_sub_elements(
        self, manager, element_repository
    ) -> None:
        created = await manager.create("n", "d", [SubElement("a", "1")])

        await manager.update(created.id, "n", "d", [])

        stored = await element_repository.get(created.id)
        assert stored.sub_elements == ()

    @pytest.mark.asyncio
    async def test_update_without_sub_elements_keeps_children(
        self, manager, element_repository
    ) -> None:
        created = await manager.create("n", "d", [SubElement("a", "1"), SubElement("b", "2")])

        await manager.update(created.id, "Renamed", "d")

        stored = await element_repository.get(created.id)
        assert stored.name == "Renamed"
        assert stored.sub_elements == (SubElement("a", "1"), SubElement("b", "2"))

    @pytest.mark.asyncio
    async def test_update_stamps_modification_and_keeps_creation(
        self, manager, element_repository
    ) -> None:
        created = await manager.create("n", "d")
        created_at = (await element_repository.get(created.id)).audit.created_at

        await manager.update(created.id, "n2", "d2")

        stored = await element_repository.get(created.id)
        assert stored.audit.created_at == created_at
        assert stored.audit.last_modified_at is not None

    @pytest.mark.asyncio
    async def test_update_missing_element_raises(self, manager) -> None:
        with pytest.raises(EntityNotFoundError):
            await manager.update(ElementId(uuid4()), "n", "d")

    @pytest.mark.asyncio
    async def test_update_deleted_element_raises(self, manager, element_repository) -> None:
        created = await manager.create("n", "d")
        await element_repository.delete(created.id)

        with pytest.raises(EntityNotFoundError):
            await manager.update(created.id, "n", "d")

    @pytest.mark.asyncio
    async def test_update_with_none_description_raises(self, manager) -> None:
        created = await manager.create("n", "d")
        with pytest.raises(ValidationError):
            await manager.update(created.id, "n", None)  # type: ignore[arg-type]
