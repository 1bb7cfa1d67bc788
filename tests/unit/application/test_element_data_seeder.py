"""Tests for ElementDataSeeder against both repository backends."""

import pytest

from elementstore.application.data.element_data_seeder import ElementDataSeeder
from elementstore.domain.elements.value_objects.sub_element import SubElement


@pytest.fixture
def seeder(element_repository, identity_generator) -> ElementDataSeeder:
    return ElementDataSeeder(element_repository, identity_generator)


class TestElementDataSeeder:
    """Test suite for ElementDataSeeder."""

    def test_build_fixtures(self, seeder) -> None:
        elements = seeder.build_fixtures()
        assert [e.name for e in elements] == [
            "DataElement1",
            "DataElement2",
            "DataElement3",
            "DataElement4",
        ]
        assert [len(e.sub_elements) for e in elements] == [2, 1, 4, 0]
        assert len({e.id for e in elements}) == 4

    @pytest.mark.asyncio
    async def test_seed_empty_store(self, seeder, element_repository) -> None:
        seeded = await seeder.seed()

        assert seeded == 4
        assert await element_repository.get_count() == 4

    @pytest.mark.asyncio
    async def test_seeded_children(self, seeder, element_repository) -> None:
        await seeder.seed()

        third = await element_repository.with_details().where_name("DataElement3").first()
        assert third is not None
        assert third.description == "The third Data Element"
        assert third.sub_elements == tuple(
            SubElement(f"DE3SE{i}", f"Test Data {i}") for i in range(1, 5)
        )

        fourth = await element_repository.with_details().where_name("DataElement4").first()
        assert fourth is not None
        assert fourth.sub_elements == ()

    @pytest.mark.asyncio
    async def test_seed_twice_is_noop(self, seeder, element_repository) -> None:
        await seeder.seed()

        assert await seeder.seed() == 0
        assert await element_repository.get_count() == 4

    @pytest.mark.asyncio
    async def test_seed_skips_non_empty_store(
        self, seeder, element_repository, identity_generator
    ) -> None:
        existing = ElementDataSeeder(element_repository, identity_generator).build_fixtures()[0]
        await element_repository.insert(existing)

        assert await seeder.seed() == 0
        assert await element_repository.get_count() == 1

    @pytest.mark.asyncio
    async def test_reseed_after_soft_deleting_everything(self, seeder, element_repository) -> None:
        await seeder.seed()
        first_round = await element_repository.get_list()
        for element in first_round:
            await element_repository.delete(element.id)
        assert await element_repository.get_count() == 0

        assert await seeder.seed() == 4

        second_round = await element_repository.get_list()
        assert [e.name for e in second_round] == [e.name for e in first_round]
        assert {e.id for e in second_round}.isdisjoint({e.id for e in first_round})
