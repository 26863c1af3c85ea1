"""
Tests for TargetResolver scope expansion.
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from herdcare.domain.livestock.services import TargetResolver
from herdcare.domain.livestock.value_objects import TargetScope
from herdcare.domain.shared.exceptions import (
    AnimalNotFoundError,
    GroupNotFoundError,
    ValidationError,
)
from herdcare.tests.factories import AnimalFactory, GroupFactory


@pytest.fixture
def resolver(directory):
    return TargetResolver(directory)


class TestResolveScope:
    @pytest.mark.asyncio
    async def test_farm_scope_returns_all_animals(self, resolver, farm):
        targets = await resolver.resolve_scope(TargetScope.for_farm(farm.farm_id))

        assert {a.id for a in targets.animals} == {a.id for a in farm.cows + farm.ewes}
        assert set(targets.groups) == {farm.cattle.id, farm.sheep.id}

    @pytest.mark.asyncio
    async def test_unknown_farm_is_empty(self, resolver, farm):
        targets = await resolver.resolve_scope(TargetScope.for_farm(uuid4()))

        assert targets.is_empty

    @pytest.mark.asyncio
    async def test_group_scope(self, resolver, farm):
        targets = await resolver.resolve_scope(TargetScope.for_group(farm.sheep.id))

        assert targets.animal_ids == [a.id for a in farm.ewes]

    @pytest.mark.asyncio
    async def test_unknown_group_raises(self, resolver, farm):
        with pytest.raises(GroupNotFoundError):
            await resolver.resolve_scope(TargetScope.for_group(uuid4()))

    @pytest.mark.asyncio
    async def test_animal_scope_attaches_group(self, resolver, farm):
        cow = farm.cows[0]

        targets = await resolver.resolve_scope(TargetScope.for_animal(cow.id))

        assert targets.animal_ids == [cow.id]
        assert targets.group_of(targets.animals[0]).name == "Dairy herd"

    @pytest.mark.asyncio
    async def test_unknown_animal_raises(self, resolver, farm):
        with pytest.raises(AnimalNotFoundError):
            await resolver.resolve_scope(TargetScope.for_animal(uuid4()))

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "scope",
        [TargetScope(), TargetScope(farm_id=uuid4(), group_id=uuid4())],
    )
    async def test_scope_needs_exactly_one_id(self, resolver, scope):
        with pytest.raises(ValidationError):
            await resolver.resolve_scope(scope)


class TestFarmIsolation:
    """Every resolved animal belongs to a group of the queried farm."""

    @pytest.mark.asyncio
    async def test_foreign_groups_and_animals_are_dropped(self):
        farm_id = uuid4()
        own = GroupFactory.create(farm_id=farm_id)
        foreign = GroupFactory.create(farm_id=uuid4())
        own_animal = AnimalFactory.create(group_id=own.id)
        stray_animal = AnimalFactory.create(group_id=foreign.id)

        directory = AsyncMock()
        directory.list_groups_by_farm.return_value = [own, foreign]
        directory.list_animals_by_group.side_effect = lambda group_id: {
            own.id: [own_animal, stray_animal],
            foreign.id: [stray_animal],
        }[group_id]

        targets = await TargetResolver(directory).resolve_farm(farm_id)

        assert targets.animal_ids == [own_animal.id]
        for animal in targets.animals:
            assert targets.group_of(animal).farm_id == farm_id


class TestResolveIds:
    @pytest.mark.asyncio
    async def test_strict_raises_on_unknown_animal(self, resolver, farm):
        with pytest.raises(AnimalNotFoundError):
            await resolver.resolve_animal_ids([farm.cows[0].id, uuid4()])

    @pytest.mark.asyncio
    async def test_lenient_skips_unknown_animal(self, resolver, farm):
        ids = [farm.ewes[1].id, uuid4(), farm.cows[0].id]

        targets = await resolver.resolve_animal_ids(ids, strict=False)

        assert targets.animal_ids == [farm.ewes[1].id, farm.cows[0].id]
        assert set(targets.groups) == {farm.sheep.id, farm.cattle.id}

    @pytest.mark.asyncio
    async def test_group_ids_skip_unknown(self, resolver, farm):
        targets = await resolver.resolve_group_ids([uuid4(), farm.cattle.id])

        assert targets.animal_ids == [a.id for a in farm.cows]
