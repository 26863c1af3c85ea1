from dataclasses import dataclass, field
from uuid import UUID, uuid4

import pytest
import pytest_asyncio

from herdcare.domain.livestock.entities import Animal, Group
from herdcare.domain.shared.clock import FixedClock
from herdcare.infrastructure.events import InMemoryEventBus
from herdcare.infrastructure.memory import (
    InMemoryAnimalDirectory,
    InMemoryVaccinationEntryRepository,
)
from herdcare.tests.factories import NOW, AnimalFactory, GroupFactory


@dataclass
class Farm:
    """A seeded farm: one cattle herd of three and one sheep flock of two."""

    farm_id: UUID
    cattle: Group
    sheep: Group
    animals: dict[UUID, list[Animal]] = field(default_factory=dict)

    @property
    def cows(self) -> list[Animal]:
        return self.animals[self.cattle.id]

    @property
    def ewes(self) -> list[Animal]:
        return self.animals[self.sheep.id]


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def directory() -> InMemoryAnimalDirectory:
    return InMemoryAnimalDirectory()


@pytest.fixture
def entry_repository() -> InMemoryVaccinationEntryRepository:
    return InMemoryVaccinationEntryRepository()


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest_asyncio.fixture
async def farm(directory: InMemoryAnimalDirectory) -> Farm:
    """Seed the in-memory directory with a small two-group farm."""
    farm_id = uuid4()
    cattle = GroupFactory.create(farm_id=farm_id, name="Dairy herd", species="cattle")
    sheep = GroupFactory.create(farm_id=farm_id, name="Flock A", species="sheep")
    await directory.add_group(cattle)
    await directory.add_group(sheep)

    seeded = Farm(farm_id=farm_id, cattle=cattle, sheep=sheep)
    seeded.animals[cattle.id] = [
        AnimalFactory.create(group_id=cattle.id, tag=f"COW-{i}") for i in range(3)
    ]
    seeded.animals[sheep.id] = [
        AnimalFactory.create(group_id=sheep.id, tag=f"EWE-{i}", breed="Merino")
        for i in range(2)
    ]
    for animals in seeded.animals.values():
        for animal in animals:
            await directory.add_animal(animal)
    return seeded
