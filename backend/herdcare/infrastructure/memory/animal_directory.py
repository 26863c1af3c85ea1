"""In-memory animal directory."""

import logging
from uuid import UUID

from ...domain.livestock.entities.animal import Animal, Group
from ...domain.livestock.repositories.animal_directory import AnimalDirectory
from ...domain.shared.base import utc_now
from ...domain.shared.exceptions import GroupNotFoundError, ValidationError

logger = logging.getLogger(__name__)


class InMemoryAnimalDirectory(AnimalDirectory):
    """
    Dictionary-backed directory.

    Reads return copies, so callers cannot change stored state without going
    through the directory.
    """

    def __init__(self) -> None:
        self._groups: dict[UUID, Group] = {}
        self._animals: dict[UUID, Animal] = {}

    async def add_group(self, group: Group) -> Group:
        self._groups[group.id] = group.model_copy(deep=True)
        return group

    async def get_animal(self, animal_id: UUID) -> Animal | None:
        animal = self._animals.get(animal_id)
        return animal.model_copy(deep=True) if animal else None

    async def list_animals_by_group(self, group_id: UUID) -> list[Animal]:
        return [
            a.model_copy(deep=True)
            for a in self._animals.values()
            if a.group_id == group_id
        ]

    async def list_groups_by_farm(self, farm_id: UUID) -> list[Group]:
        return [
            g.model_copy(deep=True) for g in self._groups.values() if g.farm_id == farm_id
        ]

    async def get_group(self, group_id: UUID) -> Group | None:
        group = self._groups.get(group_id)
        return group.model_copy(deep=True) if group else None

    async def update_group_count(self, group_id: UUID, new_count: int) -> Group:
        group = self._require_group(group_id)
        if new_count < 0:
            raise ValidationError("current_count", new_count, "count cannot be negative")
        group.current_count = new_count
        group.mark_updated(utc_now())
        return group.model_copy(deep=True)

    async def add_animal(self, animal: Animal) -> Animal:
        group = self._require_group(animal.group_id)
        existing = self._animals.get(animal.id)
        self._animals[animal.id] = animal.model_copy(deep=True)
        if existing is None or existing.group_id != animal.group_id:
            now = utc_now()
            if existing is not None:
                previous = self._groups.get(existing.group_id)
                if previous is not None:
                    previous.current_count = max(previous.current_count - 1, 0)
                    previous.mark_updated(now)
            group.current_count += 1
            group.mark_updated(now)
        logger.debug(f"Added animal {animal.tag} to group {group.name}")
        return animal

    async def remove_animal(self, animal_id: UUID) -> bool:
        animal = self._animals.pop(animal_id, None)
        if animal is None:
            return False
        group = self._groups.get(animal.group_id)
        if group is not None:
            group.current_count = max(group.current_count - 1, 0)
            group.mark_updated(utc_now())
        return True

    def _require_group(self, group_id: UUID) -> Group:
        group = self._groups.get(group_id)
        if group is None:
            raise GroupNotFoundError(group_id)
        return group
