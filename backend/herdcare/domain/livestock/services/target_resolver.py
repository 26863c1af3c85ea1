"""
Target Resolver

Expands farm, group and animal identifiers into the concrete animals (and
their groups) that schedule, reminder and bulk operations act on.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from uuid import UUID

from ...shared.base import DomainService
from ...shared.exceptions import (
    AnimalNotFoundError,
    GroupNotFoundError,
    ValidationError,
)
from ..entities.animal import Animal, Group
from ..repositories.animal_directory import AnimalDirectory
from ..value_objects.scheduling import TargetScope

logger = logging.getLogger(__name__)


@dataclass
class ResolvedTargets:
    """Animals in resolution order plus the groups they belong to."""

    animals: list[Animal] = field(default_factory=list)
    groups: dict[UUID, Group] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.animals

    @property
    def animal_ids(self) -> list[UUID]:
        return [animal.id for animal in self.animals]

    def group_of(self, animal: Animal) -> Group | None:
        return self.groups.get(animal.group_id)


class TargetResolver(DomainService):
    """
    Resolves scopes against the animal directory.

    Farm resolution only keeps groups whose ``farm_id`` is the queried farm
    and animals whose ``group_id`` is the group they were listed under, so a
    misbehaving directory cannot leak animals from another farm.
    """

    def __init__(self, animal_directory: AnimalDirectory) -> None:
        self._directory = animal_directory

    async def resolve_scope(self, scope: TargetScope) -> ResolvedTargets:
        """
        Resolve a single farm, group or animal scope.

        Raises:
            ValidationError: If not exactly one identifier is given
            GroupNotFoundError: For an unknown group id
            AnimalNotFoundError: For an unknown animal id
        """
        given = scope.given
        if len(given) != 1:
            raise ValidationError(
                "scope",
                ",".join(given) or None,
                "exactly one of farm_id, group_id or animal_id must be provided",
            )

        if scope.farm_id is not None:
            return await self.resolve_farm(scope.farm_id)

        if scope.group_id is not None:
            group = await self._directory.get_group(scope.group_id)
            if group is None:
                raise GroupNotFoundError(scope.group_id)
            return await self._resolve_groups([group])

        animal = await self._directory.get_animal(scope.animal_id)
        if animal is None:
            raise AnimalNotFoundError(scope.animal_id)
        targets = ResolvedTargets(animals=[animal])
        await self._attach_groups(targets)
        return targets

    async def resolve_farm(self, farm_id: UUID) -> ResolvedTargets:
        """All animals of all groups on a farm; empty for an unknown farm."""
        groups = await self._directory.list_groups_by_farm(farm_id)
        foreign = [g for g in groups if g.farm_id != farm_id]
        if foreign:
            logger.warning(
                f"Directory returned {len(foreign)} group(s) from another farm for {farm_id}",
                extra={"farm_id": str(farm_id)},
            )
        return await self._resolve_groups([g for g in groups if g.farm_id == farm_id])

    async def resolve_group_ids(self, group_ids: list[UUID]) -> ResolvedTargets:
        """Animals of several groups; unknown groups contribute nothing."""
        found = await asyncio.gather(
            *(self._directory.get_group(group_id) for group_id in group_ids)
        )
        groups: list[Group] = []
        for group_id, group in zip(group_ids, found):
            if group is None:
                logger.warning(f"Skipping unknown group {group_id}")
                continue
            groups.append(group)
        return await self._resolve_groups(groups)

    async def resolve_animal_ids(
        self, animal_ids: list[UUID], strict: bool = True
    ) -> ResolvedTargets:
        """
        Look up explicit animal ids, keeping the caller's order.

        Args:
            animal_ids: Animals to resolve
            strict: Raise on an unknown id instead of skipping it

        Raises:
            AnimalNotFoundError: If ``strict`` and an id does not resolve
        """
        found = await asyncio.gather(
            *(self._directory.get_animal(animal_id) for animal_id in animal_ids)
        )
        targets = ResolvedTargets()
        for animal_id, animal in zip(animal_ids, found):
            if animal is None:
                if strict:
                    raise AnimalNotFoundError(animal_id)
                logger.warning(f"Skipping unknown animal {animal_id}")
                continue
            targets.animals.append(animal)
        await self._attach_groups(targets)
        return targets

    async def _resolve_groups(self, groups: list[Group]) -> ResolvedTargets:
        animal_lists = await asyncio.gather(
            *(self._directory.list_animals_by_group(group.id) for group in groups)
        )
        targets = ResolvedTargets(groups={group.id: group for group in groups})
        for group, animals in zip(groups, animal_lists):
            targets.animals.extend(a for a in animals if a.group_id == group.id)
        return targets

    async def _attach_groups(self, targets: ResolvedTargets) -> None:
        missing = list(
            dict.fromkeys(
                a.group_id for a in targets.animals if a.group_id not in targets.groups
            )
        )
        if not missing:
            return
        found = await asyncio.gather(
            *(self._directory.get_group(group_id) for group_id in missing)
        )
        for group in found:
            if group is not None:
                targets.groups[group.id] = group
