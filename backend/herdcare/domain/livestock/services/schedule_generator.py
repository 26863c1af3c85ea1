"""
Schedule Generator

Creates initial, and optionally recurring, vaccination entries for a set of
animals.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from ...shared.clock import Clock
from ...shared.event_bus import EventBusInterface
from ...shared.exceptions import (
    AnimalNotFoundError,
    EmptyTargetError,
    GroupNotFoundError,
    ValidationError,
)
from ..entities.vaccination_entry import VaccinationEntry
from ..repositories.animal_directory import AnimalDirectory
from ..repositories.vaccination_entry_repository import VaccinationEntryRepository
from ..value_objects.scheduling import DESCRIPTION_MAX_LENGTH, ScheduleItem
from .base import VaccinationServiceBase
from .target_resolver import ResolvedTargets, TargetResolver

logger = logging.getLogger(__name__)

NEXT_SCHEDULED_SUFFIX = " (Next Scheduled)"


def next_scheduled_description(description: str) -> str:
    """Follow-up description, truncating the base text so the suffix fits."""
    room = DESCRIPTION_MAX_LENGTH - len(NEXT_SCHEDULED_SUFFIX)
    return f"{description[:room].rstrip()}{NEXT_SCHEDULED_SUFFIX}".strip()


@dataclass
class ScheduleResult:
    """Entries created by one create_schedule call."""

    scheduled_vaccinations: list[VaccinationEntry] = field(default_factory=list)
    total_animals_scheduled: int = 0
    next_scheduled_dates: list[datetime] = field(default_factory=list)

    @property
    def initial_entries(self) -> list[VaccinationEntry]:
        return [e for e in self.scheduled_vaccinations if not e.is_follow_up]

    @property
    def follow_up_entries(self) -> list[VaccinationEntry]:
        return [e for e in self.scheduled_vaccinations if e.is_follow_up]


class ScheduleGenerator(VaccinationServiceBase):
    """
    Materializes schedule items into vaccination entries.

    Calls are not idempotent: the same request twice creates two sets of
    entries, which is how a re-scheduling workflow is expressed.
    """

    def __init__(
        self,
        animal_directory: AnimalDirectory,
        entry_repository: VaccinationEntryRepository,
        clock: Clock | None = None,
        event_bus: EventBusInterface | None = None,
    ) -> None:
        super().__init__(entry_repository, clock, event_bus)
        self._directory = animal_directory
        self._resolver = TargetResolver(animal_directory)

    async def create_schedule(
        self,
        items: list[ScheduleItem],
        animal_ids: list[UUID] | None = None,
        group_id: UUID | None = None,
        auto_schedule_next: bool = False,
    ) -> ScheduleResult:
        """
        Create one entry per (animal, item) at the item's initial date, plus a
        follow-up at ``initial_date + interval_days`` when ``auto_schedule_next``.

        Args:
            items: Vaccinations to schedule
            animal_ids: Explicit animals; takes precedence over ``group_id``
            group_id: Schedule every animal of this group
            auto_schedule_next: Also create the next occurrence

        Returns:
            Created entries, number of animals and the computed next dates

        Raises:
            ValidationError: No items, an interval below 1 day, or no target
            AnimalNotFoundError: If an explicit animal does not exist
            GroupNotFoundError: If the group does not exist
            EmptyTargetError: If the group has no animals
        """
        self._validate_items(items)
        targets = await self._resolve_targets(animal_ids, group_id)

        now = self._clock.now()
        result = ScheduleResult(total_animals_scheduled=len(targets.animals))

        # build every entry before the first write
        for animal in targets.animals:
            for item in items:
                initial = VaccinationEntry.create(
                    animal_id=animal.id,
                    vaccination_type=item.vaccination_type,
                    description=item.description,
                    scheduled_date=item.initial_date,
                    veterinarian=item.veterinarian,
                    cost=item.estimated_cost,
                    notes=item.notes,
                    when=now,
                )
                result.scheduled_vaccinations.append(initial)

                if auto_schedule_next:
                    follow_up = initial.create_follow_up(
                        item.interval_days,
                        from_date=item.initial_date,
                        description=next_scheduled_description(item.description),
                        when=now,
                    )
                    if item.notes:
                        follow_up.append_note(item.notes)
                    result.scheduled_vaccinations.append(follow_up)
                    result.next_scheduled_dates.append(follow_up.scheduled_date)

        for entry in result.scheduled_vaccinations:
            await self._persist(entry)

        logger.info(
            f"Scheduled {len(result.scheduled_vaccinations)} vaccination(s) "
            f"for {result.total_animals_scheduled} animal(s)",
            extra={"auto_schedule_next": auto_schedule_next},
        )
        return result

    async def schedule_vaccination(
        self,
        animal_id: UUID,
        vaccination_type: str,
        description: str = "",
        scheduled_date: datetime | None = None,
        veterinarian: str | None = None,
        cost: Decimal | None = None,
        notes: str | None = None,
    ) -> VaccinationEntry:
        """
        Schedule a single vaccination for one animal.

        Raises:
            AnimalNotFoundError: If the animal does not exist
        """
        animal = await self._directory.get_animal(animal_id)
        if animal is None:
            raise AnimalNotFoundError(animal_id)

        entry = VaccinationEntry.create(
            animal_id=animal.id,
            vaccination_type=vaccination_type,
            description=description,
            scheduled_date=scheduled_date,
            veterinarian=veterinarian,
            cost=cost,
            notes=notes,
            when=self._clock.now(),
        )
        return await self._persist(entry)

    @staticmethod
    def _validate_items(items: list[ScheduleItem]) -> None:
        if not items:
            raise ValidationError(
                "schedule_items", None, "at least one schedule item is required"
            )
        for item in items:
            if item.interval_days < 1:
                raise ValidationError(
                    "interval_days",
                    item.interval_days,
                    f"interval for '{item.vaccination_type}' must be at least 1 day",
                )

    async def _resolve_targets(
        self, animal_ids: list[UUID] | None, group_id: UUID | None
    ) -> ResolvedTargets:
        if animal_ids:
            return await self._resolver.resolve_animal_ids(animal_ids, strict=True)

        if group_id is not None:
            group = await self._directory.get_group(group_id)
            if group is None:
                raise GroupNotFoundError(group_id)
            targets = await self._resolver.resolve_group_ids([group_id])
            if targets.is_empty:
                raise EmptyTargetError("No animals found in the specified group")
            return targets

        raise ValidationError(
            "targets", None, "either animal_ids or group_id must be provided"
        )
