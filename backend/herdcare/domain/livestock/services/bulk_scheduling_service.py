"""
Bulk Scheduling Service

Applies a list of vaccinations to a whole population of animals in one call.
Failures for a single (animal, vaccination) pair are recorded in the result
and never abort the batch.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from ....core.config import settings
from ...shared.clock import Clock
from ...shared.event_bus import EventBusInterface
from ...shared.exceptions import (
    BatchTooLargeError,
    BulkOperationTimeoutError,
    EmptyTargetError,
    PartialFailureError,
    ValidationError,
)
from ..entities.animal import Animal
from ..entities.vaccination_entry import VaccinationEntry
from ..repositories.animal_directory import AnimalDirectory
from ..repositories.vaccination_entry_repository import VaccinationEntryRepository
from ..value_objects.scheduling import AnimalFilterCriteria, BulkScheduleItem
from .base import VaccinationServiceBase
from .target_resolver import ResolvedTargets, TargetResolver

logger = logging.getLogger(__name__)


class BulkScheduleRequest(BaseModel):
    """
    Targets, filters and vaccinations for one bulk call.

    Targets are taken from ``animal_ids`` if given, else ``group_ids``, else
    ``farm_id``.
    """

    farm_id: UUID | None = None
    group_ids: list[UUID] = Field(default_factory=list)
    animal_ids: list[UUID] = Field(default_factory=list)
    filter_criteria: AnimalFilterCriteria | None = None
    vaccination_schedules: list[BulkScheduleItem] = Field(default_factory=list)
    skip_if_recently_vaccinated: bool = False
    recent_vaccination_days: int | None = Field(default=None, ge=0)


@dataclass
class SkippedVaccination:
    vaccination_type: str
    reason: str


@dataclass
class AnimalBulkResult:
    animal_id: UUID
    animal_tag: str
    animal_name: str | None
    group_id: UUID
    scheduled_entries: list[VaccinationEntry] = field(default_factory=list)
    skipped: list[SkippedVaccination] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass
class BulkScheduleSummary:
    by_vaccination_type: dict[str, int] = field(default_factory=dict)
    by_group: dict[UUID, int] = field(default_factory=dict)
    total_estimated_cost: Decimal = Decimal("0")


@dataclass
class BulkScheduleResult:
    results: list[AnimalBulkResult] = field(default_factory=list)
    total_animals_processed: int = 0
    total_vaccinations_scheduled: int = 0
    total_skipped: int = 0
    total_errors: int = 0
    summary: BulkScheduleSummary = field(default_factory=BulkScheduleSummary)

    @property
    def has_errors(self) -> bool:
        return self.total_errors > 0

    def raise_for_partial_failure(self) -> None:
        """Raise PartialFailureError if any pair failed."""
        if self.has_errors:
            raise PartialFailureError(self)


def matches_recent_type(existing_type: str, new_type: str) -> bool:
    """Case-insensitive substring match in either direction."""
    existing = existing_type.strip().lower()
    new = new_type.strip().lower()
    if not existing or not new:
        return False
    return existing in new or new in existing


class BulkSchedulingService(VaccinationServiceBase):
    """
    Coordinates bulk vaccination scheduling.

    Animals are processed concurrently, bounded by ``concurrency``; the
    result lists animals in resolution order regardless of completion order.
    The recency check reads history once per animal and is not transactional
    with the writes, so concurrent bulk calls for the same animal can both
    schedule the same type. A batch that misses its deadline keeps the entries
    it already saved; BulkOperationTimeoutError.partial_result lists them.
    """

    def __init__(
        self,
        animal_directory: AnimalDirectory,
        entry_repository: VaccinationEntryRepository,
        clock: Clock | None = None,
        event_bus: EventBusInterface | None = None,
        max_batch_size: int | None = None,
        timeout_seconds: float | None = None,
        concurrency: int | None = None,
    ) -> None:
        super().__init__(entry_repository, clock, event_bus)
        self._resolver = TargetResolver(animal_directory)
        self._max_batch_size = max_batch_size or settings.BULK_MAX_BATCH_SIZE
        self._timeout_seconds = timeout_seconds or settings.BULK_TIMEOUT_SECONDS
        self._concurrency = concurrency or settings.BULK_CONCURRENCY

    async def bulk_schedule(self, request: BulkScheduleRequest) -> BulkScheduleResult:
        """
        Schedule every requested vaccination for every matching animal.

        Returns:
            Per-animal results plus batch totals and a summary

        Raises:
            ValidationError: No target or no vaccinations given
            EmptyTargetError: If no animal remains after resolution and filtering
            BatchTooLargeError: If animals x vaccinations exceeds the batch limit
            BulkOperationTimeoutError: If the batch misses its deadline
        """
        items = request.vaccination_schedules
        if not items:
            raise ValidationError(
                "vaccination_schedules", None, "at least one vaccination is required"
            )

        targets = await self._resolve_targets(request)
        if targets.is_empty:
            raise EmptyTargetError()

        requested = len(targets.animals) * len(items)
        if requested > self._max_batch_size:
            raise BatchTooLargeError(requested, self._max_batch_size)

        recent_days = (
            request.recent_vaccination_days
            if request.recent_vaccination_days is not None
            else settings.RECENT_VACCINATION_DAYS
        )
        now = self._clock.now()
        semaphore = asyncio.Semaphore(self._concurrency)
        # filled in place so a timeout can still report what was written
        results = [self._new_result(animal) for animal in targets.animals]

        async def run(animal: Animal, animal_result: AnimalBulkResult) -> None:
            async with semaphore:
                await self._process_animal(
                    animal,
                    animal_result,
                    items,
                    request.skip_if_recently_vaccinated,
                    recent_days,
                    now,
                )

        logger.info(
            f"Bulk scheduling {len(items)} vaccination(s) for {len(targets.animals)} animal(s)",
            extra={"skip_if_recent": request.skip_if_recently_vaccinated},
        )
        try:
            await asyncio.wait_for(
                asyncio.gather(
                    *(run(a, r) for a, r in zip(targets.animals, results))
                ),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            partial = self._aggregate(results)
            logger.error(
                f"Bulk scheduling timed out after {self._timeout_seconds}s with "
                f"{partial.total_vaccinations_scheduled} entr(ies) already saved"
            )
            raise BulkOperationTimeoutError(self._timeout_seconds, partial) from None

        result = self._aggregate(results)
        if result.has_errors:
            logger.warning(
                f"Bulk scheduling finished with {result.total_errors} error(s)"
            )
        return result

    async def _resolve_targets(self, request: BulkScheduleRequest) -> ResolvedTargets:
        if request.animal_ids:
            targets = await self._resolver.resolve_animal_ids(
                request.animal_ids, strict=False
            )
        elif request.group_ids:
            targets = await self._resolver.resolve_group_ids(request.group_ids)
        elif request.farm_id is not None:
            targets = await self._resolver.resolve_farm(request.farm_id)
        else:
            raise ValidationError(
                "targets", None, "one of farm_id, group_ids or animal_ids is required"
            )

        criteria = request.filter_criteria
        if criteria is not None:
            today = self._clock.now().date()
            targets.animals = [
                animal
                for animal in targets.animals
                if animal.matches(criteria, today, targets.group_of(animal))
            ]
        return targets

    @staticmethod
    def _new_result(animal: Animal) -> AnimalBulkResult:
        return AnimalBulkResult(
            animal_id=animal.id,
            animal_tag=animal.tag,
            animal_name=animal.name,
            group_id=animal.group_id,
        )

    async def _process_animal(
        self,
        animal: Animal,
        result: AnimalBulkResult,
        items: list[BulkScheduleItem],
        skip_if_recent: bool,
        recent_days: int,
        now: datetime,
    ) -> None:
        history: list[VaccinationEntry] = []
        if skip_if_recent:
            try:
                history = [
                    e
                    for e in await self._entries.find_by_animal(animal.id)
                    if e.is_vaccination
                ]
            except Exception as e:
                logger.error(f"History lookup failed for animal {animal.id}: {e}")
                result.errors.append(f"Failed to fetch existing vaccinations: {e}")

        cutoff = now - timedelta(days=recent_days)
        for item in items:
            try:
                if skip_if_recent and self._recently_vaccinated(
                    history, item.vaccination_type, cutoff
                ):
                    result.skipped.append(
                        SkippedVaccination(
                            vaccination_type=item.vaccination_type,
                            reason=f"Recently vaccinated within {recent_days} days",
                        )
                    )
                    continue

                entry = VaccinationEntry.create(
                    animal_id=animal.id,
                    vaccination_type=item.vaccination_type,
                    description=item.description,
                    scheduled_date=item.scheduled_date,
                    veterinarian=item.veterinarian,
                    cost=item.estimated_cost,
                    notes=item.notes,
                    when=now,
                )
                await self._persist(entry)
                result.scheduled_entries.append(entry)
            except Exception as e:
                logger.error(
                    f"Failed to schedule {item.vaccination_type} for animal {animal.id}: {e}"
                )
                result.errors.append(f"Failed to schedule {item.vaccination_type}: {e}")

    @staticmethod
    def _recently_vaccinated(
        history: list[VaccinationEntry], vaccination_type: str, cutoff: datetime
    ) -> bool:
        return any(
            entry.created_at >= cutoff
            and matches_recent_type(entry.vaccination_type, vaccination_type)
            for entry in history
        )

    @staticmethod
    def _aggregate(results: list[AnimalBulkResult]) -> BulkScheduleResult:
        batch = BulkScheduleResult(results=results, total_animals_processed=len(results))
        summary = batch.summary
        for animal_result in results:
            batch.total_skipped += len(animal_result.skipped)
            batch.total_errors += len(animal_result.errors)
            for entry in animal_result.scheduled_entries:
                batch.total_vaccinations_scheduled += 1
                summary.by_vaccination_type[entry.vaccination_type] = (
                    summary.by_vaccination_type.get(entry.vaccination_type, 0) + 1
                )
                summary.by_group[animal_result.group_id] = (
                    summary.by_group.get(animal_result.group_id, 0) + 1
                )
                if entry.cost is not None:
                    summary.total_estimated_cost += entry.cost
        return batch
