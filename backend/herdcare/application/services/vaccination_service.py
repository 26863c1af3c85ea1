"""
Vaccination application service.

Single entry point for the presentation layer: wires the domain services to
one animal directory, entry store, clock and event bus, and exposes the
vaccination use cases.
"""

import logging
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from ...domain.livestock.entities import VaccinationEntry
from ...domain.livestock.repositories import (
    AnimalDirectory,
    VaccinationEntryRepository,
)
from ...domain.livestock.services import (
    BulkScheduleRequest,
    BulkScheduleResult,
    BulkSchedulingService,
    ReminderService,
    RemindersResult,
    ScheduleGenerator,
    ScheduleResult,
    ScheduleViewService,
    TransitionResult,
    VaccinationScheduleView,
    VaccinationStatusService,
)
from ...domain.livestock.value_objects import (
    ReminderPriority,
    ReminderPriorityPolicy,
    ScheduleItem,
    TargetScope,
)
from ...domain.shared.clock import Clock, SystemClock
from ...domain.shared.event_bus import EventBusInterface
from ...infrastructure.events import InMemoryEventBus
from ...infrastructure.memory import (
    InMemoryAnimalDirectory,
    InMemoryVaccinationEntryRepository,
)

logger = logging.getLogger(__name__)


class VaccinationApplicationService:
    """
    Application service for vaccination scheduling and reminders.

    Every operation takes already-typed input and either returns a result or
    raises a DomainError subclass.
    """

    def __init__(
        self,
        animal_directory: AnimalDirectory,
        entry_repository: VaccinationEntryRepository,
        clock: Clock | None = None,
        event_bus: EventBusInterface | None = None,
        priority_policy: ReminderPriorityPolicy | None = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._event_bus = event_bus
        self._generator = ScheduleGenerator(
            animal_directory, entry_repository, self._clock, event_bus
        )
        self._status = VaccinationStatusService(entry_repository, self._clock, event_bus)
        self._reminders = ReminderService(
            animal_directory, entry_repository, self._clock, priority_policy
        )
        self._schedule_view = ScheduleViewService(
            animal_directory, entry_repository, self._clock
        )
        self._bulk = BulkSchedulingService(
            animal_directory, entry_repository, self._clock, event_bus
        )

    @classmethod
    def in_memory(
        cls, clock: Clock | None = None
    ) -> "VaccinationApplicationService":
        """Service over fresh in-memory stores and event bus."""
        return cls(
            InMemoryAnimalDirectory(),
            InMemoryVaccinationEntryRepository(),
            clock=clock,
            event_bus=InMemoryEventBus(),
        )

    @property
    def event_bus(self) -> EventBusInterface | None:
        return self._event_bus

    async def create_schedule(
        self,
        items: list[ScheduleItem],
        animal_ids: list[UUID] | None = None,
        group_id: UUID | None = None,
        auto_schedule_next: bool = False,
    ) -> ScheduleResult:
        return await self._generator.create_schedule(
            items,
            animal_ids=animal_ids,
            group_id=group_id,
            auto_schedule_next=auto_schedule_next,
        )

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
        return await self._generator.schedule_vaccination(
            animal_id,
            vaccination_type,
            description=description,
            scheduled_date=scheduled_date,
            veterinarian=veterinarian,
            cost=cost,
            notes=notes,
        )

    async def complete_entry(
        self,
        entry_id: UUID,
        completed_date: datetime | None = None,
        notes: str | None = None,
        next_interval_days: int | None = None,
        actual_veterinarian: str | None = None,
        actual_cost: Decimal | None = None,
        expected_version: int | None = None,
    ) -> TransitionResult:
        return await self._status.complete_entry(
            entry_id,
            completed_date=completed_date,
            notes=notes,
            next_interval_days=next_interval_days,
            actual_veterinarian=actual_veterinarian,
            actual_cost=actual_cost,
            expected_version=expected_version,
        )

    async def reschedule_entry(
        self,
        entry_id: UUID,
        new_date: datetime | None,
        reason: str | None = None,
        expected_version: int | None = None,
    ) -> TransitionResult:
        return await self._status.reschedule_entry(
            entry_id, new_date, reason=reason, expected_version=expected_version
        )

    async def cancel_entry(
        self,
        entry_id: UUID,
        reason: str | None = None,
        expected_version: int | None = None,
    ) -> TransitionResult:
        return await self._status.cancel_entry(
            entry_id, reason=reason, expected_version=expected_version
        )

    async def get_reminders(
        self,
        scope: TargetScope,
        days_ahead: int | None = None,
        include_overdue: bool = False,
        vaccination_type: str | None = None,
        priority_level: ReminderPriority | None = None,
    ) -> RemindersResult:
        return await self._reminders.get_reminders(
            scope,
            days_ahead=days_ahead,
            include_overdue=include_overdue,
            vaccination_type=vaccination_type,
            priority_level=priority_level,
        )

    async def get_vaccination_schedule(
        self,
        scope: TargetScope,
        vaccination_type: str | None = None,
        days_ahead: int = 30,
        include_completed: bool = False,
        include_cancelled: bool = False,
    ) -> VaccinationScheduleView:
        return await self._schedule_view.get_vaccination_schedule(
            scope,
            vaccination_type=vaccination_type,
            days_ahead=days_ahead,
            include_completed=include_completed,
            include_cancelled=include_cancelled,
        )

    async def bulk_schedule(self, request: BulkScheduleRequest) -> BulkScheduleResult:
        result = await self._bulk.bulk_schedule(request)
        logger.info(
            f"Bulk schedule: {result.total_vaccinations_scheduled} scheduled, "
            f"{result.total_skipped} skipped, {result.total_errors} error(s)"
        )
        return result
