"""Read-only schedule listing for a farm, group or animal."""

import asyncio
import logging
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from ...shared.base import DomainService
from ...shared.clock import Clock, SystemClock
from ..entities.vaccination_entry import VaccinationEntry
from ..repositories.animal_directory import AnimalDirectory
from ..repositories.vaccination_entry_repository import VaccinationEntryRepository
from ..value_objects.enums import ScheduleItemStatus, VaccinationStatus
from ..value_objects.scheduling import TargetScope
from .target_resolver import TargetResolver

logger = logging.getLogger(__name__)


class ScheduleEntryView(BaseModel):
    entry_id: UUID
    animal_id: UUID
    animal_tag: str
    animal_name: str | None = None
    group_id: UUID
    group_name: str | None = None
    vaccination_type: str
    description: str = ""
    scheduled_date: datetime | None = None
    completed_date: datetime | None = None
    status: ScheduleItemStatus
    days_until_due: int | None = None
    veterinarian: str | None = None
    cost: Decimal | None = None
    version: int


class ScheduleTotals(BaseModel):
    scheduled: int = 0
    completed: int = 0
    overdue: int = 0
    cancelled: int = 0
    upcoming_within_window: int = 0


class VaccinationScheduleView(BaseModel):
    entries: list[ScheduleEntryView] = Field(default_factory=list)
    totals: ScheduleTotals = Field(default_factory=ScheduleTotals)


def view_status(entry: VaccinationEntry, now: datetime) -> ScheduleItemStatus:
    """Collapse the stored status into what a schedule shows."""
    if entry.status == VaccinationStatus.COMPLETED:
        return ScheduleItemStatus.COMPLETED
    if entry.status == VaccinationStatus.CANCELLED:
        return ScheduleItemStatus.CANCELLED
    if entry.scheduled_date is not None and entry.scheduled_date < now:
        return ScheduleItemStatus.OVERDUE
    return ScheduleItemStatus.SCHEDULED


class ScheduleViewService(DomainService):
    def __init__(
        self,
        animal_directory: AnimalDirectory,
        entry_repository: VaccinationEntryRepository,
        clock: Clock | None = None,
    ) -> None:
        self._entries = entry_repository
        self._resolver = TargetResolver(animal_directory)
        self._clock = clock or SystemClock()

    async def get_vaccination_schedule(
        self,
        scope: TargetScope,
        vaccination_type: str | None = None,
        days_ahead: int = 30,
        include_completed: bool = False,
        include_cancelled: bool = False,
    ) -> VaccinationScheduleView:
        """
        List vaccination entries in scope, sorted by scheduled date with
        undated entries last.

        ``totals.upcoming_within_window`` counts listed scheduled (not overdue)
        entries due within ``days_ahead`` days.
        """
        targets = await self._resolver.resolve_scope(scope)
        entry_lists = await asyncio.gather(
            *(self._entries.find_by_animal(animal.id) for animal in targets.animals)
        )

        now = self._clock.now()
        type_filter = vaccination_type.lower() if vaccination_type else None
        view = VaccinationScheduleView()

        for animal, entries in zip(targets.animals, entry_lists):
            group = targets.group_of(animal)
            for entry in entries:
                if not entry.is_vaccination:
                    continue
                if type_filter and type_filter not in entry.vaccination_type.lower():
                    continue

                status = view_status(entry, now)
                if status == ScheduleItemStatus.COMPLETED and not include_completed:
                    continue
                if status == ScheduleItemStatus.CANCELLED and not include_cancelled:
                    continue

                days = entry.days_until_due(now)
                view.entries.append(
                    ScheduleEntryView(
                        entry_id=entry.id,
                        animal_id=animal.id,
                        animal_tag=animal.tag,
                        animal_name=animal.name,
                        group_id=animal.group_id,
                        group_name=group.name if group else None,
                        vaccination_type=entry.vaccination_type,
                        description=entry.description,
                        scheduled_date=entry.scheduled_date,
                        completed_date=entry.completed_date,
                        status=status,
                        days_until_due=days,
                        veterinarian=entry.veterinarian,
                        cost=entry.cost,
                        version=entry.version,
                    )
                )
                self._count(view.totals, status, days, days_ahead)

        view.entries.sort(
            key=lambda e: (e.scheduled_date is None, e.scheduled_date or now)
        )
        logger.debug(f"Schedule view has {len(view.entries)} entries")
        return view

    @staticmethod
    def _count(
        totals: ScheduleTotals,
        status: ScheduleItemStatus,
        days: int | None,
        days_ahead: int,
    ) -> None:
        if status == ScheduleItemStatus.SCHEDULED:
            totals.scheduled += 1
            if days is not None and days <= days_ahead:
                totals.upcoming_within_window += 1
        elif status == ScheduleItemStatus.OVERDUE:
            totals.overdue += 1
        elif status == ScheduleItemStatus.COMPLETED:
            totals.completed += 1
        else:
            totals.cancelled += 1
