"""
Reminder Service

Derives a ranked list of vaccination reminders for a farm, group or animal.
Read-only: entries are never modified.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from ....core.config import settings
from ...shared.base import DomainService
from ...shared.clock import Clock, SystemClock
from ..entities.animal import Animal, Group
from ..entities.vaccination_entry import VaccinationEntry
from ..repositories.animal_directory import AnimalDirectory
from ..repositories.vaccination_entry_repository import VaccinationEntryRepository
from ..value_objects.enums import ReminderPriority, ReminderType
from ..value_objects.priority_policy import ReminderPriorityPolicy
from ..value_objects.scheduling import TargetScope
from .target_resolver import TargetResolver

logger = logging.getLogger(__name__)


class VaccinationReminder(BaseModel):
    """One open vaccination that needs attention."""

    entry_id: UUID
    animal_id: UUID
    animal_tag: str
    animal_name: str | None = None
    group_id: UUID
    group_name: str | None = None
    vaccination_type: str
    description: str = ""
    scheduled_date: datetime
    days_until_due: int
    reminder_type: ReminderType
    priority: ReminderPriority
    veterinarian: str | None = None
    estimated_cost: Decimal | None = None
    notes: str = ""


class ReminderSummary(BaseModel):
    by_type: dict[ReminderType, int] = Field(
        default_factory=lambda: {t: 0 for t in ReminderType}
    )
    by_priority: dict[ReminderPriority, int] = Field(
        default_factory=lambda: {p: 0 for p in ReminderPriority}
    )
    total_estimated_cost: Decimal = Decimal("0")


class RemindersResult(BaseModel):
    reminders: list[VaccinationReminder] = Field(default_factory=list)
    summary: ReminderSummary = Field(default_factory=ReminderSummary)

    @property
    def total(self) -> int:
        return len(self.reminders)


class ReminderService(DomainService):
    """
    Computes reminders from open, dated vaccination entries.

    Classification by whole days until due:
    below zero is OVERDUE (only when requested), up to ``due_soon_days`` is
    DUE_SOON, and anything later is UPCOMING while it falls inside the
    lookahead window. Priority comes from the injected ReminderPriorityPolicy.
    """

    def __init__(
        self,
        animal_directory: AnimalDirectory,
        entry_repository: VaccinationEntryRepository,
        clock: Clock | None = None,
        policy: ReminderPriorityPolicy | None = None,
    ) -> None:
        self._entries = entry_repository
        self._resolver = TargetResolver(animal_directory)
        self._clock = clock or SystemClock()
        self._policy = policy or ReminderPriorityPolicy.from_keywords(
            settings.normalized_critical_keywords,
            due_soon_days=settings.DUE_SOON_DAYS,
            medium_days=settings.MEDIUM_PRIORITY_DAYS,
        )

    @property
    def policy(self) -> ReminderPriorityPolicy:
        return self._policy

    async def get_reminders(
        self,
        scope: TargetScope,
        days_ahead: int | None = None,
        include_overdue: bool = False,
        vaccination_type: str | None = None,
        priority_level: ReminderPriority | None = None,
    ) -> RemindersResult:
        """
        Build reminders for a scope.

        Args:
            scope: Farm, group or animal to report on
            days_ahead: Lookahead window in days (defaults to configuration)
            include_overdue: Also report entries whose date has passed
            vaccination_type: Case-insensitive substring filter on the type
            priority_level: Only return reminders of this priority

        Returns:
            Reminders sorted by priority then date, with aggregate counts

        Raises:
            ValidationError: If the scope does not name exactly one target
            GroupNotFoundError: For an unknown group
            AnimalNotFoundError: For an unknown animal
        """
        if days_ahead is None:
            days_ahead = settings.REMINDER_DAYS_AHEAD

        targets = await self._resolver.resolve_scope(scope)
        if targets.is_empty:
            logger.debug(f"No animals in scope {scope.given}")
            return RemindersResult()

        entry_lists = await asyncio.gather(
            *(self._entries.find_by_animal(animal.id) for animal in targets.animals)
        )

        now = self._clock.now()
        horizon = now + timedelta(days=days_ahead)
        type_filter = vaccination_type.lower() if vaccination_type else None

        reminders: list[VaccinationReminder] = []
        for animal, entries in zip(targets.animals, entry_lists):
            group = targets.group_of(animal)
            for entry in entries:
                if not entry.is_vaccination or not entry.is_open:
                    continue
                if type_filter and type_filter not in entry.vaccination_type.lower():
                    continue
                if entry.scheduled_date is None:
                    continue

                reminder = self._build_reminder(
                    entry, animal, group, now, horizon, include_overdue
                )
                if reminder is None:
                    continue
                if priority_level is not None and reminder.priority != priority_level:
                    continue
                reminders.append(reminder)

        reminders.sort(key=lambda r: (r.priority.rank, r.scheduled_date))
        result = RemindersResult(reminders=reminders, summary=self._summarize(reminders))

        logger.info(
            f"Computed {result.total} reminder(s) for {len(targets.animals)} animal(s)",
            extra={"days_ahead": days_ahead, "include_overdue": include_overdue},
        )
        return result

    def classify(
        self,
        days_until_due: int,
        scheduled_date: datetime,
        horizon: datetime,
        include_overdue: bool,
    ) -> ReminderType | None:
        """Reminder type for an entry, or None if it should not be reported."""
        if days_until_due < 0:
            return ReminderType.OVERDUE if include_overdue else None
        if days_until_due <= self._policy.due_soon_days:
            return ReminderType.DUE_SOON
        if scheduled_date <= horizon:
            return ReminderType.UPCOMING
        return None

    def _build_reminder(
        self,
        entry: VaccinationEntry,
        animal: Animal,
        group: Group | None,
        now: datetime,
        horizon: datetime,
        include_overdue: bool,
    ) -> VaccinationReminder | None:
        days = entry.days_until_due(now)
        reminder_type = self.classify(days, entry.scheduled_date, horizon, include_overdue)
        if reminder_type is None:
            return None

        return VaccinationReminder(
            entry_id=entry.id,
            animal_id=animal.id,
            animal_tag=animal.tag,
            animal_name=animal.name,
            group_id=animal.group_id,
            group_name=group.name if group else None,
            vaccination_type=entry.vaccination_type,
            description=entry.description,
            scheduled_date=entry.scheduled_date,
            days_until_due=days,
            reminder_type=reminder_type,
            priority=self._policy.priority_for(days, entry.vaccination_type),
            veterinarian=entry.veterinarian,
            estimated_cost=entry.cost,
            notes=entry.notes,
        )

    @staticmethod
    def _summarize(reminders: list[VaccinationReminder]) -> ReminderSummary:
        summary = ReminderSummary()
        for reminder in reminders:
            summary.by_type[reminder.reminder_type] += 1
            summary.by_priority[reminder.priority] += 1
            if reminder.estimated_cost is not None:
                summary.total_estimated_cost += reminder.estimated_cost
        return summary
