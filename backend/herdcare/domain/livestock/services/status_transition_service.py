"""
Vaccination Status Service

Drives vaccination entries through complete / reschedule / cancel and
chains follow-up vaccinations on completion.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from ...shared.exceptions import (
    ConcurrencyConflictError,
    ValidationError,
    VaccinationEntryNotFoundError,
)
from ..entities.vaccination_entry import VaccinationEntry
from .base import VaccinationServiceBase

logger = logging.getLogger(__name__)


@dataclass
class TransitionResult:
    """The entry after a transition and, for completions, its follow-up."""

    updated_entry: VaccinationEntry
    next_entry: VaccinationEntry | None = None


class VaccinationStatusService(VaccinationServiceBase):
    """
    Status transitions for stored vaccination entries.

    The ``*_entry`` methods load by id and check ``expected_version`` before
    mutating; the store re-checks the version on save, so a writer that lost a
    race fails with ConcurrencyConflictError instead of overwriting.
    """

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
        entry = await self._load(entry_id, expected_version)
        return await self.complete(
            entry,
            completed_date=completed_date,
            notes=notes,
            next_interval_days=next_interval_days,
            actual_veterinarian=actual_veterinarian,
            actual_cost=actual_cost,
        )

    async def reschedule_entry(
        self,
        entry_id: UUID,
        new_date: datetime | None,
        reason: str | None = None,
        expected_version: int | None = None,
    ) -> TransitionResult:
        entry = await self._load(entry_id, expected_version)
        return await self.reschedule(entry, new_date, reason)

    async def cancel_entry(
        self,
        entry_id: UUID,
        reason: str | None = None,
        expected_version: int | None = None,
    ) -> TransitionResult:
        entry = await self._load(entry_id, expected_version)
        return await self.cancel(entry, reason)

    async def complete(
        self,
        entry: VaccinationEntry,
        completed_date: datetime | None = None,
        notes: str | None = None,
        next_interval_days: int | None = None,
        actual_veterinarian: str | None = None,
        actual_cost: Decimal | None = None,
    ) -> TransitionResult:
        """
        Mark an entry as administered.

        Args:
            entry: Open vaccination entry
            completed_date: Administration time, defaults to now
            notes: Completion commentary appended to the entry notes
            next_interval_days: Chain a follow-up this many days after completion
            actual_veterinarian: Overrides the planned veterinarian
            actual_cost: Overrides the estimated cost

        Returns:
            TransitionResult with the completed entry and the optional follow-up

        Raises:
            ValidationError: If next_interval_days is below 1
            InvalidTransitionError: If the entry is completed or cancelled
            InvalidRecordTypeError: If the entry is not a vaccination
        """
        if next_interval_days is not None and next_interval_days < 1:
            raise ValidationError(
                "next_interval_days",
                next_interval_days,
                "next interval must be at least 1 day",
            )

        now = self._clock.now()
        entry.complete(
            completed_date=completed_date,
            notes=notes,
            veterinarian=actual_veterinarian,
            cost=actual_cost,
            when=now,
        )
        next_entry = None
        if next_interval_days is not None:
            next_entry = entry.create_follow_up(next_interval_days, when=now)

        updated = await self._persist(entry)
        if next_entry is not None:
            next_entry = await self._persist(next_entry)
            logger.info(
                f"Chained follow-up {next_entry.id} for {entry.vaccination_type} "
                f"on {next_entry.scheduled_date.date().isoformat()}"
            )

        logger.info(f"Completed vaccination entry {entry.id}")
        return TransitionResult(updated_entry=updated, next_entry=next_entry)

    async def reschedule(
        self,
        entry: VaccinationEntry,
        new_date: datetime | None,
        reason: str | None = None,
    ) -> TransitionResult:
        """Move an open entry to ``new_date``; it stays awaiting administration."""
        entry.reschedule(new_date, reason, when=self._clock.now())
        updated = await self._persist(entry)
        logger.info(
            f"Rescheduled vaccination entry {entry.id}",
            extra={"new_date": entry.scheduled_date.isoformat(), "reason": reason},
        )
        return TransitionResult(updated_entry=updated)

    async def cancel(
        self, entry: VaccinationEntry, reason: str | None = None
    ) -> TransitionResult:
        entry.cancel(reason, when=self._clock.now())
        updated = await self._persist(entry)
        logger.info(f"Cancelled vaccination entry {entry.id}", extra={"reason": reason})
        return TransitionResult(updated_entry=updated)

    async def _load(
        self, entry_id: UUID, expected_version: int | None
    ) -> VaccinationEntry:
        entry = await self._entries.find_by_id(entry_id)
        if entry is None:
            raise VaccinationEntryNotFoundError(entry_id)
        if expected_version is not None and entry.version != expected_version:
            logger.warning(
                f"Version mismatch on entry {entry_id}: "
                f"expected {expected_version}, stored {entry.version}"
            )
            raise ConcurrencyConflictError(entry_id, expected_version, entry.version)
        return entry
