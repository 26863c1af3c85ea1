"""VaccinationEntry aggregate: one scheduled or administered vaccination."""

import math
from datetime import datetime, timedelta
from decimal import Decimal
from uuid import UUID

from pydantic import Field, field_validator

from ...shared.base import AggregateRoot, ensure_utc, utc_now
from ...shared.exceptions import (
    InvalidRecordTypeError,
    InvalidTransitionError,
    ValidationError,
)
from ..events import (
    VaccinationCancelled,
    VaccinationCompleted,
    VaccinationRescheduled,
    VaccinationScheduled,
    VaccinationStatusChanged,
)
from ..value_objects.enums import HealthRecordType, VaccinationStatus
from ..value_objects.scheduling import DESCRIPTION_MAX_LENGTH

SECONDS_PER_DAY = 24 * 60 * 60


class VaccinationEntry(AggregateRoot):
    """
    A vaccination event for one animal.

    Status moves SCHEDULED -> {COMPLETED, CANCELLED}, with RESCHEDULED as an
    audit marker on an entry that is still awaiting administration. COMPLETED
    and CANCELLED are terminal. Every transition increments ``version``, which
    stores use as an optimistic concurrency token.

    ``notes`` carries human commentary and audit lines only; dates live in
    their own fields.
    """

    animal_id: UUID
    record_type: HealthRecordType = HealthRecordType.VACCINATION
    vaccination_type: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    veterinarian: str | None = None
    cost: Decimal | None = Field(default=None, ge=0)
    scheduled_date: datetime | None = None
    completed_date: datetime | None = None
    status: VaccinationStatus = VaccinationStatus.SCHEDULED
    notes: str = ""
    follow_up_of: UUID | None = None
    version: int = Field(default=1, ge=1)

    @field_validator("scheduled_date", "completed_date", "created_at", "updated_at")
    @classmethod
    def normalize_timestamps(cls, v: datetime | None) -> datetime | None:
        return ensure_utc(v)

    def is_valid(self) -> bool:
        if self.status == VaccinationStatus.COMPLETED and self.completed_date is None:
            return False
        return bool(self.vaccination_type) and self.version >= 1

    @property
    def is_vaccination(self) -> bool:
        return self.record_type == HealthRecordType.VACCINATION

    @property
    def is_open(self) -> bool:
        """Still awaiting administration (scheduled or rescheduled)."""
        return self.status.is_open

    @property
    def is_follow_up(self) -> bool:
        return self.follow_up_of is not None

    def days_until_due(self, now: datetime) -> int | None:
        """Whole days until the scheduled date, rounded up; negative when overdue."""
        if self.scheduled_date is None:
            return None
        delta = self.scheduled_date - ensure_utc(now)
        return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)

    def append_note(self, line: str) -> None:
        self.notes = f"{self.notes}\n{line}" if self.notes else line

    def complete(
        self,
        completed_date: datetime | None = None,
        notes: str | None = None,
        veterinarian: str | None = None,
        cost: Decimal | None = None,
        when: datetime | None = None,
    ) -> None:
        """
        Record the vaccination as administered.

        Args:
            completed_date: When it was given (defaults to ``when``/now)
            notes: Optional completion commentary
            veterinarian: Veterinarian who actually administered it
            cost: Actual cost, replacing the estimate

        Raises:
            InvalidRecordTypeError: If this is not a vaccination record
            InvalidTransitionError: If the entry is already terminal
        """
        self._require_transition(VaccinationStatus.COMPLETED)

        now = when or utc_now()
        completed = ensure_utc(completed_date) or now

        self.completed_date = completed
        if veterinarian:
            self.veterinarian = veterinarian
        if cost is not None:
            self.cost = cost

        self.append_note(f"Completed on: {completed.date().isoformat()}")
        if notes:
            self.append_note(f"Completion notes: {notes}")

        self._change_status(VaccinationStatus.COMPLETED, now)
        self.add_domain_event(
            VaccinationCompleted(
                aggregate_id=self.id,
                animal_id=self.animal_id,
                vaccination_type=self.vaccination_type,
                completed_date=completed,
            )
        )

    def reschedule(
        self,
        new_date: datetime | None,
        reason: str | None = None,
        when: datetime | None = None,
    ) -> None:
        """
        Move the entry to a new date. The entry stays open.

        Raises:
            ValidationError: If ``new_date`` is missing
            InvalidRecordTypeError: If this is not a vaccination record
            InvalidTransitionError: If the entry is already terminal
        """
        if new_date is None:
            raise ValidationError(
                "new_date", None, "a new date is required when rescheduling"
            )
        self._require_transition(VaccinationStatus.RESCHEDULED)

        now = when or utc_now()
        old_date = self.scheduled_date
        self.scheduled_date = ensure_utc(new_date)

        self.append_note(f"Rescheduled to: {self.scheduled_date.date().isoformat()}")
        if reason:
            self.append_note(f"Reschedule reason: {reason}")

        self._change_status(VaccinationStatus.RESCHEDULED, now)
        self.add_domain_event(
            VaccinationRescheduled(
                aggregate_id=self.id,
                animal_id=self.animal_id,
                vaccination_type=self.vaccination_type,
                old_date=old_date,
                new_date=self.scheduled_date,
                reason=reason,
            )
        )

    def cancel(self, reason: str | None = None, when: datetime | None = None) -> None:
        """
        Cancel the entry.

        Raises:
            InvalidRecordTypeError: If this is not a vaccination record
            InvalidTransitionError: If the entry is already terminal
        """
        self._require_transition(VaccinationStatus.CANCELLED)

        now = when or utc_now()
        self.append_note(f"Cancelled on: {now.date().isoformat()}")
        if reason:
            self.append_note(f"Cancellation reason: {reason}")

        self._change_status(VaccinationStatus.CANCELLED, now)
        self.add_domain_event(
            VaccinationCancelled(
                aggregate_id=self.id,
                animal_id=self.animal_id,
                vaccination_type=self.vaccination_type,
                reason=reason,
            )
        )

    def create_follow_up(
        self,
        interval_days: int,
        from_date: datetime | None = None,
        description: str | None = None,
        when: datetime | None = None,
    ) -> "VaccinationEntry":
        """
        Build the next entry of the same vaccination type.

        The follow-up is due ``interval_days`` after ``from_date`` (defaults to
        the completion date, then the scheduled date).
        """
        if interval_days < 1:
            raise ValidationError(
                "interval_days", interval_days, "interval must be at least 1 day"
            )
        base = ensure_utc(from_date) or self.completed_date or self.scheduled_date
        if base is None:
            raise ValidationError(
                "from_date", None, "a base date is required to schedule a follow-up"
            )

        return VaccinationEntry.create(
            animal_id=self.animal_id,
            vaccination_type=self.vaccination_type,
            description=description or "Follow-up vaccination",
            scheduled_date=base + timedelta(days=interval_days),
            veterinarian=self.veterinarian,
            cost=self.cost,
            notes="Auto-scheduled follow-up vaccination.",
            follow_up_of=self.id,
            when=when,
        )

    def _require_transition(self, target: VaccinationStatus) -> None:
        if not self.is_vaccination:
            raise InvalidRecordTypeError(self.id, self.record_type.value)
        if not self.status.can_transition_to(target):
            raise InvalidTransitionError(self.id, self.status.value, target.value)

    def _change_status(self, new_status: VaccinationStatus, when: datetime) -> None:
        """Internal method to change status, bump the version and raise events."""
        old_status = self.status
        self.status = new_status
        self.version += 1
        self.mark_updated(when)

        self.add_domain_event(
            VaccinationStatusChanged(
                aggregate_id=self.id,
                animal_id=self.animal_id,
                old_status=old_status.value,
                new_status=new_status.value,
                version=self.version,
            )
        )

    @staticmethod
    def create(
        animal_id: UUID,
        vaccination_type: str,
        description: str = "",
        scheduled_date: datetime | None = None,
        veterinarian: str | None = None,
        cost: Decimal | None = None,
        notes: str | None = None,
        follow_up_of: UUID | None = None,
        when: datetime | None = None,
    ) -> "VaccinationEntry":
        """
        Factory method to create a new scheduled vaccination entry.

        Returns:
            New VaccinationEntry with a pending VaccinationScheduled event
        """
        now = when or utc_now()
        entry = VaccinationEntry(
            animal_id=animal_id,
            vaccination_type=vaccination_type.strip(),
            description=description,
            veterinarian=veterinarian,
            cost=cost,
            scheduled_date=scheduled_date,
            notes=notes or "",
            follow_up_of=follow_up_of,
            created_at=now,
            updated_at=now,
        )
        entry.validate_entity()
        entry.add_domain_event(
            VaccinationScheduled(
                aggregate_id=entry.id,
                animal_id=animal_id,
                vaccination_type=entry.vaccination_type,
                scheduled_date=entry.scheduled_date,
                follow_up_of=follow_up_of,
            )
        )
        return entry
