"""
Domain Events

Events raised by the VaccinationEntry aggregate. They are collected on the
aggregate and published after the entry has been saved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    aggregate_id: UUID
    event_id: UUID = field(default_factory=uuid4, kw_only=True)
    occurred_at: datetime = field(default_factory=_utc_now, kw_only=True)


@dataclass(frozen=True)
class VaccinationScheduled(DomainEvent):
    """Raised when a new vaccination entry is created."""

    animal_id: UUID
    vaccination_type: str
    scheduled_date: datetime | None
    follow_up_of: UUID | None = None


@dataclass(frozen=True)
class VaccinationCompleted(DomainEvent):
    """Raised when a vaccination is administered."""

    animal_id: UUID
    vaccination_type: str
    completed_date: datetime


@dataclass(frozen=True)
class VaccinationRescheduled(DomainEvent):
    """Raised when a vaccination moves to a new date."""

    animal_id: UUID
    vaccination_type: str
    old_date: datetime | None
    new_date: datetime
    reason: str | None = None


@dataclass(frozen=True)
class VaccinationCancelled(DomainEvent):
    """Raised when a vaccination is cancelled."""

    animal_id: UUID
    vaccination_type: str
    reason: str | None = None


@dataclass(frozen=True)
class VaccinationStatusChanged(DomainEvent):
    """Raised on every status change."""

    animal_id: UUID
    old_status: str
    new_status: str
    version: int
