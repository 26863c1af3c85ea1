"""Transient inputs for schedule creation and target resolution."""

from datetime import date, datetime, timedelta
from decimal import Decimal
from uuid import UUID

from pydantic import Field, field_validator

from ...shared.base import ValueObject, ensure_utc
from .enums import HealthStatus

DESCRIPTION_MAX_LENGTH = 500


class ScheduleItem(ValueObject):
    """
    One recurring vaccination to apply to every target animal.

    ``interval_days`` is range-checked by the schedule generator so that a bad
    item surfaces as a domain ValidationError before anything is written.
    """

    vaccination_type: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    interval_days: int
    initial_date: datetime
    veterinarian: str | None = None
    estimated_cost: Decimal | None = Field(default=None, ge=0)
    notes: str | None = None

    @field_validator("initial_date")
    @classmethod
    def normalize_initial_date(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @property
    def next_date(self) -> datetime:
        return self.initial_date + timedelta(days=self.interval_days)


class BulkScheduleItem(ValueObject):
    """A vaccination at an absolute date, applied by the bulk coordinator."""

    vaccination_type: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    scheduled_date: datetime
    veterinarian: str | None = None
    estimated_cost: Decimal | None = Field(default=None, ge=0)
    notes: str | None = None

    @field_validator("scheduled_date")
    @classmethod
    def normalize_scheduled_date(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class AnimalFilterCriteria(ValueObject):
    """Post-resolution filter for bulk targets. Unset fields do not filter."""

    species: str | None = None
    breed: str | None = None
    age_min_days: int | None = Field(default=None, ge=0)
    age_max_days: int | None = Field(default=None, ge=0)
    health_status: list[HealthStatus] | None = None

    @property
    def filters_on_age(self) -> bool:
        return self.age_min_days is not None or self.age_max_days is not None

    @property
    def filters_on_species(self) -> bool:
        return bool(self.species)


class TargetScope(ValueObject):
    """
    A farm, group or single-animal scope.

    Exactly one of the identifiers is expected; the resolver enforces it.
    """

    farm_id: UUID | None = None
    group_id: UUID | None = None
    animal_id: UUID | None = None

    @classmethod
    def for_farm(cls, farm_id: UUID) -> "TargetScope":
        return cls(farm_id=farm_id)

    @classmethod
    def for_group(cls, group_id: UUID) -> "TargetScope":
        return cls(group_id=group_id)

    @classmethod
    def for_animal(cls, animal_id: UUID) -> "TargetScope":
        return cls(animal_id=animal_id)

    @property
    def given(self) -> list[str]:
        return [
            name
            for name in ("farm_id", "group_id", "animal_id")
            if getattr(self, name) is not None
        ]


def age_in_days(birth_date: date | None, today: date) -> int | None:
    """Whole days between birth and today, or None without a birth date."""
    if birth_date is None:
        return None
    return (today - birth_date).days
