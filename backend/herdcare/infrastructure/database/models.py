"""
SQLModel table models for the vaccination engine.

Timestamp columns are timezone-aware and always written as UTC. Backends
that drop the offset on read (SQLite) are normalized back to UTC by the
mappers.
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import CheckConstraint, DateTime, Index
from sqlmodel import Column, Field, SQLModel, Text
from sqlmodel import Enum as SQLEnum

from ...domain.livestock.value_objects.enums import (
    HealthRecordType,
    HealthStatus,
    Sex,
    VaccinationStatus,
)


def utc_timestamp(nullable: bool = False) -> Column:
    return Column(DateTime(timezone=True), nullable=nullable)


class GroupRecord(SQLModel, table=True):
    __tablename__ = "livestock_groups"

    id: UUID = Field(primary_key=True)
    farm_id: UUID = Field(index=True)
    name: str = Field(max_length=100)
    species: str = Field(max_length=50)
    breed: str | None = Field(default=None, max_length=100)
    current_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(sa_column=utc_timestamp())
    updated_at: datetime | None = Field(default=None, sa_column=utc_timestamp(True))

    __table_args__ = (CheckConstraint("current_count >= 0"),)


class AnimalRecord(SQLModel, table=True):
    __tablename__ = "livestock_animals"

    id: UUID = Field(primary_key=True)
    group_id: UUID = Field(foreign_key="livestock_groups.id", index=True)
    tag: str = Field(max_length=50)
    name: str | None = Field(default=None, max_length=100)
    sex: Sex = Field(sa_column=Column(SQLEnum(Sex), nullable=False))
    birth_date: date | None = None
    breed: str | None = Field(default=None, max_length=100)
    weight: float | None = None
    health_status: HealthStatus = Field(
        default=HealthStatus.HEALTHY,
        sa_column=Column(SQLEnum(HealthStatus), nullable=False),
    )
    created_at: datetime = Field(sa_column=utc_timestamp())
    updated_at: datetime | None = Field(default=None, sa_column=utc_timestamp(True))


class VaccinationEntryRecord(SQLModel, table=True):
    __tablename__ = "vaccination_entries"

    id: UUID = Field(primary_key=True)
    animal_id: UUID = Field(foreign_key="livestock_animals.id")
    record_type: HealthRecordType = Field(
        default=HealthRecordType.VACCINATION,
        sa_column=Column(SQLEnum(HealthRecordType), nullable=False),
    )
    vaccination_type: str = Field(max_length=100)
    description: str = Field(default="", max_length=500)
    veterinarian: str | None = Field(default=None, max_length=100)
    cost: Decimal | None = Field(default=None, max_digits=12, decimal_places=2)
    scheduled_date: datetime | None = Field(default=None, sa_column=utc_timestamp(True))
    completed_date: datetime | None = Field(default=None, sa_column=utc_timestamp(True))
    status: VaccinationStatus = Field(
        default=VaccinationStatus.SCHEDULED,
        sa_column=Column(SQLEnum(VaccinationStatus), nullable=False),
    )
    notes: str = Field(default="", sa_column=Column(Text, nullable=False))
    follow_up_of: UUID | None = None
    version: int = Field(default=1, ge=1)
    # insert order, breaks ties between entries created at the same instant
    sequence: int = Field(default=0)
    created_at: datetime = Field(sa_column=utc_timestamp())
    updated_at: datetime | None = Field(default=None, sa_column=utc_timestamp(True))

    __table_args__ = (
        CheckConstraint("version >= 1"),
        Index("idx_vaccination_entries_animal", "animal_id", "created_at", "sequence"),
        Index("idx_vaccination_entries_scheduled", "scheduled_date"),
    )
