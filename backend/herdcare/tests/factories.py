"""
Test Data Factories

Factory classes for building livestock and vaccination test data.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from herdcare.domain.livestock.entities import Animal, Group, VaccinationEntry
from herdcare.domain.livestock.value_objects import (
    BulkScheduleItem,
    HealthRecordType,
    HealthStatus,
    ScheduleItem,
    Sex,
    VaccinationStatus,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class GroupFactory:
    """Factory for creating Group test instances."""

    _counter = 0

    @classmethod
    def create(
        cls,
        farm_id: UUID | None = None,
        name: str | None = None,
        species: str = "cattle",
        breed: str | None = None,
        current_count: int = 0,
        **kwargs,
    ) -> Group:
        cls._counter += 1
        return Group(
            farm_id=farm_id or uuid4(),
            name=name or f"Herd {cls._counter}",
            species=species,
            breed=breed,
            current_count=current_count,
            created_at=kwargs.pop("created_at", NOW - timedelta(days=365)),
            **kwargs,
        )


class AnimalFactory:
    """Factory for creating Animal test instances."""

    _counter = 0

    @classmethod
    def create(
        cls,
        group_id: UUID | None = None,
        tag: str | None = None,
        name: str | None = None,
        sex: Sex = Sex.FEMALE,
        birth_date: date | None = date(2022, 3, 1),
        breed: str | None = "Angus",
        health_status: HealthStatus = HealthStatus.HEALTHY,
        **kwargs,
    ) -> Animal:
        cls._counter += 1
        return Animal(
            group_id=group_id or uuid4(),
            tag=tag or f"TAG-{cls._counter:04d}",
            name=name,
            sex=sex,
            birth_date=birth_date,
            breed=breed,
            health_status=health_status,
            created_at=kwargs.pop("created_at", NOW - timedelta(days=100)),
            **kwargs,
        )


class VaccinationEntryFactory:
    """Factory for creating VaccinationEntry test instances."""

    @staticmethod
    def create(
        animal_id: UUID | None = None,
        vaccination_type: str = "Clostridial",
        description: str = "7-way booster",
        scheduled_date: datetime | None = None,
        status: VaccinationStatus = VaccinationStatus.SCHEDULED,
        record_type: HealthRecordType = HealthRecordType.VACCINATION,
        cost: Decimal | None = Decimal("12.50"),
        created_at: datetime | None = None,
        **kwargs,
    ) -> VaccinationEntry:
        """Create an entry directly, bypassing the factory method's events."""
        return VaccinationEntry(
            animal_id=animal_id or uuid4(),
            vaccination_type=vaccination_type,
            description=description,
            scheduled_date=scheduled_date or NOW + timedelta(days=10),
            status=status,
            record_type=record_type,
            cost=cost,
            created_at=created_at or NOW - timedelta(days=60),
            **kwargs,
        )


class ScheduleItemFactory:
    @staticmethod
    def create(
        vaccination_type: str = "Clostridial",
        interval_days: int = 365,
        initial_date: datetime | None = None,
        estimated_cost: Decimal | None = Decimal("12.50"),
        **kwargs,
    ) -> ScheduleItem:
        return ScheduleItem(
            vaccination_type=vaccination_type,
            description=kwargs.pop("description", "Annual booster"),
            interval_days=interval_days,
            initial_date=initial_date or NOW + timedelta(days=3),
            estimated_cost=estimated_cost,
            **kwargs,
        )

    @staticmethod
    def create_bulk(
        vaccination_type: str = "Clostridial",
        scheduled_date: datetime | None = None,
        estimated_cost: Decimal | None = Decimal("12.50"),
        **kwargs,
    ) -> BulkScheduleItem:
        return BulkScheduleItem(
            vaccination_type=vaccination_type,
            scheduled_date=scheduled_date or NOW + timedelta(days=14),
            estimated_cost=estimated_cost,
            **kwargs,
        )
