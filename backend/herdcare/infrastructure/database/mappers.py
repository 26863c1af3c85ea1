"""
Mappers between domain entities and SQLModel records.
"""

from ...domain.livestock.entities.animal import Animal, Group
from ...domain.livestock.entities.vaccination_entry import VaccinationEntry
from ...domain.shared.base import ensure_utc
from .models import AnimalRecord, GroupRecord, VaccinationEntryRecord


class GroupMapper:
    @staticmethod
    def domain_to_sql(group: Group) -> GroupRecord:
        return GroupRecord(
            id=group.id,
            farm_id=group.farm_id,
            name=group.name,
            species=group.species,
            breed=group.breed,
            current_count=group.current_count,
            created_at=ensure_utc(group.created_at),
            updated_at=ensure_utc(group.updated_at),
        )

    @staticmethod
    def sql_to_domain(record: GroupRecord) -> Group:
        return Group(
            id=record.id,
            farm_id=record.farm_id,
            name=record.name,
            species=record.species,
            breed=record.breed,
            current_count=record.current_count,
            created_at=ensure_utc(record.created_at),
            updated_at=ensure_utc(record.updated_at),
        )


class AnimalMapper:
    @staticmethod
    def domain_to_sql(animal: Animal) -> AnimalRecord:
        return AnimalRecord(
            id=animal.id,
            group_id=animal.group_id,
            tag=animal.tag,
            name=animal.name,
            sex=animal.sex,
            birth_date=animal.birth_date,
            breed=animal.breed,
            weight=animal.weight,
            health_status=animal.health_status,
            created_at=ensure_utc(animal.created_at),
            updated_at=ensure_utc(animal.updated_at),
        )

    @staticmethod
    def sql_to_domain(record: AnimalRecord) -> Animal:
        return Animal(
            id=record.id,
            group_id=record.group_id,
            tag=record.tag,
            name=record.name,
            sex=record.sex,
            birth_date=record.birth_date,
            breed=record.breed,
            weight=record.weight,
            health_status=record.health_status,
            created_at=ensure_utc(record.created_at),
            updated_at=ensure_utc(record.updated_at),
        )


class VaccinationEntryMapper:
    """
    Converts VaccinationEntry aggregates to and from their table rows.

    Pending domain events are not persisted.
    """

    @staticmethod
    def domain_to_sql(entry: VaccinationEntry) -> VaccinationEntryRecord:
        record = VaccinationEntryRecord(
            id=entry.id, created_at=ensure_utc(entry.created_at)
        )
        VaccinationEntryMapper.copy_onto(entry, record)
        return record

    @staticmethod
    def copy_onto(entry: VaccinationEntry, record: VaccinationEntryRecord) -> None:
        """Overwrite the mutable columns of an existing row."""
        record.animal_id = entry.animal_id
        record.record_type = entry.record_type
        record.vaccination_type = entry.vaccination_type
        record.description = entry.description
        record.veterinarian = entry.veterinarian
        record.cost = entry.cost
        record.scheduled_date = ensure_utc(entry.scheduled_date)
        record.completed_date = ensure_utc(entry.completed_date)
        record.status = entry.status
        record.notes = entry.notes
        record.follow_up_of = entry.follow_up_of
        record.version = entry.version
        record.updated_at = ensure_utc(entry.updated_at)

    @staticmethod
    def sql_to_domain(record: VaccinationEntryRecord) -> VaccinationEntry:
        return VaccinationEntry(
            id=record.id,
            animal_id=record.animal_id,
            record_type=record.record_type,
            vaccination_type=record.vaccination_type,
            description=record.description,
            veterinarian=record.veterinarian,
            cost=record.cost,
            scheduled_date=record.scheduled_date,
            completed_date=record.completed_date,
            status=record.status,
            notes=record.notes,
            follow_up_of=record.follow_up_of,
            version=record.version,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
