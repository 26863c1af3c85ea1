"""
SQL-backed animal directory.

Animal inserts, group moves and deletes update ``current_count`` of the
groups involved in the same transaction.
"""

import logging
from uuid import UUID

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ....domain.livestock.entities.animal import Animal, Group
from ....domain.livestock.repositories.animal_directory import AnimalDirectory
from ....domain.shared.base import utc_now
from ....domain.shared.exceptions import (
    GroupNotFoundError,
    RepositoryError,
    ValidationError,
)
from ..mappers import AnimalMapper, GroupMapper
from ..models import AnimalRecord, GroupRecord

logger = logging.getLogger(__name__)


class SQLAnimalDirectory(AnimalDirectory):
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    async def add_group(self, group: Group) -> Group:
        try:
            with Session(self._engine) as session:
                session.add(GroupMapper.domain_to_sql(group))
                session.commit()
            return group
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error saving group {group.id}: {str(e)}") from e

    async def get_animal(self, animal_id: UUID) -> Animal | None:
        try:
            with Session(self._engine) as session:
                record = session.get(AnimalRecord, animal_id)
                return AnimalMapper.sql_to_domain(record) if record else None
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error loading animal {animal_id}: {str(e)}") from e

    async def list_animals_by_group(self, group_id: UUID) -> list[Animal]:
        try:
            with Session(self._engine) as session:
                statement = (
                    select(AnimalRecord)
                    .where(AnimalRecord.group_id == group_id)
                    .order_by(AnimalRecord.created_at, AnimalRecord.tag)
                )
                return [AnimalMapper.sql_to_domain(r) for r in session.exec(statement)]
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Error listing animals of group {group_id}: {str(e)}"
            ) from e

    async def list_groups_by_farm(self, farm_id: UUID) -> list[Group]:
        try:
            with Session(self._engine) as session:
                statement = (
                    select(GroupRecord)
                    .where(GroupRecord.farm_id == farm_id)
                    .order_by(GroupRecord.created_at, GroupRecord.name)
                )
                return [GroupMapper.sql_to_domain(r) for r in session.exec(statement)]
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Error listing groups of farm {farm_id}: {str(e)}"
            ) from e

    async def get_group(self, group_id: UUID) -> Group | None:
        try:
            with Session(self._engine) as session:
                record = session.get(GroupRecord, group_id)
                return GroupMapper.sql_to_domain(record) if record else None
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error loading group {group_id}: {str(e)}") from e

    async def update_group_count(self, group_id: UUID, new_count: int) -> Group:
        if new_count < 0:
            raise ValidationError("current_count", new_count, "count cannot be negative")
        try:
            with Session(self._engine) as session:
                record = session.get(GroupRecord, group_id)
                if record is None:
                    raise GroupNotFoundError(group_id)
                record.current_count = new_count
                record.updated_at = utc_now()
                session.add(record)
                session.commit()
                session.refresh(record)
                return GroupMapper.sql_to_domain(record)
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Error updating count of group {group_id}: {str(e)}"
            ) from e

    async def add_animal(self, animal: Animal) -> Animal:
        try:
            with Session(self._engine) as session:
                group = session.get(GroupRecord, animal.group_id)
                if group is None:
                    raise GroupNotFoundError(animal.group_id)
                existing = session.get(AnimalRecord, animal.id)
                if existing is None or existing.group_id != animal.group_id:
                    now = utc_now()
                    if existing is not None:
                        previous = session.get(GroupRecord, existing.group_id)
                        if previous is not None:
                            previous.current_count = max(previous.current_count - 1, 0)
                            previous.updated_at = now
                            session.add(previous)
                    group.current_count += 1
                    group.updated_at = now
                    session.add(group)
                session.merge(AnimalMapper.domain_to_sql(animal))
                session.commit()
            logger.debug(f"Added animal {animal.tag} to group {animal.group_id}")
            return animal
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error adding animal {animal.id}: {str(e)}") from e

    async def remove_animal(self, animal_id: UUID) -> bool:
        try:
            with Session(self._engine) as session:
                record = session.get(AnimalRecord, animal_id)
                if record is None:
                    return False
                group = session.get(GroupRecord, record.group_id)
                if group is not None:
                    group.current_count = max(group.current_count - 1, 0)
                    group.updated_at = utc_now()
                    session.add(group)
                session.delete(record)
                session.commit()
                return True
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error removing animal {animal_id}: {str(e)}") from e
