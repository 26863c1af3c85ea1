"""
SQL-backed vaccination entry store.

Updates lock the row and compare versions before writing, so a writer that
loaded an older version fails instead of overwriting a newer one.
"""

import logging
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ....domain.livestock.entities.vaccination_entry import VaccinationEntry
from ....domain.livestock.repositories.vaccination_entry_repository import (
    VaccinationEntryRepository,
)
from ....domain.shared.exceptions import ConcurrencyConflictError, RepositoryError
from ..mappers import VaccinationEntryMapper
from ..models import VaccinationEntryRecord

logger = logging.getLogger(__name__)


class SQLVaccinationEntryRepository(VaccinationEntryRepository):
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    async def save(self, entry: VaccinationEntry) -> VaccinationEntry:
        try:
            with Session(self._engine) as session:
                statement = (
                    select(VaccinationEntryRecord)
                    .where(VaccinationEntryRecord.id == entry.id)
                    .with_for_update()
                )
                record = session.exec(statement).first()
                if record is None:
                    record = VaccinationEntryMapper.domain_to_sql(entry)
                    last = session.exec(
                        select(func.max(VaccinationEntryRecord.sequence))
                    ).one()
                    record.sequence = (last or 0) + 1
                    session.add(record)
                else:
                    if record.version != entry.version - 1:
                        logger.warning(
                            f"Rejected stale write of entry {entry.id}: "
                            f"stored v{record.version}, incoming v{entry.version}"
                        )
                        raise ConcurrencyConflictError(
                            entry.id, entry.version - 1, record.version
                        )
                    VaccinationEntryMapper.copy_onto(entry, record)
                    session.add(record)
                session.commit()
            return entry
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Error saving vaccination entry {entry.id}: {str(e)}"
            ) from e

    async def find_by_id(self, entry_id: UUID) -> VaccinationEntry | None:
        try:
            with Session(self._engine) as session:
                record = session.get(VaccinationEntryRecord, entry_id)
                return VaccinationEntryMapper.sql_to_domain(record) if record else None
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Error loading vaccination entry {entry_id}: {str(e)}"
            ) from e

    async def find_by_animal(self, animal_id: UUID) -> list[VaccinationEntry]:
        try:
            with Session(self._engine) as session:
                statement = (
                    select(VaccinationEntryRecord)
                    .where(VaccinationEntryRecord.animal_id == animal_id)
                    .order_by(
                        VaccinationEntryRecord.created_at.desc(),
                        VaccinationEntryRecord.sequence.desc(),
                    )
                )
                return [
                    VaccinationEntryMapper.sql_to_domain(r) for r in session.exec(statement)
                ]
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Error loading entries of animal {animal_id}: {str(e)}"
            ) from e
