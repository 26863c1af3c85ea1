"""In-memory vaccination entry store."""

import itertools
import logging
from uuid import UUID

from ...domain.livestock.entities.vaccination_entry import VaccinationEntry
from ...domain.livestock.repositories.vaccination_entry_repository import (
    VaccinationEntryRepository,
)
from ...domain.shared.exceptions import ConcurrencyConflictError

logger = logging.getLogger(__name__)


class InMemoryVaccinationEntryRepository(VaccinationEntryRepository):
    """
    Dictionary-backed entry store enforcing the version check on save.

    Entries created at the same instant are returned newest-insert first.
    """

    def __init__(self) -> None:
        self._entries: dict[UUID, VaccinationEntry] = {}
        self._sequence: dict[UUID, int] = {}
        self._counter = itertools.count()
        self.save_count = 0

    async def save(self, entry: VaccinationEntry) -> VaccinationEntry:
        stored = self._entries.get(entry.id)
        if stored is not None and stored.version != entry.version - 1:
            logger.warning(
                f"Rejected stale write of entry {entry.id}: "
                f"stored v{stored.version}, incoming v{entry.version}"
            )
            raise ConcurrencyConflictError(entry.id, entry.version - 1, stored.version)

        copy = entry.model_copy(deep=True)
        copy.clear_domain_events()
        self._entries[entry.id] = copy
        self._sequence.setdefault(entry.id, next(self._counter))
        self.save_count += 1
        return entry

    async def find_by_id(self, entry_id: UUID) -> VaccinationEntry | None:
        entry = self._entries.get(entry_id)
        return entry.model_copy(deep=True) if entry else None

    async def find_by_animal(self, animal_id: UUID) -> list[VaccinationEntry]:
        entries = [e for e in self._entries.values() if e.animal_id == animal_id]
        entries.sort(key=lambda e: (e.created_at, self._sequence[e.id]), reverse=True)
        return [e.model_copy(deep=True) for e in entries]

    async def list_all(self) -> list[VaccinationEntry]:
        return [e.model_copy(deep=True) for e in self._entries.values()]
