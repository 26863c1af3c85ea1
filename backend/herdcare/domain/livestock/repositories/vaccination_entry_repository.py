"""
Vaccination Entry Repository Interface

Defines the contract for vaccination entry persistence.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from ..entities.vaccination_entry import VaccinationEntry


class VaccinationEntryRepository(ABC):
    """
    Abstract repository interface for VaccinationEntry aggregates.

    ``save`` is an upsert guarded by the entry's version: a new entry is
    stored as-is, an existing one is only overwritten when the stored version
    is the one the writer loaded, i.e. ``entry.version - 1`` after the single
    transition that preceded the save.
    """

    @abstractmethod
    async def save(self, entry: VaccinationEntry) -> VaccinationEntry:
        """
        Insert or update an entry.

        Returns:
            The saved entry

        Raises:
            ConcurrencyConflictError: If the stored version moved on
            RepositoryError: If the save fails
        """
        pass

    @abstractmethod
    async def find_by_id(self, entry_id: UUID) -> VaccinationEntry | None:
        """
        Retrieve an entry by its ID.

        Returns:
            VaccinationEntry or None if not found
        """
        pass

    @abstractmethod
    async def find_by_animal(self, animal_id: UUID) -> list[VaccinationEntry]:
        """
        Retrieve all health records of an animal, most recent first.

        Raises:
            RepositoryError: If retrieval fails
        """
        pass
