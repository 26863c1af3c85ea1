"""
Animal Directory Interface

Defines the contract for resolving farms, groups and animals.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from ..entities.animal import Animal, Group


class AnimalDirectory(ABC):
    """
    Abstract interface over the farm -> group -> animal hierarchy.

    Implementations are owned by the livestock CRUD side of the system; the
    vaccination engine only reads through it.
    """

    @abstractmethod
    async def get_animal(self, animal_id: UUID) -> Animal | None:
        """
        Retrieve an animal by its ID.

        Returns:
            Animal or None if not found

        Raises:
            RepositoryError: If retrieval fails
        """
        pass

    @abstractmethod
    async def list_animals_by_group(self, group_id: UUID) -> list[Animal]:
        """
        Retrieve the animals of a group (empty for an unknown group).

        Raises:
            RepositoryError: If retrieval fails
        """
        pass

    @abstractmethod
    async def list_groups_by_farm(self, farm_id: UUID) -> list[Group]:
        """
        Retrieve the groups of a farm (empty for an unknown farm).

        Raises:
            RepositoryError: If retrieval fails
        """
        pass

    @abstractmethod
    async def get_group(self, group_id: UUID) -> Group | None:
        """
        Retrieve a group by its ID.

        Returns:
            Group or None if not found
        """
        pass

    @abstractmethod
    async def update_group_count(self, group_id: UUID, new_count: int) -> Group:
        """
        Overwrite a group's head count.

        Raises:
            GroupNotFoundError: If the group does not exist
            ValidationError: If the count is negative
        """
        pass

    @abstractmethod
    async def add_animal(self, animal: Animal) -> Animal:
        """
        Register or update an animal and keep group counts in step in one write.

        A new animal increments its group. Re-adding a known animal under a
        different group moves it: the old group is decremented and the new one
        incremented.

        Raises:
            GroupNotFoundError: If the animal's group does not exist
        """
        pass

    @abstractmethod
    async def remove_animal(self, animal_id: UUID) -> bool:
        """
        Remove an animal and decrement its group's count in one write.

        Returns:
            True if an animal was removed
        """
        pass
