from .animal_directory import InMemoryAnimalDirectory
from .vaccination_entry_repository import InMemoryVaccinationEntryRepository

__all__ = ["InMemoryAnimalDirectory", "InMemoryVaccinationEntryRepository"]
