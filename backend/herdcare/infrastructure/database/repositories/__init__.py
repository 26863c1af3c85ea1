from .animal_directory import SQLAnimalDirectory
from .vaccination_entry_repository import SQLVaccinationEntryRepository

__all__ = ["SQLAnimalDirectory", "SQLVaccinationEntryRepository"]
