"""
Repository Interfaces

Abstract interfaces for the animal directory and the vaccination entry store.
Implementations live in the infrastructure layer, keeping the domain
independent of persistence technology.
"""

from .animal_directory import AnimalDirectory
from .vaccination_entry_repository import VaccinationEntryRepository

__all__ = ["AnimalDirectory", "VaccinationEntryRepository"]
