from .engine import create_db_engine, init_db
from .repositories import SQLAnimalDirectory, SQLVaccinationEntryRepository

__all__ = [
    "SQLAnimalDirectory",
    "SQLVaccinationEntryRepository",
    "create_db_engine",
    "init_db",
]
