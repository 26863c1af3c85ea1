"""
Domain Entities

Entities with identity: the directory's animals and groups, and the
VaccinationEntry aggregate that carries the status state machine.
"""

from .animal import Animal, Group
from .vaccination_entry import VaccinationEntry

__all__ = ["Animal", "Group", "VaccinationEntry"]
