"""
Domain Events Module

Exports all vaccination domain events.
"""

from .domain_events import (
    DomainEvent,
    VaccinationCancelled,
    VaccinationCompleted,
    VaccinationRescheduled,
    VaccinationScheduled,
    VaccinationStatusChanged,
)

__all__ = [
    "DomainEvent",
    "VaccinationScheduled",
    "VaccinationCompleted",
    "VaccinationRescheduled",
    "VaccinationCancelled",
    "VaccinationStatusChanged",
]
