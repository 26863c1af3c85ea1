"""
Value Objects

Immutable inputs and enumerations for the vaccination domain.
"""

from .enums import (
    HealthRecordType,
    HealthStatus,
    ReminderPriority,
    ReminderType,
    ScheduleItemStatus,
    Sex,
    VaccinationStatus,
)
from .priority_policy import DEFAULT_CRITICAL_KEYWORDS, ReminderPriorityPolicy
from .scheduling import (
    AnimalFilterCriteria,
    BulkScheduleItem,
    ScheduleItem,
    TargetScope,
    age_in_days,
)

__all__ = [
    "VaccinationStatus",
    "HealthRecordType",
    "HealthStatus",
    "Sex",
    "ReminderType",
    "ReminderPriority",
    "ScheduleItemStatus",
    "ReminderPriorityPolicy",
    "DEFAULT_CRITICAL_KEYWORDS",
    "ScheduleItem",
    "BulkScheduleItem",
    "AnimalFilterCriteria",
    "TargetScope",
    "age_in_days",
]
