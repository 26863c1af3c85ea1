"""Domain enums for livestock vaccination."""

from enum import Enum


class VaccinationStatus(str, Enum):
    """Vaccination entry status enumeration."""

    SCHEDULED = "scheduled"
    RESCHEDULED = "rescheduled"  # Audit marker; still logically scheduled
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_open(self) -> bool:
        """Check if the entry is still awaiting administration."""
        return self in {VaccinationStatus.SCHEDULED, VaccinationStatus.RESCHEDULED}

    @property
    def is_terminal(self) -> bool:
        """Check if status is terminal (cannot transition further)."""
        return self in {VaccinationStatus.COMPLETED, VaccinationStatus.CANCELLED}

    def can_transition_to(self, target_status: "VaccinationStatus") -> bool:
        """Check if an entry can move from current status to target status."""
        open_targets = {
            VaccinationStatus.COMPLETED,
            VaccinationStatus.RESCHEDULED,
            VaccinationStatus.CANCELLED,
        }
        valid_transitions = {
            VaccinationStatus.SCHEDULED: open_targets,
            VaccinationStatus.RESCHEDULED: open_targets,
            VaccinationStatus.COMPLETED: set(),  # Terminal state
            VaccinationStatus.CANCELLED: set(),  # Terminal state
        }
        return target_status in valid_transitions.get(self, set())


class HealthRecordType(str, Enum):
    """Kind of health record held in the entry store."""

    VACCINATION = "vaccination"
    TREATMENT = "treatment"
    CHECKUP = "checkup"
    INJURY = "injury"
    ILLNESS = "illness"


class HealthStatus(str, Enum):
    """Animal health status."""

    HEALTHY = "healthy"
    SICK = "sick"
    INJURED = "injured"
    DECEASED = "deceased"


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"


class ReminderType(str, Enum):
    """Time-window classification of a reminder."""

    UPCOMING = "upcoming"
    DUE_SOON = "due_soon"
    OVERDUE = "overdue"


class ReminderPriority(str, Enum):
    """Reminder priority; lower rank sorts first."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {
            ReminderPriority.HIGH: 0,
            ReminderPriority.MEDIUM: 1,
            ReminderPriority.LOW: 2,
        }[self]


class ScheduleItemStatus(str, Enum):
    """Derived status of an entry in the schedule view."""

    SCHEDULED = "scheduled"
    OVERDUE = "overdue"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
