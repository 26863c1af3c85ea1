from .bulk_scheduling_service import (
    AnimalBulkResult,
    BulkScheduleRequest,
    BulkScheduleResult,
    BulkScheduleSummary,
    BulkSchedulingService,
    SkippedVaccination,
)
from .reminder_service import (
    ReminderService,
    ReminderSummary,
    RemindersResult,
    VaccinationReminder,
)
from .schedule_generator import ScheduleGenerator, ScheduleResult
from .schedule_view_service import (
    ScheduleEntryView,
    ScheduleTotals,
    ScheduleViewService,
    VaccinationScheduleView,
)
from .status_transition_service import TransitionResult, VaccinationStatusService
from .target_resolver import ResolvedTargets, TargetResolver

__all__ = [
    "AnimalBulkResult",
    "BulkScheduleRequest",
    "BulkScheduleResult",
    "BulkScheduleSummary",
    "BulkSchedulingService",
    "ReminderService",
    "ReminderSummary",
    "RemindersResult",
    "ResolvedTargets",
    "ScheduleEntryView",
    "ScheduleGenerator",
    "ScheduleResult",
    "ScheduleTotals",
    "ScheduleViewService",
    "SkippedVaccination",
    "TargetResolver",
    "TransitionResult",
    "VaccinationReminder",
    "VaccinationScheduleView",
    "VaccinationStatusService",
]
