"""
Domain Exceptions

Defines custom exceptions for vaccination scheduling errors with discriminated
error types. Single-entity operations raise these directly; bulk operations
capture per-item failures in their result payload instead.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any
from uuid import UUID

if TYPE_CHECKING:
    from ..livestock.services.bulk_scheduling_service import BulkScheduleResult


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    EMPTY_TARGET = "empty_target"
    INVALID_TRANSITION = "invalid_transition"
    INVALID_RECORD_TYPE = "invalid_record_type"
    PARTIAL_FAILURE = "partial_failure"
    CONFLICT = "conflict"
    TIMEOUT = "timeout"
    REPOSITORY = "repository"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when a required field is missing or out of range."""

    def __init__(
        self,
        field_name: str,
        value: Any,
        message: str,
        error_code: str | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value
        self.error_code = error_code or "VALIDATION_ERROR"

        full_message = f"Validation failed for field '{field_name}': {message}"
        details = {
            "field": field_name,
            "value": str(value) if value is not None else None,
            "error_code": self.error_code,
        }
        super().__init__(full_message, ErrorType.VALIDATION, details)


class BatchTooLargeError(ValidationError):
    """Raised when a bulk request exceeds the configured batch size."""

    def __init__(self, requested: int, limit: int) -> None:
        super().__init__(
            "batch_size",
            requested,
            f"{requested} (animal, item) pairs exceeds the limit of {limit}",
            "BATCH_TOO_LARGE",
        )
        self.requested = requested
        self.limit = limit


# Not found
class NotFoundError(DomainError):
    """Base class for unknown identifiers."""

    def __init__(self, entity_type: str, entity_id: UUID) -> None:
        super().__init__(
            f"{entity_type} not found: {entity_id}",
            ErrorType.NOT_FOUND,
            {"entity_type": entity_type, "entity_id": str(entity_id)},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class AnimalNotFoundError(NotFoundError):
    """Raised when an animal id does not resolve."""

    def __init__(self, animal_id: UUID) -> None:
        super().__init__("Animal", animal_id)
        self.animal_id = animal_id


class GroupNotFoundError(NotFoundError):
    """Raised when a group id does not resolve."""

    def __init__(self, group_id: UUID) -> None:
        super().__init__("Group", group_id)
        self.group_id = group_id


class VaccinationEntryNotFoundError(NotFoundError):
    """Raised when a vaccination entry id does not resolve."""

    def __init__(self, entry_id: UUID) -> None:
        super().__init__("VaccinationEntry", entry_id)
        self.entry_id = entry_id


class EmptyTargetError(DomainError):
    """Raised when a resolved scope contains no animals."""

    def __init__(self, message: str = "No animals found matching the specified criteria") -> None:
        super().__init__(message, ErrorType.EMPTY_TARGET)


# State machine
class InvalidTransitionError(DomainError):
    """Raised when a transition is attempted out of a terminal status."""

    def __init__(self, entry_id: UUID, current_status: str, target_status: str) -> None:
        super().__init__(
            f"Cannot move vaccination entry {entry_id} from {current_status} to {target_status}",
            ErrorType.INVALID_TRANSITION,
            {
                "entry_id": str(entry_id),
                "current_status": current_status,
                "target_status": target_status,
            },
        )
        self.entry_id = entry_id
        self.current_status = current_status
        self.target_status = target_status


class InvalidRecordTypeError(DomainError):
    """Raised when a vaccination transition targets a non-vaccination record."""

    def __init__(self, entry_id: UUID, record_type: str) -> None:
        super().__init__(
            f"Record {entry_id} is a {record_type} record, not a vaccination record",
            ErrorType.INVALID_RECORD_TYPE,
            {"entry_id": str(entry_id), "record_type": record_type},
        )
        self.entry_id = entry_id
        self.record_type = record_type


class ConcurrencyConflictError(DomainError):
    """Raised when an entry changed since the caller read it."""

    def __init__(self, entry_id: UUID, expected_version: int, actual_version: int) -> None:
        super().__init__(
            f"Concurrent modification of vaccination entry {entry_id}: "
            f"expected version {expected_version}, found {actual_version}",
            ErrorType.CONFLICT,
            {
                "entry_id": str(entry_id),
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )
        self.entry_id = entry_id
        self.expected_version = expected_version
        self.actual_version = actual_version


# Bulk
class PartialFailureError(DomainError):
    """Raised on demand when a bulk batch completed with per-item errors."""

    def __init__(self, result: BulkScheduleResult) -> None:
        super().__init__(
            f"Bulk scheduling completed with {result.total_errors} error(s)",
            ErrorType.PARTIAL_FAILURE,
            {
                "total_errors": result.total_errors,
                "total_scheduled": result.total_vaccinations_scheduled,
            },
        )
        self.result = result


class BulkOperationTimeoutError(DomainError):
    """
    Raised when a bulk batch exceeds its overall deadline.

    Entries saved before the deadline stay saved; ``partial_result`` lists
    them per animal.
    """

    def __init__(
        self,
        timeout_seconds: float,
        partial_result: BulkScheduleResult | None = None,
    ) -> None:
        details: dict[str, Any] = {"timeout_seconds": timeout_seconds}
        if partial_result is not None:
            details["total_scheduled"] = partial_result.total_vaccinations_scheduled
            details["scheduled_entry_ids"] = [
                str(entry.id)
                for animal_result in partial_result.results
                for entry in animal_result.scheduled_entries
            ]
        super().__init__(
            f"Bulk scheduling did not finish within {timeout_seconds} seconds",
            ErrorType.TIMEOUT,
            details,
        )
        self.timeout_seconds = timeout_seconds
        self.partial_result = partial_result


# Repository
class RepositoryError(DomainError):
    """Raised when the underlying store fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorType.REPOSITORY)
