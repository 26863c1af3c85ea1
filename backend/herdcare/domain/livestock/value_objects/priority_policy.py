"""Reminder ranking policy."""

from collections.abc import Mapping

from pydantic import Field

from ...shared.base import ValueObject
from .enums import ReminderPriority

DEFAULT_CRITICAL_KEYWORDS: dict[str, int] = {
    "rabies": 14,
    "core": 14,
    "mandatory": 14,
    "required": 14,
}


class ReminderPriorityPolicy(ValueObject):
    """
    Ranks a reminder from its days-until-due and vaccination type.

    Rules are evaluated in order and the first match wins:

    1. overdue -> HIGH
    2. type contains a critical keyword -> HIGH inside that keyword's window,
       MEDIUM beyond it
    3. within ``due_soon_days`` -> HIGH
    4. within ``medium_days`` -> MEDIUM
    5. otherwise LOW

    ``critical_keywords`` maps a case-insensitive keyword to its HIGH window in
    days, so deployments can change the critical list without code changes.
    """

    critical_keywords: dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_CRITICAL_KEYWORDS)
    )
    due_soon_days: int = Field(default=7, ge=0)
    medium_days: int = Field(default=14, ge=0)

    @classmethod
    def from_keywords(
        cls,
        keywords: Mapping[str, int],
        due_soon_days: int = 7,
        medium_days: int = 14,
    ) -> "ReminderPriorityPolicy":
        return cls(
            critical_keywords={k.lower(): v for k, v in keywords.items()},
            due_soon_days=due_soon_days,
            medium_days=medium_days,
        )

    def critical_window(self, vaccination_type: str) -> int | None:
        """Widest HIGH window among matching keywords, or None if not critical."""
        lowered = vaccination_type.lower()
        windows = [
            window
            for keyword, window in self.critical_keywords.items()
            if keyword.lower() in lowered
        ]
        return max(windows) if windows else None

    def is_critical(self, vaccination_type: str) -> bool:
        return self.critical_window(vaccination_type) is not None

    def priority_for(self, days_until_due: int, vaccination_type: str) -> ReminderPriority:
        if days_until_due < 0:
            return ReminderPriority.HIGH

        window = self.critical_window(vaccination_type)
        if window is not None:
            return ReminderPriority.HIGH if days_until_due <= window else ReminderPriority.MEDIUM

        if days_until_due <= self.due_soon_days:
            return ReminderPriority.HIGH
        if days_until_due <= self.medium_days:
            return ReminderPriority.MEDIUM
        return ReminderPriority.LOW
