"""Shared plumbing for services that write vaccination entries."""

import logging

from ...shared.base import DomainService
from ...shared.clock import Clock, SystemClock
from ...shared.event_bus import EventBusInterface
from ..entities.vaccination_entry import VaccinationEntry
from ..repositories.vaccination_entry_repository import VaccinationEntryRepository

logger = logging.getLogger(__name__)


class VaccinationServiceBase(DomainService):
    """Holds the entry store, clock and optional event bus."""

    def __init__(
        self,
        entry_repository: VaccinationEntryRepository,
        clock: Clock | None = None,
        event_bus: EventBusInterface | None = None,
    ) -> None:
        self._entries = entry_repository
        self._clock = clock or SystemClock()
        self._event_bus = event_bus

    async def _persist(self, entry: VaccinationEntry) -> VaccinationEntry:
        """Save an entry, then publish the events it raised."""
        saved = await self._entries.save(entry)
        if self._event_bus is not None:
            await self._event_bus.publish_from(entry)
        else:
            entry.clear_domain_events()
        logger.debug(
            f"Saved vaccination entry {entry.id} ({entry.status.value}, v{entry.version})"
        )
        return saved
