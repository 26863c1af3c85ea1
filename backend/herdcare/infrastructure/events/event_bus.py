"""
In-process event bus for vaccination domain events.

Handlers may be plain functions or coroutines; a failing handler is logged
and does not stop delivery to the others.
"""

import inspect
import logging
from collections import defaultdict

from ...domain.shared.event_bus import EventBusInterface, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBusInterface):
    """
    Routes events to the handlers registered for their exact type.

    Events are delivered in publish order and kept in a bounded history for
    inspection.
    """

    def __init__(self, max_history_size: int = 1000) -> None:
        self._handlers: dict[type, list[EventHandler]] = defaultdict(list)
        self._event_history: list[object] = []
        self._max_history_size = max_history_size

    async def publish(self, event: object) -> None:
        self._add_to_history(event)

        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))
        if not handlers:
            logger.debug(f"No handlers registered for event type: {event_type.__name__}")
            return

        logger.debug(f"Publishing {event_type.__name__} to {len(handlers)} handler(s)")
        for handler in handlers:
            try:
                outcome = handler(event)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as e:
                logger.error(
                    f"Error handling event {event_type.__name__} with {handler}: {e}"
                )

    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        if handler in self._handlers[event_type]:
            logger.warning(
                f"Handler {handler} already subscribed to event type {event_type.__name__}"
            )
            return
        self._handlers[event_type].append(handler)
        logger.info(f"Subscribed handler {handler} to event type {event_type.__name__}")

    def unsubscribe(self, event_type: type, handler: EventHandler) -> None:
        if handler not in self._handlers[event_type]:
            logger.warning(
                f"Handler {handler} not found for event type {event_type.__name__}"
            )
            return
        self._handlers[event_type].remove(handler)

    def clear_handlers(self, event_type: type | None = None) -> None:
        if event_type:
            self._handlers.pop(event_type, None)
        else:
            self._handlers.clear()

    def get_handler_count(self, event_type: type) -> int:
        return len(self._handlers.get(event_type, []))

    def get_event_history(self, event_type: type | None = None) -> list[object]:
        """Published events, oldest first, optionally of one type."""
        if event_type:
            return [e for e in self._event_history if type(e) is event_type]
        return self._event_history.copy()

    def clear_event_history(self) -> None:
        self._event_history.clear()

    def _add_to_history(self, event: object) -> None:
        self._event_history.append(event)
        if len(self._event_history) > self._max_history_size:
            self._event_history.pop(0)
