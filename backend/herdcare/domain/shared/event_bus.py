"""Event bus contract used by domain services to publish aggregate events."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

from .base import AggregateRoot

EventHandler = Callable[[Any], Awaitable[None] | None]


class EventBusInterface(ABC):
    """
    Abstract interface for event bus implementations.

    Defines the contract for publishing events and subscribing to event types.
    """

    @abstractmethod
    async def publish(self, event: Any) -> None:
        """Publish a domain event to all handlers registered for its type."""
        pass

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """Subscribe a handler (sync or async) to a specific event type."""
        pass

    @abstractmethod
    def unsubscribe(self, event_type: type, handler: EventHandler) -> None:
        """Unsubscribe a handler from a specific event type."""
        pass

    async def publish_from(self, aggregate: AggregateRoot) -> None:
        """Publish and then clear all pending events of an aggregate."""
        events = aggregate.get_domain_events()
        aggregate.clear_domain_events()
        for event in events:
            await self.publish(event)
