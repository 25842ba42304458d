"""
In-memory event bus.

Handlers run in-process right after the publishing handler commits its
work. A failing subscriber is logged and never fails the publisher.
"""

import asyncio
import logging
from typing import Dict, List, Type

from core.domain.events import DomainEvent, EventBus, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """Event bus keeping its subscriptions in a dict keyed by event class."""

    def __init__(self):
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe a handler to an event type.

        Subscribing the same handler instance twice is a no-op.

        Args:
            event_type: Event class to listen for
            handler: Handler to invoke on publish
        """
        handlers = self._handlers.setdefault(event_type, [])
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug("Subscribed %s to %s", handler.__class__.__name__, event_type.__name__)

    def clear(self) -> None:
        """Drop every subscription."""
        self._handlers.clear()

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        """Return the handlers subscribed to an event type."""
        return list(self._handlers.get(event_type, []))

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event to its subscribers concurrently.

        Args:
            event: The event to publish
        """
        handlers = self._handlers.get(type(event), [])
        if not handlers:
            logger.debug("No handlers registered for %s", event.event_type)
            return

        await asyncio.gather(
            *(self._dispatch(handler, event) for handler in handlers),
            return_exceptions=True,
        )

    async def _dispatch(self, handler: EventHandler, event: DomainEvent) -> None:
        try:
            await handler.handle(event)
        except Exception:
            logger.error(
                "Error handling %s with %s",
                event.event_type,
                handler.__class__.__name__,
                exc_info=True,
            )
            raise


event_bus = InMemoryEventBus()
