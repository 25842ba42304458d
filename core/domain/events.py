"""
Domain event primitives.

Events describe state changes that already happened in a bounded context
(a license was created, a device claimed a slot, a release was offered).
Publishers never depend on who listens to them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import UUID, uuid4


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Subclasses define their own ``__init__``, call ``super().__init__`` with
    the envelope fields and then attach their payload attributes.
    """

    event_id: UUID
    occurred_at: datetime
    aggregate_id: str
    event_type: str

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.event_type = cls.__name__

    def __post_init__(self):
        if self.event_id is None:
            object.__setattr__(self, "event_id", uuid4())
        if self.occurred_at is None:
            object.__setattr__(self, "occurred_at", utc_now())

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the event envelope."""
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "event_type": self.event_type,
        }


class EventHandler(ABC):
    """Reacts to published domain events."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """
        Handle a domain event.

        Args:
            event: The published event
        """


class EventBus(ABC):
    """Publish/subscribe contract for domain events."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Deliver an event to every handler subscribed to its type.

        Args:
            event: The event to publish
        """

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """
        Register a handler for an event type.

        Args:
            event_type: Event class to listen for
            handler: Handler invoked on publish
        """
