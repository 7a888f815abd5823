"""In-process event bus for allocation notifications."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

import pendulum
import structlog

WILDCARD = "*"


@dataclass(slots=True)
class AllocationEvent:
    name: str
    payload: dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime | None = None


Handler = Callable[[AllocationEvent], None]


class EventBus:
    """Synchronous publish/subscribe owned by the application shell."""

    def __init__(self, *, now_provider: Callable[[], datetime] | None = None) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)
        self._now_provider = now_provider or pendulum.now
        self._logger = structlog.get_logger(__name__)

    def subscribe(self, name: str, handler: Handler) -> Callable[[], None]:
        """Register ``handler``; the returned callable unsubscribes it."""
        self._handlers[name].append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers.get(name, []):
                self._handlers[name].remove(handler)

        return unsubscribe

    def publish(self, name: str, **payload: Any) -> AllocationEvent:
        event = AllocationEvent(name=name, payload=payload, occurred_at=self._now_provider())
        handlers = [*self._handlers.get(name, []), *self._handlers.get(WILDCARD, [])]
        self._logger.debug("event.published", event_name=name, handlers=len(handlers))
        for handler in handlers:
            handler(event)
        return event


class EventRecorder:
    """Collects published events; handy as a wildcard subscriber."""

    def __init__(self) -> None:
        self.events: list[AllocationEvent] = []

    def __call__(self, event: AllocationEvent) -> None:
        self.events.append(event)

    def names(self) -> list[str]:
        return [event.name for event in self.events]
