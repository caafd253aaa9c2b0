# Area: Events
"""
trivia_session._events.bus — In-process broadcast bus
=====================================================

Publish/subscribe over the event catalog. Payloads are validated when
they are published, so subscribers always receive a typed model.

Delivery is synchronous and queued. A publish issued while another
event is being dispatched is appended to the queue rather than
delivered immediately, so every subscriber sees the events of a given
name in publish order. Nothing is promised across different names.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, List, Optional, Union

from .._shared.logging_config import log_event
from .catalog import TriviaEvent, event_model, parse_event

logger = logging.getLogger("trivia_session.bus")

EventHandler = Callable[[TriviaEvent], None]


@dataclass(eq=False)
class Subscription:
    """Handle returned by subscribe(); pass it to unsubscribe()."""
    event_name: str
    handler: EventHandler
    active: bool = field(default=True)


class EventBus:
    """
    Routes published events to their subscribers.

    Usage:
        bus = EventBus()
        sub = bus.subscribe("triviaTimerUpdate", on_tick)
        bus.publish(TimerUpdate(time_remaining=10, question_index=0))
        bus.unsubscribe(sub)
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Subscription]] = {}
        self._queue: Deque[TriviaEvent] = deque()
        self._dispatching = False

    def subscribe(self, event_name: str, handler: EventHandler) -> Subscription:
        """
        Register a handler for one event name.

        Raises:
            UnknownEventError: If the name is not in the catalog
        """
        event_model(event_name)
        subscription = Subscription(event_name=event_name, handler=handler)
        self._subscribers.setdefault(event_name, []).append(subscription)
        logger.debug(f"Subscribed to {event_name}")
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription. No-op if already removed."""
        subscription.active = False
        subs = self._subscribers.get(subscription.event_name, [])
        if subscription in subs:
            subs.remove(subscription)

    def subscriber_count(self, event_name: str) -> int:
        return len(self._subscribers.get(event_name, []))

    def publish(
        self,
        event: Union[TriviaEvent, str],
        payload: Optional[dict] = None,
    ) -> TriviaEvent:
        """
        Publish an event.

        Accepts either a catalog model instance, or a wire name plus a
        raw payload dict which is validated first.

        Returns:
            The validated event

        Raises:
            UnknownEventError: Unknown wire name
            EventValidationError: Payload does not match the schema
        """
        if isinstance(event, str):
            event = parse_event(event, payload or {})
        elif payload is not None:
            raise TypeError("payload is only accepted together with an event name")
        elif not event.event_name:
            raise TypeError(f"{type(event).__name__} is not a catalog event")

        log_event(event)
        self._queue.append(event)
        if not self._dispatching:
            self._drain()
        return event

    def _drain(self) -> None:
        self._dispatching = True
        try:
            while self._queue:
                self._deliver(self._queue.popleft())
        finally:
            self._dispatching = False

    def _deliver(self, event: TriviaEvent) -> None:
        name = event.event_name
        subs = list(self._subscribers.get(name, []))
        logger.debug("Publishing %s to %d subscribers", name, len(subs))
        for subscription in subs:
            if not subscription.active:
                continue
            try:
                subscription.handler(event)
            except Exception:
                logger.error(f"Subscriber for {name} failed", exc_info=True)
