"""
Events Core - Real-Time Fan-out Channel.

A best-effort publish/subscribe bus. Every published event is offered to
every subscriber that exists at publish time, including the publisher's
own subscription. Nothing is persisted or replayed: a display that
connects later must fetch current state over HTTP instead.

Subscribers are expected to apply events with idempotent reducers such as
DisplayState, so receiving an echo of their own change is harmless.
"""

import logging
import queue
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Any

from core.errors import ValidationError

logger = logging.getLogger(__name__)

# Inbound client event -> broadcast event
CLIENT_EVENTS = {
    "switch-view": "view-changed",
    "config-update": "config-changed",
    "chore-update": "chore-changed",
}
BROADCAST_EVENTS = tuple(CLIENT_EVENTS.values())


@dataclass
class Event:
    name: str
    data: Any
    published_at: float = field(default_factory=time.time)


_CLOSED = object()


class Subscription:
    """A subscriber's bounded inbox."""

    def __init__(self, maxsize: int = 100):
        self.id = uuid.uuid4().hex
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self.closed = False
        self.dropped = 0

    def offer(self, event: Event) -> bool:
        if self.closed:
            return False
        try:
            self._queue.put_nowait(event)
            return True
        except queue.Full:
            self.dropped += 1
            return False

    def get(self, timeout: float | None = None) -> Event | None:
        """
        Waits for the next event.

        Returns None on timeout or once the subscription is closed.
        """
        if self.closed and self._queue.empty():
            return None
        try:
            item = self._queue.get(timeout=timeout)
        except queue.Empty:
            return None
        if item is _CLOSED:
            return None
        return item

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self._queue.put_nowait(_CLOSED)
        except queue.Full:
            pass


class EventBus:
    """In-process broadcast to all current subscribers."""

    def __init__(self, queue_size: int = 100):
        self.queue_size = queue_size
        self._subscribers: dict[str, Subscription] = {}
        self._lock = threading.Lock()

    def subscribe(self) -> Subscription:
        sub = Subscription(maxsize=self.queue_size)
        with self._lock:
            self._subscribers[sub.id] = sub
        logger.info(f"Client connected: {sub.id}")
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            self._subscribers.pop(sub.id, None)
        sub.close()
        logger.info(f"Client disconnected: {sub.id}")

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def publish(self, name: str, data: Any) -> int:
        """
        Offers an event to every current subscriber.

        Returns: number of subscribers that accepted the event.
        """
        event = Event(name=name, data=data)
        with self._lock:
            subscribers = list(self._subscribers.values())

        delivered = 0
        for sub in subscribers:
            if sub.offer(event):
                delivered += 1
            else:
                logger.warning(f"Dropped '{name}' for subscriber {sub.id} (queue full)")
        logger.debug(f"Published '{name}' to {delivered}/{len(subscribers)} subscribers")
        return delivered

    def relay(self, client_event: str, data: Any) -> tuple[str, int]:
        """
        Re-broadcasts an inbound client event under its *-changed name.

        Returns: (broadcast event name, delivered count)
        """
        broadcast = CLIENT_EVENTS.get(client_event)
        if broadcast is None:
            raise ValidationError(f"Unknown event: {client_event}")

        if client_event == "switch-view":
            if not isinstance(data, str) or not data.strip():
                raise ValidationError("switch-view requires a view name")
        elif client_event == "chore-update":
            if not isinstance(data, dict) or data.get("id") is None:
                raise ValidationError("chore-update requires an object with an id")
        elif not isinstance(data, dict):
            raise ValidationError(f"{client_event} requires an object")

        logger.info(f"{client_event} received: {data}")
        return broadcast, self.publish(broadcast, data)

    def close(self) -> None:
        with self._lock:
            subscribers = list(self._subscribers.values())
            self._subscribers.clear()
        for sub in subscribers:
            sub.close()


class DisplayState:
    """
    Idempotent reducer for broadcast events on the subscriber side.

    apply() returns whether the event changed anything; applying the same
    event again is a no-op.
    """

    def __init__(self, current_view: str = "dashboard", config: dict = None, chores: list = None):
        self.current_view = current_view
        self.config = dict(config or {})
        self.chores = {chore["id"]: dict(chore) for chore in chores or []}

    def apply(self, name: str, data: Any) -> bool:
        if name == "view-changed":
            if data == self.current_view:
                return False
            self.current_view = data
            return True

        if name == "config-changed":
            merged = {**self.config, **data}
            changed = merged != self.config
            self.config = merged
            view = data.get("currentView")
            if view and view != self.current_view:
                self.current_view = view
                changed = True
            return changed

        if name == "chore-changed":
            chore_id = data["id"]
            current = self.chores.get(chore_id, {})
            merged = {**current, **data}
            if merged == current:
                return False
            self.chores[chore_id] = merged
            return True

        return False
