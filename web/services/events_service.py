"""
Events Service - Web Layer Service for the Real-Time Channel.

Bridges the core EventBus to Server-Sent Events.
"""

import json
from collections.abc import Iterator
from typing import Any

from flask import current_app

from core.events_core import Event, EventBus, Subscription


def _bus() -> EventBus:
    return current_app.extensions["family_pane"]["bus"]


def subscribe() -> Subscription:
    return _bus().subscribe()


def unsubscribe_callback():
    """Unsubscribe bound to the current bus, usable once the request context is gone."""
    return _bus().unsubscribe


def publish(name: str, data: Any) -> int:
    return _bus().publish(name, data)


def relay(client_event: str, data: Any) -> tuple[str, int]:
    """Re-broadcast an inbound client event under its *-changed name."""
    return _bus().relay(client_event, data)


def broadcast_chore(chore: dict, action: str) -> int:
    """Announce a chore mutation made over HTTP."""
    payload = {"id": chore["id"], "status": chore.get("status"), "action": action}
    payload["chore"] = chore
    return publish("chore-changed", payload)


def format_sse(event: Event) -> str:
    """Render one event as a Server-Sent Events frame."""
    return f"event: {event.name}\ndata: {json.dumps(event.data, default=str)}\n\n"


def iter_sse(
    sub: Subscription, keepalive_seconds: float, on_close=None
) -> Iterator[str]:
    """
    Yields SSE frames for a subscription until it is closed.

    A comment line is sent whenever no event arrives within
    keepalive_seconds so proxies keep the connection open.
    """
    try:
        yield f": connected {sub.id}\n\n"
        while not sub.closed:
            event = sub.get(timeout=keepalive_seconds)
            if event is None:
                if sub.closed:
                    break
                yield ": keepalive\n\n"
                continue
            yield format_sse(event)
    finally:
        if on_close is not None:
            on_close(sub)
