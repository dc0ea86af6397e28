"""Web-facing observer for core events.

EventFeed subscribes to an EventBus and keeps a lightweight in-memory ring
buffer of recent events that an HTTP renderer can poll to refresh its
views without reloading the page.

Design:
  * Each event stored with an auto-increment integer id (cursor) so clients
    can request only newer events (since=<last_id_seen>).
  * A Lock guards the buffer so a threaded server sharing the feed stays
    consistent; the core itself runs on one event loop.
  * max_events caps memory use.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import EventBus, ALL_EVENTS

logger = logging.getLogger(__name__)

MAX_EVENTS = 300  # keep a few hundred recent events


class EventFeed:
    def __init__(self, max_events: int = MAX_EVENTS):
        self._lock = Lock()
        self._events: List[Dict[str, Any]] = []
        self._next_id = 1
        self._max_events = max_events
        self._bus: Optional[EventBus] = None

    def _record(self, event_name: str, payload: Any):  # signature expected by EventBus
        with self._lock:
            evt = {
                'id': self._next_id,
                'type': event_name,
                'ts': datetime.now(timezone.utc).isoformat(),
                'payload': payload if isinstance(payload, dict) else {'value': payload},
            }
            self._events.append(evt)
            self._next_id += 1
            # Trim buffer
            if len(self._events) > self._max_events:
                del self._events[: len(self._events) - self._max_events]

    def start(self, bus: EventBus) -> "EventFeed":
        """Idempotent start: subscribe to every core event once."""
        if self._bus is bus:
            return self
        if self._bus is not None:
            self.stop()
        bus.subscribe_all(self._record)
        self._bus = bus
        logger.debug("Event feed attached to %r", bus)
        return self

    def stop(self):
        if self._bus is None:
            return
        for name in ALL_EVENTS:
            self._bus.unsubscribe(name, self._record)
        self._bus = None

    def get_events(self, since: int | None = None) -> Dict[str, Any]:
        """Return events newer than 'since' (exclusive).

        If since is None, returns the whole buffer.
        Response includes next_cursor (largest id) so client can poll with since=next_cursor.
        """
        with self._lock:
            if since is None:
                data = list(self._events)
            else:
                data = [e for e in self._events if e['id'] > since]
            next_cursor = self._events[-1]['id'] if self._events else since or 0
        return {'events': data, 'next_cursor': next_cursor}


__all__ = ['EventFeed', 'MAX_EVENTS']
