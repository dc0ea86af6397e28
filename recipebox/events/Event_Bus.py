"""Simple Event Bus / Observer implementation between the core and the rendering layer.

Event names and payloads:
  recipes.ready          -> {"recipes": [recipe dict, ...]}
  recipes.fetch_failed   -> {"error": str}
  shopping.list_changed  -> {"items": [item dict, ...]}
  shopping.message       -> {"message": str}
  shopping.text_changed  -> {"text": str}
  suggestions.changed    -> {"suggestions": [str, ...]}
  tabs.changed           -> workspace snapshot dict

Subscribers are callables taking (event_name, payload). A bus instance is
owned by the composition root; there is no module-level bus.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
RECIPES_READY = "recipes.ready"
RECIPES_FETCH_FAILED = "recipes.fetch_failed"
SHOPPING_LIST_CHANGED = "shopping.list_changed"
SHOPPING_MESSAGE = "shopping.message"
SHOPPING_TEXT_CHANGED = "shopping.text_changed"
SUGGESTIONS_CHANGED = "suggestions.changed"
TAB_STATE_CHANGED = "tabs.changed"

ALL_EVENTS = (
    RECIPES_READY, RECIPES_FETCH_FAILED, SHOPPING_LIST_CHANGED, SHOPPING_MESSAGE,
    SHOPPING_TEXT_CHANGED, SUGGESTIONS_CHANGED, TAB_STATE_CHANGED,
)

Listener = Callable[[str, Any], None]


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Listener]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Listener):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def subscribe_all(self, callback: Listener):
		for event_name in ALL_EVENTS:
			self.subscribe(event_name, callback)

	def unsubscribe(self, event_name: str, callback: Listener):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any = None):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				# listener errors never reach the publisher
				logger.exception("Error delivering %s to %r", event_name, cb)


__all__ = [
	'EventBus', 'Listener', 'ALL_EVENTS',
	'RECIPES_READY', 'RECIPES_FETCH_FAILED', 'SHOPPING_LIST_CHANGED', 'SHOPPING_MESSAGE',
	'SHOPPING_TEXT_CHANGED', 'SUGGESTIONS_CHANGED', 'TAB_STATE_CHANGED',
]
