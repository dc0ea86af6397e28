"""Event helper utilities.

Typed publishing helpers so callers never build payload dicts by hand.

Quick import:
    from recipebox.events.event_helpers import (
        publish_recipes_ready, publish_fetch_failed, publish_list_changed,
        publish_message, publish_shopping_text, publish_suggestions, publish_tab_state
    )
"""
from __future__ import annotations
from typing import Iterable, Any, Dict
from .Event_Bus import (
    EventBus,
    RECIPES_READY, RECIPES_FETCH_FAILED, SHOPPING_LIST_CHANGED, SHOPPING_MESSAGE,
    SHOPPING_TEXT_CHANGED, SUGGESTIONS_CHANGED, TAB_STATE_CHANGED,
)

__all__ = [
    'publish_recipes_ready', 'publish_fetch_failed', 'publish_list_changed',
    'publish_message', 'publish_shopping_text', 'publish_suggestions', 'publish_tab_state',
]


def publish_recipes_ready(bus: EventBus, recipes: Iterable[Any]):
    """Publish a recipes.ready event with the cache in sidebar order."""
    bus.publish(RECIPES_READY, {
        'recipes': [r.to_dict() for r in recipes]
    })

def publish_fetch_failed(bus: EventBus, error: str):
    bus.publish(RECIPES_FETCH_FAILED, {'error': error})

def publish_list_changed(bus: EventBus, items: Iterable[Any]):
    """Publish a shopping.list_changed event.

    Payload structure:
        { 'items': [ { id, text, checked }, ... ] }
    """
    bus.publish(SHOPPING_LIST_CHANGED, {
        'items': [item.to_dict() for item in items]
    })

def publish_message(bus: EventBus, message: str):
    """Transient, non-fatal notice for the user (empty string clears it)."""
    bus.publish(SHOPPING_MESSAGE, {'message': message})

def publish_shopping_text(bus: EventBus, text: str):
    bus.publish(SHOPPING_TEXT_CHANGED, {'text': text})

def publish_suggestions(bus: EventBus, suggestions: Iterable[str]):
    bus.publish(SUGGESTIONS_CHANGED, {'suggestions': list(suggestions)})

def publish_tab_state(bus: EventBus, snapshot: Dict[str, Any]):
    bus.publish(TAB_STATE_CHANGED, dict(snapshot))
