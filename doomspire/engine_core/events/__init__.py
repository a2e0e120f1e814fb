"""
Event Cards - One async handler per card, dispatched by card id.

Every handler takes a ResolutionContext and returns an EventCardResult.
"""

from .result import EventCardResult
from .dispatch import EVENT_HANDLERS, EventHandler, resolve_event_card

__all__ = [
    "EventCardResult",
    "EVENT_HANDLERS",
    "EventHandler",
    "resolve_event_card",
]
