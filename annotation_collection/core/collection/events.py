"""
Event system for the annotation collection.

Lets callers (UI layers, savers) react to collection changes without the
collection depending on them.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of events emitted by a collection."""

    OBJECTS_IMPORTED = "objects_imported"
    OBJECTS_MERGED = "objects_merged"
    COLLECTION_EMPTIED = "collection_emptied"


@dataclass
class CollectionEvent:
    """Event that occurs on a collection."""

    event_type: EventType
    data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.data is None:
            self.data = {}


class EventEmitter:
    """
    Simple event emitter for pub/sub pattern.

    A failing listener is logged and does not stop the others.
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[Callable]] = {}

    def on(self, event_type: EventType, callback: Callable[[CollectionEvent], None]):
        """Subscribe to an event type."""
        self._listeners.setdefault(event_type, []).append(callback)

    def off(self, event_type: EventType, callback: Callable[[CollectionEvent], None]):
        """Unsubscribe from an event type."""
        if event_type in self._listeners:
            self._listeners[event_type].remove(callback)

    def emit(self, event: CollectionEvent):
        """Emit an event to all subscribers."""
        for callback in list(self._listeners.get(event.event_type, [])):
            try:
                callback(event)
            except Exception:
                logger.exception("Error in event listener for %s", event.event_type)

    def clear(self):
        """Clear all event listeners."""
        self._listeners.clear()
