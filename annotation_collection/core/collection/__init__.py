"""
Annotation collection - the in-memory store of a job's annotations.

Provides import/export of server payloads, per-frame queries and merging of
shapes and tracks into a single track.
"""

from .collection import Collection
from .events import CollectionEvent, EventEmitter, EventType
from .exceptions import AnnotationError, ArgumentError, DataError
from .factory import COLORS, color_for, shape_factory, tag_factory, track_factory
from .labels import Attribute, Label
from .objects import Injection, Shape, Tag, Track
from .state import KeyframeRecord, ObjectState, ObjectType, ShapeType

__all__ = [
    "Collection",
    "CollectionEvent",
    "EventEmitter",
    "EventType",
    "AnnotationError",
    "ArgumentError",
    "DataError",
    "COLORS",
    "color_for",
    "shape_factory",
    "tag_factory",
    "track_factory",
    "Attribute",
    "Label",
    "Injection",
    "Shape",
    "Tag",
    "Track",
    "KeyframeRecord",
    "ObjectState",
    "ObjectType",
    "ShapeType",
]
