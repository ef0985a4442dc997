"""
State types for the annotation collection.

Contains the enums and data classes exchanged between the collection, the
annotation objects and callers.
"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Optional

import numpy as np

from .labels import Label
from .utils import attributes_from_list, attributes_to_list


class ShapeType(Enum):
    """Geometry of a shape or of a track's keyframes."""

    RECTANGLE = "rectangle"
    POLYGON = "polygon"
    POLYLINE = "polyline"
    POINTS = "points"


class ObjectType(Enum):
    """Kind of annotation object."""

    SHAPE = "shape"
    TRACK = "track"
    TAG = "tag"


def as_points(points) -> np.ndarray:
    """Coordinates as a flat float array (always a fresh copy)."""
    return np.array(points, dtype=np.float64).reshape(-1)


def _equal(left, right) -> bool:
    """Field-wise equality of two dataclasses of the same type, points included."""
    if type(left) is not type(right):
        return NotImplemented
    for f in fields(left):
        a, b = getattr(left, f.name), getattr(right, f.name)
        if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
            if a is None or b is None or not np.array_equal(a, b):
                return False
        elif a != b:
            return False
    return True


@dataclass(eq=False)
class KeyframeRecord:
    """One explicitly recorded frame of a track."""

    frame: int
    type: ShapeType
    points: np.ndarray
    occluded: bool = False
    z_order: int = 0
    outside: bool = False
    attributes: Dict[int, Any] = field(default_factory=dict)
    server_id: Optional[int] = None

    __eq__ = _equal

    def copy(self, **changes) -> "KeyframeRecord":
        """Value copy of this record, optionally with some fields replaced."""
        changes.setdefault("points", self.points.copy())
        changes.setdefault("attributes", dict(self.attributes))
        return replace(self, **changes)

    def to_dict(self):
        """Convert to the server keyframe layout."""
        data = {
            "type": self.type.value,
            "frame": self.frame,
            "points": [float(v) for v in self.points],
            "occluded": self.occluded,
            "z_order": self.z_order,
            "outside": self.outside,
            "attributes": attributes_to_list(self.attributes),
        }
        if self.server_id is not None:
            data["id"] = self.server_id
        return data

    @classmethod
    def from_dict(cls, data: dict, default_type: Optional[ShapeType] = None):
        """Create from the server keyframe layout."""
        shape_type = data.get("type")
        return cls(
            frame=int(data["frame"]),
            type=ShapeType(shape_type) if shape_type is not None else default_type,
            points=as_points(data.get("points", [])),
            occluded=bool(data.get("occluded", False)),
            z_order=int(data.get("z_order", 0)),
            outside=bool(data.get("outside", False)),
            attributes=attributes_from_list(data.get("attributes", [])),
            server_id=data.get("id"),
        )


@dataclass(eq=False)
class ObjectState:
    """
    Snapshot of one annotation object at one frame.

    Produced by ``Collection.get`` and consumed by ``Collection.merge``.
    """

    client_id: int
    object_type: ObjectType
    label: Label
    frame: int
    shape_type: Optional[ShapeType] = None
    attributes: Dict[int, Any] = field(default_factory=dict)
    points: Optional[np.ndarray] = None
    occluded: bool = False
    z_order: int = 0
    outside: bool = False
    keyframe: bool = True
    color: Optional[str] = None
    group: int = 0
    server_id: Optional[int] = None

    __eq__ = _equal

    def to_dict(self):
        """Convert to dictionary (points as a plain list)."""
        return {
            "client_id": self.client_id,
            "object_type": self.object_type.value,
            "label_id": self.label.id,
            "frame": self.frame,
            "shape_type": self.shape_type.value if self.shape_type else None,
            "attributes": attributes_to_list(self.attributes),
            "points": None if self.points is None else [float(v) for v in self.points],
            "occluded": self.occluded,
            "z_order": self.z_order,
            "outside": self.outside,
            "keyframe": self.keyframe,
            "color": self.color,
            "group": self.group,
            "server_id": self.server_id,
        }
