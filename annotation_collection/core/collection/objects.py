"""
Annotation objects held by the collection.

Shapes live on a single frame, tracks span several frames through keyframes
and tags mark a frame without geometry. Frames between two keyframes hold the
state of the earlier keyframe; geometric interpolation is left to consumers.
"""

import logging
from bisect import bisect_right
from dataclasses import dataclass, field
from gettext import gettext as _
from typing import Any, Dict, Optional

import numpy as np

from .exceptions import ArgumentError, DataError
from .labels import Label
from .state import KeyframeRecord, ObjectState, ObjectType, ShapeType, as_points
from .utils import attributes_from_list, attributes_to_list, update_z_range

logger = logging.getLogger(__name__)

# Minimal number of coordinates (x and y counted separately) per geometry
MIN_COORDINATES = {
    ShapeType.RECTANGLE: 4,
    ShapeType.POLYGON: 6,
    ShapeType.POLYLINE: 4,
    ShapeType.POINTS: 2,
}


def validate_points(shape_type: ShapeType, points: np.ndarray):
    """
    Check that ``points`` can describe a ``shape_type`` geometry.

    Raises:
        DataError: on an odd coordinate count or too few coordinates
    """
    count = len(points)
    expected = MIN_COORDINATES[shape_type]
    if count % 2 or count < expected:
        raise DataError(
            _("A {shape_type} expects at least {expected} coordinates, got {count}").format(
                shape_type=shape_type.value, expected=expected, count=count
            )
        )
    if shape_type is ShapeType.RECTANGLE and count != expected:
        raise DataError(
            _("A rectangle expects exactly 4 coordinates, got {count}").format(
                count=count
            )
        )


@dataclass
class Injection:
    """
    Read-only context shared by every object of a collection.

    Args:
        labels: Label table keyed by label id
        collection_z: ``frame -> {"min": z, "max": z}`` index kept up to date
            by objects as they are constructed
    """

    labels: Dict[int, Label]
    collection_z: Dict[int, Dict[str, int]] = field(default_factory=dict)


class Annotation:
    """Base class of every annotation object."""

    object_type: ObjectType
    frame_required = True

    def __init__(self, data: dict, client_id: int, color: str, injection: Injection):
        self.client_id = client_id
        self.color = color
        self.injection = injection
        self.server_id: Optional[int] = data.get("id")
        self.group = int(data.get("group", 0) or 0)
        self.label = self._resolve_label(data.get("label_id"))
        self.attributes: Dict[int, Any] = attributes_from_list(
            data.get("attributes", [])
        )
        self.removed = False

        frame = data.get("frame")
        if frame is None and self.frame_required:
            raise DataError(
                _("The {kind} has no frame").format(kind=self.object_type.value)
            )
        self.frame: Optional[int] = None if frame is None else int(frame)

    def _resolve_label(self, label_id) -> Label:
        try:
            return self.injection.labels[int(label_id)]
        except (KeyError, TypeError, ValueError):
            raise DataError(
                _('Unknown label id "{label_id}"').format(label_id=label_id)
            ) from None

    def _base_json(self) -> Dict[str, Any]:
        data = {
            "frame": self.frame,
            "label_id": self.label.id,
            "group": self.group,
            "attributes": attributes_to_list(self.attributes),
        }
        if self.server_id is not None:
            data["id"] = self.server_id
        return data

    def get(self, frame: int) -> ObjectState:
        raise NotImplementedError

    def to_json(self) -> Dict[str, Any]:
        raise NotImplementedError

    def __repr__(self):
        return (
            f"{type(self).__name__}(client_id={self.client_id}, "
            f"frame={self.frame}, removed={self.removed})"
        )


class Shape(Annotation):
    """A single-frame geometric annotation."""

    object_type = ObjectType.SHAPE
    shape_type: ShapeType

    def __init__(self, data, client_id, color, injection):
        super().__init__(data, client_id, color, injection)
        self.points = as_points(data.get("points", []))
        validate_points(self.shape_type, self.points)
        self.occluded = bool(data.get("occluded", False))
        self.z_order = int(data.get("z_order", 0))
        update_z_range(injection.collection_z, self.frame, self.z_order)

    def get(self, frame: int) -> ObjectState:
        if frame != self.frame:
            raise ArgumentError(
                _("Shape {client_id} exists only on frame {frame}").format(
                    client_id=self.client_id, frame=self.frame
                )
            )
        return ObjectState(
            client_id=self.client_id,
            object_type=self.object_type,
            label=self.label,
            frame=frame,
            shape_type=self.shape_type,
            attributes=dict(self.attributes),
            points=self.points.copy(),
            occluded=self.occluded,
            z_order=self.z_order,
            outside=False,
            keyframe=True,
            color=self.color,
            group=self.group,
            server_id=self.server_id,
        )

    def to_json(self):
        data = self._base_json()
        data.update(
            type=self.shape_type.value,
            occluded=self.occluded,
            z_order=self.z_order,
            points=[float(v) for v in self.points],
        )
        return data


class Track(Annotation):
    """
    A multi-frame annotation defined by its keyframes.

    ``attributes`` holds the track-level (immutable) values, each keyframe
    holds the mutable values that changed on it.
    """

    object_type = ObjectType.TRACK
    frame_required = False
    shape_type: ShapeType

    def __init__(self, data, client_id, color, injection):
        super().__init__(data, client_id, color, injection)
        # exported back only when the payload declared it
        self.declared_type = data.get("type") is not None
        shapes = {}
        for shape in data.get("shapes", []):
            record = KeyframeRecord.from_dict(shape, default_type=self.shape_type)
            if record.type is not self.shape_type:
                raise DataError(
                    _("A {expected} track got a {actual} keyframe").format(
                        expected=self.shape_type.value, actual=record.type.value
                    )
                )
            validate_points(self.shape_type, record.points)
            if record.frame in shapes:
                logger.warning(
                    _("Track {client_id} has two keyframes on frame {frame}").format(
                        client_id=client_id, frame=record.frame
                    )
                )
            shapes[record.frame] = record

        if not shapes:
            raise DataError(_("A track needs at least one keyframe"))
        for record in shapes.values():
            update_z_range(injection.collection_z, record.frame, record.z_order)
        self.shapes: Dict[int, KeyframeRecord] = dict(sorted(shapes.items()))
        if self.frame is None:
            self.frame = next(iter(self.shapes))

    def get(self, frame: int) -> ObjectState:
        frames = list(self.shapes)
        position = bisect_right(frames, frame)
        attributes = dict(self.attributes)

        if position == 0:
            # before the first keyframe the object does not exist yet
            record = self.shapes[frames[0]]
            attributes.update(record.attributes)
            outside, keyframe = True, False
        else:
            for keyframe_frame in frames[:position]:
                attributes.update(self.shapes[keyframe_frame].attributes)
            record = self.shapes[frames[position - 1]]
            outside, keyframe = record.outside, record.frame == frame

        return ObjectState(
            client_id=self.client_id,
            object_type=self.object_type,
            label=self.label,
            frame=frame,
            shape_type=self.shape_type,
            attributes=attributes,
            points=record.points.copy(),
            occluded=record.occluded,
            z_order=record.z_order,
            outside=outside,
            keyframe=keyframe,
            color=self.color,
            group=self.group,
            server_id=self.server_id,
        )

    def to_json(self):
        data = self._base_json()
        if self.declared_type:
            data["type"] = self.shape_type.value
        data["shapes"] = [record.to_dict() for record in self.shapes.values()]
        return data


class Tag(Annotation):
    """A frame-level annotation without geometry."""

    object_type = ObjectType.TAG

    def get(self, frame: int) -> ObjectState:
        if frame != self.frame:
            raise ArgumentError(
                _("Tag {client_id} exists only on frame {frame}").format(
                    client_id=self.client_id, frame=self.frame
                )
            )
        return ObjectState(
            client_id=self.client_id,
            object_type=self.object_type,
            label=self.label,
            frame=frame,
            attributes=dict(self.attributes),
            color=self.color,
            group=self.group,
            server_id=self.server_id,
        )

    def to_json(self):
        return self._base_json()


class RectangleShape(Shape):
    shape_type = ShapeType.RECTANGLE


class PolygonShape(Shape):
    shape_type = ShapeType.POLYGON


class PolylineShape(Shape):
    shape_type = ShapeType.POLYLINE


class PointsShape(Shape):
    shape_type = ShapeType.POINTS


class RectangleTrack(Track):
    shape_type = ShapeType.RECTANGLE


class PolygonTrack(Track):
    shape_type = ShapeType.POLYGON


class PolylineTrack(Track):
    shape_type = ShapeType.POLYLINE


class PointsTrack(Track):
    shape_type = ShapeType.POINTS
