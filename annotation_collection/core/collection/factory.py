"""
Construction of annotation objects from raw data.

This is the only place where concrete shape and track classes are picked.
"""

import logging
from gettext import gettext as _
from typing import Optional

from .exceptions import DataError
from .objects import (
    Injection,
    PointsShape,
    PointsTrack,
    PolygonShape,
    PolygonTrack,
    PolylineShape,
    PolylineTrack,
    RectangleShape,
    RectangleTrack,
    Shape,
    Tag,
    Track,
)
from .state import ShapeType

logger = logging.getLogger(__name__)

COLORS = (
    "#0066FF", "#AF593E", "#01A368", "#FF861F", "#ED0A3F", "#FF3F34", "#76D7EA",
    "#8359A3", "#FBE870", "#C5E17A", "#03BB85", "#FFDF00", "#8B8680", "#0A6B0D",
    "#8FD8D8", "#A36F40", "#F653A6", "#CA3435", "#FFCBA4", "#FF99CC", "#FA9D5A",
    "#FFAE42", "#A78B00", "#788193", "#514E49", "#1164B4", "#F4FA9F", "#FED8B1",
    "#C32148", "#01796F", "#E90067", "#FF91A4", "#404E5A", "#6CDAE7", "#FFC1CC",
    "#006A93", "#867200", "#E2B631", "#6EEB6E", "#FFC800", "#CC99BA", "#FF007C",
    "#BC6CAC", "#DCCCD7", "#EBE1C2", "#A6AAAE", "#B99685", "#0086A7", "#5E4330",
    "#C8A2C8", "#708EB3", "#BC8777", "#B2592D", "#497E48", "#6A2963", "#E6335F",
    "#00755E", "#B5A895", "#0048ba", "#EED9C4", "#C88A65", "#FF6E4A", "#87421F",
    "#B2BEB5", "#926F5B", "#00B9FB", "#6456B7", "#DB5079", "#C62D42", "#FA9C44",
    "#DA8A67", "#FD7C6E", "#93CCEA", "#FCF686", "#503E32", "#FF5470", "#9DE093",
    "#FF7A00", "#4F69C6", "#A50B5E", "#F0E68C", "#FDFF00", "#F091A9", "#FFFF66",
    "#6F9940", "#FC74FD", "#652DC1", "#D6AEDD", "#EE34D2", "#BB3385", "#6B3FA0",
    "#33CC99", "#FFDB00", "#87FF2A", "#6EEB6E", "#FFC800", "#CC99BA", "#7A89B8",
    "#006A93", "#867200", "#E2B631", "#D9D6CF",
)  # fmt: skip

SHAPE_CLASSES = {
    ShapeType.RECTANGLE: RectangleShape,
    ShapeType.POLYGON: PolygonShape,
    ShapeType.POLYLINE: PolylineShape,
    ShapeType.POINTS: PointsShape,
}

TRACK_CLASSES = {
    ShapeType.RECTANGLE: RectangleTrack,
    ShapeType.POLYGON: PolygonTrack,
    ShapeType.POLYLINE: PolylineTrack,
    ShapeType.POINTS: PointsTrack,
}


def color_for(client_id: int) -> str:
    """Display color of the object with ``client_id``."""
    return COLORS[client_id % len(COLORS)]


def _shape_type(value, kind: str) -> ShapeType:
    try:
        return ShapeType(value)
    except ValueError:
        raise DataError(
            _('An unexpected type of {kind} "{type}"').format(kind=kind, type=value)
        ) from None


def shape_factory(data: dict, client_id: int, injection: Injection) -> Shape:
    """
    Build the shape variant matching ``data["type"]``.

    Raises:
        DataError: on an unknown type
    """
    cls = SHAPE_CLASSES[_shape_type(data.get("type"), "shape")]
    return cls(data, client_id, color_for(client_id), injection)


def track_factory(data: dict, client_id: int, injection: Injection) -> Optional[Track]:
    """
    Build the track variant matching the track type.

    The type is read from ``data["type"]`` or, for server payloads that do not
    carry it, from the first keyframe.

    Returns:
        The track, or None when ``data`` has no keyframes at all

    Raises:
        DataError: on an unknown type
    """
    shapes = data.get("shapes") or []
    if not shapes:
        logger.warning(_("The track without any shapes had been found. It was ignored."))
        return None

    track_type = data.get("type", shapes[0].get("type"))
    cls = TRACK_CLASSES[_shape_type(track_type, "track")]
    return cls(data, client_id, color_for(client_id), injection)


def tag_factory(data: dict, client_id: int, injection: Injection) -> Tag:
    return Tag(data, client_id, color_for(client_id), injection)
