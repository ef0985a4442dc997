"""
Pure helper functions for the annotation collection.

These functions have no side effects and can be tested in isolation.
"""

from itertools import chain
from typing import Any, Dict, Iterable, List, Mapping


def attributes_from_list(attributes: Iterable[Mapping[str, Any]]) -> Dict[int, Any]:
    """
    Convert server attribute records to a ``{spec_id: value}`` mapping.

    Args:
        attributes: Iterable of ``{"spec_id": ..., "value": ...}`` records

    Returns:
        Ordered mapping keyed by integer spec id
    """
    return {int(attr["spec_id"]): attr["value"] for attr in attributes}


def attributes_to_list(attributes: Mapping[int, Any]) -> List[Dict[str, Any]]:
    """Inverse of :func:`attributes_from_list`."""
    return [
        {"spec_id": int(spec_id), "value": value}
        for spec_id, value in attributes.items()
    ]


def flatten_frame_index(index: Mapping[int, List[Any]]) -> List[Any]:
    """
    Flatten a ``frame -> [objects]`` index into one list, by increasing frame.
    """
    return list(chain.from_iterable(index[frame] for frame in sorted(index)))


def diff_attributes(
    running: Dict[int, Any], incoming: Mapping[int, Any]
) -> Dict[int, Any]:
    """
    Return the attributes of ``incoming`` that differ from ``running``.

    ``running`` is updated in place with every changed value, so it always
    holds the last recorded value of each attribute.

    Args:
        running: Last known value per attribute id
        incoming: Attribute values of the next keyframe

    Returns:
        Only the changed (or first seen) attributes
    """
    changed = {}
    for spec_id, value in incoming.items():
        if spec_id not in running or running[spec_id] != value:
            running[spec_id] = value
            changed[spec_id] = value
    return changed


def trim_leading_outside(keyframes: Dict[int, Any]) -> Dict[int, Any]:
    """
    Drop outside keyframes preceding the first visible one.

    Args:
        keyframes: Mapping ``frame -> record`` where records expose ``outside``

    Returns:
        New mapping sorted by frame, starting at the first visible keyframe
        (empty when no keyframe is visible)
    """
    frames = sorted(keyframes)
    for position, frame in enumerate(frames):
        if not keyframes[frame].outside:
            return {f: keyframes[f] for f in frames[position:]}
    return {}


def update_z_range(collection_z: Dict[int, Dict[str, int]], frame: int, z_order: int):
    """Widen the ``{"min", "max"}`` z-order range stored for ``frame``."""
    current = collection_z.get(frame)
    if current is None:
        collection_z[frame] = {"min": z_order, "max": z_order}
    else:
        current["min"] = min(current["min"], z_order)
        current["max"] = max(current["max"], z_order)
