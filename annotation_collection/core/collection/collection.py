"""
The annotation collection.

Holds every annotation object of a job, indexed by frame and by client id,
and folds several objects into one track on merge.
"""

import logging
from gettext import gettext as _
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .events import CollectionEvent, EventEmitter, EventType
from .exceptions import ArgumentError
from .factory import shape_factory, tag_factory, track_factory
from .labels import Label
from .objects import Annotation, Injection, Shape, Tag, Track
from .state import KeyframeRecord, ObjectState, ShapeType
from .utils import (
    attributes_to_list,
    diff_attributes,
    flatten_frame_index,
    trim_leading_outside,
)

logger = logging.getLogger(__name__)


class Collection:
    """
    In-memory store of the annotation objects of one job.

    Objects are created by :meth:`import_data` and :meth:`merge` only.
    Merged objects are tombstoned (``removed = True``): they disappear from
    :meth:`get` and :meth:`export` but stay reachable in ``objects``.

    The collection is not thread-safe; callers serialize every call.
    """

    def __init__(self, labels: Iterable[Any]):
        """
        Initialize the collection.

        Args:
            labels: Label objects or label dictionaries of the job
        """
        self.labels: Dict[int, Label] = {}
        for label in labels:
            label = Label.from_dict(label)
            self.labels[label.id] = label

        self.shapes: Dict[int, List[Shape]] = {}  # key is a frame
        self.tags: Dict[int, List[Tag]] = {}  # key is a frame
        self.tracks: List[Track] = []
        self.objects: Dict[int, Annotation] = {}  # key is a client id
        self.count = 0
        self.flush = False

        self.collection_z: Dict[int, Dict[str, int]] = {}  # key is a frame
        self.injection = Injection(labels=self.labels, collection_z=self.collection_z)

        # Event emitter for listeners interested in changes
        self.events = EventEmitter()

    def _next_client_id(self) -> int:
        self.count += 1
        return self.count

    def import_data(self, data: Dict[str, List[dict]]) -> "Collection":
        """
        Add tags, shapes and tracks from a server-style payload.

        Items get consecutive client ids: tags first, then shapes, then
        tracks. Tracks without keyframes are skipped.

        Args:
            data: ``{"tags": [...], "shapes": [...], "tracks": [...]}``

        Returns:
            The collection itself
        """
        imported = {"tags": 0, "shapes": 0, "tracks": 0}

        for tag in data.get("tags", []):
            client_id = self._next_client_id()
            tag_model = tag_factory(tag, client_id, self.injection)
            self.tags.setdefault(tag_model.frame, []).append(tag_model)
            self.objects[client_id] = tag_model
            imported["tags"] += 1

        for shape in data.get("shapes", []):
            client_id = self._next_client_id()
            shape_model = shape_factory(shape, client_id, self.injection)
            self.shapes.setdefault(shape_model.frame, []).append(shape_model)
            self.objects[client_id] = shape_model
            imported["shapes"] += 1

        for track in data.get("tracks", []):
            client_id = self._next_client_id()
            track_model = track_factory(track, client_id, self.injection)
            # None means the track had no shapes, the factory already warned
            if track_model is not None:
                self.tracks.append(track_model)
                self.objects[client_id] = track_model
                imported["tracks"] += 1

        logger.debug(
            "Imported %(tags)d tags, %(shapes)d shapes, %(tracks)d tracks", imported
        )
        self.events.emit(CollectionEvent(EventType.OBJECTS_IMPORTED, imported))
        return self

    def export(self) -> Dict[str, List[dict]]:
        """
        Serialize every object that has not been removed.

        Returns:
            ``{"tracks": [...], "shapes": [...], "tags": [...]}``
        """
        return {
            "tracks": [t.to_json() for t in self.tracks if not t.removed],
            "shapes": [
                s.to_json() for s in flatten_frame_index(self.shapes) if not s.removed
            ],
            "tags": [
                t.to_json() for t in flatten_frame_index(self.tags) if not t.removed
            ],
        }

    def empty(self):
        """
        Drop every object and restart client ids.

        Sets ``flush`` so savers know to treat the next state as a fresh load.
        """
        self.shapes = {}
        self.tags = {}
        self.tracks = []
        self.objects = {}
        self.count = 0
        self.collection_z.clear()

        self.flush = True
        self.events.emit(CollectionEvent(EventType.COLLECTION_EMPTIED))

    def get(self, frame: int) -> List[ObjectState]:
        """
        Get the states of the visible objects on ``frame``.

        Returns:
            States of tracks, then shapes, then tags. A track reports an
            outside state only on one of its explicit keyframes.
        """
        objects = [
            *self.tracks,
            *self.shapes.get(frame, []),
            *self.tags.get(frame, []),
        ]

        object_states = []
        for obj in objects:
            if obj.removed:
                continue
            state = obj.get(frame)
            if state.outside and not state.keyframe:
                continue
            object_states.append(state)

        return object_states

    def merge(self, object_states: Sequence[ObjectState]) -> Optional[Track]:
        """
        Merge shapes and tracks into one new track.

        Every input is validated and the whole timeline is built before
        anything changes, so a failed merge leaves the collection untouched.

        Args:
            object_states: States obtained from :meth:`get`, all with the
                same label and shape type

        Returns:
            The new track, or None for an empty input

        Raises:
            ArgumentError: on unsaved objects, label or type mismatches,
                tags, or two visible keyframes on one frame
        """
        if not isinstance(object_states, (list, tuple)):
            raise ArgumentError(
                _("Merged shapes are expected to be a list of object states")
            )
        if not object_states:
            return None

        objects_for_merge = [self._saved_object(state) for state in object_states]

        first_state = object_states[0]
        label, shape_type = first_state.label, first_state.shape_type
        label_attributes = label.attribute_map()
        mutable_ids = label.mutable_ids()

        keyframes: Dict[int, KeyframeRecord] = {}
        attributes: Dict[int, Any] = {}  # last recorded value per attribute id
        for obj, state in zip(objects_for_merge, object_states):
            if state.label.id != label.id:
                raise ArgumentError(
                    _(
                        "All shape labels are expected to be {expected}, but got {actual}"
                    ).format(expected=label.name, actual=state.label.name)
                )
            if state.shape_type != shape_type:
                raise ArgumentError(
                    _("All shapes are expected to be {expected}, but got {actual}").format(
                        expected=_type_name(shape_type), actual=_type_name(state.shape_type)
                    )
                )

            if isinstance(obj, Shape):
                self._fold_shape(obj, shape_type, mutable_ids, keyframes)
            elif isinstance(obj, Track):
                self._fold_track(obj, shape_type, attributes, keyframes)
            else:
                raise ArgumentError(
                    _(
                        "Trying to merge unknown object type: {name}. "
                        "Only shapes and tracks are expected."
                    ).format(name=type(obj).__name__)
                )

        keyframes = trim_leading_outside(keyframes)
        if not keyframes:
            raise ArgumentError(_("The merged objects have no visible keyframes"))

        track_data = {
            "frame": min(keyframes),
            "type": shape_type.value,
            "shapes": [record.to_dict() for record in keyframes.values()],
            "group": 0,
            "label_id": label.id,
            "attributes": attributes_to_list(
                {
                    spec_id: value
                    for spec_id, value in first_state.attributes.items()
                    if spec_id in label_attributes
                    and not label_attributes[spec_id].mutable
                }
            ),
        }

        client_id = self.count + 1
        track_model = track_factory(track_data, client_id, self.injection)
        self.count = client_id
        self.tracks.append(track_model)
        self.objects[client_id] = track_model

        for obj in objects_for_merge:
            obj.removed = True

        merged = [obj.client_id for obj in objects_for_merge]
        logger.info(
            _("Merged objects {merged} into track {client_id}").format(
                merged=merged, client_id=client_id
            )
        )
        self.events.emit(
            CollectionEvent(
                EventType.OBJECTS_MERGED, {"client_id": client_id, "merged": merged}
            )
        )
        return track_model

    def split(self, object_state: ObjectState):
        """
        Split a track into two tracks.

        Only the argument is validated; splitting itself is not supported yet.
        """
        _check_object_state(object_state)

    def group(self, object_states: Sequence[ObjectState]):
        """
        Put several objects in one group.

        Only the arguments are validated; grouping itself is not supported yet.
        """
        if not isinstance(object_states, (list, tuple)):
            raise ArgumentError(
                _("Grouped shapes are expected to be a list of object states")
            )
        for object_state in object_states:
            _check_object_state(object_state)

    def z_order_range(self, frame: int) -> Tuple[int, int]:
        """Lowest and highest z-order used on ``frame``, (0, 0) when unused."""
        z_range = self.collection_z.get(frame)
        if z_range is None:
            return 0, 0
        return z_range["min"], z_range["max"]

    def _saved_object(self, state: ObjectState) -> Annotation:
        _check_object_state(state)
        obj = self.objects.get(state.client_id)
        if obj is None:
            raise ArgumentError(
                _(
                    "The object has not been saved yet. "
                    "Merge only object states obtained from Collection.get"
                )
            )
        return obj

    @staticmethod
    def _fold_shape(
        shape: Shape,
        shape_type: ShapeType,
        mutable_ids,
        keyframes: Dict[int, KeyframeRecord],
    ):
        existing = keyframes.get(shape.frame)
        if existing is not None and not existing.outside:
            raise ArgumentError(_("Expected only one visible shape per frame"))

        keyframes[shape.frame] = KeyframeRecord(
            frame=shape.frame,
            type=shape_type,
            points=shape.points.copy(),
            occluded=shape.occluded,
            z_order=shape.z_order,
            outside=False,
            # only mutable attributes belong to keyframes
            attributes={
                spec_id: value
                for spec_id, value in shape.attributes.items()
                if spec_id in mutable_ids
            },
        )

        # an outside twin closes the shape, any later keyframe there wins
        twin_frame = shape.frame + 1
        if twin_frame not in keyframes:
            keyframes[twin_frame] = keyframes[shape.frame].copy(
                frame=twin_frame, outside=True
            )

    @staticmethod
    def _fold_track(
        track: Track,
        shape_type: ShapeType,
        attributes: Dict[int, Any],
        keyframes: Dict[int, KeyframeRecord],
    ):
        for frame, shape in track.shapes.items():
            existing = keyframes.get(frame)
            if existing is not None and not existing.outside:
                if shape.outside:
                    continue
                raise ArgumentError(_("Expected only one visible shape per frame"))

            keyframes[frame] = shape.copy(
                type=shape_type,
                attributes=diff_attributes(attributes, shape.attributes),
                server_id=None,
            )

    def __len__(self):
        return sum(1 for obj in self.objects.values() if not obj.removed)

    def __contains__(self, client_id):
        return client_id in self.objects


def _type_name(shape_type: Optional[ShapeType]) -> str:
    return shape_type.value if shape_type is not None else str(shape_type)


def _check_object_state(object_state):
    if not isinstance(object_state, ObjectState):
        raise ArgumentError(
            _("Expected an object state, got {name}").format(
                name=type(object_state).__name__
            )
        )
