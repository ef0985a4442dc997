"""
Tests for Collection import, export and queries.
"""

import logging
from unittest.mock import Mock

import pytest

from annotation_collection.core.collection import (
    ArgumentError,
    Collection,
    DataError,
    EventType,
    Label,
    ObjectType,
    Shape,
    Tag,
    Track,
)

from ..helpers import CAR, PERSON, make_keyframe, make_shape, make_track, state_of


class TestImport:
    def test_labels_indexed_by_id(self, collection):
        assert set(collection.labels) == {CAR, PERSON}
        assert isinstance(collection.labels[CAR], Label)
        assert collection.labels[CAR].attribute_map()[10].mutable

    def test_client_ids_follow_kind_order(self, loaded):
        assert isinstance(loaded.objects[1], Tag)
        assert isinstance(loaded.objects[2], Shape) and loaded.objects[2].frame == 3
        assert isinstance(loaded.objects[3], Shape) and loaded.objects[3].frame == 1
        assert isinstance(loaded.objects[4], Track)
        assert loaded.count == 4

    def test_client_ids_keep_increasing(self, loaded, payload):
        loaded.import_data(payload)
        assert sorted(loaded.objects) == list(range(1, 9))

    def test_indexes(self, loaded):
        assert [s.client_id for s in loaded.shapes[3]] == [2]
        assert [s.client_id for s in loaded.shapes[1]] == [3]
        assert [t.client_id for t in loaded.tags[0]] == [1]
        assert [t.client_id for t in loaded.tracks] == [4]

    def test_returns_collection(self, collection, payload):
        assert collection.import_data(payload) is collection

    def test_empty_track_skipped(self, collection, caplog):
        data = {
            "tags": [],
            "shapes": [],
            "tracks": [make_track([]), make_track([make_keyframe(0)])],
        }
        with caplog.at_level(logging.WARNING):
            collection.import_data(data)
        assert "without any shapes" in caplog.text
        assert 1 not in collection
        assert [t.client_id for t in collection.tracks] == [2]

    def test_unknown_type_propagates(self, collection):
        with pytest.raises(DataError):
            collection.import_data({"shapes": [make_shape(0, type="cuboid")]})

    def test_missing_sections(self, collection):
        collection.import_data({"shapes": [make_shape(0)]})
        assert len(collection) == 1

    def test_emits_event(self, collection, payload):
        listener = Mock()
        collection.events.on(EventType.OBJECTS_IMPORTED, listener)
        collection.import_data(payload)
        event = listener.call_args[0][0]
        assert event.data == {"tags": 1, "shapes": 2, "tracks": 1}


class TestExport:
    def test_round_trip(self, loaded, payload):
        exported = loaded.export()
        assert exported["tags"] == payload["tags"]
        assert exported["tracks"] == payload["tracks"]
        # shapes come back ordered by frame
        assert exported["shapes"] == sorted(payload["shapes"], key=lambda s: s["frame"])

    def test_skips_removed(self, loaded):
        loaded.objects[2].removed = True
        loaded.objects[4].removed = True
        exported = loaded.export()
        assert [s["frame"] for s in exported["shapes"]] == [1]
        assert exported["tracks"] == []
        assert 2 in loaded and 4 in loaded


class TestGet:
    def test_order_tracks_shapes_tags(self, collection):
        collection.import_data(
            {
                "tags": [{"frame": 4, "label_id": PERSON, "attributes": []}],
                "shapes": [make_shape(4)],
                "tracks": [make_track([make_keyframe(0)])],
            }
        )
        states = collection.get(4)
        assert [s.object_type for s in states] == [
            ObjectType.TRACK,
            ObjectType.SHAPE,
            ObjectType.TAG,
        ]

    def test_frame_without_objects(self, loaded):
        # the track ended with an outside keyframe on frame 6
        assert loaded.get(100) == []

    def test_track_ghost_excluded(self, loaded):
        assert 4 not in [s.client_id for s in loaded.get(1)]

    def test_outside_keyframe_included(self, loaded):
        state = state_of(loaded, 4, frame=6)
        assert state.outside and state.keyframe

    def test_interpolated_frame_included(self, loaded):
        state = state_of(loaded, 4, frame=4)
        assert not state.outside and not state.keyframe

    def test_removed_excluded(self, loaded):
        loaded.objects[2].removed = True
        assert [s.client_id for s in loaded.get(3)] == [4]

    def test_state_carries_color(self, loaded):
        assert state_of(loaded, 2).color == loaded.objects[2].color


class TestEmpty:
    def test_resets_everything(self, loaded):
        listener = Mock()
        loaded.events.on(EventType.COLLECTION_EMPTIED, listener)
        loaded.empty()
        assert loaded.flush
        assert loaded.objects == {} and loaded.tracks == []
        assert loaded.shapes == {} and loaded.tags == {}
        assert loaded.count == 0
        assert loaded.z_order_range(1) == (0, 0)
        assert loaded.export() == {"tracks": [], "shapes": [], "tags": []}
        listener.assert_called_once()

    def test_client_ids_restart(self, loaded, payload):
        loaded.empty()
        loaded.import_data(payload)
        assert sorted(loaded.objects) == [1, 2, 3, 4]


def test_z_order_range(loaded):
    assert loaded.z_order_range(1) == (2, 2)
    assert loaded.z_order_range(50) == (0, 0)


def test_len_counts_live_objects(loaded):
    assert len(loaded) == 4
    loaded.objects[1].removed = True
    assert len(loaded) == 3


class TestSplitGroup:
    def test_split_is_noop(self, loaded):
        before = loaded.export()
        assert loaded.split(state_of(loaded, 4, frame=2)) is None
        assert loaded.export() == before

    def test_split_validates(self, loaded):
        with pytest.raises(ArgumentError):
            loaded.split({"client_id": 4})

    def test_group_is_noop(self, loaded):
        before = loaded.export()
        assert loaded.group([state_of(loaded, 2), state_of(loaded, 3)]) is None
        assert loaded.export() == before

    def test_group_validates(self, loaded):
        with pytest.raises(ArgumentError):
            loaded.group(state_of(loaded, 2))
        with pytest.raises(ArgumentError):
            loaded.group([state_of(loaded, 2), 3])


def test_collection_accepts_label_objects(labels):
    collection = Collection([Label.from_dict(label) for label in labels])
    collection.import_data({"shapes": [make_shape(0)]})
    assert collection.objects[1].label.name == "car"


def test_rejected_track_leaves_z_index_untouched(collection):
    track = make_track(
        [make_keyframe(1, z_order=7), make_keyframe(4, points=[1, 2])]
    )
    with pytest.raises(DataError):
        collection.import_data({"tracks": [track]})
    assert collection.z_order_range(1) == (0, 0)
    assert collection.collection_z == {}
