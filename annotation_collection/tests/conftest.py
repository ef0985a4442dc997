"""
Test fixtures for annotation_collection tests.

Provides reusable labels, payloads and collections.
"""

import pytest

from .helpers import CAR, MODEL, PERSON, SPEED, make_keyframe, make_shape, make_track


@pytest.fixture
def labels():
    """Label dictionaries as a server would send them."""
    return [
        {
            "id": CAR,
            "name": "car",
            "attributes": [
                {"id": SPEED, "name": "speed", "mutable": True, "input_type": "text"},
                {
                    "id": MODEL,
                    "name": "model",
                    "mutable": False,
                    "input_type": "select",
                    "values": ["sedan", "truck"],
                },
            ],
        },
        {"id": PERSON, "name": "person", "attributes": []},
    ]


@pytest.fixture
def payload():
    """An import payload with objects of every kind."""
    return {
        "tags": [{"frame": 0, "label_id": PERSON, "group": 0, "attributes": []}],
        "shapes": [
            make_shape(
                3,
                attributes=[
                    {"spec_id": SPEED, "value": "50"},
                    {"spec_id": MODEL, "value": "sedan"},
                ],
            ),
            make_shape(1, "polygon", label_id=PERSON, z_order=2),
        ],
        "tracks": [
            make_track(
                [
                    make_keyframe(2, attributes=[{"spec_id": SPEED, "value": "10"}]),
                    make_keyframe(6, outside=True),
                ],
                attributes=[{"spec_id": MODEL, "value": "truck"}],
            )
        ],
    }


@pytest.fixture
def collection(labels):
    """An empty collection for the test labels."""
    from annotation_collection.core.collection import Collection

    return Collection(labels)


@pytest.fixture
def loaded(collection, payload):
    """The test collection after importing the test payload."""
    return collection.import_data(payload)
