"""
Example of merging per-frame shapes into one track.

Usage:
    python examples/merge_example.py
"""

import json
import logging

from annotation_collection import Collection
from annotation_collection.core.collection import EventType

logging.basicConfig(level=logging.INFO)

labels = [
    {
        "id": 1,
        "name": "car",
        "attributes": [
            {"id": 1, "name": "parked", "mutable": True},
            {"id": 2, "name": "model", "mutable": False},
        ],
    }
]


def box(frame, x, parked):
    return {
        "type": "rectangle",
        "frame": frame,
        "label_id": 1,
        "points": [x, 10, x + 50, 40],
        "attributes": [
            {"spec_id": 1, "value": parked},
            {"spec_id": 2, "value": "sedan"},
        ],
    }


collection = Collection(labels)
collection.events.on(
    EventType.OBJECTS_MERGED, lambda event: print("merged:", event.data)
)
collection.import_data(
    {"shapes": [box(0, 0, "false"), box(10, 100, "false"), box(20, 200, "true")]}
)

states = [state for frame in (0, 10, 20) for state in collection.get(frame)]
track = collection.merge(states)
print(f"track {track.client_id} has keyframes on {list(track.shapes)}")

for frame in (0, 1, 5, 10, 11, 20, 21):
    visible = [s.client_id for s in collection.get(frame)]
    print(f"frame {frame}: {visible}")

print(json.dumps(collection.export(), indent=2))
