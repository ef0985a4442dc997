"""Builders for server-style annotation records used across the tests."""

CAR = 1
PERSON = 2
SPEED = 10  # mutable attribute of CAR
MODEL = 11  # immutable attribute of CAR

DEFAULT_POINTS = {
    "rectangle": [0, 0, 10, 10],
    "polygon": [0, 0, 10, 0, 10, 10],
    "polyline": [0, 0, 10, 10],
    "points": [5, 5],
}


def make_shape(frame, shape_type="rectangle", label_id=CAR, points=None, **kwargs):
    """Server-style shape record."""
    if points is None:
        points = DEFAULT_POINTS[shape_type]
    data = {
        "type": shape_type,
        "frame": frame,
        "label_id": label_id,
        "group": 0,
        "occluded": False,
        "z_order": 0,
        "points": [float(v) for v in points],
        "attributes": [],
    }
    data.update(kwargs)
    return data


def make_keyframe(frame, shape_type="rectangle", outside=False, points=None, **kwargs):
    """Server-style track keyframe record."""
    if points is None:
        points = DEFAULT_POINTS[shape_type]
    data = {
        "type": shape_type,
        "frame": frame,
        "occluded": False,
        "z_order": 0,
        "outside": outside,
        "points": [float(v) for v in points],
        "attributes": [],
    }
    data.update(kwargs)
    return data


def make_track(keyframes, label_id=CAR, attributes=None):
    """Server-style track record."""
    return {
        "frame": min(k["frame"] for k in keyframes) if keyframes else 0,
        "label_id": label_id,
        "group": 0,
        "attributes": attributes or [],
        "shapes": keyframes,
    }


def state_of(collection, client_id, frame=None):
    """The state of ``client_id`` as returned by ``Collection.get``."""
    if frame is None:
        frame = collection.objects[client_id].frame
    for state in collection.get(frame):
        if state.client_id == client_id:
            return state
    raise LookupError(client_id)
