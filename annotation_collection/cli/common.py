import logging
from gettext import gettext as _
from pathlib import Path

from annotation_collection.core.collection import Collection
from annotation_collection.utils.misc import read_json

logger = logging.getLogger(__name__)


def load_collection(path: Path) -> Collection:
    """
    Build a collection from a JSON file.

    The file holds the job labels next to the annotation payload:
    ``{"labels": [...], "tags": [...], "shapes": [...], "tracks": [...]}``.
    """
    data = read_json(path)
    assert "labels" in data, _("The annotation file has no labels")
    collection = Collection(data["labels"])
    collection.import_data(data)
    logger.info(
        _("Loaded {count} objects from {path}").format(count=len(collection), path=path)
    )
    return collection
