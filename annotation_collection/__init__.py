from pathlib import Path

from .core.collection import (
    ArgumentError,
    Collection,
    DataError,
    Label,
    ObjectState,
    ShapeType,
)

__version__ = (Path(__file__).parent / "VERSION").read_text().strip()

__all__ = [
    "ArgumentError",
    "Collection",
    "DataError",
    "Label",
    "ObjectState",
    "ShapeType",
]
