"""
Label schema as seen by the collection.

Labels are owned elsewhere; the collection only reads them, mostly to know
which attributes are mutable.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Attribute:
    """A label attribute specification."""

    id: int
    name: str = ""
    mutable: bool = False
    input_type: str = "text"
    default_value: Optional[str] = None
    values: List[str] = field(default_factory=list)

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "mutable": self.mutable,
            "input_type": self.input_type,
            "default_value": self.default_value,
            "values": list(self.values),
        }

    @classmethod
    def from_dict(cls, data: dict):
        """Create from dictionary."""
        return cls(
            id=int(data["id"]),
            name=data.get("name", ""),
            mutable=bool(data.get("mutable", False)),
            input_type=data.get("input_type", "text"),
            default_value=data.get("default_value"),
            values=list(data.get("values", [])),
        )


@dataclass(frozen=True)
class Label:
    """A label with its ordered attribute specifications."""

    id: int
    name: str = ""
    attributes: List[Attribute] = field(default_factory=list)

    def attribute_map(self) -> Dict[int, Attribute]:
        return {attribute.id: attribute for attribute in self.attributes}

    def mutable_ids(self):
        return {attribute.id for attribute in self.attributes if attribute.mutable}

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "attributes": [a.to_dict() for a in self.attributes],
        }

    @classmethod
    def from_dict(cls, data: Any):
        """Create from dictionary, passing existing labels through."""
        if isinstance(data, cls):
            return data
        return cls(
            id=int(data["id"]),
            name=data.get("name", ""),
            attributes=[Attribute.from_dict(a) for a in data.get("attributes", [])],
        )
