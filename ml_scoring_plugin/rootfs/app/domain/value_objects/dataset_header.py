"""Dataset header value objects.

Describes the attribute layout of the rows a model was trained on.
"""

from dataclasses import dataclass
from enum import Enum


class AttributeType(str, Enum):
    """Kinds of attribute a dataset column can hold."""

    NUMERIC = "numeric"
    NOMINAL = "nominal"
    STRING = "string"
    DATE = "date"


@dataclass(frozen=True)
class Attribute:
    """A single column of a dataset header.

    Attributes:
        name: Column name
        type: Kind of values the column holds
        values: Allowed labels for nominal attributes, in index order
    """

    name: str
    type: AttributeType = AttributeType.NUMERIC
    values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate attribute values."""
        if not self.name:
            raise ValueError("name cannot be empty")
        if self.type is AttributeType.NOMINAL and not self.values:
            raise ValueError(f"nominal attribute {self.name} requires values")


@dataclass(frozen=True)
class DatasetHeader:
    """Ordered attribute layout used to train a model.

    Rows handed to a scorer are laid out in attribute order. When
    class_index is set, rows carry the class slot (possibly NaN) at that
    position.

    Attributes:
        attributes: Columns in row order
        class_index: Position of the class attribute, if any
        relation_name: Name of the dataset the header came from
    """

    attributes: tuple[Attribute, ...]
    class_index: int | None = None
    relation_name: str = "dataset"

    def __post_init__(self) -> None:
        """Validate header values."""
        if not self.attributes:
            raise ValueError("attributes cannot be empty")
        names = [a.name for a in self.attributes]
        if len(set(names)) != len(names):
            raise ValueError("attribute names must be unique")
        if self.class_index is not None and not (
            0 <= self.class_index < len(self.attributes)
        ):
            raise ValueError(
                f"class_index must be between 0 and {len(self.attributes) - 1}, "
                f"got {self.class_index}"
            )

    @property
    def num_attributes(self) -> int:
        return len(self.attributes)

    @property
    def class_attribute(self) -> Attribute | None:
        if self.class_index is None:
            return None
        return self.attributes[self.class_index]

    @property
    def feature_names(self) -> tuple[str, ...]:
        """Names of the non-class attributes, in row order."""
        return tuple(
            a.name for i, a in enumerate(self.attributes) if i != self.class_index
        )

    @classmethod
    def from_dict(cls, data: dict) -> "DatasetHeader":
        """Build a header from its JSON form."""
        attributes = tuple(
            Attribute(
                name=a["name"],
                type=AttributeType(a.get("type", AttributeType.NUMERIC.value)),
                values=tuple(a.get("values", ())),
            )
            for a in data["attributes"]
        )
        return cls(
            attributes=attributes,
            class_index=data.get("class_index"),
            relation_name=data.get("relation_name", "dataset"),
        )

    def to_dict(self) -> dict:
        return {
            "relation_name": self.relation_name,
            "class_index": self.class_index,
            "attributes": [
                {"name": a.name, "type": a.type.value, "values": list(a.values)}
                for a in self.attributes
            ],
        }
