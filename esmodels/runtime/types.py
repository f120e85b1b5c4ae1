"""Runtime descriptors for API models.

These dataclasses describe the structure of model types at runtime. They are
built once per model class and consulted by builders, serializers and
deserializers alike.
"""

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any


class Cardinality(StrEnum):
    """How many values a field holds."""

    SCALAR = auto()
    LIST = auto()
    MAP = auto()


class Location(StrEnum):
    """Where a request field travels."""

    BODY = auto()
    PATH = auto()
    QUERY = auto()


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Describes one field of a model."""

    name: str
    wire_key: str
    codec: Any
    cardinality: Cardinality = Cardinality.SCALAR
    required: bool = False
    variant: bool = False
    location: Location = Location.BODY
    aliases: tuple[str, ...] = ()
    owner: str = ""

    @property
    def is_collection(self) -> bool:
        return self.cardinality is not Cardinality.SCALAR

    @property
    def wire_keys(self) -> tuple[str, ...]:
        """Every key this field is read from, canonical key first."""
        return (self.wire_key, *self.aliases)


@dataclass(frozen=True, slots=True)
class ModelInfo:
    """Describes a model type: its full field table and wire shape.

    ``fields`` lists inherited descriptors first, then the model's own, in
    declaration order. That order is the order keys are written in.
    """

    name: str
    fields: tuple[FieldDescriptor, ...]
    ancestors: tuple[str, ...] = ()
    abstract: bool = False
    field_key: str | None = None  # field whose value wraps the body as its key
    value_body: str | None = None  # field whose value is the whole body
    untagged: bool = False  # union variants are told apart by wire shape
    by_name: dict[str, FieldDescriptor] = field(init=False, repr=False, compare=False)
    by_wire_key: dict[str, FieldDescriptor] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "by_name", {f.name: f for f in self.fields})
        object.__setattr__(
            self,
            "by_wire_key",
            {
                key: f
                for f in self.fields
                if f.location is Location.BODY and f.name != self.field_key
                for key in f.wire_keys
            },
        )

    @property
    def variants(self) -> tuple[FieldDescriptor, ...]:
        return tuple(f for f in self.fields if f.variant)

    @property
    def is_union(self) -> bool:
        return any(f.variant for f in self.fields)

    @property
    def kind(self) -> str:
        if self.abstract:
            return "abstract"
        if self.is_union:
            return "union"
        return "object"
