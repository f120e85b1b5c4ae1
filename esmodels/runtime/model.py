"""Base class and field declarations for API models."""

import inspect
import json
from collections.abc import Callable, Mapping
from typing import Any, ClassVar, Self

from .builder import ObjectBuilder, make_setters
from .helpers import UNDEFINED_LIST, UNDEFINED_MAP
from .serialization import deserialize, serialize
from .tokens import JsonGenerator, ValueGenerator, ValueParser
from .types import Cardinality, FieldDescriptor, Location, ModelInfo


class ModelDefinitionError(RuntimeError):
    """Raised when a model class is declared inconsistently."""


_MODELS: dict[str, type["ObjectModel"]] = {}


def _hashable(value: Any) -> Any:
    # order-insensitive for mappings, to agree with ==
    if isinstance(value, Mapping):
        return frozenset((key, _hashable(item)) for key, item in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(_hashable(item) for item in value)
    return value


class _FieldSpec:
    """Placeholder left in a class body by ``api_field()`` and friends."""

    def __init__(
        self,
        codec: Any,
        cardinality: Cardinality,
        *,
        wire_key: str | None,
        aliases: tuple[str, ...],
        required: bool,
        variant: bool,
        location: Location,
    ):
        self.codec = codec
        self.cardinality = cardinality
        self.wire_key = wire_key
        self.aliases = aliases
        self.required = required
        self.variant = variant
        self.location = location

    def descriptor(self, name: str, owner: str) -> FieldDescriptor:
        return FieldDescriptor(
            name=name,
            wire_key=self.wire_key or name.rstrip("_"),
            codec=self.codec,
            cardinality=self.cardinality,
            required=self.required,
            variant=self.variant,
            location=self.location,
            aliases=self.aliases,
            owner=owner,
        )


def api_field(
    codec: Any,
    *,
    wire_key: str | None = None,
    aliases: tuple[str, ...] = (),
    required: bool = False,
    location: Location = Location.BODY,
) -> Any:
    """Declare a scalar field.

    Args:
        codec: Element codec (e.g. ``STRING``, ``model_codec(TotalHits)``).
        wire_key: JSON key. Defaults to the attribute name without a
            trailing underscore.
        aliases: Extra keys accepted when reading.
        required: Whether ``build()`` insists on a value.
        location: Body, path or query parameter.

    Returns:
        A placeholder replaced by a read-only accessor when the class is
        created.
    """
    return _FieldSpec(
        codec,
        Cardinality.SCALAR,
        wire_key=wire_key,
        aliases=aliases,
        required=required,
        variant=False,
        location=location,
    )


def list_field(
    codec: Any,
    *,
    wire_key: str | None = None,
    aliases: tuple[str, ...] = (),
    required: bool = False,
    location: Location = Location.BODY,
) -> Any:
    """Declare a list field. Unset lists read as ``UNDEFINED_LIST``."""
    return _FieldSpec(
        codec,
        Cardinality.LIST,
        wire_key=wire_key,
        aliases=aliases,
        required=required,
        variant=False,
        location=location,
    )


def map_field(
    codec: Any,
    *,
    wire_key: str | None = None,
    aliases: tuple[str, ...] = (),
    required: bool = False,
) -> Any:
    """Declare a string-keyed map field. Unset maps read as ``UNDEFINED_MAP``."""
    return _FieldSpec(
        codec,
        Cardinality.MAP,
        wire_key=wire_key,
        aliases=aliases,
        required=required,
        variant=False,
        location=Location.BODY,
    )


def variant(
    codec: Any,
    *,
    wire_key: str | None = None,
    cardinality: Cardinality = Cardinality.SCALAR,
) -> Any:
    """Declare a union variant. A model with variants holds exactly one."""
    return _FieldSpec(
        codec,
        cardinality,
        wire_key=wire_key,
        aliases=(),
        required=False,
        variant=True,
        location=Location.BODY,
    )


class _FieldAccessor:
    """Read-only attribute for one model field."""

    def __init__(self, desc: FieldDescriptor):
        self.descriptor = desc
        if desc.cardinality is Cardinality.LIST:
            self._default: Any = UNDEFINED_LIST
        elif desc.cardinality is Cardinality.MAP:
            self._default = UNDEFINED_MAP
        else:
            self._default = None

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        name = self.descriptor.name
        if self.descriptor.variant:
            kind = instance.variant_kind
            if kind != name:
                raise ValueError(f"Expected variant '{name}' but found '{kind}'")
        return instance._values.get(name, self._default)

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(f"{type(instance).__name__} is immutable")


def _check_wire_keys(name: str, fields: tuple[FieldDescriptor, ...]) -> None:
    seen: dict[tuple[Location, str], str] = {}
    for desc in fields:
        location = Location.BODY if desc.location is Location.BODY else Location.QUERY
        for key in desc.wire_keys:
            other = seen.setdefault((location, key), desc.name)
            if other != desc.name:
                raise ModelDefinitionError(
                    f"{name}: wire key '{key}' used by both '{other}' and '{desc.name}'"
                )


def _check_options(info: ModelInfo) -> None:
    for option in (info.field_key, info.value_body):
        if option is not None and option not in info.by_name:
            raise ModelDefinitionError(f"{info.name}: unknown field '{option}'")
    if info.field_key is not None:
        desc = info.by_name[info.field_key]
        if not desc.required or desc.is_collection:
            raise ModelDefinitionError(
                f"{info.name}: field key '{desc.name}' must be a required scalar"
            )
    if info.value_body is not None:
        body = [f for f in info.fields if f.location is Location.BODY]
        if len(body) != 1:
            raise ModelDefinitionError(f"{info.name}: a value body model has exactly one field")
    if info.untagged and not info.is_union:
        raise ModelDefinitionError(f"{info.name}: untagged models must declare variants")


def _check_unique_name(cls: type) -> None:
    existing = _MODELS.get(cls.__name__)
    if existing is None:
        return
    if (existing.__module__, existing.__qualname__) != (cls.__module__, cls.__qualname__):
        raise ModelDefinitionError(
            f"{cls.__name__} is already defined in {existing.__module__}"
        )


class ObjectModel:
    """Base class for API models.

    Subclasses declare fields with ``api_field()``, ``list_field()``,
    ``map_field()`` and ``variant()``. When the class is created its field
    table is the concatenation of its bases' tables and its own fields, and a
    matching ``Builder`` class is derived from the bases' builders.

    Example:
        class TotalHits(ObjectModel):
            value: int = api_field(INTEGER, required=True)
            relation: TotalHitsRelation = api_field(
                enum_codec(TotalHitsRelation), required=True
            )

        hits = TotalHits.of(lambda b: b.value(0).relation(TotalHitsRelation.EQ))

    Instances are immutable, hashable and safe to share between threads.
    """

    _info: ClassVar[ModelInfo] = ModelInfo(name="ObjectModel", fields=(), abstract=True)
    Builder: ClassVar[type[ObjectBuilder]] = ObjectBuilder

    _values: dict[str, Any]

    def __init_subclass__(
        cls,
        *,
        abstract: bool = False,
        field_key: str | None = None,
        value_body: str | None = None,
        untagged: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        bases = [b for b in cls.__bases__ if issubclass(b, ObjectModel)]

        fields: list[FieldDescriptor] = []
        for base in bases:
            for desc in base._info.fields:
                if desc.name not in {f.name for f in fields}:
                    fields.append(desc)
        inherited = {f.name for f in fields}

        annotations = inspect.get_annotations(cls)
        setters: dict[str, Callable[..., Any]] = {}
        for name, declared in list(cls.__dict__.items()):
            if not isinstance(declared, _FieldSpec):
                continue
            if name in inherited:
                raise ModelDefinitionError(f"{cls.__name__}.{name} redeclares an inherited field")
            desc = declared.descriptor(name, cls.__name__)
            fields.append(desc)
            setattr(cls, name, _FieldAccessor(desc))
            setters.update(make_setters(desc, annotations.get(name, Any)))

        _check_wire_keys(cls.__name__, tuple(fields))
        info = ModelInfo(
            name=cls.__name__,
            fields=tuple(fields),
            ancestors=tuple(b.__name__ for b in bases if b is not ObjectModel),
            abstract=abstract,
            field_key=field_key,
            value_body=value_body,
            untagged=untagged,
        )
        _check_options(info)
        _check_unique_name(cls)
        cls._info = info

        builder_bases = tuple(b.Builder for b in bases)
        cls.Builder = type(
            "Builder",
            builder_bases,
            {
                "__module__": cls.__module__,
                "__qualname__": f"{cls.__qualname__}.Builder",
                "__doc__": f"Builder for :class:`{cls.__name__}`.",
                "_model": cls,
                **setters,
            },
        )
        _MODELS[cls.__name__] = cls

    def __init__(self, **fields: Any) -> None:
        builder = self.Builder()
        for name, value in fields.items():
            builder.set(name, value)
        object.__setattr__(self, "_values", builder._freeze())

    @classmethod
    def _from_values(cls, values: dict[str, Any]) -> Self:
        instance = cls.__new__(cls)
        object.__setattr__(instance, "_values", values)
        return instance

    @classmethod
    def builder(cls) -> Any:
        """Return a new builder for this model."""
        return cls.Builder()

    @classmethod
    def of(cls, fn: Callable[[Any], Any]) -> Self:
        """Build an instance from a function that configures a builder.

        Example:
            TotalHits.of(lambda b: b.value(0).relation(TotalHitsRelation.EQ))
        """
        builder = cls.Builder()
        result = fn(builder)
        return (builder if result is None else result).build()

    @property
    def variant_kind(self) -> str | None:
        """Name of the selected variant, or None if this is not a union."""
        for desc in self._info.variants:
            if desc.name in self._values:
                return desc.name
        return None

    @property
    def variant_value(self) -> Any:
        kind = self.variant_kind
        return None if kind is None else self._values[kind]

    def serialize(self, generator: JsonGenerator) -> None:
        """Write this object to a token generator."""
        serialize(self, generator)

    @classmethod
    def deserialize(cls, parser: Any) -> Any:
        """Read this model from a token parser into a builder (not built)."""
        return deserialize(cls, parser)

    def to_dict(self) -> Any:
        """Return the wire representation as plain Python values."""
        generator = ValueGenerator()
        serialize(self, generator)
        return generator.result()

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        return deserialize(cls, ValueParser(data)).build()

    def to_json(self, **kwargs: Any) -> str:
        """Serialize to a JSON string (compact unless ``indent`` is given)."""
        kwargs.setdefault("separators", (",", ":") if "indent" not in kwargs else None)
        return json.dumps(self.to_dict(), ensure_ascii=False, **kwargs)

    @classmethod
    def from_json(cls, text: str | bytes) -> Self:
        return cls.from_dict(json.loads(text))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._values == other._values  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), _hashable(self._values)))

    def __repr__(self) -> str:
        args = ", ".join(f"{name}={value!r}" for name, value in self._values.items())
        return f"{type(self).__name__}({args})"


def registered_models() -> dict[str, type[ObjectModel]]:
    """Return every model class created so far, by name."""
    return dict(_MODELS)


def get_model(name: str) -> type[ObjectModel]:
    try:
        return _MODELS[name]
    except KeyError:
        raise KeyError(f"Unknown model {name}") from None
