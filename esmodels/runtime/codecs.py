"""Element codecs: how single values are checked, written and read."""

from collections.abc import Callable
from enum import Enum
from typing import Any

from .serialization import UnrecognizedWireValue, deserialize, serialize
from .tokens import Event, JsonGenerator, JsonParser


class Codec:
    """Reads and writes one wire value.

    ``coerce`` runs on the builder side when a value is set, ``serialize``
    and ``deserialize`` at the wire boundary.
    """

    name = "value"
    python_type: Any = Any

    def coerce(self, value: Any, path: str) -> Any:
        return value

    def accepts(self, event: Event) -> bool:
        return True

    def serialize(self, value: Any, generator: JsonGenerator) -> None:
        raise NotImplementedError

    def deserialize(self, parser: JsonParser, event: Event) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class _PrimitiveCodec(Codec):
    def __init__(
        self,
        name: str,
        python_type: type,
        events: frozenset[Event],
        read: Callable[[Event, Any], Any],
        accepted: tuple[type, ...] | None = None,
    ):
        self.name = name
        self.python_type = python_type
        self._events = events
        self._read = read
        self._accepted = accepted or (python_type,)

    def coerce(self, value: Any, path: str) -> Any:
        # bool is an int subclass but never a valid number here
        if isinstance(value, bool) and self.python_type is not bool:
            raise TypeError(f"'{path}' expects {self.name}, got bool")
        if not isinstance(value, self._accepted):
            raise TypeError(f"'{path}' expects {self.name}, got {type(value).__name__}")
        return value

    def accepts(self, event: Event) -> bool:
        return event in self._events

    def serialize(self, value: Any, generator: JsonGenerator) -> None:
        generator.write(value)

    def deserialize(self, parser: JsonParser, event: Event) -> Any:
        if event not in self._events:
            raise UnrecognizedWireValue(f"Expected {self.name} but found {event.name}")
        try:
            return self._read(event, parser.value)
        except ValueError:
            raise UnrecognizedWireValue(f"Cannot read {parser.value!r} as {self.name}") from None


def _read_string(event: Event, value: Any) -> str:
    return value


def _read_integer(event: Event, value: Any) -> int:
    # Some APIs (cat) send numbers as strings
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(value)
        return int(value)
    return int(value)


def _read_float(event: Event, value: Any) -> float:
    return float(value)


def _read_boolean(event: Event, value: Any) -> bool:
    if event is Event.VALUE_TRUE:
        return True
    if event is Event.VALUE_FALSE:
        return False
    if value in ("true", "false"):
        return value == "true"
    raise ValueError(value)


STRING = _PrimitiveCodec("string", str, frozenset([Event.VALUE_STRING]), _read_string)
INTEGER = _PrimitiveCodec(
    "integer", int, frozenset([Event.VALUE_NUMBER, Event.VALUE_STRING]), _read_integer
)
FLOAT = _PrimitiveCodec(
    "float",
    float,
    frozenset([Event.VALUE_NUMBER, Event.VALUE_STRING]),
    _read_float,
    accepted=(int, float),
)
BOOLEAN = _PrimitiveCodec(
    "boolean",
    bool,
    frozenset([Event.VALUE_TRUE, Event.VALUE_FALSE, Event.VALUE_STRING]),
    _read_boolean,
)


class _JsonDataCodec(Codec):
    """Arbitrary JSON, kept as plain Python values."""

    name = "json"

    def serialize(self, value: Any, generator: JsonGenerator) -> None:
        generator.write_value(value)

    def deserialize(self, parser: JsonParser, event: Event) -> Any:
        return parser.read_value(event)


JSON_DATA = _JsonDataCodec()


class EnumCodec(Codec):
    """Enums whose member values are their wire strings."""

    def __init__(self, enum_type: type[Enum]):
        self.enum_type = enum_type
        self.name = enum_type.__name__
        self.python_type = enum_type

    def _lookup(self, value: str) -> Enum:
        try:
            return self.enum_type(value)
        except ValueError:
            raise UnrecognizedWireValue(f"Unknown {self.name} value {value!r}") from None

    def coerce(self, value: Any, path: str) -> Any:
        if isinstance(value, self.enum_type):
            return value
        if isinstance(value, str):
            try:
                return self.enum_type(value)
            except ValueError:
                raise ValueError(f"'{path}': unknown {self.name} value {value!r}") from None
        raise TypeError(f"'{path}' expects {self.name}, got {type(value).__name__}")

    def accepts(self, event: Event) -> bool:
        return event is Event.VALUE_STRING

    def serialize(self, value: Any, generator: JsonGenerator) -> None:
        generator.write(value.value)

    def deserialize(self, parser: JsonParser, event: Event) -> Any:
        if event is not Event.VALUE_STRING:
            raise UnrecognizedWireValue(f"Expected {self.name} but found {event.name}")
        return self._lookup(parser.value)


class ModelCodec(Codec):
    """Nested API models.

    The target may be a model class or a zero-argument callable returning
    one, for models that refer to themselves or to later definitions.
    """

    def __init__(self, target: Any):
        self._target = target

    @property
    def model(self) -> Any:
        if not isinstance(self._target, type):
            self._target = self._target()
        return self._target

    @property
    def name(self) -> str:  # type: ignore[override]
        return self.model.__name__

    @property
    def python_type(self) -> Any:  # type: ignore[override]
        return self.model

    def coerce(self, value: Any, path: str) -> Any:
        model = self.model
        if isinstance(value, model):
            return value

        # A variant instance given where its union is expected. Exact types
        # win since one variant's model may extend another's.
        candidates = [
            v
            for v in model._info.variants
            if not v.is_collection and isinstance(v.codec, ModelCodec)
        ]
        matches = [v for v in candidates if type(value) is v.codec.model] or [
            v for v in candidates if isinstance(value, v.codec.model)
        ]
        if matches:
            name = matches[0].name
            return model.of(lambda b: b.set(name, value))

        if callable(value) and not isinstance(value, type):
            builder = model.Builder()
            result = value(builder)
            return (builder if result is None else result).build()

        raise TypeError(
            f"'{path}' expects {model.__name__} or a builder function, got {type(value).__name__}"
        )

    def accepts(self, event: Event) -> bool:
        info = self.model._info
        if info.value_body or info.untagged:
            return True
        return event is Event.START_OBJECT

    def serialize(self, value: Any, generator: JsonGenerator) -> None:
        serialize(value, generator)

    def deserialize(self, parser: JsonParser, event: Event) -> Any:
        return deserialize(self.model, parser, event).build()


def enum_codec(enum_type: type[Enum]) -> EnumCodec:
    return EnumCodec(enum_type)


def model_codec(target: Any) -> ModelCodec:
    return ModelCodec(target)
