"""Serialization and deserialization of API models.

Both directions are driven by the same descriptor table (``ModelInfo``), so
key names, aliases and ordering cannot drift apart.
"""

import logging
from enum import Enum
from typing import Any

from .builder import MissingRequiredField
from .helpers import is_defined
from .tokens import Event, JsonGenerator, JsonParser
from .types import Cardinality, FieldDescriptor, Location, ModelInfo

logger = logging.getLogger(__name__)


class UnrecognizedWireValue(RuntimeError):
    """Raised when a wire value cannot be read as the expected shape."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(f"{message} (at '{path}')" if path else message)
        self.message = message
        self.path = path

    def within(self, key: str) -> "UnrecognizedWireValue":
        """Return the same error with ``key`` prepended to its path."""
        return UnrecognizedWireValue(self.message, f"{key}.{self.path}" if self.path else key)


def _expect(event: Event, expected: Event, what: str) -> None:
    if event is not expected:
        raise UnrecognizedWireValue(f"Expected {expected.name} for {what} but found {event.name}")


def _write_field(desc: FieldDescriptor, value: Any, generator: JsonGenerator) -> None:
    codec = desc.codec
    if desc.cardinality is Cardinality.LIST:
        generator.write_start_array()
        for item in value:
            codec.serialize(item, generator)
        generator.write_end()
    elif desc.cardinality is Cardinality.MAP:
        generator.write_start_object()
        for key, item in value.items():
            generator.write_key(str(key))
            codec.serialize(item, generator)
        generator.write_end()
    else:
        codec.serialize(value, generator)


def _write_properties(info: ModelInfo, values: dict[str, Any], generator: JsonGenerator) -> None:
    for desc in info.fields:
        if desc.location is not Location.BODY or desc.name == info.field_key:
            continue
        value = values.get(desc.name)
        if not is_defined(value):
            continue
        generator.write_key(desc.wire_key)
        _write_field(desc, value, generator)


def serialize(instance: Any, generator: JsonGenerator) -> None:
    """Write a model instance to a token generator.

    Keys are written in descriptor declaration order, ancestors first. Only
    defined fields are written, so an explicitly empty collection appears as
    ``[]`` or ``{}`` while an unset one is left out.
    """
    info: ModelInfo = type(instance)._info
    values: dict[str, Any] = instance._values

    if info.value_body:
        desc = info.by_name[info.value_body]
        _write_field(desc, getattr(instance, desc.name), generator)
        return

    if info.untagged:
        kind = instance.variant_kind
        if kind is None:
            generator.write_null()
        else:
            _write_field(info.by_name[kind], values[kind], generator)
        return

    generator.write_start_object()
    if info.field_key:
        generator.write_key(str(values.get(info.field_key, "")))
        generator.write_start_object()
        _write_properties(info, values, generator)
        generator.write_end()
    else:
        _write_properties(info, values, generator)
    generator.write_end()


def _read_field(builder: Any, desc: FieldDescriptor, parser: JsonParser, event: Event) -> None:
    if event is Event.VALUE_NULL:
        return
    codec = desc.codec

    if desc.cardinality is Cardinality.LIST:
        _expect(event, Event.START_ARRAY, desc.wire_key)
        builder.set(desc.name, [])
        while True:
            event = parser.next_event()
            if event is Event.END_ARRAY:
                return
            builder.append(desc.name, codec.deserialize(parser, event))

    if desc.cardinality is Cardinality.MAP:
        _expect(event, Event.START_OBJECT, desc.wire_key)
        builder.set(desc.name, {})
        while True:
            event = parser.next_event()
            if event is Event.END_OBJECT:
                return
            key = parser.value
            try:
                item = codec.deserialize(parser, parser.next_event())
            except UnrecognizedWireValue as exc:
                raise exc.within(key) from None
            except MissingRequiredField as exc:
                raise exc.within(exc.model, key) from None
            builder.append(desc.name, key, item)

    builder.set(desc.name, codec.deserialize(parser, event))


def _read_properties(builder: Any, info: ModelInfo, parser: JsonParser) -> None:
    while True:
        event = parser.next_event()
        if event is Event.END_OBJECT:
            return
        key = parser.value
        desc = info.by_wire_key.get(key)
        if desc is None:
            logger.debug("%s: ignoring unknown property '%s'", info.name, key)
            parser.skip_value(parser.next_event())
            continue
        try:
            _read_qualified(builder, info, desc, parser, parser.next_event())
        except UnrecognizedWireValue as exc:
            raise exc.within(key) from None


def _read_qualified(
    builder: Any, info: ModelInfo, desc: FieldDescriptor, parser: JsonParser, event: Event
) -> None:
    try:
        _read_field(builder, desc, parser, event)
    except MissingRequiredField as exc:
        raise exc.within(info.name, desc.name) from None


def _matches(desc: FieldDescriptor, event: Event) -> bool:
    if desc.cardinality is Cardinality.LIST:
        return event is Event.START_ARRAY
    if desc.cardinality is Cardinality.MAP:
        return event is Event.START_OBJECT
    return desc.codec.accepts(event)


def deserialize(model: type, parser: JsonParser, event: Event | None = None) -> Any:
    """Read a model's wire representation into a fresh builder.

    Unknown keys are skipped. The returned builder is not built: the caller
    calls ``build()``, which is where required properties are checked.

    Args:
        model: The model class to read.
        parser: The token source.
        event: The first event of the value, if already consumed.

    Returns:
        The populated ``model.Builder``.
    """
    info: ModelInfo = model._info
    builder = model.Builder()
    if event is None:
        event = parser.next_event()

    if info.value_body:
        _read_qualified(builder, info, info.by_name[info.value_body], parser, event)
        return builder

    if info.untagged:
        for desc in info.variants:
            if _matches(desc, event):
                _read_qualified(builder, info, desc, parser, event)
                return builder
        raise UnrecognizedWireValue(f"No variant of {info.name} accepts {event.name}")

    _expect(event, Event.START_OBJECT, info.name)
    if info.field_key:
        event = parser.next_event()
        _expect(event, Event.KEY_NAME, f"{info.name}.{info.field_key}")
        key = parser.value
        builder.set(info.field_key, key)
        try:
            _expect(parser.next_event(), Event.START_OBJECT, info.name)
            _read_properties(builder, info, parser)
        except UnrecognizedWireValue as exc:
            raise exc.within(key) from None
        _expect(parser.next_event(), Event.END_OBJECT, info.name)
    else:
        _read_properties(builder, info, parser)
    return builder


def _param_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def encode_params(instance: Any, location: Location) -> dict[str, str]:
    """Encode the path or query parameters of a request for the transport.

    Lists are comma-joined, booleans lower-cased and enums given by their
    wire value. Unset parameters are left out.
    """
    info: ModelInfo = type(instance)._info
    params: dict[str, str] = {}
    for desc in info.fields:
        if desc.location is not location:
            continue
        value = instance._values.get(desc.name)
        if not is_defined(value):
            continue
        if desc.cardinality is Cardinality.LIST:
            params[desc.wire_key] = ",".join(_param_value(v) for v in value)
        else:
            params[desc.wire_key] = _param_value(value)
    return params
