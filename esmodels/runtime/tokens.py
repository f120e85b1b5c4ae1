"""JSON token streams used at the serialization boundary.

Serializers write through a ``JsonGenerator`` and deserializers read from a
``JsonParser``. Both are event based so that the transport can plug in any
JSON implementation. ``ValueGenerator`` and ``ValueParser`` bridge to plain
Python values as produced and consumed by the ``json`` module.
"""

from collections.abc import Iterator, Mapping
from enum import Enum, auto
from typing import Any


class Event(Enum):
    """Parser events."""

    START_OBJECT = auto()
    END_OBJECT = auto()
    START_ARRAY = auto()
    END_ARRAY = auto()
    KEY_NAME = auto()
    VALUE_STRING = auto()
    VALUE_NUMBER = auto()
    VALUE_TRUE = auto()
    VALUE_FALSE = auto()
    VALUE_NULL = auto()


SCALAR_EVENTS = frozenset(
    [
        Event.VALUE_STRING,
        Event.VALUE_NUMBER,
        Event.VALUE_TRUE,
        Event.VALUE_FALSE,
        Event.VALUE_NULL,
    ]
)


class JsonGenerator:
    """Token-emitting interface that serializers write to."""

    def write_start_object(self) -> None:
        raise NotImplementedError

    def write_start_array(self) -> None:
        raise NotImplementedError

    def write_key(self, name: str) -> None:
        raise NotImplementedError

    def write(self, value: str | int | float | bool) -> None:
        raise NotImplementedError

    def write_null(self) -> None:
        raise NotImplementedError

    def write_end(self) -> None:
        raise NotImplementedError

    def write_value(self, value: Any) -> None:
        """Write an arbitrary JSON value (dicts, lists, scalars, None)."""
        if value is None:
            self.write_null()
        elif isinstance(value, Mapping):
            self.write_start_object()
            for key, item in value.items():
                self.write_key(str(key))
                self.write_value(item)
            self.write_end()
        elif isinstance(value, (list, tuple)):
            self.write_start_array()
            for item in value:
                self.write_value(item)
            self.write_end()
        else:
            self.write(value)


class ValueGenerator(JsonGenerator):
    """Generator that assembles plain Python values.

    Example:
        gen = ValueGenerator()
        model.serialize(gen)
        json.dumps(gen.result())
    """

    def __init__(self) -> None:
        self._stack: list[dict[str, Any] | list[Any]] = []
        self._keys: list[str | None] = []
        self._result: Any = None
        self._done = False

    def _emit(self, value: Any) -> None:
        if not self._stack:
            if self._done:
                raise ValueError("Generator already holds a complete value")
            self._result = value
            self._done = True
            return
        top = self._stack[-1]
        if isinstance(top, list):
            top.append(value)
            return
        key = self._keys[-1]
        if key is None:
            raise ValueError("Object value written without a key")
        top[key] = value
        self._keys[-1] = None

    def write_start_object(self) -> None:
        container: dict[str, Any] = {}
        self._emit(container)
        self._stack.append(container)
        self._keys.append(None)

    def write_start_array(self) -> None:
        container: list[Any] = []
        self._emit(container)
        self._stack.append(container)
        self._keys.append(None)

    def write_key(self, name: str) -> None:
        if not self._stack or not isinstance(self._stack[-1], dict):
            raise ValueError(f"Key '{name}' written outside of an object")
        self._keys[-1] = name

    def write(self, value: str | int | float | bool) -> None:
        self._emit(value)

    def write_null(self) -> None:
        self._emit(None)

    def write_end(self) -> None:
        if not self._stack:
            raise ValueError("write_end() without a matching start")
        self._stack.pop()
        self._keys.pop()

    def result(self) -> Any:
        """Return the assembled value."""
        if self._stack or not self._done:
            raise ValueError("Generator holds an incomplete value")
        return self._result


class JsonParser:
    """Event source that deserializers read from.

    ``next_event()`` advances the stream; ``value`` holds the key name or
    scalar value of the last event.
    """

    value: Any = None

    def next_event(self) -> Event:
        raise NotImplementedError

    def skip_value(self, event: Event) -> None:
        """Skip the value that starts with ``event``."""
        depth = 0
        while True:
            if event in (Event.START_OBJECT, Event.START_ARRAY):
                depth += 1
            elif event in (Event.END_OBJECT, Event.END_ARRAY):
                depth -= 1
            if depth == 0:
                return
            event = self.next_event()

    def read_value(self, event: Event) -> Any:
        """Materialize the value that starts with ``event``."""
        if event is Event.START_OBJECT:
            obj: dict[str, Any] = {}
            while True:
                event = self.next_event()
                if event is Event.END_OBJECT:
                    return obj
                key = self.value
                obj[key] = self.read_value(self.next_event())
        if event is Event.START_ARRAY:
            items: list[Any] = []
            while True:
                event = self.next_event()
                if event is Event.END_ARRAY:
                    return items
                items.append(self.read_value(event))
        if event is Event.VALUE_NULL:
            return None
        if event is Event.VALUE_TRUE:
            return True
        if event is Event.VALUE_FALSE:
            return False
        return self.value


def _events(value: Any) -> Iterator[tuple[Event, Any]]:
    # bool before int/float: bool is an int subclass
    if value is None:
        yield Event.VALUE_NULL, None
    elif value is True:
        yield Event.VALUE_TRUE, True
    elif value is False:
        yield Event.VALUE_FALSE, False
    elif isinstance(value, str):
        yield Event.VALUE_STRING, value
    elif isinstance(value, (int, float)):
        yield Event.VALUE_NUMBER, value
    elif isinstance(value, Mapping):
        yield Event.START_OBJECT, None
        for key, item in value.items():
            yield Event.KEY_NAME, key
            yield from _events(item)
        yield Event.END_OBJECT, None
    elif isinstance(value, (list, tuple)):
        yield Event.START_ARRAY, None
        for item in value:
            yield from _events(item)
        yield Event.END_ARRAY, None
    else:
        raise TypeError(f"Not a JSON value: {type(value).__name__}")


class ValueParser(JsonParser):
    """Parser over a decoded JSON value (as returned by ``json.loads``)."""

    def __init__(self, value: Any) -> None:
        self._events = _events(value)
        self.value = None

    def next_event(self) -> Event:
        try:
            event, self.value = next(self._events)
        except StopIteration:
            raise ValueError("Unexpected end of JSON input") from None
        return event
