"""Single-use builders for API models."""

import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, Self

from .helpers import is_reset, required_checks_disabled
from .types import Cardinality, FieldDescriptor, ModelInfo

if TYPE_CHECKING:
    from .model import ObjectModel

logger = logging.getLogger(__name__)

VARIANT_PATH = "<variant>"


class MissingRequiredField(RuntimeError):
    """Raised by ``build()`` when a required property was never set."""

    def __init__(self, model: str, path: str) -> None:
        super().__init__(f"Missing required property '{model}.{path}'")
        self.model = model
        self.path = path

    def within(self, model: str, prefix: str) -> "MissingRequiredField":
        """Return the same error as seen from an enclosing builder."""
        return MissingRequiredField(model, f"{prefix}.{self.path}")


class BuilderAlreadyUsed(RuntimeError):
    """Raised when a builder is used after it built its object."""

    def __init__(self) -> None:
        super().__init__("Object builders can only be used once")


class ObjectBuilder:
    """Accumulates field values for one model instance.

    Builders are single-use: the first successful ``build()`` consumes them
    and any later call (``build``, ``set`` or ``append``) raises
    ``BuilderAlreadyUsed``. A builder must not be shared between threads
    without external locking.

    Every model gets its own ``Builder`` subclass, derived from the builders
    of its ancestors, with one chaining method per field. All of them write
    to the same flat ``_values`` mapping.
    """

    _model: ClassVar["type[ObjectModel] | None"] = None

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._used = False

    @property
    def _info(self) -> ModelInfo:
        if self._model is None:
            raise TypeError("ObjectBuilder must be used through a model's Builder")
        return self._model._info

    def _descriptor(self, name: str) -> FieldDescriptor:
        try:
            return self._info.by_name[name]
        except KeyError:
            raise AttributeError(f"'{self._info.name}' has no field '{name}'") from None

    def _check_open(self) -> None:
        if self._used:
            raise BuilderAlreadyUsed()

    def _coerce(self, desc: FieldDescriptor, value: Any, path: str) -> Any:
        try:
            return desc.codec.coerce(value, path)
        except MissingRequiredField as exc:
            raise exc.within(self._info.name, path) from None

    @staticmethod
    def _check_key(name: str, key: Any) -> str:
        # map keys are JSON object keys
        if not isinstance(key, str):
            raise TypeError(f"'{name}' keys must be strings, got {type(key).__name__}")
        return key

    def is_set(self, name: str) -> bool:
        """Whether a value was set for ``name`` (collections: whether defined)."""
        self._descriptor(name)
        return name in self._values

    def set(self, name: str, value: Any) -> Self:
        """Set a field, replacing any previous value.

        ``None`` and the reset tokens return the field to the unset state.
        Collections are copied so the caller's object is never touched.
        """
        self._check_open()
        desc = self._descriptor(name)

        if value is None or is_reset(value):
            self._values.pop(name, None)
            return self

        if desc.cardinality is Cardinality.LIST:
            if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
                raise TypeError(f"'{name}' expects a list, got {type(value).__name__}")
            self._values[name] = [self._coerce(desc, item, name) for item in value]
        elif desc.cardinality is Cardinality.MAP:
            if not isinstance(value, Mapping):
                raise TypeError(f"'{name}' expects a mapping, got {type(value).__name__}")
            self._values[name] = {
                self._check_key(name, key): self._coerce(desc, item, f"{name}.{key}")
                for key, item in value.items()
            }
        else:
            self._values[name] = self._coerce(desc, value, name)

        if desc.variant:
            self._select_variant(name)
        return self

    def append(self, name: str, *values: Any) -> Self:
        """Add to a collection field, defining it first if it was unset.

        Lists take any number of items. Maps take either ``key, value`` or a
        single mapping whose entries are added in order.
        """
        self._check_open()
        desc = self._descriptor(name)

        if desc.cardinality is Cardinality.LIST:
            items = self._values.setdefault(name, [])
            items.extend(self._coerce(desc, item, name) for item in values)
        elif desc.cardinality is Cardinality.MAP:
            if len(values) == 1 and isinstance(values[0], Mapping):
                entries: Iterable[tuple[Any, Any]] = values[0].items()
            elif len(values) == 2:
                entries = [(values[0], values[1])]
            else:
                raise TypeError(f"'{name}' takes a key and a value, or a mapping")
            mapping = self._values.setdefault(name, {})
            for key, item in entries:
                mapping[self._check_key(name, key)] = self._coerce(desc, item, f"{name}.{key}")
        else:
            raise TypeError(f"'{name}' is not a list or map field")

        if desc.variant:
            self._select_variant(name)
        return self

    def _select_variant(self, name: str) -> None:
        for other in self._info.variants:
            if other.name != name and other.name in self._values:
                logger.debug("%s: variant '%s' replaces '%s'", self._info.name, name, other.name)
                del self._values[other.name]

    def _check_required(self, info: ModelInfo) -> None:
        for desc in info.fields:
            if desc.required and not desc.variant and desc.name not in self._values:
                raise MissingRequiredField(info.name, desc.name)
        if info.is_union and not any(v.name in self._values for v in info.variants):
            raise MissingRequiredField(info.name, VARIANT_PATH)

    def _freeze(self) -> dict[str, Any]:
        """Validate, consume the builder and return frozen field values."""
        self._check_open()
        info = self._info
        if info.abstract:
            raise TypeError(f"{info.name} is abstract and cannot be built")
        if not required_checks_disabled():
            self._check_required(info)
        self._used = True

        frozen: dict[str, Any] = {}
        for desc in info.fields:
            if desc.name not in self._values:
                continue
            value = self._values[desc.name]
            if desc.cardinality is Cardinality.LIST:
                value = tuple(value)
            elif desc.cardinality is Cardinality.MAP:
                value = MappingProxyType(dict(value))
            frozen[desc.name] = value
        return frozen

    def build(self) -> Any:
        """Build the model instance.

        Raises:
            MissingRequiredField: if a required property is not set.
            BuilderAlreadyUsed: if this builder already built an object.
        """
        values = self._freeze()
        return self._model._from_values(values)


def _setter(name: str, annotation: Any, doc: str) -> Callable[..., Any]:
    def setter(self: ObjectBuilder, value: Any) -> ObjectBuilder:
        return self.set(name, value)

    setter.__name__ = name
    setter.__annotations__ = {"value": annotation}
    setter.__doc__ = doc
    return setter


def _adder(name: str, doc: str) -> Callable[..., Any]:
    def adder(self: ObjectBuilder, *values: Any) -> ObjectBuilder:
        return self.append(name, *values)

    adder.__name__ = f"add_{name}"
    adder.__doc__ = doc
    return adder


def _putter(name: str, doc: str) -> Callable[..., Any]:
    def putter(self: ObjectBuilder, key: str, value: Any) -> ObjectBuilder:
        return self.append(name, key, value)

    putter.__name__ = f"put_{name}"
    putter.__doc__ = doc
    return putter


def make_setters(desc: FieldDescriptor, annotation: Any) -> dict[str, Callable[..., Any]]:
    """Create the chaining builder methods for one field."""
    api_name = f"API name: ``{desc.wire_key}``"
    methods = {desc.name: _setter(desc.name, annotation, f"Set ``{desc.name}``.\n\n{api_name}")}
    if desc.cardinality is Cardinality.LIST:
        methods[f"add_{desc.name}"] = _adder(
            desc.name, f"Add values to ``{desc.name}``, defining it if needed.\n\n{api_name}"
        )
    elif desc.cardinality is Cardinality.MAP:
        methods[f"put_{desc.name}"] = _putter(
            desc.name, f"Add an entry to ``{desc.name}``, defining it if needed.\n\n{api_name}"
        )
    return methods
