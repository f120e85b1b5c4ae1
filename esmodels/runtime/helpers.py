"""Collection state helpers and the required property check toggle.

List and map fields are tri-state: unset, defined and empty, defined and not
empty. Unset fields read as the undefined sentinels below, which are empty
but are never serialized. ``is_defined`` tells them apart from a collection
that was explicitly set to empty.
"""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

logger = logging.getLogger(__name__)


class _UndefinedList(tuple):
    """Empty list marker for list fields that were never set."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "UNDEFINED_LIST"


class _UndefinedMap(Mapping):
    """Empty map marker for map fields that were never set."""

    __slots__ = ()

    def __getitem__(self, key: Any) -> Any:
        raise KeyError(key)

    def __iter__(self) -> Iterator[Any]:
        return iter(())

    def __len__(self) -> int:
        return 0

    def __repr__(self) -> str:
        return "UNDEFINED_MAP"


UNDEFINED_LIST: tuple = _UndefinedList()
UNDEFINED_MAP: Mapping = _UndefinedMap()


def is_defined(value: Any) -> bool:
    """Check whether a field value was set.

    False for ``None`` and for the undefined collection sentinels, true for
    everything else, including empty collections that were set explicitly.
    """
    if value is None:
        return False
    return not isinstance(value, (_UndefinedList, _UndefinedMap))


def is_reset(value: Any) -> bool:
    """Check whether a value is one of the reset tokens."""
    return isinstance(value, (_UndefinedList, _UndefinedMap))


def reset_list() -> tuple:
    """Token that returns a list field to the unset state when set."""
    return UNDEFINED_LIST


def reset_map() -> Mapping:
    """Token that returns a map field to the unset state when set."""
    return UNDEFINED_MAP


_checks_disabled: ContextVar[bool] = ContextVar("required_checks_disabled", default=False)


def required_checks_disabled() -> bool:
    """Whether required property checks are disabled in the current context."""
    return _checks_disabled.get()


@contextmanager
def disable_required_checks(disable: bool = True) -> Iterator[None]:
    """Disable (or re-enable) required property checks for a block.

    Models built inside the block may lack required properties, which then
    read as ``None`` or as undefined collections. This is meant for payloads
    that legitimately omit a property the API declares as required. The
    previous setting is restored on exit, even if the block raises.

    Example:
        with disable_required_checks():
            request = GetRequest.of(lambda b: b.index("foo"))
    """
    token = _checks_disabled.set(disable)
    logger.debug("Required property checks %s", "disabled" if disable else "enabled")
    try:
        yield
    finally:
        _checks_disabled.reset(token)
        logger.debug("Required property checks restored (disabled=%s)", _checks_disabled.get())
