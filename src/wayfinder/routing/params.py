"""Placeholder defaults and build-value conversion.

``stringify`` turns a value passed to ``build`` into the text substituted
for a ``<name>`` placeholder.
"""

import logging
from collections.abc import Mapping
from numbers import Number
from typing import Any

from wayfinder.errors import UnrepresentableValueError

logger = logging.getLogger("wayfinder.routing")

# Capture group body for a placeholder without a constraint: one path segment
DEFAULT_SEGMENT = r"[^/]+"

# Values of these types have no textual form in a URL path
_CONTAINERS: tuple[type, ...] = (Mapping, list, tuple, set, frozenset)


def _unrepresentable(name: str, value: Any, strict: bool) -> str:
    if strict:
        raise UnrepresentableValueError(name, value)
    logger.debug(
        "Substituting empty string for %r: %s has no text form",
        name,
        type(value).__name__,
    )
    return ""


def stringify(value: Any, *, name: str = "", strict: bool = False) -> str:
    """Convert a build value to the text placed in the path.

    ``None`` becomes ``""``; strings pass through; bytes are decoded as
    UTF-8; numbers use ``str()``. ``bool`` is a number here, so ``True``
    renders as ``"True"``. Other objects use their own ``__str__``.

    Containers, callables, objects without a ``__str__`` of their own and
    objects whose ``str()`` raises cannot be represented: they become
    ``""``, or raise ``UnrepresentableValueError`` when *strict* is set.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bytes | bytearray):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError:
            return _unrepresentable(name, value, strict)
    if isinstance(value, Number):
        return str(value)
    if isinstance(value, _CONTAINERS) or callable(value):
        return _unrepresentable(name, value, strict)
    if type(value).__str__ is object.__str__:
        # Only the default repr, e.g. "<Plain object at 0x...>"
        return _unrepresentable(name, value, strict)
    try:
        return str(value)
    except Exception:
        return _unrepresentable(name, value, strict)
