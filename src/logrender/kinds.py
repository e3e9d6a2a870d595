"""Primitive kinds eligible for their own renderer.

A value belongs to at most one kind. Strings, bytes and arbitrary objects
belong to none and are handled by the type table or the default renderer.

``Kind.LONG`` is an alias of ``Kind.INT``: Python has a single integer type.

Example:
    >>> kind_of(True)
    <Kind.BOOL: 'bool'>
    >>> kind_of(3) is Kind.LONG
    True
    >>> kind_from_name("Double")
    <Kind.FLOAT: 'float'>
    >>> kind_of("text") is None
    True
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from typing import Any

_TEXT_TYPES = (str, bytes, bytearray)


class Kind(Enum):
    """Closed set of primitive kinds."""

    FLOAT = "float"
    INT = "int"
    LONG = "int"
    BOOL = "bool"
    ARRAY = "array"
    NULL = "null"


# Fixed evaluation order of the primitive table
PRIMITIVE_ORDER: tuple[Kind, ...] = (
    Kind.FLOAT,
    Kind.INT,
    Kind.BOOL,
    Kind.ARRAY,
    Kind.NULL,
)

# Builtin classes accepted as primitive registration keys
_PRIMITIVE_TYPES: dict[type, Kind] = {
    type(None): Kind.NULL,
    bool: Kind.BOOL,
    int: Kind.INT,
    float: Kind.FLOAT,
    list: Kind.ARRAY,
    tuple: Kind.ARRAY,
    dict: Kind.ARRAY,
    set: Kind.ARRAY,
    frozenset: Kind.ARRAY,
}

# Extra spellings accepted by kind_from_name
_NAME_ALIASES: dict[str, Kind] = {
    "double": Kind.FLOAT,
    "integer": Kind.INT,
    "boolean": Kind.BOOL,
    "none": Kind.NULL,
}


def is_text(value: Any) -> bool:
    """Check if value is a string-like scalar (never a collection)."""
    return isinstance(value, _TEXT_TYPES)


def kind_of(value: Any) -> Kind | None:
    """Return the primitive kind of a value, or None if it has none."""
    if value is None:
        return Kind.NULL
    if isinstance(value, bool):
        return Kind.BOOL
    if isinstance(value, numbers.Integral):
        return Kind.INT
    if isinstance(value, numbers.Real):
        return Kind.FLOAT
    if isinstance(value, Mapping | Set):
        return Kind.ARRAY
    if isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES):
        return Kind.ARRAY
    return None


def kind_for_type(cls: type) -> Kind | None:
    """Return the primitive kind for a builtin primitive class.

    Used when a class object (``bool``, ``int``, ``dict``...) is given as a
    registration key. Subclasses and other classes return None and are
    treated as ordinary type keys.
    """
    return _PRIMITIVE_TYPES.get(cls)


def kind_from_name(name: str) -> Kind | None:
    """Look up a kind by name, case-insensitively.

    Accepts the enum names (including ``LONG``) and a few common aliases.
    """
    key = name.strip().lower()
    alias = _NAME_ALIASES.get(key)
    if alias is not None:
        return alias
    try:
        return Kind[key.upper()]
    except KeyError:
        return None


__all__ = [
    "PRIMITIVE_ORDER",
    "Kind",
    "is_text",
    "kind_for_type",
    "kind_from_name",
    "kind_of",
]
