"""Default renderer: the terminal fallback of the dispatch chain.

Tries, in order:
1. A user-defined ``__str__`` (anything other than ``object.__str__``)
2. A structural dump (mappings, sequences, dataclasses, ``__dict__`` and
   ``__slots__`` objects)
3. ``object.__repr__``, which cannot fail

``None`` renders as the empty string.

Thread Safety:
Stateless. Safe for concurrent use.

"""

from __future__ import annotations

import dataclasses
import pprint
from collections.abc import Mapping, Sequence, Set
from typing import Any

from logrender.kinds import is_text
from logrender.utils.logger import get_logger

logger = get_logger(__name__)

# Width used by pprint for structural dumps
_DUMP_WIDTH = 100


def has_custom_str(value: Any) -> bool:
    """Check if the value's type defines its own string conversion."""
    return type(value).__str__ is not object.__str__


def dump_structure(value: Any) -> str | None:
    """Produce a structural textual dump of a value.

    Returns:
        The dump, or None if the value has no inspectable structure.
    """
    if isinstance(value, Mapping | Set) or (
        isinstance(value, Sequence) and not is_text(value)
    ):
        return pprint.pformat(value, width=_DUMP_WIDTH)

    name = type(value).__qualname__
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        return _format_fields(name, fields)

    fields = _instance_fields(value)
    if fields is None:
        return None
    return _format_fields(name, fields)


def fallback_render(value: Any) -> str:
    """Render any value to a string without ever raising."""
    if value is None:
        return ""
    if is_text(value):
        return value if isinstance(value, str) else _safe_repr(value)

    if has_custom_str(value):
        try:
            return str(value)
        except Exception:
            logger.debug("__str__ of %s failed, using structural dump", type(value).__qualname__)

    try:
        dumped = dump_structure(value)
    except Exception:
        logger.debug("Structural dump of %s failed", type(value).__qualname__)
        dumped = None
    if dumped is not None:
        return dumped

    return _safe_repr(value)


class DefaultRenderer:
    """Generic fallback renderer.

    Never fails for any input; worst case returns the empty string for None.

    Thread Safety:
        Stateless handler. Safe for concurrent use.

    """

    __slots__ = ()

    def render(self, value: Any, options: int = 0) -> str:
        """Render value using the fallback chain."""
        return fallback_render(value)

    def __repr__(self) -> str:
        return "DefaultRenderer()"


def _instance_fields(value: Any) -> dict[str, Any] | None:
    fields: dict[str, Any] = {}
    found = False
    instance_dict = getattr(value, "__dict__", None)
    if isinstance(instance_dict, dict):
        found = True
        fields.update(instance_dict)
    for klass in type(value).__mro__:
        if "__slots__" not in klass.__dict__:
            continue
        found = True
        slots = klass.__dict__["__slots__"]
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__"):
                continue
            if hasattr(value, slot):
                fields.setdefault(slot, getattr(value, slot))
    return fields if found else None


def _format_fields(name: str, fields: dict[str, Any]) -> str:
    body = ", ".join(f"{key}={_safe_repr(val)}" for key, val in fields.items())
    return f"{name}({body})"


def _safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception:
        return object.__repr__(value)


__all__ = [
    "DefaultRenderer",
    "dump_structure",
    "fallback_render",
    "has_custom_str",
]
