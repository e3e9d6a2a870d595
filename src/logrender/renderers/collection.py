"""Collection renderer: JSON encoding of already-rendered collections.

The registry renders every element of a collection first, so this renderer
only ever sees a mapping or sequence of strings (nested collections arrive
as their own encoded strings).

Output is compact (``{"a":"1","b":"2"}``) and follows iteration order, so it
is deterministic for ordered inputs. Forward slashes are escaped as ``\\/``
unless ``RenderOption.UNESCAPED_SLASHES`` is set. When the caller passes none
of the collection flags, the renderer's ``default_options`` apply.
Non-string keys are coerced to strings; keys that coerce to the same string
keep the later value.

Thread Safety:
Stateless after construction. Safe for concurrent use.

"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from logrender.renderers.protocol import RenderOption
from logrender.utils.logger import get_logger

logger = get_logger(__name__)

# Flags this renderer reads; any other bits are meant for other renderers
_COLLECTION_OPTIONS = (
    RenderOption.UNESCAPED_SLASHES
    | RenderOption.PRETTY_PRINT
    | RenderOption.UNESCAPED_UNICODE
)


class CollectionRenderer:
    """Renders mappings as JSON objects and other iterables as JSON arrays.

    Args:
        default_options: Flags used when render() is called without any of
            the collection flags set
    """

    __slots__ = ("_default_options",)

    def __init__(self, default_options: int = RenderOption.UNESCAPED_SLASHES) -> None:
        self._default_options = RenderOption(default_options)

    @property
    def default_options(self) -> RenderOption:
        return self._default_options

    def render(self, value: Any, options: int = 0) -> str:
        """Encode a collection of rendered strings."""
        flags = RenderOption(options)
        if not flags & _COLLECTION_OPTIONS:
            flags |= self._default_options

        if isinstance(value, Mapping):
            payload: Any = _coerce_keys(value)
        elif isinstance(value, Iterable) and not isinstance(value, str | bytes):
            payload = list(value)
        else:
            payload = value

        encoded = json.dumps(
            payload,
            ensure_ascii=not flags & RenderOption.UNESCAPED_UNICODE,
            indent=4 if flags & RenderOption.PRETTY_PRINT else None,
            separators=(",", ": ") if flags & RenderOption.PRETTY_PRINT else (",", ":"),
            default=str,
        )
        if not flags & RenderOption.UNESCAPED_SLASHES:
            encoded = encoded.replace("/", "\\/")
        return encoded

    def __repr__(self) -> str:
        return f"CollectionRenderer(default_options={self._default_options!r})"


def _coerce_keys(value: Mapping[Any, Any]) -> dict[str, Any]:
    coerced: dict[str, Any] = {}
    for key, item in value.items():
        name = _key(key)
        if name in coerced:
            logger.debug(
                "Mapping key %r collides with an earlier key as %r; later value kept",
                key,
                name,
            )
        coerced[name] = item
    return coerced


def _key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is None:
        return ""
    if isinstance(key, bool):
        return str(int(key))
    return str(key)


__all__ = ["CollectionRenderer"]
