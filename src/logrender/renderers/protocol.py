"""Renderer protocol: the contract every renderer satisfies.

Any object with a ``render(value, options=0) -> str`` method conforms.
Renderers are strategies invoked by ``RendererRegistry``; the registry
decides which one applies to a value.

Thread Safety:
Renderers must be stateless. The same renderer instance may be called
concurrently from multiple threads, and must never mutate ``value``.

Example:
    >>> class YesNoRenderer:
    ...     def render(self, value, options=0):
    ...         return "yes" if value else "no"
    >>> isinstance(YesNoRenderer(), Renderer)
    True

    >>> @renderer
    ... def upper(value):
    ...     return str(value).upper()
    >>> upper.render("abc")
    'ABC'

"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from enum import IntFlag
from typing import Any, Protocol, runtime_checkable


class RenderOption(IntFlag):
    """Formatting flags passed through to leaf renderers.

    The first three values mirror the usual JSON encoder flag values.
    """

    NONE = 0
    UNESCAPED_SLASHES = 64
    PRETTY_PRINT = 128
    UNESCAPED_UNICODE = 256
    WITH_TRACEBACK = 1024


@runtime_checkable
class Renderer(Protocol):
    """Protocol for renderer implementations.

    Thread Safety:
        Renderers must be stateless. Multiple threads may call the same
        renderer instance concurrently.

    """

    def render(self, value: Any, options: int = 0) -> str:
        """Render a value to its string representation.

        Args:
            value: The value to render. Must not be mutated.
            options: Opaque formatting flags (see RenderOption)

        Returns:
            The string representation of value.
        """
        ...


def is_renderer(obj: object) -> bool:
    """Check if obj satisfies the Renderer protocol.

    Class objects are rejected: a renderer is an instance. Its ``render``
    must be callable as ``render(value, options)``.
    """
    if obj is None or isinstance(obj, type):
        return False
    method = getattr(obj, "render", None)
    if not callable(method):
        return False
    return _accepts_options(method, unknown=True)


class FunctionRenderer:
    """Adapts a plain function to the Renderer protocol.

    The function may accept ``(value)`` or ``(value, options)``.
    """

    __slots__ = ("_func", "_takes_options")

    def __init__(self, func: Callable[..., str]) -> None:
        self._func = func
        self._takes_options = _accepts_options(func, unknown=False)

    @property
    def func(self) -> Callable[..., str]:
        """The wrapped function."""
        return self._func

    def render(self, value: Any, options: int = 0) -> str:
        if self._takes_options:
            return self._func(value, options)
        return self._func(value)

    def __repr__(self) -> str:
        name = getattr(self._func, "__qualname__", repr(self._func))
        return f"FunctionRenderer({name})"


def renderer(func: Callable[..., str]) -> FunctionRenderer:
    """Decorator turning a function into a renderer instance.

    Example:
        @renderer
        def render_point(point, options=0):
            return f"({point.x}, {point.y})"

        registry.register(Point, render_point)

    """
    return FunctionRenderer(func)


def _accepts_options(func: Callable[..., Any], *, unknown: bool) -> bool:
    """Check if func can be called with (value, options) positionally.

    ``unknown`` is returned for callables without an introspectable signature.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return unknown
    positional = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            positional += 1
    return positional >= 2


__all__ = [
    "FunctionRenderer",
    "RenderOption",
    "Renderer",
    "is_renderer",
    "renderer",
]
