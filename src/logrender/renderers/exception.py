"""Exception renderer: renders raised errors by their message.

Example:
    >>> ExceptionRenderer().render(ValueError("bad input"))
    'ValueError: bad input'
    >>> ExceptionRenderer().render(KeyError())
    'KeyError'

"""

from __future__ import annotations

import traceback
from typing import Any

from logrender.renderers.protocol import RenderOption


class ExceptionRenderer:
    """Renders ``BaseException`` instances as ``TypeName: message``.

    With ``RenderOption.WITH_TRACEBACK`` the formatted traceback is appended
    on the following lines. Values that are not exceptions render as "".

    Thread Safety:
        Stateless handler. Safe for concurrent use.

    """

    __slots__ = ()

    def render(self, value: Any, options: int = 0) -> str:
        if not isinstance(value, BaseException):
            return ""

        message = _message(value)
        name = type(value).__name__
        text = f"{name}: {message}" if message else name

        if options & RenderOption.WITH_TRACEBACK and value.__traceback__ is not None:
            tb = "".join(traceback.format_tb(value.__traceback__))
            text = f"{text}\nTraceback (most recent call last):\n{tb.rstrip()}"
        return text

    def __repr__(self) -> str:
        return "ExceptionRenderer()"


def _message(exc: BaseException) -> str:
    # KeyError.__str__ quotes its argument
    if isinstance(exc, KeyError) and len(exc.args) == 1:
        return str(exc.args[0])
    return str(exc)


__all__ = ["ExceptionRenderer"]
