"""Logger renderer: renders the host logging objects themselves.

Handles ``logging.Logger`` (and ``RootLogger``) as well as
``logging.LoggerAdapter``. A subclass that defines its own ``__str__`` is
rendered with it; otherwise a deterministic summary is produced:

    Logger(name='app.db', level=INFO, propagate=True, handlers=[StreamHandler])

Thread Safety:
Stateless handler. Reads logger attributes without modifying them.

"""

from __future__ import annotations

import logging
from typing import Any

from logrender.renderers.default import has_custom_str


class LoggerRenderer:
    """Renders logging.Logger and logging.LoggerAdapter instances.

    Values of any other type render as "".
    """

    __slots__ = ()

    def render(self, value: Any, options: int = 0) -> str:
        if isinstance(value, logging.LoggerAdapter):
            return f"{type(value).__name__}({self.render(value.logger, options)})"
        if not isinstance(value, logging.Logger):
            return ""
        if has_custom_str(value):
            return str(value)
        return summarize_logger(value)

    def __repr__(self) -> str:
        return "LoggerRenderer()"


def summarize_logger(log: logging.Logger) -> str:
    """Structural summary of a logger: name, level, propagation, handlers."""
    level = logging.getLevelName(log.level)
    handlers = ", ".join(type(h).__name__ for h in log.handlers)
    return (
        f"{type(log).__name__}(name={log.name!r}, level={level}, "
        f"propagate={log.propagate}, handlers=[{handlers}])"
    )


__all__ = ["LoggerRenderer", "summarize_logger"]
