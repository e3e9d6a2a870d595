"""Logger access for logrender modules.

Every logger lives under the ``logrender`` namespace so applications can
tune the whole library with a single ``logging.getLogger("logrender")``.
No handlers are attached here; output is left to the application.

Example:
    >>> from logrender.utils.logger import get_logger
    >>> get_logger(__name__).debug("Registered renderer")
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "logrender"


def get_logger(name: str) -> logging.Logger:
    """Return the standard library logger for name, inside the logrender namespace.

    Args:
        name: Module name (typically __name__) or a short suffix

    Example:
        >>> get_logger("mymodule").name
        'logrender.mymodule'
        >>> get_logger("logrender.registry").name
        'logrender.registry'
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if name == ROOT_LOGGER_NAME:
        return root
    suffix = name.removeprefix(f"{ROOT_LOGGER_NAME}.")
    return root.getChild(suffix)
