"""Exception classes for logrender.

Provides standardized exceptions for error handling throughout logrender.
"""

from __future__ import annotations


class LogRenderError(Exception):
    """Base exception for all logrender errors.

    Subclass this for specific error categories.
    """

    pass


class RegistrationRejected(LogRenderError):
    """Malformed renderer registration.

    Only raised when the registry runs with ``strict_registration``.
    By default a rejected registration is logged and ignored.
    """

    def __init__(self, key: object, message: str) -> None:
        """Initialize registration error.

        Args:
            key: The key the caller tried to register or remove
            message: Description of what was wrong with the input
        """
        self.key = key
        super().__init__(f"Cannot register renderer for {key!r}: {message}")


class RenderFailure(LogRenderError):
    """Error raised by a renderer while formatting a value.

    The message is the original failure's message, unchanged. The original
    exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        renderer_name: str | None = None,
        value_type: str | None = None,
    ) -> None:
        """Initialize render failure.

        Args:
            message: Original error message
            renderer_name: Class name of the renderer that failed (optional)
            value_type: Qualified name of the value's type (optional)
        """
        self.message = message
        self.renderer_name = renderer_name
        self.value_type = value_type
        super().__init__(message)
