"""
logrender — Value rendering for logging

Turns any runtime value (primitive, collection or object) into a
deterministic string, honoring custom renderers bound to primitive kinds,
exact types or whole type hierarchies.

Quick Start:
    >>> from logrender import create_default_registry
    >>> registry = create_default_registry()
    >>> registry.render(None)
    ''
    >>> registry.render(ValueError("bad input"))
    'ValueError: bad input'
    >>> registry.render({"user": "ada", "tags": ["a", "b"]})
    '{"user":"ada","tags":"[\\\\"a\\\\",\\\\"b\\\\"]"}'

Custom Renderers:
    >>> from logrender import renderer
    >>>
    >>> @renderer
    ... def yes_no(value):
    ...     return "yes" if value else "no"
    >>>
    >>> registry.register(bool, yes_no)
    RendererRegistry(primitives=2, types=3)
    >>> registry.render(True)
    'yes'

Inheritance:
    Renderers registered for a base class and a subclass both contribute,
    in registration order, joined by " - ". Register the subclass renderer
    with ``disable_inheritance=True`` to make its output the only one.

Installation:
    pip install logrender              # Zero runtime dependencies
"""

from typing import Any

from logrender.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from logrender.errors import LogRenderError, RegistrationRejected, RenderFailure
from logrender.kinds import PRIMITIVE_ORDER, Kind, kind_from_name, kind_of
from logrender.registry import (
    RendererEntry,
    RendererRegistry,
    create_default_registry,
)
from logrender.renderers import (
    CollectionRenderer,
    DefaultRenderer,
    ExceptionRenderer,
    FunctionRenderer,
    LoggerRenderer,
    Renderer,
    RenderOption,
    is_renderer,
    renderer,
)

__version__ = "0.3.0"


def render(
    value: Any,
    options: int = 0,
    *,
    registry: RendererRegistry | None = None,
) -> str:
    """Render a value to a string.

    Args:
        value: Anything
        options: Formatting flags (see RenderOption)
        registry: Registry to dispatch with (a fresh default registry if None)

    Returns:
        Rendered string

    Raises:
        RenderFailure: If a renderer fails

    Example:
        >>> render([1, None, True])
        '["1","","True"]'
    """
    if registry is None:
        registry = create_default_registry()
    return registry.render(value, options)


__all__ = [  # noqa: RUF022 - grouped by category
    # Version
    "__version__",
    # Core API
    "render",
    # Registry
    "RendererEntry",
    "RendererRegistry",
    "create_default_registry",
    # Kinds
    "Kind",
    "PRIMITIVE_ORDER",
    "kind_of",
    "kind_from_name",
    # Renderers
    "Renderer",
    "RenderOption",
    "FunctionRenderer",
    "renderer",
    "is_renderer",
    "DefaultRenderer",
    "CollectionRenderer",
    "ExceptionRenderer",
    "LoggerRenderer",
    # Configuration (ContextVar-based)
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
    # Errors
    "LogRenderError",
    "RegistrationRejected",
    "RenderFailure",
]
