"""ContextVar-based render configuration for logrender.

Provides context-local configuration using Python's ContextVars (PEP 567).
A RendererRegistry captures the active config when it is constructed,
unless one is passed explicitly.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Explicit config
    registry = RendererRegistry(config=RenderConfig(max_depth=8))

    # Or scoped ambient config
    with render_config_context(RenderConfig(strict_registration=True)):
        registry = create_default_registry()

    # Bootstrap from a plain mapping
    config = RenderConfig.from_dict({"max_depth": 16, "unknown": "ignored"})

"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Iterator, Mapping


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        max_depth: Deepest collection nesting render() will descend into
        strict_registration: Raise RegistrationRejected instead of logging
            and ignoring malformed registrations
        inheritance_separator: Joins the outputs of several matching
            type renderers

    """

    max_depth: int = 64
    strict_registration: bool = False
    inheritance_separator: str = " - "

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            msg = f"max_depth must be at least 1, got {self.max_depth}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "RenderConfig":
        """Create RenderConfig from a mapping.

        Only includes keys that are valid RenderConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = RenderConfig.from_dict({
            ...     "max_depth": 8,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.max_depth
            8

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get current render configuration (context-local)."""
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set render configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to default configuration."""
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[RenderConfig]:
    """Install config for the duration of a with-block.

    Example:
        >>> with render_config_context(RenderConfig(max_depth=4)) as active:
        ...     active.max_depth
        4

    The previous config is restored on exit, including on error.
    """
    token = _render_config.set(config)
    try:
        yield config
    finally:
        _render_config.reset(token)


__all__ = [
    "RenderConfig",
    "get_render_config",
    "render_config_context",
    "reset_render_config",
    "set_render_config",
]
