"""Renderer registry: registration tables and the rendering dispatch.

The registry owns three tables:

- a primitive table, one entry per Kind
- a type table, ordered by registration, matched with "is-a" semantics
- a default-renderer slot, never empty after construction

``render()`` picks the renderer for a value in a fixed priority order:
collections (recursively rendered first), then primitive kinds, then every
matching type entry in registration order, then the default renderer.

Thread Safety:
Copy-on-write. Registration builds new tables under a lock and publishes
them in a single assignment; render() reads one snapshot per call and never
locks. Safe to render and register concurrently from any thread.

Example:
    >>> registry = create_default_registry()
    >>> registry.register(bool, FunctionRenderer(lambda v: "yes" if v else "no"))
    RendererRegistry(primitives=2, types=3)
    >>> registry.render(True)
    'yes'
    >>> registry.render({"a": 1, "b": [2, 3]})
    '{"a":"1","b":"[\\\\"2\\\\",\\\\"3\\\\"]"}'

"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

from logrender.config import RenderConfig, get_render_config
from logrender.errors import RegistrationRejected, RenderFailure
from logrender.kinds import (
    PRIMITIVE_ORDER,
    Kind,
    is_text,
    kind_for_type,
    kind_from_name,
    kind_of,
)
from logrender.renderers.default import DefaultRenderer, fallback_render
from logrender.renderers.protocol import FunctionRenderer, Renderer, is_renderer
from logrender.utils.logger import get_logger
from logrender.utils.naming import normalize_type_name, qualified_name, type_names

logger = get_logger(__name__)

# A class object or a dotted class name
TypeKey = Union[type, str]


@dataclass(frozen=True, slots=True)
class RendererEntry:
    """A registered renderer and its inheritance behavior.

    Attributes:
        renderer: The renderer to invoke
        disable_inheritance: When this entry matches, its output replaces
            anything accumulated from earlier type entries and no later
            entries are consulted

    """

    renderer: Renderer
    disable_inheritance: bool = False


@dataclass(frozen=True, slots=True)
class _Tables:
    """Immutable snapshot of the registry state."""

    primitives: Mapping[Kind, RendererEntry] = field(
        default_factory=lambda: MappingProxyType({})
    )
    types: tuple[tuple[TypeKey, RendererEntry], ...] = ()
    default: Renderer | None = None


class RendererRegistry:
    """Registry of renderers with hierarchy-aware dispatch.

    Create one per logging subsystem and pass it to whatever needs it.
    Use create_default_registry() for a registry seeded with the built-ins.

    Args:
        config: Render configuration (defaults to the active context config)
        default_renderer: Terminal fallback renderer (defaults to DefaultRenderer)

    Thread Safety:
        Registration is serialized by an internal lock. render() works on an
        immutable snapshot and may run concurrently with registration.

    """

    __slots__ = ("_config", "_lock", "_tables")

    def __init__(
        self,
        *,
        config: RenderConfig | None = None,
        default_renderer: Renderer | None = None,
    ) -> None:
        self._config = config if config is not None else get_render_config()
        self._lock = threading.Lock()
        if default_renderer is None or not is_renderer(default_renderer):
            default_renderer = DefaultRenderer()
        self._tables = _Tables(default=default_renderer)

    @property
    def config(self) -> RenderConfig:
        """The configuration captured at construction."""
        return self._config

    # =========================================================================
    # Registration
    # =========================================================================

    def register(
        self,
        key: Any,
        renderer: Any,
        disable_inheritance: bool = False,
    ) -> RendererRegistry:
        """Register a renderer for a kind, a type, or the type of a sample.

        Key routing:
            - Kind, or a kind name ("bool", "Long", "array"...): primitive table
            - builtin primitive class (bool, int, dict...): primitive table
            - any other class or class name: type table, except collection
              classes, which are rejected (collections use Kind.ARRAY)
            - any other object: primitive table if it has a kind,
              otherwise the type table under type(key)

        Re-registering a key replaces its entry in place.

        Args:
            key: What the renderer applies to
            renderer: Object satisfying the Renderer protocol
            disable_inheritance: Make a type entry's output authoritative

        Returns:
            Self for chaining

        Raises:
            RegistrationRejected: Only with strict_registration; otherwise
                malformed input is logged and ignored
        """
        if key is None:
            # Use Kind.NULL to target null values
            return self._reject(key, "no key given")
        if not is_renderer(renderer):
            return self._reject(key, f"{type(renderer).__name__} is not a renderer")
        if not isinstance(disable_inheritance, bool):
            disable_inheritance = False

        target = self._route(key)
        if target is None:
            return self._reject(key, "no kind or type applies to this key")
        if isinstance(target, type) and _is_collection_type(target):
            # Collections always take the ARRAY branch before the type table
            return self._reject(key, "collections are rendered by the Kind.ARRAY renderer")

        entry = RendererEntry(renderer, disable_inheritance)
        if isinstance(target, Kind):
            return self.register_primitive(target, entry)
        return self._store_type(target, entry)

    def register_type(
        self,
        key: Any,
        renderer: Any,
        disable_inheritance: bool = False,
    ) -> RendererRegistry:
        """Register a renderer for a type key.

        Same routing as register(): a key naming a primitive kind still
        lands in the primitive table.
        """
        return self.register(key, renderer, disable_inheritance)

    def register_primitive(self, kind: Kind, entry: RendererEntry) -> RendererRegistry:
        """Set the entry for a primitive kind, replacing any previous one."""
        if not isinstance(kind, Kind):
            return self._reject(kind, "not a primitive kind")
        if not isinstance(entry, RendererEntry) or not is_renderer(entry.renderer):
            return self._reject(kind, "entry has no valid renderer")

        with self._lock:
            tables = self._tables
            primitives = dict(tables.primitives)
            primitives[kind] = entry
            self._tables = _Tables(
                primitives=MappingProxyType(primitives),
                types=tables.types,
                default=tables.default,
            )
        logger.debug("Registered %r for primitive kind %s", entry.renderer, kind.name)
        return self

    def register_function(
        self,
        key: Any,
        disable_inheritance: bool = False,
    ) -> Callable[[Callable[..., str]], Callable[..., str]]:
        """Decorator registering a plain function as the renderer for key.

        Example:
            @registry.register_function(Point)
            def render_point(point):
                return f"({point.x}, {point.y})"

        """

        def decorator(func: Callable[..., str]) -> Callable[..., str]:
            self.register(key, FunctionRenderer(func), disable_inheritance)
            return func

        return decorator

    def unregister(self, key: Any) -> RendererRegistry:
        """Remove the renderer registered for key.

        Uses the same key routing as register(). Removing a key that was
        never registered is a no-op.
        """
        if key is None:
            return self._reject(key, "no key given")
        target = self._route(key)
        if target is None:
            return self._reject(key, "no kind or type applies to this key")

        with self._lock:
            tables = self._tables
            if isinstance(target, Kind):
                if target not in tables.primitives:
                    return self
                primitives = {k: v for k, v in tables.primitives.items() if k is not target}
                self._tables = _Tables(
                    primitives=MappingProxyType(primitives),
                    types=tables.types,
                    default=tables.default,
                )
            else:
                types = tuple((k, e) for k, e in tables.types if k != target)
                if len(types) == len(tables.types):
                    return self
                self._tables = _Tables(
                    primitives=tables.primitives,
                    types=types,
                    default=tables.default,
                )
        logger.debug("Unregistered renderer for %s", _describe(target))
        return self

    # =========================================================================
    # Default renderer
    # =========================================================================

    @property
    def default_renderer(self) -> Renderer | None:
        """The renderer used when nothing else matches."""
        return self._tables.default

    def set_default_renderer(self, default: Any) -> RendererRegistry:
        """Install a new default renderer. Non-renderers are ignored."""
        if not is_renderer(default):
            return self._reject("<default>", f"{type(default).__name__} is not a renderer")
        self._replace_default(default)
        logger.debug("Default renderer set to %r", default)
        return self

    def reset_default_renderer(self) -> RendererRegistry:
        """Restore the system DefaultRenderer."""
        self._replace_default(DefaultRenderer())
        return self

    # =========================================================================
    # Introspection
    # =========================================================================

    def list_entries(self) -> dict[Kind | TypeKey, RendererEntry]:
        """Union of the primitive and type tables.

        Primitive entries come first in evaluation order, then type
        entries in registration order.
        """
        tables = self._tables
        entries: dict[Kind | TypeKey, RendererEntry] = {
            kind: tables.primitives[kind]
            for kind in PRIMITIVE_ORDER
            if kind in tables.primitives
        }
        entries.update(tables.types)
        return entries

    def get(self, key: Any) -> RendererEntry | None:
        """Get the entry registered for key, or None."""
        target = self._route(key) if key is not None else None
        if target is None:
            return None
        tables = self._tables
        if isinstance(target, Kind):
            return tables.primitives.get(target)
        for type_key, entry in tables.types:
            if type_key == target:
                return entry
        return None

    @property
    def kinds(self) -> tuple[Kind, ...]:
        """Primitive kinds that have a renderer, in evaluation order."""
        primitives = self._tables.primitives
        return tuple(kind for kind in PRIMITIVE_ORDER if kind in primitives)

    @property
    def type_keys(self) -> tuple[TypeKey, ...]:
        """Type keys in registration order."""
        return tuple(key for key, _ in self._tables.types)

    def copy(self) -> RendererRegistry:
        """Independent registry with the same entries and config."""
        clone = RendererRegistry(config=self._config)
        clone._tables = self._tables
        return clone

    def __contains__(self, key: Any) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        tables = self._tables
        return len(tables.primitives) + len(tables.types)

    def __repr__(self) -> str:
        tables = self._tables
        return (
            f"{type(self).__name__}(primitives={len(tables.primitives)}, "
            f"types={len(tables.types)})"
        )

    # =========================================================================
    # Rendering
    # =========================================================================

    def render(self, value: Any, options: int = 0) -> str:
        """Render a value to a string.

        Priority order, first applicable branch wins:

        1. Collections: every element is rendered first (keys and order
           kept), then the ARRAY renderer encodes the result, or the default
           renderer if no ARRAY renderer is registered.
        2. Primitive kinds: the entry for kind_of(value), if any.
        3. Type table: every entry whose key value is an instance of, in
           registration order. Outputs are joined with the configured
           separator; a disable_inheritance entry replaces them and stops.
           Strings never reach this branch.
        4. Default renderer.

        Args:
            value: Anything
            options: Formatting flags passed through to leaf renderers

        Returns:
            The rendered string

        Raises:
            RenderFailure: A renderer raised, or collections nest deeper
                than config.max_depth or the interpreter recursion limit
        """
        try:
            return self._render(value, options, self._tables, 0)
        except RecursionError as exc:
            msg = "Collection nesting exceeds the interpreter recursion limit"
            raise RenderFailure(msg, value_type=qualified_name(type(value))) from exc

    def _render(self, value: Any, options: int, tables: _Tables, depth: int) -> str:
        if _is_collection(value):
            if depth >= self._config.max_depth:
                msg = f"Collection nesting exceeds max_depth={self._config.max_depth}"
                raise RenderFailure(msg, value_type=qualified_name(type(value)))
            rendered = self._render_elements(value, options, tables, depth + 1)
            entry = tables.primitives.get(Kind.ARRAY)
            if entry is not None:
                return _invoke(entry.renderer, rendered, options)
            return self._render_default(rendered, options, tables)

        kind = kind_of(value)
        if kind is not None:
            entry = tables.primitives.get(kind)
            if entry is not None:
                return _invoke(entry.renderer, value, options)

        if tables.types and not is_text(value):
            result = self._render_hierarchy(value, options, tables)
            if result is not None:
                return result

        return self._render_default(value, options, tables)

    def _render_elements(
        self,
        value: Iterable[Any],
        options: int,
        tables: _Tables,
        depth: int,
    ) -> dict[Any, str] | list[str]:
        if isinstance(value, Mapping):
            return {
                key: self._render(item, options, tables, depth)
                for key, item in value.items()
            }
        return [self._render(item, options, tables, depth) for item in value]

    def _render_hierarchy(self, value: Any, options: int, tables: _Tables) -> str | None:
        separator = self._config.inheritance_separator
        accumulated: str | None = None
        for key, entry in tables.types:
            if not _matches(key, value):
                continue
            output = _invoke(entry.renderer, value, options)
            if entry.disable_inheritance:
                # Earlier matches are discarded, not kept in front
                accumulated = output
                break
            if accumulated:
                accumulated = f"{accumulated}{separator}{output}"
            else:
                accumulated = output
        return accumulated

    def _render_default(self, value: Any, options: int, tables: _Tables) -> str:
        if tables.default is not None:
            return _invoke(tables.default, value, options)
        return fallback_render(value)

    # =========================================================================
    # Internals
    # =========================================================================

    def _route(self, key: Any) -> Kind | TypeKey | None:
        if isinstance(key, Kind):
            return key
        if isinstance(key, str):
            kind = kind_from_name(key)
            if kind is not None:
                return kind
            name = normalize_type_name(key)
            return name or None
        if isinstance(key, type):
            kind = kind_for_type(key)
            if kind is not None:
                return kind
            if issubclass(key, (str, bytes, bytearray)):
                return None
            try:
                isinstance(None, key)
            except TypeError:
                # Protocols that are not runtime_checkable cannot be matched
                return None
            return key
        kind = kind_of(key)
        if kind is not None:
            return kind
        if is_text(key):
            return None
        return type(key)

    def _store_type(self, key: TypeKey, entry: RendererEntry) -> RendererRegistry:
        with self._lock:
            tables = self._tables
            types = list(tables.types)
            for index, (existing, _) in enumerate(types):
                if existing == key:
                    types[index] = (key, entry)
                    break
            else:
                types.append((key, entry))
            self._tables = _Tables(
                primitives=tables.primitives,
                types=tuple(types),
                default=tables.default,
            )
        logger.debug(
            "Registered %r for type %s (disable_inheritance=%s)",
            entry.renderer,
            _describe(key),
            entry.disable_inheritance,
        )
        return self

    def _replace_default(self, default: Renderer) -> None:
        with self._lock:
            tables = self._tables
            self._tables = _Tables(
                primitives=tables.primitives,
                types=tables.types,
                default=default,
            )

    def _reject(self, key: Any, reason: str) -> RendererRegistry:
        if self._config.strict_registration:
            raise RegistrationRejected(key, reason)
        logger.warning("Ignoring renderer registration for %r: %s", key, reason)
        return self


def create_default_registry(config: RenderConfig | None = None) -> RendererRegistry:
    """Create a registry seeded with the built-in renderers.

    Seeds:
        - logging.Logger and logging.LoggerAdapter: LoggerRenderer
          (disable_inheritance)
        - BaseException: ExceptionRenderer
        - Kind.ARRAY: CollectionRenderer
        - default: DefaultRenderer

    """
    from logrender.renderers.collection import CollectionRenderer
    from logrender.renderers.exception import ExceptionRenderer
    from logrender.renderers.logger import LoggerRenderer

    registry = RendererRegistry(config=config)
    registry.register(logging.Logger, LoggerRenderer(), disable_inheritance=True)
    registry.register(logging.LoggerAdapter, LoggerRenderer(), disable_inheritance=True)
    registry.register(BaseException, ExceptionRenderer())
    registry.register(Kind.ARRAY, CollectionRenderer())
    return registry


def _is_collection(value: Any) -> bool:
    if isinstance(value, Mapping):
        return True
    return isinstance(value, Iterable) and not is_text(value)


def _is_collection_type(cls: type) -> bool:
    return issubclass(cls, (Mapping, Iterable)) and not issubclass(cls, (str, bytes, bytearray))


def _matches(key: TypeKey, value: Any) -> bool:
    if isinstance(key, str):
        return key in type_names(type(value))
    return isinstance(value, key)


def _invoke(handler: Renderer, value: Any, options: int) -> str:
    try:
        result = handler.render(value, options)
    except RenderFailure:
        raise
    except Exception as exc:
        raise RenderFailure(
            str(exc),
            renderer_name=type(handler).__name__,
            value_type=qualified_name(type(value)),
        ) from exc
    if not isinstance(result, str):
        msg = f"{type(handler).__name__} returned {type(result).__name__}, expected str"
        raise RenderFailure(
            msg,
            renderer_name=type(handler).__name__,
            value_type=qualified_name(type(value)),
        )
    return result


def _describe(key: Kind | TypeKey) -> str:
    if isinstance(key, Kind):
        return key.name
    if isinstance(key, str):
        return key
    return qualified_name(key)


__all__ = [
    "RendererEntry",
    "RendererRegistry",
    "TypeKey",
    "create_default_registry",
]
