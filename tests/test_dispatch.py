"""Tests for RendererRegistry.render dispatch.

Tests cover:
- Primitive kind renderers and their priority over type renderers
- Inheritance concatenation across the type table
- disable_inheritance override and early stop
- Recursive collection rendering
- Default fallback and failure propagation
"""

from __future__ import annotations

import numbers
import sys

import pytest

from logrender import (
    FunctionRenderer,
    Kind,
    RenderConfig,
    RenderFailure,
    RendererRegistry,
    create_default_registry,
)

# =============================================================================
# Fixtures
# =============================================================================


class Parent:
    pass


class Child(Parent):
    pass


class GrandChild(Child):
    pass


class Widget:
    pass


def const(text: str) -> FunctionRenderer:
    """Renderer that always returns text."""
    return FunctionRenderer(lambda value: text)


class Boom:
    """Renderer that always raises."""

    def render(self, value, options=0):
        raise ValueError("kaput")


class CallCounter:
    """Renderer recording how often it was called."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.calls = 0

    def render(self, value, options=0):
        self.calls += 1
        return self.text


@pytest.fixture
def registry() -> RendererRegistry:
    """Fresh empty registry for each test."""
    return RendererRegistry()


# =============================================================================
# Primitive branch
# =============================================================================


class TestPrimitiveDispatch:
    """Primitive kind renderers."""

    def test_bool_renderer_bypasses_default(self, registry: RendererRegistry) -> None:
        registry.register(Kind.BOOL, FunctionRenderer(lambda v: "yes" if v else "no"))
        assert registry.render(True) == "yes"
        assert registry.render(False) == "no"

    def test_int_renderer_does_not_catch_bools(self, registry: RendererRegistry) -> None:
        registry.register(Kind.INT, const("int"))
        assert registry.render(7) == "int"
        assert registry.render(True) == "True"

    def test_float_renderer(self, registry: RendererRegistry) -> None:
        registry.register("double", FunctionRenderer(lambda v: f"{v:.2f}"))
        assert registry.render(1.5) == "1.50"

    def test_null_renderer(self, registry: RendererRegistry) -> None:
        registry.register(Kind.NULL, const("NULL"))
        assert registry.render(None) == "NULL"

    def test_primitive_wins_over_type_match(self, registry: RendererRegistry) -> None:
        registry.register(numbers.Number, const("number"))
        registry.register(Kind.BOOL, const("bool"))
        assert registry.render(True) == "bool"

    def test_primitive_without_renderer_reaches_type_table(
        self, registry: RendererRegistry
    ) -> None:
        registry.register(numbers.Number, const("number"))
        assert registry.render(5) == "number"
        assert registry.render(2.5) == "number"

    @pytest.mark.parametrize("value", [None, True, False, 0, -3, 1.5, float("inf")])
    def test_unregistered_primitives_never_fail(self, value: object) -> None:
        result = create_default_registry().render(value)
        assert isinstance(result, str)

    def test_null_renders_empty_with_default(self, registry: RendererRegistry) -> None:
        assert registry.render(None) == ""
        assert create_default_registry().render(None) == ""


# =============================================================================
# Type-hierarchy branch
# =============================================================================


class TestInheritanceRendering:
    """Type table matching in registration order."""

    def test_parent_then_child_concatenates(self, registry: RendererRegistry) -> None:
        registry.register(Parent, const("parent"))
        registry.register(Child, const("child"))
        assert registry.render(Child()) == "parent - child"
        assert registry.render(Parent()) == "parent"

    def test_registration_order_not_specificity(self, registry: RendererRegistry) -> None:
        registry.register(Child, const("child"))
        registry.register(Parent, const("parent"))
        assert registry.render(Child()) == "child - parent"

    def test_disable_inheritance_owns_output(self, registry: RendererRegistry) -> None:
        registry.register(Parent, const("parent"))
        registry.register(Child, const("child"), disable_inheritance=True)
        assert registry.render(Child()) == "child"
        assert registry.render(Parent()) == "parent"

    def test_disable_inheritance_discards_earlier_output(
        self, registry: RendererRegistry
    ) -> None:
        """Accumulated output from earlier matches is dropped, not prefixed.

        Kept for compatibility: an override discards what was already
        rendered rather than appending and stopping.
        """
        parent = CallCounter("parent")
        registry.register(Parent, parent)
        registry.register(Child, const("child"), disable_inheritance=True)

        assert registry.render(GrandChild()) == "child"
        assert parent.calls == 1

    def test_disable_inheritance_stops_search(self, registry: RendererRegistry) -> None:
        later = CallCounter("grandchild")
        registry.register(Child, const("child"), disable_inheritance=True)
        registry.register(GrandChild, later)

        assert registry.render(GrandChild()) == "child"
        assert later.calls == 0

    def test_non_matching_disable_entry_is_skipped(self, registry: RendererRegistry) -> None:
        registry.register(Widget, const("widget"), disable_inheritance=True)
        registry.register(Parent, const("parent"))
        assert registry.render(Child()) == "parent"

    def test_empty_output_gets_no_separator(self, registry: RendererRegistry) -> None:
        registry.register(Parent, const(""))
        registry.register(Child, const("child"))
        assert registry.render(Child()) == "child"

    def test_custom_separator(self) -> None:
        registry = RendererRegistry(config=RenderConfig(inheritance_separator=" | "))
        registry.register(Parent, const("parent"))
        registry.register(Child, const("child"))
        assert registry.render(Child()) == "parent | child"

    def test_string_key_matches_ancestors(self, registry: RendererRegistry) -> None:
        registry.register("Parent", const("parent"))
        assert registry.render(GrandChild()) == "parent"

    def test_backslash_string_key(self, registry: RendererRegistry) -> None:
        registry.register("\\Parent", const("parent"))
        assert registry.render(Child()) == "parent"

    def test_strings_skip_type_table(self, registry: RendererRegistry) -> None:
        registry.register(object, const("object"))
        assert registry.render("hello") == "hello"
        assert registry.render(Widget()) == "object"

    def test_no_match_uses_default(self, registry: RendererRegistry) -> None:
        registry.register(Parent, const("parent"))
        assert registry.render(Widget()) == "Widget()"

    def test_exception_renderer_combines_with_custom(self) -> None:
        registry = create_default_registry()
        registry.register(ValueError, const("custom"))
        assert registry.render(ValueError("x")) == "ValueError: x - custom"


# =============================================================================
# Collection branch
# =============================================================================


class TestCollectionRendering:
    """Recursive rendering of collections."""

    def test_nested_collection_with_builtin_renderer(self) -> None:
        registry = create_default_registry()
        result = registry.render({"a": 1, "b": [2, 3]})
        assert result == '{"a":"1","b":"[\\"2\\",\\"3\\"]"}'

    def test_rendered_string_is_stable(self) -> None:
        registry = create_default_registry()
        first = registry.render({"a": 1, "b": [2, 3]})
        assert registry.render(first) == first

    def test_array_renderer_receives_only_strings(self, registry: RendererRegistry) -> None:
        seen: list[object] = []

        def join(value):
            seen.append(value)
            items = value.values() if isinstance(value, dict) else value
            return "|".join(items)

        registry.register(Kind.ARRAY, FunctionRenderer(join))
        result = registry.render({"x": [1, {"y": None}], "z": True})

        assert result == "1||True"
        for collection in seen:
            items = collection.values() if isinstance(collection, dict) else collection
            assert all(isinstance(item, str) for item in items)

    def test_elements_use_registered_renderers(self) -> None:
        registry = create_default_registry()
        registry.register(bool, const("yes"))
        registry.register(Widget, const("widget"))
        assert registry.render([True, Widget()]) == '["yes","widget"]'

    def test_without_array_renderer_uses_default(self, registry: RendererRegistry) -> None:
        assert registry.render([1, 2]) == "['1', '2']"

    def test_generator_is_rendered_as_list(self) -> None:
        registry = create_default_registry()
        assert registry.render(x for x in (1, 2)) == '["1","2"]'

    def test_options_reach_collection_renderer(self) -> None:
        from logrender import RenderOption

        registry = create_default_registry()
        assert registry.render(["a/b"]) == '["a/b"]'
        assert registry.render(["a/b"], RenderOption.PRETTY_PRINT) == '[\n    "a\\/b"\n]'

    def test_traceback_flag_does_not_change_collection_encoding(self) -> None:
        from logrender import RenderOption

        registry = create_default_registry()
        assert registry.render(["a/b"], RenderOption.WITH_TRACEBACK) == '["a/b"]'

    def test_nesting_past_interpreter_limit_is_render_failure(self) -> None:
        registry = RendererRegistry(config=RenderConfig(max_depth=100_000))
        nested: list[object] = []
        for _ in range(sys.getrecursionlimit() * 2):
            nested = [nested]
        with pytest.raises(RenderFailure):
            registry.render(nested)
        assert registry.render([1]) == "['1']"

    def test_depth_limit(self) -> None:
        registry = RendererRegistry(config=RenderConfig(max_depth=2))
        registry.render([[1]])
        with pytest.raises(RenderFailure, match="max_depth=2"):
            registry.render([[[1]]])

    def test_self_referencing_list_fails_cleanly(self) -> None:
        loop: list[object] = []
        loop.append(loop)
        with pytest.raises(RenderFailure):
            create_default_registry().render(loop)


# =============================================================================
# Failures
# =============================================================================


class TestRenderFailure:
    """Renderer errors propagate as RenderFailure."""

    def test_failure_carries_original_message(self, registry: RendererRegistry) -> None:
        registry.register(Widget, Boom())
        with pytest.raises(RenderFailure) as exc_info:
            registry.render(Widget())

        err = exc_info.value
        assert str(err) == "kaput"
        assert err.renderer_name == "Boom"
        assert isinstance(err.__cause__, ValueError)

    def test_nested_failure_is_not_rewrapped(self) -> None:
        registry = create_default_registry()
        registry.register(Widget, Boom())
        with pytest.raises(RenderFailure) as exc_info:
            registry.render({"w": [Widget()]})
        assert str(exc_info.value) == "kaput"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_primitive_renderer_failure(self, registry: RendererRegistry) -> None:
        registry.register(Kind.BOOL, Boom())
        with pytest.raises(RenderFailure, match="kaput"):
            registry.render(True)

    def test_default_renderer_failure_propagates(self, registry: RendererRegistry) -> None:
        registry.set_default_renderer(Boom())
        with pytest.raises(RenderFailure, match="kaput"):
            registry.render(Widget())

    def test_non_string_result_is_failure(self, registry: RendererRegistry) -> None:
        registry.register(Widget, FunctionRenderer(lambda v: 42))
        with pytest.raises(RenderFailure, match="expected str"):
            registry.render(Widget())

    def test_failure_does_not_break_registry(self, registry: RendererRegistry) -> None:
        registry.register(Widget, Boom())
        with pytest.raises(RenderFailure):
            registry.render(Widget())
        assert registry.render(Parent()) == "Parent()"
