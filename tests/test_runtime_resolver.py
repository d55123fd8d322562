"""Tests for runtime.resolver: strict template rendering."""

from collections.abc import Mapping
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ftlbind.diagnostics import ResolutionError
from ftlbind.runtime import (
    FluentNumber,
    FluentValue,
    FunctionRegistry,
    ResolutionContext,
    ResolvedReference,
    TemplateRenderer,
)
from ftlbind.runtime.resolver import UNICODE_FSI, UNICODE_PDI
from ftlbind.syntax import MessageReference, TermReference, parse_template


def render(
    template: str, args: Mapping[str, FluentValue] | None = None, locale: str = "en_US"
) -> str:
    return TemplateRenderer(locale).render(parse_template(template), args)


class _DictScope:
    """ReferenceScope over a flat ``{key: template}`` mapping."""

    def __init__(self, entries: dict[str, str]) -> None:
        self._entries = {key: parse_template(text) for key, text in entries.items()}

    def find(self, reference: MessageReference | TermReference) -> ResolvedReference | None:
        prefix = "-" if isinstance(reference, TermReference) else ""
        key = f"{prefix}{reference.id.name}"
        if reference.attribute is not None:
            key = f"{key}.{reference.attribute.name}"
        pattern = self._entries.get(key)
        return ResolvedReference(key, pattern, self) if pattern is not None else None


# ============================================================================
# VARIABLES
# ============================================================================


class TestVariables:
    """Variable interpolation."""

    def test_counter_example(self) -> None:
        """The canonical example renders."""
        assert render("count is at {$counter}", {"counter": 2}) == "count is at 2"

    def test_plain_text(self) -> None:
        """No placeables, no arguments."""
        assert render("English") == "English"

    def test_missing_variable_raises(self) -> None:
        """Rendering never silently drops a variable."""
        with pytest.raises(ResolutionError, match=r"\$counter"):
            render("count is at {$counter}", {})

    def test_value_formatting(self) -> None:
        """Booleans, None and Decimals have fixed text forms."""
        args: dict[str, FluentValue] = {"a": True, "b": None, "c": Decimal("1.50"), "d": "x"}

        assert render("{$a}|{$b}|{$c}|{$d}", args) == "true||1.50|x"

    def test_fluent_number_uses_formatted_text(self) -> None:
        """FluentNumber renders its formatted string."""
        value = FluentNumber(value=1234, formatted="1,234", precision=0)

        assert render("{$n}", {"n": value}) == "1,234"

    def test_isolating_marks(self) -> None:
        """Bidi isolation wraps each placeable when enabled."""
        renderer = TemplateRenderer("en_US", use_isolating=True)

        result = renderer.render(parse_template("Hi {$name}!"), {"name": "Anna"})

        assert result == f"Hi {UNICODE_FSI}Anna{UNICODE_PDI}!"

    @given(value=st.integers())
    def test_integers_render_with_str(self, value: int) -> None:
        """Raw integers are not locale-formatted."""
        assert render("{$v}", {"v": value}) == str(value)


# ============================================================================
# SELECT EXPRESSIONS
# ============================================================================


class TestSelectExpressions:
    """Variant selection: exact match, plural category, default."""

    TEMPLATE = "{ $count ->\n[0] no emails\n[one] one email\n*[other] {$count} emails\n}"

    def test_exact_numeric_match_wins(self) -> None:
        """``[0]`` matches before the plural category."""
        assert render(self.TEMPLATE, {"count": 0}) == "no emails"

    def test_plural_category(self) -> None:
        """English 1 is 'one'."""
        assert render(self.TEMPLATE, {"count": 1}) == "one email"

    def test_default_variant(self) -> None:
        """Everything else falls to the default."""
        assert render(self.TEMPLATE, {"count": 5}) == "5 emails"

    def test_locale_plural_rules(self) -> None:
        """Polish 5 is 'many', not 'other'."""
        template = "{ $n ->\n[one] plik\n[few] pliki\n[many] plików\n*[other] pliku\n}"

        assert render(template, {"n": 5}, locale="pl_PL") == "plików"
        assert render(template, {"n": 3}, locale="pl_PL") == "pliki"

    def test_fluent_number_precision(self) -> None:
        """Visible fraction digits change the category: 1.0 is 'other' in English."""
        value = FluentNumber(value=1, formatted="1.0", precision=1)

        assert render(self.TEMPLATE, {"count": value}) == "1.0 emails"

    def test_string_selector(self) -> None:
        """Strings match identifier keys."""
        template = "{ $gender ->\n[female] her\n[male] his\n*[other] their\n}"

        assert render(template, {"gender": "female"}) == "her"
        assert render(template, {"gender": "unknown"}) == "their"

    def test_boolean_selector(self) -> None:
        """Booleans match ``[true]`` / ``[false]``."""
        template = "{ $flag ->\n[true] on\n*[false] off\n}"

        assert render(template, {"flag": True}) == "on"
        assert render(template, {"flag": False}) == "off"

    def test_decimal_exact_match(self) -> None:
        """Numeric keys compare by value."""
        template = "{ $n ->\n[1.5] one and a half\n*[other] other\n}"

        assert render(template, {"n": Decimal("1.50")}) == "one and a half"


# ============================================================================
# REFERENCES
# ============================================================================


class TestReferences:
    """Message and term references through a scope."""

    def test_reference_without_scope_raises(self) -> None:
        """References need a scope."""
        with pytest.raises(ResolutionError, match="outside of a bundle"):
            render("{ other }")

    def test_message_reference_sees_caller_arguments(self) -> None:
        """Referenced messages are rendered with the caller's arguments."""
        scope = _DictScope({"greeting": "Hello, {$user}"})
        renderer = TemplateRenderer("en_US")

        result = renderer.render(parse_template("{ greeting }!"), {"user": "Anna"}, scope=scope)

        assert result == "Hello, Anna!"

    def test_term_sees_only_its_arguments(self) -> None:
        """Terms get their call arguments, not the caller's."""
        scope = _DictScope(
            {"-brand": '{ $case ->\n[genitive] Firefoxa\n*[nominative] Firefox\n}'}
        )
        renderer = TemplateRenderer("en_US")

        result = renderer.render(
            parse_template('{ -brand(case: "genitive") }'), {"case": "nominative"}, scope=scope
        )

        assert result == "Firefoxa"

    def test_unknown_reference(self) -> None:
        """Missing targets raise."""
        with pytest.raises(ResolutionError, match="Unknown message 'missing'"):
            TemplateRenderer("en_US").render(parse_template("{ missing }"), scope=_DictScope({}))

    def test_cycle_detected(self) -> None:
        """A reference loop raises instead of recursing forever."""
        scope = _DictScope({"a": "{ b }", "b": "{ a }"})

        with pytest.raises(ResolutionError, match="Cyclic reference"):
            TemplateRenderer("en_US").render(parse_template("{ a }"), scope=scope, key="start")


class TestResolutionContext:
    """Explicit per-render state."""

    def test_depth_limit(self) -> None:
        """Pushing beyond max_depth raises."""
        context = ResolutionContext(max_depth=2)
        context.push("a")
        context.push("b")

        with pytest.raises(ResolutionError, match="Maximum reference depth"):
            context.push("c")

    def test_pop_returns_last(self) -> None:
        """pop() leaves the current pattern."""
        context = ResolutionContext()
        context.push("a")

        assert context.pop() == "a"
        assert context.stack == []


# ============================================================================
# FUNCTIONS
# ============================================================================


class TestFunctionCalls:
    """Function calls through the registry."""

    def test_number_function(self) -> None:
        """NUMBER formats with the renderer's locale."""
        assert render("{ NUMBER($n, minimumFractionDigits: 2) }", {"n": 1234.5}) == "1,234.50"
        assert render("{ NUMBER($n) }", {"n": 1234.5}, locale="de_DE") == "1.234,5"

    def test_number_result_drives_plural(self) -> None:
        """A formatted NUMBER keeps its precision for selection."""
        template = "{ NUMBER($n, minimumFractionDigits: 1) ->\n[one] one\n*[other] other\n}"

        assert render(template, {"n": 1}) == "other"

    def test_unknown_function(self) -> None:
        """Unregistered functions raise."""
        with pytest.raises(ResolutionError, match="Unknown function"):
            render("{ MISSING($x) }", {"x": 1})

    def test_function_error_wrapped(self) -> None:
        """Bad arguments surface as ResolutionError."""
        with pytest.raises(ResolutionError, match="NUMBER"):
            render("{ NUMBER($x) }", {"x": "not a number"})

    def test_custom_registry(self) -> None:
        """Renderers accept their own registry."""
        registry = FunctionRegistry()
        registry.register(lambda value: str(value).upper(), ftl_name="UPPER")
        renderer = TemplateRenderer("en_US", functions=registry)

        assert renderer.render(parse_template("{ UPPER($x) }"), {"x": "abc"}) == "ABC"
