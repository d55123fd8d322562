"""Template renderer: Pattern AST plus arguments to string.

Walks the AST, interpolating variables, evaluating selectors and following
message/term references through a caller-supplied ReferenceScope.

Rendering is strict: anything that would make the output incomplete (a
missing variable, an unknown function or reference, a cycle, a failing
function) raises ResolutionError instead of producing partial output.

Python 3.13+. Indirect dependency: Babel (via plural_rules and functions).

Thread Safety:
    Resolution state is passed explicitly via ResolutionContext, so one
    TemplateRenderer can serve any number of concurrent callers.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Protocol

from ftlbind.constants import MAX_DEPTH
from ftlbind.diagnostics import ResolutionError
from ftlbind.syntax.ast import (
    Expression,
    FunctionReference,
    Identifier,
    MessageReference,
    NumberLiteral,
    Pattern,
    Placeable,
    SelectExpression,
    StringLiteral,
    TermReference,
    TextElement,
    VariableReference,
    Variant,
)

from .function_bridge import FunctionRegistry
from .functions import get_shared_registry
from .plural_rules import select_plural_category
from .value_types import FluentNumber, FluentValue

__all__ = [
    "ReferenceScope",
    "ResolutionContext",
    "ResolvedReference",
    "TemplateRenderer",
]

# Unicode bidirectional isolation characters per Unicode TR9.
UNICODE_FSI: str = "\u2068"  # U+2068 FIRST STRONG ISOLATE
UNICODE_PDI: str = "\u2069"  # U+2069 POP DIRECTIONAL ISOLATE


@dataclass(frozen=True, slots=True)
class ResolvedReference:
    """A reference target found by a ReferenceScope.

    Attributes:
        key: Unique key of the target, used for cycle detection
            (e.g. ``base_welcome`` or ``base_-brand.gender``)
        pattern: Pattern to render (entry value or attribute)
        scope: Scope for references made from inside ``pattern``
    """

    key: str
    pattern: Pattern
    scope: ReferenceScope


class ReferenceScope(Protocol):
    """Finds the pattern a message or term reference points to."""

    def find(self, reference: MessageReference | TermReference) -> ResolvedReference | None:
        """Return the referenced pattern, or None if it does not exist.

        Raises:
            ResolutionError: If the reference cannot be resolved unambiguously
        """
        ...  # pragma: no cover  # Protocol stub - not executable


@dataclass(slots=True)
class ResolutionContext:
    """Explicit per-render state.

    Attributes:
        stack: Keys of the patterns being resolved (cycle detection)
        max_depth: Maximum reference depth
    """

    stack: list[str] = field(default_factory=list)
    max_depth: int = MAX_DEPTH

    def push(self, key: str) -> None:
        """Enter a pattern, rejecting cycles and runaway depth."""
        if key in self.stack:
            cycle = " -> ".join([*self.stack, key])
            msg = f"Cyclic reference: {cycle}"
            raise ResolutionError(msg)
        if len(self.stack) >= self.max_depth:
            msg = f"Maximum reference depth ({self.max_depth}) exceeded at '{key}'"
            raise ResolutionError(msg)
        self.stack.append(key)

    def pop(self) -> str:
        """Leave the current pattern."""
        return self.stack.pop()


class TemplateRenderer:
    """Renders patterns for one locale.

    Attributes:
        locale: Locale code used for plural selection and formatting functions
        functions: Registry of callable functions (NUMBER, DATETIME, ...)
        use_isolating: Wrap interpolated values in Unicode bidi isolation marks
        max_depth: Maximum reference depth
    """

    __slots__ = ("functions", "locale", "max_depth", "use_isolating")

    def __init__(
        self,
        locale: str,
        *,
        functions: FunctionRegistry | None = None,
        use_isolating: bool = False,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        self.locale = locale
        self.functions = functions if functions is not None else get_shared_registry()
        self.use_isolating = use_isolating
        self.max_depth = max_depth

    def __repr__(self) -> str:
        return f"TemplateRenderer(locale={self.locale!r}, use_isolating={self.use_isolating!r})"

    def render(
        self,
        pattern: Pattern,
        args: Mapping[str, FluentValue] | None = None,
        *,
        scope: ReferenceScope | None = None,
        key: str = "<template>",
    ) -> str:
        """Render a pattern to a string.

        Args:
            pattern: Parsed pattern
            args: Variable values keyed by variable name (without ``$``)
            scope: Resolves message/term references; without one, any
                reference raises ResolutionError
            key: Identity of the pattern, used for cycle detection

        Raises:
            ResolutionError: If the pattern cannot be fully rendered

        Example:
            >>> from ftlbind.syntax import parse_template
            >>> TemplateRenderer("en_US").render(
            ...     parse_template("count is at {$counter}"), {"counter": 2}
            ... )
            'count is at 2'
        """
        context = ResolutionContext(max_depth=self.max_depth)
        context.push(key)
        try:
            return self._resolve_pattern(pattern, args or {}, scope, context)
        finally:
            context.pop()

    def _resolve_pattern(
        self,
        pattern: Pattern,
        args: Mapping[str, FluentValue],
        scope: ReferenceScope | None,
        context: ResolutionContext,
    ) -> str:
        parts: list[str] = []
        for element in pattern.elements:
            match element:
                case TextElement():
                    parts.append(element.value)
                case Placeable():
                    value = self._resolve_expression(element.expression, args, scope, context)
                    formatted = self._format_value(value)
                    if self.use_isolating:
                        formatted = f"{UNICODE_FSI}{formatted}{UNICODE_PDI}"
                    parts.append(formatted)
        return "".join(parts)

    def _resolve_expression(  # noqa: PLR0911  # one return per expression kind
        self,
        expr: Expression,
        args: Mapping[str, FluentValue],
        scope: ReferenceScope | None,
        context: ResolutionContext,
    ) -> FluentValue:
        match expr:
            case SelectExpression():
                return self._resolve_select_expression(expr, args, scope, context)
            case VariableReference():
                name = expr.id.name
                if name not in args:
                    msg = f"Variable '${name}' was not provided"
                    raise ResolutionError(msg)
                return args[name]
            case MessageReference() | TermReference():
                return self._resolve_reference(expr, args, scope, context)
            case FunctionReference():
                return self._resolve_function_call(expr, args, scope, context)
            case StringLiteral():
                return expr.value
            case NumberLiteral():
                return expr.value
            case Placeable():
                return self._resolve_expression(expr.expression, args, scope, context)
            case _:
                msg = f"Unknown expression type: {type(expr).__name__}"
                raise ResolutionError(msg)

    def _resolve_reference(
        self,
        expr: MessageReference | TermReference,
        args: Mapping[str, FluentValue],
        scope: ReferenceScope | None,
        context: ResolutionContext,
    ) -> str:
        """Resolve a message or term reference through the scope.

        Messages are rendered without arguments of their own: a referenced
        message sees the caller's arguments. Terms see only their own call
        arguments.
        """
        display = _reference_display(expr)
        if scope is None:
            msg = f"Cannot resolve reference '{display}' outside of a bundle"
            raise ResolutionError(msg)
        target = scope.find(expr)
        if target is None:
            kind = "term" if isinstance(expr, TermReference) else "message"
            msg = f"Unknown {kind} '{display}'"
            raise ResolutionError(msg)

        if isinstance(expr, TermReference):
            term_args: dict[str, FluentValue] = {}
            if expr.arguments is not None:
                term_args = {arg.name.name: arg.value.value for arg in expr.arguments.named}
            nested_args: Mapping[str, FluentValue] = term_args
        else:
            nested_args = args

        context.push(target.key)
        try:
            return self._resolve_pattern(target.pattern, nested_args, target.scope, context)
        finally:
            context.pop()

    def _resolve_function_call(
        self,
        func_ref: FunctionReference,
        args: Mapping[str, FluentValue],
        scope: ReferenceScope | None,
        context: ResolutionContext,
    ) -> FluentValue:
        positional = [
            self._resolve_expression(arg, args, scope, context)
            for arg in func_ref.arguments.positional
        ]
        named: dict[str, FluentValue] = {
            arg.name.name: arg.value.value for arg in func_ref.arguments.named
        }
        return self.functions.call(func_ref.id.name, positional, named, self.locale)

    def _resolve_select_expression(
        self,
        expr: SelectExpression,
        args: Mapping[str, FluentValue],
        scope: ReferenceScope | None,
        context: ResolutionContext,
    ) -> str:
        """Resolve select expression by matching variant.

        Matching priority:
            1. Exact string/number match
            2. Plural category match for numeric selectors
            3. Default variant
        """
        selector = self._resolve_expression(expr.selector, args, scope, context)
        variant = (
            _find_exact_variant(expr.variants, selector)
            or self._find_plural_variant(expr.variants, selector)
            or expr.default_variant
        )
        return self._resolve_pattern(variant.value, args, scope, context)

    def _find_plural_variant(
        self, variants: Sequence[Variant], selector: FluentValue
    ) -> Variant | None:
        number = _numeric_value(selector)
        if number is None:
            return None
        precision = selector.precision if isinstance(selector, FluentNumber) else None
        category = select_plural_category(number, self.locale, precision)
        for variant in variants:
            if Identifier.guard(variant.key) and variant.key.name == category:
                return variant
        return None

    def _format_value(self, value: FluentValue) -> str:
        """Format a resolved value for output.

        - str: returned as-is
        - bool: "true"/"false"
        - None: empty string
        - anything else (numbers, FluentNumber, dates): str()
        """
        if isinstance(value, str):
            return value
        # bool before anything numeric: bool is a subclass of int
        if isinstance(value, bool):
            return "true" if value else "false"
        if value is None:
            return ""
        return str(value)


def _numeric_value(value: FluentValue) -> int | float | Decimal | None:
    if isinstance(value, FluentNumber):
        return value.value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return value
    return None


def _find_exact_variant(variants: Sequence[Variant], selector: FluentValue) -> Variant | None:
    number = _numeric_value(selector)
    if isinstance(selector, bool):
        text: str | None = "true" if selector else "false"
    else:
        text = selector if isinstance(selector, str) else None
    for variant in variants:
        key = variant.key
        if NumberLiteral.guard(key):
            if number is not None and key.value == number:
                return variant
        elif text is not None and key.name == text:
            return variant
    return None


def _reference_display(expr: MessageReference | TermReference) -> str:
    prefix = "-" if isinstance(expr, TermReference) else ""
    suffix = f".{expr.attribute.name}" if expr.attribute else ""
    return f"{prefix}{expr.id.name}{suffix}"
