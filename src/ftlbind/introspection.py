"""Pattern introspection: variables and references in source order.

Walks a parsed Pattern and reports every variable reference and every
message/term reference in the order a reader encounters them left to right.
Binding analysis builds accessor parameter lists from this order; the
runtime uses nothing here.

Traversal order:
    - pattern elements left to right
    - select expression: selector first, then each variant in declaration order
    - function call: positional arguments (named values are literals)
    - term call arguments are NOT visited for variables: a term only sees
      its own call arguments, which are literals

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import assert_never

from ftlbind.enums import ReferenceKind, VariableContext
from ftlbind.syntax.ast import (
    Expression,
    FunctionReference,
    MessageReference,
    NumberLiteral,
    Pattern,
    Placeable,
    SelectExpression,
    StringLiteral,
    TermReference,
    TextElement,
    VariableReference,
)

__all__ = [
    "PlaceableInfo",
    "ReferenceInfo",
    "VariableInfo",
    "extract_references",
    "extract_variables",
    "iter_placeables",
]


@dataclass(frozen=True, slots=True)
class VariableInfo:
    """A ``$name`` occurrence."""

    name: str
    """Variable name (without $ prefix)."""

    context: VariableContext
    """Where the variable appears."""


@dataclass(frozen=True, slots=True)
class ReferenceInfo:
    """A message or term reference.

    Examples:
        - { msg } -> ReferenceInfo(id="msg", kind=MESSAGE, attribute=None)
        - { -term } -> ReferenceInfo(id="term", kind=TERM, attribute=None)
        - { msg.attr } -> ReferenceInfo(id="msg", kind=MESSAGE, attribute="attr")
    """

    id: str
    """Referenced key (without - prefix for terms)."""

    kind: ReferenceKind

    attribute: str | None = None

    @property
    def entry_key(self) -> str:
        """Key as stored in a bundle: ``-id`` for terms."""
        return f"-{self.id}" if self.kind is ReferenceKind.TERM else self.id


type PlaceableInfo = VariableInfo | ReferenceInfo


def iter_placeables(pattern: Pattern) -> Iterator[PlaceableInfo]:
    """Yield variables and references of a pattern in source order.

    Repeated occurrences are yielded each time; see extract_variables() for
    the de-duplicated view.

    Example:
        >>> from ftlbind.syntax import parse_template
        >>> [p.name for p in iter_placeables(parse_template("{$a} and {$b}"))]
        ['a', 'b']
    """
    yield from _iter_pattern(pattern, VariableContext.PATTERN)


def _iter_pattern(pattern: Pattern, context: VariableContext) -> Iterator[PlaceableInfo]:
    for element in pattern.elements:
        match element:
            case TextElement():
                pass
            case Placeable(expression=expression):
                yield from _iter_expression(expression, context)
            case _ as unreachable:
                assert_never(unreachable)


def _iter_expression(expr: Expression, context: VariableContext) -> Iterator[PlaceableInfo]:
    match expr:
        case VariableReference():
            yield VariableInfo(expr.id.name, context)
        case MessageReference():
            attribute = expr.attribute.name if expr.attribute else None
            yield ReferenceInfo(expr.id.name, ReferenceKind.MESSAGE, attribute)
        case TermReference():
            attribute = expr.attribute.name if expr.attribute else None
            yield ReferenceInfo(expr.id.name, ReferenceKind.TERM, attribute)
        case FunctionReference():
            for argument in expr.arguments.positional:
                yield from _iter_expression(argument, VariableContext.FUNCTION_ARG)
        case SelectExpression():
            yield from _iter_expression(expr.selector, VariableContext.SELECTOR)
            for variant in expr.variants:
                yield from _iter_pattern(variant.value, VariableContext.VARIANT)
        case Placeable():
            yield from _iter_expression(expr.expression, context)
        case StringLiteral() | NumberLiteral():
            pass
        case _ as unreachable:
            assert_never(unreachable)


def extract_variables(pattern: Pattern) -> tuple[str, ...]:
    """Distinct variable names in first-occurrence order.

    Example:
        >>> from ftlbind.syntax import parse_template
        >>> extract_variables(parse_template("count is at {$counter}"))
        ('counter',)
    """
    names: dict[str, None] = {}
    for info in iter_placeables(pattern):
        if isinstance(info, VariableInfo):
            names.setdefault(info.name, None)
    return tuple(names)


def extract_references(pattern: Pattern) -> tuple[ReferenceInfo, ...]:
    """Distinct message/term references in first-occurrence order."""
    references: dict[ReferenceInfo, None] = {}
    for info in iter_placeables(pattern):
        if isinstance(info, ReferenceInfo):
            references.setdefault(info, None)
    return tuple(references)
