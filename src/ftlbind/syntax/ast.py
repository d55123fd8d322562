"""Template AST node definitions.

Covers the pattern grammar accepted inside resource values: text,
placeables, select expressions, literals, variable/message/term references
and function calls. Nodes the parser and resolver branch on carry
``guard`` static methods for type narrowing.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import TypeIs

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Identifier",
    # Pattern elements
    "Pattern",
    "TextElement",
    "Placeable",
    # Expressions
    "SelectExpression",
    "Variant",
    "StringLiteral",
    "NumberLiteral",
    "VariableReference",
    "MessageReference",
    "TermReference",
    "FunctionReference",
    "CallArguments",
    "NamedArgument",
    # Type aliases
    "PatternElement",
    "Expression",
    "InlineExpression",
    "VariantKey",
]


@dataclass(frozen=True, slots=True)
class Identifier:
    """Identifier: [a-zA-Z][a-zA-Z0-9_-]*"""

    name: str

    @staticmethod
    def guard(key: object) -> TypeIs["Identifier"]:
        """Type guard for Identifier (used in variant keys)."""
        return isinstance(key, Identifier)


# ============================================================================
# PATTERNS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Pattern:
    """Text pattern with optional placeables."""

    elements: tuple["PatternElement", ...]


@dataclass(frozen=True, slots=True)
class TextElement:
    """Plain text segment."""

    value: str

    @staticmethod
    def guard(elem: object) -> TypeIs["TextElement"]:
        """Type guard for TextElement.

        Example:
            if TextElement.guard(elem):
                elem.value  # mypy knows elem is TextElement
        """
        return isinstance(elem, TextElement)


@dataclass(frozen=True, slots=True)
class Placeable:
    """Dynamic content: { expression }"""

    expression: "Expression"


# ============================================================================
# EXPRESSIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class SelectExpression:
    """Conditional expression with variants.

    Example:
        { $count ->
            [one] 1 item
           *[other] { $count } items
        }
    """

    selector: "InlineExpression"
    variants: tuple["Variant", ...]

    @property
    def default_variant(self) -> "Variant":
        """The variant marked with ``*`` (the parser guarantees exactly one)."""
        return next(v for v in self.variants if v.default)


@dataclass(frozen=True, slots=True)
class Variant:
    """Single variant in select expression."""

    key: "VariantKey"
    value: Pattern
    default: bool = False


# ============================================================================
# LITERALS
# ============================================================================


@dataclass(frozen=True, slots=True)
class StringLiteral:
    """String literal: "text"

    Escape sequences are already decoded in ``value``.
    """

    value: str


@dataclass(frozen=True, slots=True)
class NumberLiteral:
    """Number literal: 42 or 3.14

    Integers parse to ``int``; anything with a fraction parses to ``Decimal``
    so the literal keeps its visible precision for formatting and plural
    selection. ``raw`` preserves the source text.
    """

    value: int | Decimal
    raw: str

    @staticmethod
    def guard(key: object) -> TypeIs["NumberLiteral"]:
        """Type guard for NumberLiteral (used in variant keys)."""
        return isinstance(key, NumberLiteral)


# ============================================================================
# REFERENCES
# ============================================================================


@dataclass(frozen=True, slots=True)
class VariableReference:
    """Variable reference: $variable"""

    id: Identifier


@dataclass(frozen=True, slots=True)
class MessageReference:
    """Message reference: message-id or message-id.attribute"""

    id: Identifier
    attribute: Identifier | None = None

    @staticmethod
    def guard(expr: object) -> TypeIs["MessageReference"]:
        """Type guard for MessageReference."""
        return isinstance(expr, MessageReference)


@dataclass(frozen=True, slots=True)
class TermReference:
    """Term reference: -term-id, -term-id.attribute or -term-id(key: "value")"""

    id: Identifier
    attribute: Identifier | None = None
    arguments: "CallArguments | None" = None

    @staticmethod
    def guard(expr: object) -> TypeIs["TermReference"]:
        """Type guard for TermReference."""
        return isinstance(expr, TermReference)


@dataclass(frozen=True, slots=True)
class FunctionReference:
    """Function call: FUNCTION(arg1, key: value)"""

    id: Identifier
    arguments: "CallArguments"


@dataclass(frozen=True, slots=True)
class CallArguments:
    """Function call arguments."""

    positional: tuple["InlineExpression", ...]
    named: tuple["NamedArgument", ...]


@dataclass(frozen=True, slots=True)
class NamedArgument:
    """Named argument: name: value (value is always a literal)"""

    name: Identifier
    value: StringLiteral | NumberLiteral


# ============================================================================
# TYPE ALIASES
# ============================================================================

type PatternElement = TextElement | Placeable
type Expression = SelectExpression | InlineExpression
type InlineExpression = (
    StringLiteral
    | NumberLiteral
    | VariableReference
    | MessageReference
    | TermReference
    | FunctionReference
    | Placeable
)
type VariantKey = Identifier | NumberLiteral
