"""Template parser: pattern text to Pattern AST.

Parses the value side of a resource entry (after the resource parser has
joined continuation lines and stripped their indentation) into an immutable
Pattern tree. Uses the immutable Cursor: every sub-parser takes a cursor and
returns ParseResult(value, new_cursor), raising TemplateSyntaxError on
malformed input.

Grammar (FTL subset):
    pattern      := (text | placeable)*
    placeable    := "{" blank? expression blank? "}"
    expression   := inline ( blank? "->" variants )?
    variants     := ( blank? "*"? "[" key "]" pattern )+      # exactly one "*"
    inline       := string | number | "$" ident | ident ( "." ident )?
                  | "-" ident ( "." ident )? call-args?
                  | FUNC call-args | placeable
    call-args    := "(" ( arg ( "," arg )* )? ")"
    arg          := inline | ident ":" ( string | number )

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass
from decimal import Decimal

from ftlbind.constants import MAX_DEPTH
from ftlbind.diagnostics import TemplateSyntaxError

from .ast import (
    CallArguments,
    Expression,
    FunctionReference,
    Identifier,
    InlineExpression,
    MessageReference,
    NamedArgument,
    NumberLiteral,
    Pattern,
    PatternElement,
    Placeable,
    SelectExpression,
    StringLiteral,
    TermReference,
    TextElement,
    VariableReference,
    Variant,
    VariantKey,
)
from .cursor import Cursor, ParseResult

__all__ = ["parse_template"]

_FUNCTION_NAME_PATTERN = re.compile(r"[A-Z][A-Z0-9_-]*")

# Escapes mapping to themselves: \" and \\
_SIMPLE_ESCAPES = frozenset({'"', "\\"})

# \uXXXX and \UXXXXXX
_UNICODE_ESCAPE_LENGTHS = {"u": 4, "U": 6}


@dataclass(frozen=True, slots=True)
class _ParseContext:
    """Nesting depth tracker threaded through the recursive descent."""

    max_depth: int = MAX_DEPTH
    depth: int = 0

    def is_depth_exceeded(self) -> bool:
        return self.depth >= self.max_depth

    def enter_placeable(self) -> _ParseContext:
        return _ParseContext(self.max_depth, self.depth + 1)


def parse_template(text: str, *, max_depth: int = MAX_DEPTH) -> Pattern:
    """Parse template text into a Pattern.

    Args:
        text: Template text (LF line endings)
        max_depth: Maximum placeable nesting depth

    Returns:
        Immutable Pattern AST

    Raises:
        TemplateSyntaxError: On malformed input. Line and column are
            relative to ``text``.

    Example:
        >>> pattern = parse_template("count is at {$counter}")
        >>> [type(e).__name__ for e in pattern.elements]
        ['TextElement', 'Placeable']
    """
    result = _parse_pattern(Cursor(text, 0), _ParseContext(max_depth), in_variant=False)
    if not result.cursor.is_eof:
        raise _error("Unbalanced closing brace '}'", result.cursor)
    return result.value


def _error(reason: str, cursor: Cursor) -> TemplateSyntaxError:
    line, column = cursor.compute_line_col()
    return TemplateSyntaxError(reason, line, column=column)


def _is_identifier_start(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _is_identifier_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch in "_-")


def _is_number_start(cursor: Cursor) -> bool:
    ch = cursor.current
    if ch in string.digits:
        return True
    nxt = cursor.peek(1)
    return ch == "-" and nxt is not None and nxt in string.digits


# ============================================================================
# PATTERNS
# ============================================================================


def _is_variant_boundary(cursor: Cursor) -> bool:
    """Check whether the line starting at cursor opens a variant or closes a select."""
    c = cursor.skip_spaces()
    if c.is_eof:
        return True
    return c.current in "[}" or (c.current == "*" and c.peek(1) == "[")


def _parse_pattern(cursor: Cursor, ctx: _ParseContext, *, in_variant: bool) -> ParseResult[Pattern]:
    """Parse text and placeables until EOF, an unmatched '}' or (in a variant) the next variant."""
    elements: list[PatternElement] = []
    text_start = cursor

    while not cursor.is_eof:
        ch = cursor.current
        if ch == "{":
            if cursor.pos > text_start.pos:
                elements.append(TextElement(text_start.slice_to(cursor.pos)))
            placeable = _parse_placeable(cursor, ctx)
            elements.append(placeable.value)
            cursor = placeable.cursor
            text_start = cursor
            continue
        if ch == "}":
            break
        if in_variant and ch == "\n" and _is_variant_boundary(cursor.advance()):
            break
        cursor = cursor.advance()

    if cursor.pos > text_start.pos:
        elements.append(TextElement(text_start.slice_to(cursor.pos)))
    return ParseResult(Pattern(tuple(elements)), cursor)


def _trim_variant_value(elements: tuple[PatternElement, ...]) -> tuple[PatternElement, ...]:
    """Strip blank space around a variant's value (it may start on its own line)."""
    trimmed = list(elements)
    if trimmed and TextElement.guard(first := trimmed[0]):
        value = first.value.lstrip(" \n")
        if value:
            trimmed[0] = TextElement(value)
        else:
            trimmed.pop(0)
    if trimmed and TextElement.guard(last := trimmed[-1]):
        value = last.value.rstrip(" \n")
        if value:
            trimmed[-1] = TextElement(value)
        else:
            trimmed.pop()
    return tuple(trimmed)


# ============================================================================
# PLACEABLES AND SELECT EXPRESSIONS
# ============================================================================


def _parse_placeable(cursor: Cursor, ctx: _ParseContext) -> ParseResult[Placeable]:
    """Parse '{' expression '}' with cursor on the opening brace."""
    if ctx.is_depth_exceeded():
        msg = f"Maximum nesting depth ({ctx.max_depth}) exceeded"
        raise _error(msg, cursor)
    inner = ctx.enter_placeable()

    cursor = cursor.advance().skip_whitespace()
    if cursor.is_eof:
        raise _error("Unterminated placeable", cursor)
    if cursor.current == "}":
        raise _error("Empty placeable", cursor)

    expression = _parse_expression(cursor, inner)
    cursor = expression.cursor.skip_whitespace()
    if cursor.is_eof or cursor.current != "}":
        raise _error("Expected '}' to close placeable", cursor)
    return ParseResult(Placeable(expression.value), cursor.advance())


def _parse_expression(cursor: Cursor, ctx: _ParseContext) -> ParseResult[Expression]:
    inline = _parse_inline_expression(cursor, ctx)
    after = inline.cursor.skip_whitespace()
    if after.slice_to(after.pos + 2) != "->":
        return ParseResult(inline.value, inline.cursor)

    _validate_selector(inline.value, cursor)
    variants = _parse_variants(after.advance(2), ctx)
    return ParseResult(SelectExpression(inline.value, variants.value), variants.cursor)


def _validate_selector(selector: InlineExpression, cursor: Cursor) -> None:
    if MessageReference.guard(selector):
        raise _error("Message references cannot be used as selectors", cursor)
    if TermReference.guard(selector) and selector.attribute is None:
        raise _error("Term values cannot be used as selectors; use a term attribute", cursor)


def _parse_variants(cursor: Cursor, ctx: _ParseContext) -> ParseResult[tuple[Variant, ...]]:
    """Parse the variant list of a select expression, stopping at the closing '}'."""
    variants: list[Variant] = []
    has_default = False

    while True:
        cursor = cursor.skip_whitespace()
        if cursor.is_eof:
            raise _error("Unterminated select expression", cursor)
        if cursor.current == "}":
            break
        if cursor.current not in "*[":
            raise _error("Expected a variant key '[...]' or default variant '*[...]'", cursor)

        variant_start = cursor
        variant = _parse_variant(cursor, ctx)
        if variant.value.default:
            if has_default:
                raise _error("Select expression has more than one default variant", variant_start)
            has_default = True
        variants.append(variant.value)
        cursor = variant.cursor

    if not variants:
        raise _error("Select expression has no variants", cursor)
    if not has_default:
        raise _error("Select expression must have a default variant marked with '*'", cursor)
    return ParseResult(tuple(variants), cursor)


def _parse_variant(cursor: Cursor, ctx: _ParseContext) -> ParseResult[Variant]:
    default = cursor.current == "*"
    if default:
        cursor = cursor.advance()
    opening = cursor.expect("[")
    if opening is None:
        raise _error("Expected '[' to open variant key", cursor)

    key = _parse_variant_key(opening.skip_spaces())
    cursor = key.cursor.skip_spaces()
    closing = cursor.expect("]")
    if closing is None:
        raise _error("Expected ']' to close variant key", cursor)

    value_start = closing.skip_spaces()
    pattern = _parse_pattern(value_start, ctx, in_variant=True)
    elements = _trim_variant_value(pattern.value.elements)
    if not elements:
        raise _error("Variant has no value", value_start)
    return ParseResult(Variant(key.value, Pattern(elements), default), pattern.cursor)


def _parse_variant_key(cursor: Cursor) -> ParseResult[VariantKey]:
    if cursor.is_eof:
        raise _error("Expected a variant key", cursor)
    if _is_number_start(cursor):
        number = _parse_number(cursor)
        return ParseResult(number.value, number.cursor)
    identifier = _parse_identifier(cursor)
    return ParseResult(identifier.value, identifier.cursor)


# ============================================================================
# INLINE EXPRESSIONS
# ============================================================================


def _parse_inline_expression(  # noqa: PLR0911  # one return per expression kind
    cursor: Cursor, ctx: _ParseContext
) -> ParseResult[InlineExpression]:
    if cursor.is_eof:
        raise _error("Expected an expression", cursor)

    ch = cursor.current
    if ch == '"':
        literal = _parse_string_literal(cursor)
        return ParseResult(literal.value, literal.cursor)
    if _is_number_start(cursor):
        number = _parse_number(cursor)
        return ParseResult(number.value, number.cursor)
    if ch == "-":
        term = _parse_term_reference(cursor, ctx)
        return ParseResult(term.value, term.cursor)
    if ch == "$":
        identifier = _parse_identifier(cursor.advance())
        return ParseResult(VariableReference(identifier.value), identifier.cursor)
    if ch == "{":
        placeable = _parse_placeable(cursor, ctx)
        return ParseResult(placeable.value, placeable.cursor)
    if _is_identifier_start(ch):
        return _parse_identifier_expression(cursor, ctx)

    msg = f"Unexpected character '{ch}' in placeable"
    raise _error(msg, cursor)


def _parse_identifier_expression(
    cursor: Cursor, ctx: _ParseContext
) -> ParseResult[InlineExpression]:
    """Parse a message reference or, when followed by '(', a function call."""
    identifier = _parse_identifier(cursor)
    after = identifier.cursor.skip_spaces()

    if not after.is_eof and after.current == "(":
        if not _FUNCTION_NAME_PATTERN.fullmatch(identifier.value.name):
            msg = f"Function names must be upper-case, got '{identifier.value.name}'"
            raise _error(msg, cursor)
        arguments = _parse_call_arguments(after, ctx)
        return ParseResult(FunctionReference(identifier.value, arguments.value), arguments.cursor)

    attribute = _parse_optional_attribute(identifier.cursor)
    return ParseResult(MessageReference(identifier.value, attribute.value), attribute.cursor)


def _parse_term_reference(cursor: Cursor, ctx: _ParseContext) -> ParseResult[TermReference]:
    identifier = _parse_identifier(cursor.advance())
    attribute = _parse_optional_attribute(identifier.cursor)
    cursor = attribute.cursor

    arguments: CallArguments | None = None
    after = cursor.skip_spaces()
    if not after.is_eof and after.current == "(":
        call = _parse_call_arguments(after, ctx)
        arguments = call.value
        cursor = call.cursor
    return ParseResult(TermReference(identifier.value, attribute.value, arguments), cursor)


def _parse_optional_attribute(cursor: Cursor) -> ParseResult[Identifier | None]:
    dot = cursor.expect(".")
    if dot is None:
        return ParseResult(None, cursor)
    attribute = _parse_identifier(dot)
    return ParseResult(attribute.value, attribute.cursor)


def _parse_call_arguments(cursor: Cursor, ctx: _ParseContext) -> ParseResult[CallArguments]:
    """Parse '(' arguments ')' with cursor on the opening parenthesis."""
    positional: list[InlineExpression] = []
    named: list[NamedArgument] = []
    seen_names: set[str] = set()

    cursor = cursor.advance().skip_whitespace()
    closing = cursor.expect(")")
    if closing is not None:
        return ParseResult(CallArguments((), ()), closing)

    while True:
        if cursor.is_eof:
            raise _error("Unterminated argument list", cursor)

        argument_start = cursor
        named_argument = _try_parse_named_argument(cursor)
        if named_argument is not None:
            name = named_argument.value.name.name
            if name in seen_names:
                msg = f"Duplicate named argument '{name}'"
                raise _error(msg, argument_start)
            seen_names.add(name)
            named.append(named_argument.value)
            cursor = named_argument.cursor
        else:
            if named:
                raise _error("Positional arguments must precede named arguments", cursor)
            expression = _parse_inline_expression(cursor, ctx)
            positional.append(expression.value)
            cursor = expression.cursor

        cursor = cursor.skip_whitespace()
        if cursor.is_eof:
            raise _error("Unterminated argument list", cursor)
        if cursor.current == ")":
            return ParseResult(CallArguments(tuple(positional), tuple(named)), cursor.advance())
        if cursor.current != ",":
            raise _error("Expected ',' or ')' in argument list", cursor)
        cursor = cursor.advance().skip_whitespace()


def _try_parse_named_argument(cursor: Cursor) -> ParseResult[NamedArgument] | None:
    """Parse ``name: literal`` or return None if the argument is positional."""
    if not _is_identifier_start(cursor.current):
        return None
    identifier = _parse_identifier(cursor)
    colon = identifier.cursor.skip_whitespace().expect(":")
    if colon is None:
        return None

    value_cursor = colon.skip_whitespace()
    if value_cursor.is_eof:
        raise _error("Expected a value for named argument", value_cursor)
    if value_cursor.current == '"':
        literal: ParseResult[StringLiteral] | ParseResult[NumberLiteral] = (
            _parse_string_literal(value_cursor)
        )
    elif _is_number_start(value_cursor):
        literal = _parse_number(value_cursor)
    else:
        raise _error("Named argument values must be string or number literals", value_cursor)
    return ParseResult(NamedArgument(identifier.value, literal.value), literal.cursor)


# ============================================================================
# PRIMITIVES
# ============================================================================


def _parse_identifier(cursor: Cursor) -> ParseResult[Identifier]:
    """Parse identifier: [a-zA-Z][a-zA-Z0-9_-]*"""
    if cursor.is_eof or not _is_identifier_start(cursor.current):
        raise _error("Expected an identifier", cursor)
    start = cursor
    cursor = cursor.advance()
    while not cursor.is_eof and _is_identifier_char(cursor.current):
        cursor = cursor.advance()
    return ParseResult(Identifier(start.slice_to(cursor.pos)), cursor)


def _parse_digits(cursor: Cursor) -> Cursor:
    while not cursor.is_eof and cursor.current in string.digits:
        cursor = cursor.advance()
    return cursor


def _parse_number(cursor: Cursor) -> ParseResult[NumberLiteral]:
    """Parse number literal: -?[0-9]+(.[0-9]+)?"""
    start = cursor
    if cursor.current == "-":
        cursor = cursor.advance()
    integer_end = _parse_digits(cursor)
    if integer_end.pos == cursor.pos:
        raise _error("Expected a digit", cursor)
    cursor = integer_end

    if cursor.peek() == ".":
        fraction_start = cursor.advance()
        fraction_end = _parse_digits(fraction_start)
        if fraction_end.pos == fraction_start.pos:
            raise _error("Expected a digit after '.'", fraction_start)
        cursor = fraction_end

    raw = start.slice_to(cursor.pos)
    value: int | Decimal = Decimal(raw) if "." in raw else int(raw)
    return ParseResult(NumberLiteral(value, raw), cursor)


def _parse_string_literal(cursor: Cursor) -> ParseResult[StringLiteral]:
    """Parse string literal with cursor on the opening quote.

    Supports escape sequences:
        \\" -> "
        \\\\ -> \\
        \\uXXXX -> Unicode character (4 hex digits)
        \\UXXXXXX -> Unicode character (6 hex digits)
    """
    cursor = cursor.advance()
    chars: list[str] = []

    while not cursor.is_eof:
        ch = cursor.current
        if ch == '"':
            return ParseResult(StringLiteral("".join(chars)), cursor.advance())
        if ch == "\n":
            break
        if ch == "\\":
            escaped = _parse_escape_sequence(cursor.advance())
            chars.append(escaped.value)
            cursor = escaped.cursor
            continue
        chars.append(ch)
        cursor = cursor.advance()

    raise _error("Unterminated string literal", cursor)


def _parse_escape_sequence(cursor: Cursor) -> ParseResult[str]:
    """Parse the part of an escape sequence following the backslash."""
    if cursor.is_eof:
        raise _error("Unterminated escape sequence", cursor)

    ch = cursor.current
    if ch in _SIMPLE_ESCAPES:
        return ParseResult(ch, cursor.advance())

    length = _UNICODE_ESCAPE_LENGTHS.get(ch)
    if length is None:
        msg = f"Unknown escape sequence '\\{ch}'"
        raise _error(msg, cursor)

    digits_start = cursor.advance()
    digits = digits_start.slice_to(digits_start.pos + length)
    if len(digits) != length or any(d not in string.hexdigits for d in digits):
        msg = f"Invalid unicode escape '\\{ch}{digits}'"
        raise _error(msg, cursor)
    code_point = int(digits, 16)
    if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
        msg = f"Invalid code point U+{code_point:X} in escape sequence"
        raise _error(msg, cursor)
    return ParseResult(chr(code_point), digits_start.advance(length))
