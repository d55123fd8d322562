"""Resource and template syntax: parsers and AST.

Python 3.13+. Zero external dependencies.
"""

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
from .resource import ResourceAttribute, ResourceEntry, parse_resource
from .template import parse_template

__all__ = [
    "CallArguments",
    "Cursor",
    "Expression",
    "FunctionReference",
    "Identifier",
    "InlineExpression",
    "MessageReference",
    "NamedArgument",
    "NumberLiteral",
    "ParseResult",
    "Pattern",
    "PatternElement",
    "Placeable",
    "ResourceAttribute",
    "ResourceEntry",
    "SelectExpression",
    "StringLiteral",
    "TermReference",
    "TextElement",
    "VariableReference",
    "Variant",
    "VariantKey",
    "parse_resource",
    "parse_template",
]
