"""Enumerations for ftlbind type-safe constants.

Uses StrEnum for automatic string conversion.

Python 3.13+.
"""

from enum import StrEnum


class VariableContext(StrEnum):
    """Context where a variable reference appears."""

    PATTERN = "pattern"
    """Variable in message pattern: msg = Hello { $name }"""

    SELECTOR = "selector"
    """Variable in select expression selector: { $count -> }"""

    VARIANT = "variant"
    """Variable in select variant: [one] { $count } item"""

    FUNCTION_ARG = "function_arg"
    """Variable in function argument: { NUMBER($value) }"""


class ReferenceKind(StrEnum):
    """Kind of reference (message or term)."""

    MESSAGE = "message"
    """Reference to a message: { message-id }"""

    TERM = "term"
    """Reference to a term: { -term-id }"""


class LoadStatus(StrEnum):
    """Outcome of loading one language directory."""

    SUCCESS = "success"
    """Bundle built and registered."""

    ERROR = "error"
    """Bundle failed to build; the language is unavailable."""


__all__ = [
    "LoadStatus",
    "ReferenceKind",
    "VariableContext",
]
