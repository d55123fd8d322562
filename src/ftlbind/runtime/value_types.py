"""Core value types for the template runtime.

Defines the fundamental types used throughout rendering:
    - FluentNumber: Formatted number preserving numeric identity
    - FluentValue: Union of all values accepted as template arguments
    - FluentFunction: Protocol for template-callable functions

Generated accessors annotate every parameter as FluentValue; the renderer
decides how each value is displayed.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Protocol

__all__ = [
    "FluentFunction",
    "FluentNumber",
    "FluentValue",
]


@dataclass(frozen=True, slots=True)
class FluentNumber:
    """Wrapper for formatted numbers preserving numeric identity and precision.

    When NUMBER() formats a value, the result must display as the formatted
    string but still select plural variants by its numeric value, including
    visible fraction digits (CLDR ``v`` operand: "1.0" is not "one" in English).

    Attributes:
        value: Original numeric value for matching
        formatted: Locale-formatted string for display
        precision: Visible fraction digit count in ``formatted``, None if unknown

    Example:
        >>> fn = FluentNumber(value=1, formatted="1.00", precision=2)
        >>> str(fn)
        '1.00'
        >>> fn.value
        1
    """

    value: int | float | Decimal
    formatted: str
    precision: int | None = None

    def __str__(self) -> str:
        """Return formatted string for output."""
        return self.formatted


# Canonical argument type, imported by the resolver, the holder and
# generated bindings. datetime is listed for readability; it is a date.
type FluentValue = (
    str
    | int
    | float
    | bool
    | Decimal
    | datetime
    | date
    | FluentNumber
    | None
)


class FluentFunction(Protocol):
    """Protocol for template-callable functions.

    Built-in formatting functions receive the primary value and the locale
    code positionally, then named arguments (already converted to
    snake_case) as keywords.
    """

    def __call__(
        self,
        value: FluentValue,
        locale_code: str,
        /,
        **kwargs: FluentValue,
    ) -> FluentValue:
        ...  # pragma: no cover  # Protocol stub - not executable
