"""Built-in template functions with Python-native APIs.

Implements NUMBER and DATETIME with locale-aware formatting via Babel.
Python functions use snake_case parameters; FunctionRegistry bridges to
the camelCase names written in templates.

Example:
    # Python API (snake_case):
    number_format(1234.5, "en-US", minimum_fraction_digits=2)

    # Template (camelCase):
    price = { NUMBER($amount, minimumFractionDigits: 2) }

Python 3.13+. Uses Babel for i18n.
"""

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from babel import dates as babel_dates
from babel import numbers as babel_numbers
from babel.core import UnknownLocaleError

from ftlbind.locale_utils import get_babel_locale

from .function_bridge import FunctionRegistry
from .value_types import FluentNumber, FluentValue

__all__ = [
    "create_default_registry",
    "datetime_format",
    "get_shared_registry",
    "number_format",
]

logger = logging.getLogger(__name__)

_DATE_STYLES = frozenset({"short", "medium", "long", "full"})


def _coerce_bool(name: str, value: FluentValue) -> bool:
    """Accept a real bool or the template literals "true"/"false"."""
    if isinstance(value, bool):
        return value
    if value in ("true", "false"):
        return value == "true"
    msg = f"{name} must be true or false, got {value!r}"
    raise ValueError(msg)


def _coerce_digits(name: str, value: FluentValue) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, Decimal)):
        msg = f"{name} must be a whole number, got {value!r}"
        raise TypeError(msg)
    digits = int(value)
    if digits != value or digits < 0:
        msg = f"{name} must be a non-negative whole number, got {value}"
        raise ValueError(msg)
    return digits


def _resolve_locale(locale_code: str) -> str:
    """Return a locale Babel can format for, falling back to en_US."""
    try:
        get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError):
        logger.debug("Unknown locale %s, formatting with en_US", locale_code)
        return "en_US"
    return locale_code.replace("-", "_")


def number_format(
    value: FluentValue,
    locale_code: str = "en-US",
    *,
    minimum_fraction_digits: FluentValue = 0,
    maximum_fraction_digits: FluentValue = 3,
    use_grouping: FluentValue = True,
    pattern: FluentValue = None,
) -> FluentNumber:
    """Format number with locale-specific separators.

    Args:
        value: Number to format (int, float, Decimal or a FluentNumber)
        locale_code: BCP 47 / POSIX locale identifier
        minimum_fraction_digits: Minimum decimal places (default: 0)
        maximum_fraction_digits: Maximum decimal places (default: 3)
        use_grouping: Use thousands separator (default: True)
        pattern: Custom Babel number pattern (overrides the other options)

    Returns:
        FluentNumber carrying both the formatted text and the numeric value

    Raises:
        TypeError: If value is not numeric
        ValueError: If an option is out of range

    Examples:
        >>> str(number_format(1234.5, "en-US"))
        '1,234.5'
        >>> str(number_format(1234.5, "de-DE"))
        '1.234,5'
        >>> str(number_format(42, "en-US", minimum_fraction_digits=2))
        '42.00'

    Template Usage:
        price = { NUMBER($amount, minimumFractionDigits: 2) }
        plain = { NUMBER($year, useGrouping: "false") }
    """
    if isinstance(value, FluentNumber):
        value = value.value
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        msg = f"NUMBER() expects a number, got {type(value).__name__}"
        raise TypeError(msg)

    babel_locale = _resolve_locale(locale_code)

    if pattern is not None:
        format_pattern = str(pattern)
    else:
        minimum = _coerce_digits("minimumFractionDigits", minimum_fraction_digits)
        maximum = max(_coerce_digits("maximumFractionDigits", maximum_fraction_digits), minimum)
        # '#,##0' = integer with grouping, '#,##0.0##' = 1-3 decimals with grouping
        integer_part = "#,##0" if _coerce_bool("useGrouping", use_grouping) else "0"
        if maximum == 0:
            format_pattern = integer_part
        else:
            fraction = "0" * minimum + "#" * (maximum - minimum)
            format_pattern = f"{integer_part}.{fraction}"

    try:
        formatted = str(
            babel_numbers.format_decimal(value, format=format_pattern, locale=babel_locale)
        )
    except (InvalidOperation, KeyError) as e:
        msg = f"Cannot format {value!r} with pattern {format_pattern!r}"
        raise ValueError(msg) from e

    decimal_symbol = babel_numbers.get_decimal_symbol(babel_locale)
    precision = len(formatted.rsplit(decimal_symbol, 1)[1]) if decimal_symbol in formatted else 0
    return FluentNumber(value=value, formatted=formatted, precision=precision)


def datetime_format(
    value: FluentValue,
    locale_code: str = "en-US",
    *,
    date_style: FluentValue = "medium",
    time_style: FluentValue = None,
    pattern: FluentValue = None,
) -> str:
    """Format a date or datetime with locale-specific formatting.

    Args:
        value: datetime, date, or ISO 8601 string
        locale_code: BCP 47 / POSIX locale identifier
        date_style: "short", "medium", "long" or "full" (default: "medium")
        time_style: Same choices, or None for date only
        pattern: Custom Babel datetime pattern (overrides the styles)

    Returns:
        Formatted string

    Examples:
        >>> from datetime import datetime, UTC
        >>> dt = datetime(2025, 10, 27, 14, 30, tzinfo=UTC)
        >>> datetime_format(dt, "en-US", date_style="short")
        '10/27/25'
        >>> datetime_format(dt, "en-US", pattern="yyyy-MM-dd")
        '2025-10-27'

    Template Usage:
        today = { DATETIME($date, dateStyle: "short") }
        stamp = { DATETIME($time, dateStyle: "medium", timeStyle: "short") }
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError as e:
            msg = f"Invalid datetime string '{value}': not ISO 8601 format"
            raise ValueError(msg) from e
    if not isinstance(value, date):
        msg = f"DATETIME() expects a date or datetime, got {type(value).__name__}"
        raise TypeError(msg)

    babel_locale = _resolve_locale(locale_code)

    if pattern is not None:
        if isinstance(value, datetime):
            return str(babel_dates.format_datetime(value, format=str(pattern), locale=babel_locale))
        return str(babel_dates.format_date(value, format=str(pattern), locale=babel_locale))

    for name, style in (("dateStyle", date_style), ("timeStyle", time_style)):
        if style is not None and style not in _DATE_STYLES:
            msg = f"{name} must be one of {sorted(_DATE_STYLES)}, got {style!r}"
            raise ValueError(msg)

    date_str = str(babel_dates.format_date(value, format=str(date_style), locale=babel_locale))
    if time_style is None:
        return date_str
    if not isinstance(value, datetime):
        msg = "timeStyle requires a datetime value, got a date"
        raise TypeError(msg)

    time_str = str(babel_dates.format_time(value, format=str(time_style), locale=babel_locale))
    # CLDR dateTimeFormat: {0} is the time, {1} the date
    locale_obj = get_babel_locale(babel_locale)
    datetime_pattern = (
        locale_obj.datetime_formats.get(str(date_style))
        or locale_obj.datetime_formats.get("medium")
        or "{1} {0}"
    )
    return str(datetime_pattern).replace("{0}", time_str).replace("{1}", date_str)


def create_default_registry() -> FunctionRegistry:
    """Create a new FunctionRegistry with NUMBER and DATETIME registered.

    Each call returns a fresh, unfrozen instance that callers may extend.
    """
    registry = FunctionRegistry()
    registry.register(number_format, ftl_name="NUMBER", inject_locale=True)
    registry.register(datetime_format, ftl_name="DATETIME", inject_locale=True)
    return registry


# Initialized lazily on first access to avoid import-time side effects.
_SHARED_REGISTRY: FunctionRegistry | None = None


def get_shared_registry() -> FunctionRegistry:
    """Get a shared, frozen FunctionRegistry with the built-in functions.

    The registry is frozen; use ``copy()`` or create_default_registry() to
    add custom functions.
    """
    global _SHARED_REGISTRY  # noqa: PLW0603
    if _SHARED_REGISTRY is None:
        registry = create_default_registry()
        registry.freeze()
        _SHARED_REGISTRY = registry
    return _SHARED_REGISTRY
