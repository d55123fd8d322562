"""CLDR plural rules implementation using Babel.

Provides plural category selection for all locales using Babel's CLDR data.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from decimal import Decimal

from babel.core import UnknownLocaleError

from ftlbind.locale_utils import get_babel_locale

__all__ = ["select_plural_category"]


def select_plural_category(
    n: int | float | Decimal, locale: str, precision: int | None = None
) -> str:
    """Select CLDR plural category for a number.

    Args:
        n: Number to categorize
        locale: Locale code (e.g., "lv_LV", "en_US", "ar-SA")
        precision: Visible fraction digits; when given, the number is
            quantized so trailing zeros count (CLDR ``v`` operand)

    Returns:
        Plural category: "zero", "one", "two", "few", "many", or "other"

    Examples:
        >>> select_plural_category(1, "en_US")
        'one'
        >>> select_plural_category(1, "en_US", precision=1)
        'other'
        >>> select_plural_category(5, "ru_RU")
        'many'

    If locale parsing fails, falls back to a simple one/other rule.
    """
    try:
        locale_obj = get_babel_locale(locale)
    except (UnknownLocaleError, ValueError):
        return "one" if abs(n) == 1 and not precision else "other"

    if precision is not None and precision > 0:
        n = Decimal(str(n)).quantize(Decimal(1).scaleb(-precision))

    return str(locale_obj.plural_form(n))
