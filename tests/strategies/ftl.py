"""Hypothesis strategies for generating resource and template text."""

from __future__ import annotations

import keyword
import string

from hypothesis import strategies as st
from hypothesis.strategies import composite

# =============================================================================
# Constants
# =============================================================================

# Identifier character sets: [a-zA-Z][a-zA-Z0-9_-]*
FTL_IDENTIFIER_FIRST_CHARS: str = string.ascii_letters
FTL_IDENTIFIER_REST_CHARS: str = string.ascii_letters + string.digits + "-_"

# No braces, no '#', no leading markers: safe anywhere in a single-line value
FTL_SAFE_CHARS = string.ascii_letters + string.digits + " .,!?'-"


# =============================================================================
# String Strategies
# =============================================================================


@composite
def ftl_identifiers(draw: st.DrawFn) -> str:
    """Generate valid message keys and variable names.

    Uses both uppercase AND lowercase letters.
    """
    first = draw(st.sampled_from(FTL_IDENTIFIER_FIRST_CHARS))
    rest = draw(st.text(alphabet=FTL_IDENTIFIER_REST_CHARS, max_size=20))
    return first + rest


@composite
def python_identifiers(draw: st.DrawFn) -> str:
    """Generate lowercase keys that map to themselves as Python identifiers."""
    first = draw(st.sampled_from(string.ascii_lowercase))
    rest = draw(st.text(alphabet=string.ascii_lowercase + string.digits, max_size=12))
    name = first + rest
    if keyword.iskeyword(name) or name == "self":
        name = f"{name}x"
    return name


@composite
def ftl_safe_text(draw: st.DrawFn) -> str:
    """Generate single-line text without placeables.

    Never empty, never padded with spaces (values are trimmed).
    """
    text = draw(st.text(alphabet=FTL_SAFE_CHARS, min_size=1, max_size=50)).strip(" ")
    if not text:
        text = draw(st.sampled_from(string.ascii_letters))
    return text


@composite
def ftl_variable_templates(draw: st.DrawFn) -> tuple[str, list[str]]:
    """Generate a template interleaving text and ``{ $var }`` placeables.

    Returns:
        (template, variables in order of appearance, repeats included)
    """
    names = draw(st.lists(python_identifiers(), min_size=0, max_size=6))
    parts = [draw(ftl_safe_text())]
    for name in names:
        parts.append(f"{{ ${name} }}")
        parts.append(draw(ftl_safe_text()))
    return " ".join(parts), names
