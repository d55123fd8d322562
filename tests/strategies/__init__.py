"""Hypothesis strategies for ftlbind property-based testing.

Usage:
    from tests.strategies import ftl_identifiers, ftl_safe_text
"""

from .ftl import (
    FTL_IDENTIFIER_FIRST_CHARS,
    FTL_IDENTIFIER_REST_CHARS,
    FTL_SAFE_CHARS,
    ftl_identifiers,
    ftl_safe_text,
    ftl_variable_templates,
    python_identifiers,
)

__all__ = [
    "FTL_IDENTIFIER_FIRST_CHARS",
    "FTL_IDENTIFIER_REST_CHARS",
    "FTL_SAFE_CHARS",
    "ftl_identifiers",
    "ftl_safe_text",
    "ftl_variable_templates",
    "python_identifiers",
]
