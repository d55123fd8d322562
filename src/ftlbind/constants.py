"""Shared constants for ftlbind.

Constants are grouped by domain:
- Resource layout: file extension and directory conventions
- Configuration: environment variable names and their defaults
- Limits: recursion and input size protection

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Resource layout
    "FILE_EXTENSION",
    "DEFAULT_DIR",
    "QUALIFIED_ID_SEPARATOR",
    # Configuration
    "TRANSLATION_DIR_ENV",
    "DEFAULT_LANG_ENV",
    "DEFAULT_TRANSLATION_DIR",
    "DEFAULT_LANGUAGE",
    # Limits
    "MAX_DEPTH",
    "MAX_SOURCE_SIZE",
]

# ============================================================================
# RESOURCE LAYOUT
# ============================================================================

# Only files with this suffix are treated as localization resources.
FILE_EXTENSION: str = ".ftl"

# Sub-directory of the root that aliases the default language.
# May be a symlink to the default language directory or a plain copy.
DEFAULT_DIR: str = "default"

# Joins resource name and message key into a qualified id: base.ftl + hello -> base_hello
QUALIFIED_ID_SEPARATOR: str = "_"

# ============================================================================
# CONFIGURATION
# ============================================================================

TRANSLATION_DIR_ENV: str = "TRANSLATION_DIR"
DEFAULT_LANG_ENV: str = "DEFAULT_LANG"

# Relative to the current working directory.
DEFAULT_TRANSLATION_DIR: str = "localizations"
DEFAULT_LANGUAGE: str = "en_US"

# ============================================================================
# LIMITS
# ============================================================================

# Unified maximum depth for recursion protection.
# Used by: template parser (placeable nesting) and resolver (reference chains).
MAX_DEPTH: int = 100

# Maximum resource file size in characters (10 MB).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024
