"""Type aliases for the localization domain.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "FTLSource",
    "LanguageTag",
    "QualifiedId",
    "ResourceName",
]

type LanguageTag = str
"""Language directory name (e.g., 'en_US', 'fr_FR', 'zh-Hant')."""

type ResourceName = str
"""Resource file name without extension (e.g., 'base' for base.ftl)."""

type QualifiedId = str
"""Cross-language message identifier: '<resource_name>_<key>' (e.g., 'base_name')."""

type FTLSource = str
"""Raw resource file text."""
