"""Runtime localization: bundles, the holder and its configuration.

Python 3.13+. Depends on Babel (via the runtime) for formatting.
"""

from .bundle import (
    LanguageBundle,
    Message,
    build_language_bundle,
    load_language_bundle,
    qualified_id,
)
from .config import LocalizationConfig
from .holder import LocalizationHolder
from .loading import LanguageLoadResult, LoadSummary
from .types import FTLSource, LanguageTag, QualifiedId, ResourceName

__all__ = [
    "FTLSource",
    "LanguageBundle",
    "LanguageLoadResult",
    "LanguageTag",
    "LoadSummary",
    "LocalizationConfig",
    "LocalizationHolder",
    "Message",
    "QualifiedId",
    "ResourceName",
    "build_language_bundle",
    "load_language_bundle",
    "qualified_id",
]
