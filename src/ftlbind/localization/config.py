"""Holder configuration with environment-variable overrides.

Recognized variables:
    TRANSLATION_DIR: root directory of the language tree
        (default: ``localizations`` under the working directory)
    DEFAULT_LANG: designated default language tag (default: ``en_US``)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from ftlbind.constants import (
    DEFAULT_LANG_ENV,
    DEFAULT_LANGUAGE,
    DEFAULT_TRANSLATION_DIR,
    TRANSLATION_DIR_ENV,
)

from .types import LanguageTag

__all__ = ["LocalizationConfig"]


@dataclass(frozen=True, slots=True)
class LocalizationConfig:
    """Where to load resources from and which language is the default.

    Attributes:
        root_dir: Directory containing one sub-directory per language
        default_language: Tag of the language every lookup falls back to
        max_workers: Thread pool size for per-language loading
            (None = executor default, 1 = sequential)
        use_isolating: Wrap interpolated values in Unicode bidi marks

    Example:
        >>> config = LocalizationConfig.from_env({"DEFAULT_LANG": "de_DE"})
        >>> config.default_language
        'de_DE'
    """

    root_dir: Path
    default_language: LanguageTag = DEFAULT_LANGUAGE
    max_workers: int | None = None
    use_isolating: bool = False

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.default_language:
            msg = "default_language must not be empty"
            raise ValueError(msg)
        if self.max_workers is not None and self.max_workers < 1:
            msg = f"max_workers must be >= 1, got {self.max_workers}"
            raise ValueError(msg)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        max_workers: int | None = None,
        use_isolating: bool = False,
    ) -> LocalizationConfig:
        """Build a configuration from environment variables.

        Empty variables count as unset.

        Args:
            environ: Variables to read (default: ``os.environ``)
            max_workers: Thread pool size for loading
            use_isolating: Wrap interpolated values in Unicode bidi marks
        """
        env = os.environ if environ is None else environ
        root = env.get(TRANSLATION_DIR_ENV) or str(Path.cwd() / DEFAULT_TRANSLATION_DIR)
        language = env.get(DEFAULT_LANG_ENV) or DEFAULT_LANGUAGE
        return cls(
            root_dir=Path(root),
            default_language=language,
            max_workers=max_workers,
            use_isolating=use_isolating,
        )
