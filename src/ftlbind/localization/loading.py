"""Load result records for holder construction.

Components:
    LanguageLoadResult - Immutable result of loading one language directory
    LoadSummary - Immutable aggregate of all language load results

A language that fails to build is reported here instead of aborting the
whole load, so operators can see which languages were dropped and why.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from ftlbind.enums import LoadStatus

from .types import LanguageTag

__all__ = ["LanguageLoadResult", "LoadSummary"]


@dataclass(frozen=True, slots=True)
class LanguageLoadResult:
    """Result of loading a single language directory.

    Attributes:
        language: Language tag the directory was loaded as
        path: Directory that was read
        status: Load status (success, error)
        error: Exception if status is ERROR, None otherwise
        message_count: Number of entries (messages and terms) in the bundle
    """

    language: LanguageTag
    path: str
    status: LoadStatus
    error: Exception | None = None
    message_count: int = 0

    @property
    def is_success(self) -> bool:
        """Check if the language loaded successfully."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        """Check if the language failed to load."""
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of language load results.

    All statistics are computed properties derived from ``results``, which
    is sorted by language tag.

    Example:
        >>> summary = holder.load_summary
        >>> for result in summary.get_errors():
        ...     print(f"Failed: {result.language}: {result.error}")
    """

    results: tuple[LanguageLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"errors={self.errors})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of languages attempted."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of languages loaded."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def errors(self) -> int:
        """Number of languages that failed to load."""
        return sum(1 for r in self.results if r.is_error)

    def get_errors(self) -> tuple[LanguageLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_successful(self) -> tuple[LanguageLoadResult, ...]:
        """Get all successful load results."""
        return tuple(r for r in self.results if r.is_success)

    def get_by_language(self, language: LanguageTag) -> LanguageLoadResult | None:
        """Get the result for a specific language, if it was attempted."""
        return next((r for r in self.results if r.language == language), None)

    @property
    def has_errors(self) -> bool:
        """Check if any language failed to load."""
        return self.errors > 0

    @property
    def all_successful(self) -> bool:
        """Check if every attempted language loaded."""
        return self.errors == 0
