"""Tests for LocalizationConfig and the load report types."""

from pathlib import Path

import pytest

from ftlbind.diagnostics import ParseError
from ftlbind.enums import LoadStatus
from ftlbind.localization import LanguageLoadResult, LoadSummary, LocalizationConfig


class TestLocalizationConfig:
    """Configuration with environment overrides."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Unset variables give ./localizations and en_US."""
        monkeypatch.chdir(tmp_path)

        config = LocalizationConfig.from_env({})

        assert config.root_dir == tmp_path / "localizations"
        assert config.default_language == "en_US"
        assert config.max_workers is None
        assert config.use_isolating is False

    def test_overrides(self) -> None:
        """TRANSLATION_DIR and DEFAULT_LANG win over the defaults."""
        config = LocalizationConfig.from_env(
            {"TRANSLATION_DIR": "/srv/l10n", "DEFAULT_LANG": "de_DE"}, max_workers=2
        )

        assert config.root_dir == Path("/srv/l10n")
        assert config.default_language == "de_DE"
        assert config.max_workers == 2

    def test_empty_values_count_as_unset(self) -> None:
        """An empty DEFAULT_LANG does not produce an empty tag."""
        config = LocalizationConfig.from_env({"DEFAULT_LANG": ""})

        assert config.default_language == "en_US"

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without an explicit mapping, os.environ is used."""
        monkeypatch.setenv("DEFAULT_LANG", "lv_LV")

        assert LocalizationConfig.from_env().default_language == "lv_LV"

    def test_invalid_max_workers(self, tmp_path: Path) -> None:
        """max_workers must be positive."""
        with pytest.raises(ValueError, match="max_workers"):
            LocalizationConfig(root_dir=tmp_path, max_workers=0)

    def test_empty_default_language(self, tmp_path: Path) -> None:
        """The default language cannot be empty."""
        with pytest.raises(ValueError, match="default_language"):
            LocalizationConfig(root_dir=tmp_path, default_language="")


class TestLoadSummary:
    """Aggregated per-language load results."""

    @pytest.fixture
    def summary(self) -> LoadSummary:
        return LoadSummary(
            (
                LanguageLoadResult("de_DE", "/l10n/de_DE", LoadStatus.ERROR, ParseError("x", 1)),
                LanguageLoadResult("en_US", "/l10n/en_US", LoadStatus.SUCCESS, message_count=4),
                LanguageLoadResult("fr_FR", "/l10n/fr_FR", LoadStatus.SUCCESS, message_count=2),
            )
        )

    def test_counts(self, summary: LoadSummary) -> None:
        """Statistics derive from the results."""
        assert summary.total_attempted == 3
        assert summary.successful == 2
        assert summary.errors == 1
        assert summary.has_errors
        assert not summary.all_successful

    def test_filters(self, summary: LoadSummary) -> None:
        """Errors and successes can be listed separately."""
        assert [r.language for r in summary.get_errors()] == ["de_DE"]
        assert [r.language for r in summary.get_successful()] == ["en_US", "fr_FR"]

    def test_get_by_language(self, summary: LoadSummary) -> None:
        """Results are addressable by language."""
        result = summary.get_by_language("de_DE")

        assert result is not None
        assert result.is_error
        assert isinstance(result.error, ParseError)
        assert summary.get_by_language("ja_JP") is None

    def test_repr(self, summary: LoadSummary) -> None:
        """repr shows the totals."""
        assert repr(summary) == "LoadSummary(total=3, ok=2, errors=1)"
