"""Tests for the ftlbind-generate command line."""

from pathlib import Path

import pytest

from ftlbind.bindgen import generate_bindings
from ftlbind.bindgen.cli import main


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TRANSLATION_DIR", raising=False)
    monkeypatch.delenv("DEFAULT_LANG", raising=False)


class TestGenerate:
    """Writing bindings."""

    def test_stdout(self, sample_tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Without --output the module goes to standard output."""
        assert main(["--root", str(sample_tree)]) == 0

        assert capsys.readouterr().out == generate_bindings(sample_tree / "en_US")

    def test_output_file(self, sample_tree: Path, tmp_path: Path) -> None:
        """--output writes the file, creating parent directories."""
        target = tmp_path / "generated" / "l10n.py"

        assert main(["--root", str(sample_tree), "--output", str(target)]) == 0

        assert target.read_text(encoding="utf-8") == generate_bindings(sample_tree / "en_US")

    def test_environment_defaults(
        self,
        sample_tree: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """TRANSLATION_DIR and DEFAULT_LANG are used when flags are absent."""
        (sample_tree / "fr_FR" / "extra.ftl").write_text("only-fr = x\n", encoding="utf-8")
        monkeypatch.setenv("TRANSLATION_DIR", str(sample_tree))
        monkeypatch.setenv("DEFAULT_LANG", "fr_FR")

        assert main([]) == 0

        assert "def extra_only_fr(self) -> str:" in capsys.readouterr().out

    def test_default_directory_wins(
        self, sample_tree: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A ``default`` directory is the binding source when present."""
        (sample_tree / "default").mkdir()
        (sample_tree / "default" / "app.ftl").write_text("title = App\n", encoding="utf-8")

        assert main(["--root", str(sample_tree)]) == 0

        out = capsys.readouterr().out
        assert "def app_title(self) -> str:" in out
        assert "base_name" not in out

    def test_class_name(self, sample_tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """--class-name renames the generated class."""
        assert main(["--root", str(sample_tree), "--class-name", "Texts"]) == 0

        assert "class Texts(LocalizerBase):" in capsys.readouterr().out


class TestCheck:
    """--check compares instead of writing."""

    def test_up_to_date(self, sample_tree: Path, tmp_path: Path) -> None:
        """A freshly generated file passes."""
        target = tmp_path / "l10n.py"
        assert main(["--root", str(sample_tree), "-o", str(target)]) == 0

        assert main(["--root", str(sample_tree), "-o", str(target), "--check"]) == 0

    def test_out_of_date(
        self, sample_tree: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A stale file fails with exit code 1 and is left untouched."""
        target = tmp_path / "l10n.py"
        target.write_text("# stale\n", encoding="utf-8")

        assert main(["--root", str(sample_tree), "-o", str(target), "--check"]) == 1

        assert "out of date" in capsys.readouterr().err
        assert target.read_text(encoding="utf-8") == "# stale\n"

    def test_missing_file(self, sample_tree: Path, tmp_path: Path) -> None:
        """A missing output counts as out of date."""
        target = tmp_path / "absent.py"

        assert main(["--root", str(sample_tree), "-o", str(target), "--check"]) == 1
        assert not target.exists()

    def test_requires_output(self, sample_tree: Path) -> None:
        """--check without --output is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--root", str(sample_tree), "--check"])

        assert exc_info.value.code == 2


class TestErrors:
    """Failures exit with code 2 and write nothing."""

    def test_missing_default_directory(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """No default-language directory."""
        assert main(["--root", str(tmp_path)]) == 2

        assert "error:" in capsys.readouterr().err

    def test_binding_error(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Analysis failures abort before anything is written."""
        root = tmp_path / "l10n"
        (root / "en_US").mkdir(parents=True)
        (root / "en_US" / "base.ftl").write_text("a = { missing }\n", encoding="utf-8")
        target = tmp_path / "out.py"

        assert main(["--root", str(root), "-o", str(target)]) == 2

        assert "missing" in capsys.readouterr().err
        assert not target.exists()

    def test_parse_error(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Malformed resources report the file and line."""
        (tmp_path / "en_US").mkdir()
        (tmp_path / "en_US" / "base.ftl").write_text("ok = 1\nbroken\n", encoding="utf-8")

        assert main(["--root", str(tmp_path)]) == 2

        assert "base.ftl:2" in capsys.readouterr().err
