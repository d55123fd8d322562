"""Pytest configuration for the ftlbind test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: GitHub Actions with 50 examples (fast CI feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile (GitHub Actions sets this)
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/
"""

import importlib
import os
import sys
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path
from types import ModuleType

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var (GitHub Actions auto-detection)
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# LOCALIZATION TREES
# =============================================================================

type TreeSpec = Mapping[str, Mapping[str, str]]
"""Language directory name -> resource file name -> file text."""


def write_tree(root: Path, tree: TreeSpec) -> Path:
    """Create ``root/<language>/<file>`` for every entry of ``tree``."""
    for language, files in tree.items():
        directory = root / language
        directory.mkdir(parents=True, exist_ok=True)
        for name, text in files.items():
            (directory / name).write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[TreeSpec], Path]:
    """Factory writing a localization tree under a fresh directory."""

    def factory(tree: TreeSpec) -> Path:
        return write_tree(tmp_path / "localizations", tree)

    return factory


@pytest.fixture
def sample_tree(make_tree: Callable[[TreeSpec], Path]) -> Path:
    """English default plus a partial French translation."""
    return make_tree(
        {
            "en_US": {
                "base.ftl": (
                    "name=English\n"
                    "counter=count is at {$counter}\n"
                    "greeting = Hello, { $user }!\n"
                    "    .title = Greeting for { $user }\n"
                ),
            },
            "fr_FR": {
                "base.ftl": "name=Français\n",
            },
        }
    )


# =============================================================================
# GENERATED BINDINGS
# =============================================================================

type ImportBindings = Callable[[str], ModuleType]
"""Bindings source text -> imported module."""


@pytest.fixture
def import_bindings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[ImportBindings]:
    """Factory writing generated source to a module file and importing it.

    Every call gets a fresh module name; imported modules are dropped from
    ``sys.modules`` afterwards.
    """
    module_dir = tmp_path / "generated_bindings"
    module_dir.mkdir()
    monkeypatch.syspath_prepend(str(module_dir))
    names: list[str] = []

    def factory(source: str) -> ModuleType:
        name = f"ftlbind_generated_{len(names)}"
        (module_dir / f"{name}.py").write_text(source, encoding="utf-8")
        names.append(name)
        importlib.invalidate_caches()
        return importlib.import_module(name)

    yield factory

    for name in names:
        sys.modules.pop(name, None)
