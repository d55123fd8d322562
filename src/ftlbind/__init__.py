"""ftlbind - Fluent (FTL) localization with typed, generated accessors.

Runtime: a LocalizationHolder loads one bundle per language directory and
resolves every lookup with fallback to the default language. Build time:
the bindgen package analyses the default-language resources and emits a
class with one typed method per message.

Public API:
    LocalizationHolder - Per-language bundles with default-language fallback
    LocalizationConfig - Root directory and default language (env overrides)
    LocalizerBase - Runtime base of generated localizer classes
    generate_bindings - Analyse a directory and return the bindings module source
    parse_resource - Parse .ftl text into entries
    parse_template - Parse one template into a Pattern
    FluentValue - Type alias for values accepted by accessors

Exceptions:
    LocalizationError - Base exception class
    ParseError - Malformed resource entry
    LoadError - Bundle or holder construction failed
    MissingMessageError - Id absent even from the default bundle
    RenderError - Rendering failed for an accessor
    BindingError - Binding generation failed

Submodules:
    ftlbind.syntax - Resource and template parsers, AST
    ftlbind.runtime - Renderer, NUMBER/DATETIME functions, plural rules
    ftlbind.localization - Bundles, holder, configuration, load reports
    ftlbind.bindgen - Analyzer, emitter and the ftlbind-generate CLI
    ftlbind.introspection - Variable and reference extraction
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .bindgen import LocalizerBase, generate_bindings
from .diagnostics import (
    BindingError,
    LoadError,
    LocalizationError,
    MissingMessageError,
    ParseError,
    RenderError,
)
from .localization import LocalizationConfig, LocalizationHolder
from .runtime import FluentValue
from .syntax import parse_resource, parse_template

try:
    __version__ = _get_version("ftlbind")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BindingError",
    "FluentValue",
    "LoadError",
    "LocalizationConfig",
    "LocalizationError",
    "LocalizationHolder",
    "LocalizerBase",
    "MissingMessageError",
    "ParseError",
    "RenderError",
    "__version__",
    "generate_bindings",
    "parse_resource",
    "parse_template",
]
