"""ftlbind exception hierarchy.

Errors are grouped by the phase that raises them:

    LocalizationError (base)
    ├─ ParseError (malformed resource file, carries line/reason)
    │  └─ TemplateSyntaxError (malformed placeable inside a template)
    ├─ LoadError (load-time)
    │  ├─ DuplicateKeyError (same qualified id twice in one language)
    │  └─ MissingDefaultLanguageError (default bundle absent after load)
    ├─ MissingMessageError (run-time lookup miss in requested AND default bundle)
    ├─ ResolutionError (template could not be rendered)
    ├─ RenderError (accessor-level wrapper around ResolutionError)
    └─ BindingError (build-time, binding generation aborts)
       ├─ DuplicateAccessorError
       ├─ InvalidIdentifierError
       ├─ AmbiguousParameterError
       ├─ UnresolvedReferenceError
       ├─ AmbiguousReferenceError
       └─ CyclicReferenceError

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Sequence

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "LocalizationError",
    # Parse / load
    "ParseError",
    "TemplateSyntaxError",
    "LoadError",
    "DuplicateKeyError",
    "MissingDefaultLanguageError",
    # Run-time
    "MissingMessageError",
    "ResolutionError",
    "RenderError",
    # Build-time
    "BindingError",
    "DuplicateAccessorError",
    "InvalidIdentifierError",
    "AmbiguousParameterError",
    "UnresolvedReferenceError",
    "AmbiguousReferenceError",
    "CyclicReferenceError",
]


class LocalizationError(Exception):
    """Base exception for all ftlbind errors."""


# ============================================================================
# PARSE / LOAD
# ============================================================================


class ParseError(LocalizationError):
    """Malformed entry in a resource file.

    Fatal for the file; the bundle load for the offending language aborts.

    Attributes:
        reason: Human-readable description of the problem
        line: 1-based line number in the file
        column: 1-based column, when known
        source_path: File the error was found in, when known
    """

    def __init__(
        self,
        reason: str,
        line: int,
        *,
        column: int | None = None,
        source_path: str | None = None,
    ) -> None:
        """Initialize ParseError.

        Args:
            reason: Human-readable description of the problem
            line: 1-based line number
            column: 1-based column number (optional)
            source_path: File path for diagnostics (optional)
        """
        self.reason = reason
        self.line = line
        self.column = column
        self.source_path = source_path
        super().__init__(self._format())

    def _format(self) -> str:
        location = f"{self.line}" if self.column is None else f"{self.line}:{self.column}"
        if self.source_path:
            location = f"{self.source_path}:{location}"
        return f"{location}: {self.reason}"

    def with_location(self, line: int, source_path: str | None) -> ParseError:
        """Return a copy re-anchored at an absolute file line."""
        return ParseError(self.reason, line, column=self.column, source_path=source_path)


class TemplateSyntaxError(ParseError):
    """Syntax error inside a single template.

    Line and column are relative to the template text; the resource parser
    re-anchors them to the file before surfacing the error.
    """


class LoadError(LocalizationError):
    """Load-time failure building a bundle or the holder."""


class DuplicateKeyError(LoadError):
    """The same qualified id was defined twice within one language.

    Attributes:
        qualified_id: The colliding id (``<resource>_<key>``)
        language: Language whose bundle was being built
        locations: Human-readable locations of both definitions
    """

    def __init__(self, qualified_id: str, language: str, locations: Sequence[str]) -> None:
        self.qualified_id = qualified_id
        self.language = language
        self.locations = tuple(locations)
        msg = (
            f"Duplicate message id '{qualified_id}' in language '{language}' "
            f"(defined at {', '.join(self.locations)})"
        )
        super().__init__(msg)


class MissingDefaultLanguageError(LoadError):
    """No usable bundle exists for the designated default language."""

    def __init__(self, language: str, root_dir: str, detail: str | None = None) -> None:
        self.language = language
        self.root_dir = root_dir
        msg = f"Default language '{language}' could not be loaded from '{root_dir}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


# ============================================================================
# RUN-TIME
# ============================================================================


class MissingMessageError(LocalizationError):
    """Requested id is absent from both the requested and the default bundle.

    This signals build skew (bindings generated against different resources
    than the ones loaded) rather than a recoverable condition.
    """

    def __init__(self, qualified_id: str, language: str, default_language: str) -> None:
        self.qualified_id = qualified_id
        self.language = language
        self.default_language = default_language
        msg = (
            f"Message '{qualified_id}' not found for language '{language}' "
            f"nor in the default language '{default_language}'"
        )
        super().__init__(msg)


class ResolutionError(LocalizationError):
    """A template could not be rendered with the supplied arguments.

    Examples: a variable was not provided, a referenced message is missing,
    a reference cycle, or a formatting function failed.
    """


class RenderError(LocalizationError):
    """Rendering failed for a specific accessor or qualified id.

    Attributes:
        accessor: Accessor name (or qualified id for untyped calls)
        qualified_id: Message that was being rendered
        language: Requested language
        cause: Underlying error (also chained as ``__cause__``)
    """

    def __init__(
        self,
        accessor: str,
        qualified_id: str,
        language: str,
        cause: Exception,
    ) -> None:
        self.accessor = accessor
        self.qualified_id = qualified_id
        self.language = language
        self.cause = cause
        msg = f"Failed to localize '{accessor}' ({qualified_id}, language '{language}'): {cause}"
        super().__init__(msg)


# ============================================================================
# BUILD-TIME
# ============================================================================


class BindingError(LocalizationError):
    """Binding generation failed; no partial bindings are emitted."""


class DuplicateAccessorError(BindingError):
    """Two messages map to the same accessor name."""

    def __init__(self, accessor_name: str, qualified_ids: Sequence[str]) -> None:
        self.accessor_name = accessor_name
        self.qualified_ids = tuple(qualified_ids)
        msg = (
            f"Accessor name '{accessor_name}' is produced by more than one message: "
            f"{', '.join(self.qualified_ids)}"
        )
        super().__init__(msg)


class InvalidIdentifierError(BindingError):
    """A name cannot be turned into a valid Python identifier."""

    def __init__(self, name: str, qualified_id: str, reason: str) -> None:
        self.name = name
        self.qualified_id = qualified_id
        self.reason = reason
        msg = f"Cannot use '{name}' (from '{qualified_id}') as an identifier: {reason}"
        super().__init__(msg)


class AmbiguousParameterError(BindingError):
    """Two placeables of one message map to the same Python parameter name."""

    def __init__(self, accessor_name: str, parameter: str, variables: Sequence[str]) -> None:
        self.accessor_name = accessor_name
        self.parameter = parameter
        self.variables = tuple(variables)
        msg = (
            f"Accessor '{accessor_name}': variables "
            f"{', '.join('$' + v for v in self.variables)} all map to parameter '{parameter}'"
        )
        super().__init__(msg)


class UnresolvedReferenceError(BindingError):
    """A template references a message or term that does not exist."""

    def __init__(self, qualified_id: str, reference: str) -> None:
        self.qualified_id = qualified_id
        self.reference = reference
        msg = f"Message '{qualified_id}' references unknown entry '{reference}'"
        super().__init__(msg)


class AmbiguousReferenceError(BindingError):
    """A reference key is defined in several other resources."""

    def __init__(self, qualified_id: str, reference: str, candidates: Sequence[str]) -> None:
        self.qualified_id = qualified_id
        self.reference = reference
        self.candidates = tuple(candidates)
        msg = (
            f"Message '{qualified_id}' references '{reference}', which is defined in "
            f"several resources: {', '.join(self.candidates)}"
        )
        super().__init__(msg)


class CyclicReferenceError(BindingError):
    """Messages reference each other in a loop."""

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = tuple(cycle)
        msg = f"Cyclic reference detected: {' -> '.join(self.cycle)}"
        super().__init__(msg)
