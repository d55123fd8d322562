"""Error types for resource parsing, loading, rendering and binding generation.

Python 3.13+. Zero external dependencies.
"""

from .errors import (
    AmbiguousParameterError,
    AmbiguousReferenceError,
    BindingError,
    CyclicReferenceError,
    DuplicateAccessorError,
    DuplicateKeyError,
    InvalidIdentifierError,
    LoadError,
    LocalizationError,
    MissingDefaultLanguageError,
    MissingMessageError,
    ParseError,
    RenderError,
    ResolutionError,
    TemplateSyntaxError,
    UnresolvedReferenceError,
)

__all__ = [
    "AmbiguousParameterError",
    "AmbiguousReferenceError",
    "BindingError",
    "CyclicReferenceError",
    "DuplicateAccessorError",
    "DuplicateKeyError",
    "InvalidIdentifierError",
    "LoadError",
    "LocalizationError",
    "MissingDefaultLanguageError",
    "MissingMessageError",
    "ParseError",
    "RenderError",
    "ResolutionError",
    "TemplateSyntaxError",
    "UnresolvedReferenceError",
]
