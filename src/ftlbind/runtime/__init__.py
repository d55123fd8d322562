"""Template rendering runtime: renderer, functions and value types.

Python 3.13+. Depends on Babel for CLDR data.
"""

from .function_bridge import FunctionRegistry, FunctionSignature
from .functions import create_default_registry, get_shared_registry
from .plural_rules import select_plural_category
from .resolver import ReferenceScope, ResolutionContext, ResolvedReference, TemplateRenderer
from .value_types import FluentFunction, FluentNumber, FluentValue

__all__ = [
    "FluentFunction",
    "FluentNumber",
    "FluentValue",
    "FunctionRegistry",
    "FunctionSignature",
    "ReferenceScope",
    "ResolutionContext",
    "ResolvedReference",
    "TemplateRenderer",
    "create_default_registry",
    "get_shared_registry",
    "select_plural_category",
]
