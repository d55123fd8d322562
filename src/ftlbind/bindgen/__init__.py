"""Build-time binding generation and the runtime base of generated types.

Python 3.13+. Depends on Babel (via the runtime) for formatting.
"""

from .analyzer import (
    AccessorDescriptor,
    BindingAnalysis,
    BindingAnalyzer,
    ParameterDescriptor,
    accessor_name_for,
    analyze_bundle,
    analyze_directory,
    find_default_directory,
    parameter_name_for,
)
from .base import LocalizerBase
from .emitter import DEFAULT_CLASS_NAME, emit_bindings, generate_bindings

__all__ = [
    "DEFAULT_CLASS_NAME",
    "AccessorDescriptor",
    "BindingAnalysis",
    "BindingAnalyzer",
    "LocalizerBase",
    "ParameterDescriptor",
    "accessor_name_for",
    "analyze_bundle",
    "analyze_directory",
    "emit_bindings",
    "find_default_directory",
    "generate_bindings",
    "parameter_name_for",
]
