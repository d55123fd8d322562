"""Function call bridge between Python and template calling conventions.

Provides a mapping layer:
    - Python: snake_case parameters (PEP 8)
    - Templates: camelCase parameters (JavaScript/ICU heritage)

Example:
    # Python function (snake_case):
    def number_format(value, locale_code, *, minimum_fraction_digits=0):
        ...

    # Template (camelCase):
    price = { NUMBER($amount, minimumFractionDigits: 2) }

    # The registry converts minimumFractionDigits -> minimum_fraction_digits

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from inspect import signature
from types import MappingProxyType

from ftlbind.diagnostics import ResolutionError

from .value_types import FluentValue

__all__ = ["FunctionRegistry", "FunctionSignature"]


@dataclass(frozen=True, slots=True)
class FunctionSignature:
    """Function metadata with calling convention mappings.

    Attributes:
        python_name: Function name in Python (snake_case)
        ftl_name: Function name in templates (UPPERCASE)
        param_mapping: Read-only map of camelCase to snake_case parameter names
        callable: The actual Python function
        inject_locale: Append the renderer's locale after the positional arguments
    """

    python_name: str
    ftl_name: str
    param_mapping: Mapping[str, str]
    callable: Callable[..., FluentValue]
    inject_locale: bool = False


class FunctionRegistry:
    """Manages Python <-> template function calling convention bridge.

    Supports dict-like introspection (``in``, ``len``, iteration over names).
    A frozen registry rejects further registrations.

    Example:
        >>> registry = FunctionRegistry()
        >>> registry.register(lambda value: str(value), ftl_name="CUSTOM")
        >>> "CUSTOM" in registry
        True
    """

    __slots__ = ("_frozen", "_functions")

    def __init__(self) -> None:
        self._functions: dict[str, FunctionSignature] = {}
        self._frozen = False

    def register(
        self,
        func: Callable[..., FluentValue],
        *,
        ftl_name: str | None = None,
        inject_locale: bool = False,
    ) -> None:
        """Register Python function for template use.

        Args:
            func: Python function to register
            ftl_name: Function name in templates (default: func.__name__.upper())
            inject_locale: Pass the locale code after the positional arguments

        Raises:
            TypeError: If the registry is frozen
        """
        if self._frozen:
            msg = "Cannot register functions on a frozen FunctionRegistry; use copy()"
            raise TypeError(msg)

        python_name = getattr(func, "__name__", "unknown")
        if ftl_name is None:
            ftl_name = python_name.upper()

        mapping = {
            self._to_camel_case(name.lstrip("_")): name
            for name in signature(func).parameters
        }
        self._functions[ftl_name] = FunctionSignature(
            python_name=python_name,
            ftl_name=ftl_name,
            param_mapping=MappingProxyType(mapping),
            callable=func,
            inject_locale=inject_locale,
        )

    def call(
        self,
        ftl_name: str,
        positional: Sequence[FluentValue],
        named: Mapping[str, FluentValue],
        locale_code: str,
    ) -> FluentValue:
        """Call a registered function with template arguments.

        Raises:
            ResolutionError: If the function is unknown or rejects its arguments
        """
        func_sig = self._functions.get(ftl_name)
        if func_sig is None:
            msg = f"Unknown function: {ftl_name}()"
            raise ResolutionError(msg)

        python_kwargs = {
            func_sig.param_mapping.get(name, name): value for name, value in named.items()
        }
        args = [*positional, locale_code] if func_sig.inject_locale else list(positional)

        # TypeError/ValueError signal bad arguments; anything else is a bug in
        # the function and propagates unchanged.
        try:
            return func_sig.callable(*args, **python_kwargs)
        except (TypeError, ValueError) as e:
            msg = f"Function {ftl_name}() failed: {e}"
            raise ResolutionError(msg) from e

    def freeze(self) -> None:
        """Reject further registrations."""
        self._frozen = True

    def copy(self) -> FunctionRegistry:
        """Return an unfrozen copy sharing the registered signatures."""
        registry = FunctionRegistry()
        registry._functions = dict(self._functions)
        return registry

    @staticmethod
    def _to_camel_case(snake_case: str) -> str:
        """Convert snake_case to camelCase.

        Example:
            >>> FunctionRegistry._to_camel_case("minimum_fraction_digits")
            'minimumFractionDigits'
        """
        head, *rest = snake_case.split("_")
        return head + "".join(part.capitalize() for part in rest)

    def __contains__(self, ftl_name: object) -> bool:
        return ftl_name in self._functions

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def __repr__(self) -> str:
        return f"FunctionRegistry(functions={sorted(self._functions)!r})"
