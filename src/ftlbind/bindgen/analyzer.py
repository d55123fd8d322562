"""Build-time analysis of the default-language resources.

Produces one AccessorDescriptor per default-language message that has a
value. Each descriptor carries the Python accessor name and the ordered
parameter list inferred from the message's placeables.

Parameter order is the first occurrence of each distinct variable scanning
the value pattern left to right, then each attribute in declaration order.
A message reference contributes the referenced pattern's variables at the
reference position, because a referenced message is rendered with the
caller's arguments. Term references contribute nothing (terms only see
their own call arguments) but must resolve.

Analysis is a pure function of the directory contents: the same files give
the same descriptors in the same order.

Python 3.13+.
"""

from __future__ import annotations

import keyword
import logging
from dataclasses import dataclass
from pathlib import Path

from ftlbind.constants import DEFAULT_DIR, DEFAULT_LANGUAGE
from ftlbind.diagnostics import (
    AmbiguousParameterError,
    AmbiguousReferenceError,
    CyclicReferenceError,
    DuplicateAccessorError,
    InvalidIdentifierError,
    MissingDefaultLanguageError,
    UnresolvedReferenceError,
)
from ftlbind.introspection import ReferenceInfo, VariableInfo, iter_placeables
from ftlbind.localization import LanguageBundle, Message, load_language_bundle

from .base import LocalizerBase

__all__ = [
    "AccessorDescriptor",
    "BindingAnalysis",
    "BindingAnalyzer",
    "ParameterDescriptor",
    "accessor_name_for",
    "analyze_bundle",
    "analyze_directory",
    "find_default_directory",
    "parameter_name_for",
]

logger = logging.getLogger(__name__)

# Names the generated class already uses
_RESERVED_NAMES: frozenset[str] = frozenset(dir(LocalizerBase))


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    """One accessor parameter.

    Attributes:
        name: Python parameter name
        variable: Template variable name (without ``$``)
    """

    name: str
    variable: str


@dataclass(frozen=True, slots=True)
class AccessorDescriptor:
    """One generated accessor method.

    Attributes:
        accessor_name: Python method name
        qualified_id: ``<resource_name>_<key>`` looked up at runtime
        resource_name: Resource file name without extension
        key: Message key
        parameters: Parameters in inference order
    """

    accessor_name: str
    qualified_id: str
    resource_name: str
    key: str
    parameters: tuple[ParameterDescriptor, ...]

    @property
    def parameter_names(self) -> tuple[str, ...]:
        """Python parameter names in order."""
        return tuple(p.name for p in self.parameters)


@dataclass(frozen=True, slots=True)
class BindingAnalysis:
    """Result of analysing a default-language bundle.

    Attributes:
        descriptors: Accessors in resource-name then declaration order
        message_ids: Every message id of the bundle (build-time snapshot)
        term_ids: Every term id of the bundle (build-time snapshot)
    """

    descriptors: tuple[AccessorDescriptor, ...]
    message_ids: tuple[str, ...]
    term_ids: tuple[str, ...]

    @property
    def accessor_names(self) -> tuple[str, ...]:
        """Accessor names in order."""
        return tuple(d.accessor_name for d in self.descriptors)


def accessor_name_for(resource_name: str, key: str) -> str:
    """Derive the accessor name of a message.

    ``-`` becomes ``_`` and the result is lowercased; anything else that is
    not a valid identifier is rejected.

    Raises:
        InvalidIdentifierError: If the result is not a usable method name

    Example:
        >>> accessor_name_for("base", "user-Name")
        'base_user_name'
    """
    qualified = f"{resource_name}_{key}"
    name = qualified.replace("-", "_").lower()
    if name[:1].isdigit():
        raise InvalidIdentifierError(name, qualified, "starts with a digit")
    if not (name.isascii() and name.isidentifier()):
        raise InvalidIdentifierError(name, qualified, "contains characters invalid in identifiers")
    if keyword.iskeyword(name):
        raise InvalidIdentifierError(name, qualified, "is a Python keyword")
    if name in _RESERVED_NAMES:
        raise InvalidIdentifierError(name, qualified, "is reserved by the generated class")
    return name


def parameter_name_for(variable: str) -> str:
    """Derive a Python parameter name from a template variable name.

    Example:
        >>> parameter_name_for("user-name")
        'user_name'
        >>> parameter_name_for("class")
        'class_'
    """
    name = variable.replace("-", "_")
    if keyword.iskeyword(name) or name == "self":
        return f"{name}_"
    return name


class BindingAnalyzer:
    """Infers accessor descriptors from one bundle.

    Parameter lists of referenced patterns are memoised, so a message
    referenced from many places is scanned once.
    """

    __slots__ = ("_bundle", "_cache")

    def __init__(self, bundle: LanguageBundle) -> None:
        self._bundle = bundle
        self._cache: dict[str, tuple[str, ...]] = {}

    def analyze(self) -> BindingAnalysis:
        """Analyse every entry of the bundle.

        Raises:
            BindingError: On the first invalid name, unresolved or ambiguous
                reference, cycle or parameter collision
        """
        descriptors: list[AccessorDescriptor] = []
        owners: dict[str, str] = {}

        for qid, message in self._bundle.messages.items():
            variables = self._message_variables(message)
            if message.is_term or message.pattern is None:
                logger.debug("No accessor for %s", qid)
                continue

            name = accessor_name_for(message.resource_name, message.key)
            if name in owners:
                raise DuplicateAccessorError(name, [owners[name], qid])
            owners[name] = qid

            descriptors.append(
                AccessorDescriptor(
                    accessor_name=name,
                    qualified_id=qid,
                    resource_name=message.resource_name,
                    key=message.key,
                    parameters=_parameters(name, variables),
                )
            )
            logger.debug("Accessor %s(%s)", name, ", ".join(variables))

        return BindingAnalysis(
            descriptors=tuple(descriptors),
            message_ids=self._bundle.message_ids(),
            term_ids=self._bundle.term_ids(),
        )

    def _message_variables(self, message: Message) -> tuple[str, ...]:
        """Distinct variables of a message: value first, then attributes."""
        ordered: dict[str, None] = {}
        if message.pattern is not None:
            ordered.update(dict.fromkeys(self._pattern_variables(message, None, [])))
        for attribute in message.attributes:
            ordered.update(dict.fromkeys(self._pattern_variables(message, attribute, [])))
        return tuple(ordered)

    def _pattern_variables(
        self, message: Message, attribute: str | None, stack: list[str]
    ) -> tuple[str, ...]:
        """Variables one pattern needs, with message references spliced in."""
        node = message.qualified_id if attribute is None else f"{message.qualified_id}.{attribute}"
        cached = self._cache.get(node)
        if cached is not None:
            return cached
        if node in stack:
            raise CyclicReferenceError([*stack[stack.index(node) :], node])

        pattern = message.get_pattern(attribute)
        if pattern is None:  # pragma: no cover  # callers check existence
            return ()

        stack.append(node)
        ordered: dict[str, None] = {}
        for placeable in iter_placeables(pattern):
            match placeable:
                case VariableInfo(name=name):
                    ordered[name] = None
                case ReferenceInfo():
                    target = self._resolve(message, placeable)
                    nested = self._pattern_variables(target, placeable.attribute, stack)
                    if not target.is_term:
                        ordered.update(dict.fromkeys(nested))
        stack.pop()

        result = tuple(ordered)
        self._cache[node] = result
        return result

    def _resolve(self, message: Message, reference: ReferenceInfo) -> Message:
        """Find the entry a reference points to, from the referencing resource."""
        key = reference.entry_key
        display = key if reference.attribute is None else f"{key}.{reference.attribute}"
        target = self._bundle.find_entry(key, message.resource_name)
        if target is None:
            candidates = self._bundle.resources_defining(key)
            if len(candidates) > 1:
                raise AmbiguousReferenceError(message.qualified_id, display, candidates)
            raise UnresolvedReferenceError(message.qualified_id, display)
        if target.get_pattern(reference.attribute) is None:
            raise UnresolvedReferenceError(message.qualified_id, display)
        return target


def _parameters(accessor_name: str, variables: tuple[str, ...]) -> tuple[ParameterDescriptor, ...]:
    """Map variables to Python parameters, rejecting collisions."""
    seen: dict[str, str] = {}
    parameters: list[ParameterDescriptor] = []
    for variable in variables:
        name = parameter_name_for(variable)
        if name in seen:
            raise AmbiguousParameterError(accessor_name, name, [seen[name], variable])
        seen[name] = variable
        parameters.append(ParameterDescriptor(name=name, variable=variable))
    return tuple(parameters)


def analyze_bundle(bundle: LanguageBundle) -> BindingAnalysis:
    """Analyse an already built bundle."""
    return BindingAnalyzer(bundle).analyze()


def analyze_directory(directory: Path | str) -> BindingAnalysis:
    """Analyse the resource files of one directory.

    Raises:
        OSError: If the directory cannot be read
        ParseError: If a resource is malformed
        DuplicateKeyError: If a qualified id is defined twice
        BindingError: If accessors cannot be derived
    """
    directory = Path(directory)
    bundle = load_language_bundle(directory, directory.name)
    analysis = analyze_bundle(bundle)
    logger.info(
        "Analysed %s: %d accessor(s), %d term(s)",
        directory,
        len(analysis.descriptors),
        len(analysis.term_ids),
    )
    return analysis


def find_default_directory(root: Path | str, default_language: str = DEFAULT_LANGUAGE) -> Path:
    """Return the directory bindings are generated from.

    ``root/default`` when it exists, otherwise ``root/<default_language>``.

    Raises:
        MissingDefaultLanguageError: If neither directory exists
    """
    root = Path(root)
    for candidate in (root / DEFAULT_DIR, root / default_language):
        if candidate.is_dir():
            return candidate
    raise MissingDefaultLanguageError(
        default_language, str(root), f"no '{DEFAULT_DIR}' or '{default_language}' directory"
    )
