"""Python source generation for localizer bindings.

``emit_bindings`` turns a BindingAnalysis into the text of a module that
defines one LocalizerBase subclass. Output is deterministic: the same
analysis always produces byte-identical source, so generated files diff
cleanly and ``--check`` can compare them.

Python 3.13+.
"""

from __future__ import annotations

import keyword
import logging
from pathlib import Path

from ftlbind.diagnostics import InvalidIdentifierError

from .analyzer import AccessorDescriptor, BindingAnalysis, analyze_directory

__all__ = [
    "DEFAULT_CLASS_NAME",
    "emit_bindings",
    "generate_bindings",
]

logger = logging.getLogger(__name__)

DEFAULT_CLASS_NAME: str = "LanguageLocalizer"

_INDENT = "    "

_HEADER = '''\
"""Localizer bindings generated by ftlbind-generate. Do not edit.

Accessors: {accessors}. Expected messages: {messages}. Expected terms: {terms}.
"""

from __future__ import annotations

from ftlbind.bindgen.base import LocalizerBase
from ftlbind.runtime import FluentValue

__all__ = [{class_name!r}]
'''


def _check_class_name(class_name: str) -> None:
    if not (class_name.isascii() and class_name.isidentifier()) or keyword.iskeyword(class_name):
        raise InvalidIdentifierError(class_name, "<class>", "not a valid class name")


def _emit_id_tuple(name: str, ids: tuple[str, ...]) -> list[str]:
    if not ids:
        return [f"{_INDENT}{name} = ()"]
    lines = [f"{_INDENT}{name} = ("]
    lines.extend(f"{_INDENT * 2}{qid!r}," for qid in ids)
    lines.append(f"{_INDENT})")
    return lines


def _emit_accessor(descriptor: AccessorDescriptor) -> list[str]:
    params = "".join(f", {p.name}: FluentValue" for p in descriptor.parameters)
    args = ", ".join(f"{p.variable!r}: {p.name}" for p in descriptor.parameters)
    call = (
        f"self._localize({descriptor.accessor_name!r}, "
        f"{descriptor.qualified_id!r}, {{{args}}})"
    )
    return [
        f"{_INDENT}def {descriptor.accessor_name}(self{params}) -> str:",
        f'{_INDENT * 2}"""Render {descriptor.qualified_id}."""',
        f"{_INDENT * 2}return {call}",
    ]


def emit_bindings(analysis: BindingAnalysis, *, class_name: str = DEFAULT_CLASS_NAME) -> str:
    """Render the bindings module for an analysis.

    Args:
        analysis: Result of analyze_bundle() / analyze_directory()
        class_name: Name of the generated class

    Returns:
        Module source text, ending with a newline

    Raises:
        InvalidIdentifierError: If class_name is not a valid identifier
    """
    _check_class_name(class_name)

    lines = [
        _HEADER.format(
            accessors=len(analysis.descriptors),
            messages=len(analysis.message_ids),
            terms=len(analysis.term_ids),
            class_name=class_name,
        ),
        "",
        f"class {class_name}(LocalizerBase):",
        f'{_INDENT}"""Typed accessors for the default-language messages."""',
        "",
        f"{_INDENT}__slots__ = ()",
        "",
        *_emit_id_tuple("EXPECTED_MESSAGES", analysis.message_ids),
        *_emit_id_tuple("EXPECTED_TERMS", analysis.term_ids),
        *_emit_id_tuple(
            "EXPECTED_VALUES", tuple(d.qualified_id for d in analysis.descriptors)
        ),
    ]
    for descriptor in analysis.descriptors:
        lines.append("")
        lines.extend(_emit_accessor(descriptor))

    logger.debug("Emitted %s with %d accessor(s)", class_name, len(analysis.descriptors))
    return "\n".join(lines) + "\n"


def generate_bindings(directory: Path | str, *, class_name: str = DEFAULT_CLASS_NAME) -> str:
    """Analyse a default-language directory and return the bindings source.

    Raises:
        OSError: If the directory cannot be read
        LocalizationError: If parsing or analysis fails; nothing is emitted
    """
    return emit_bindings(analyze_directory(directory), class_name=class_name)

