"""Resource file parser: .ftl text to ordered entry records.

A resource file is a flat sequence of entries::

    ### Resource comment
    # Entry comment
    name = English
    counter = count is at {$counter}
    login = Sign in
        .tooltip = Click here to sign in
    -brand = Firefox
    multi =
        First line
        second line with { $var }

Headers start at column 0. Continuation lines and ``.attribute`` lines are
indented with spaces. The common indentation of a template's continuation
lines is removed, so deeper lines keep their relative indent, and the lines
are joined with ``\\n``. A placeable left open at the end of a line
continues the template on the following lines regardless of indentation, and
may be closed by a ``}`` (or continued with a ``[key]`` / ``*[key]`` variant)
at column 0.

Malformed input raises ParseError carrying the 1-based line in the file. The
parser is a pure function over text.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from ftlbind.constants import MAX_SOURCE_SIZE
from ftlbind.diagnostics import ParseError, TemplateSyntaxError

from .ast import Pattern
from .template import parse_template

__all__ = ["ResourceAttribute", "ResourceEntry", "parse_resource"]

logger = logging.getLogger(__name__)

_HEADER_PATTERN = re.compile(r"^(-?)([a-zA-Z][a-zA-Z0-9_-]*) *= *(.*)$")
_ATTRIBUTE_PATTERN = re.compile(r"^\.([a-zA-Z][a-zA-Z0-9_-]*) *= *(.*)$")
_COMMENT_PATTERN = re.compile(r"^#{1,3}( |$)")

# Column-0 lines allowed while a placeable is still open
_OPEN_PLACEABLE_CONTINUATIONS = ("}", "[", "*[")


@dataclass(frozen=True, slots=True)
class ResourceAttribute:
    """Named sub-template of an entry (``.name = value``)."""

    name: str
    template: str
    pattern: Pattern
    line: int


@dataclass(frozen=True, slots=True)
class ResourceEntry:
    """One message or term as written in a resource file.

    Attributes:
        key: Entry key as written (without the ``-`` prefix for terms)
        template: Raw template text of the value, or None for an
            attribute-only message
        attributes: Attributes in declaration order
        pattern: Parsed value, or None when template is None
        is_term: True for ``-term`` entries
        line: 1-based line of the entry header
    """

    key: str
    template: str | None
    attributes: tuple[ResourceAttribute, ...]
    pattern: Pattern | None
    is_term: bool
    line: int

    @property
    def entry_key(self) -> str:
        """Key as used in the bundle: ``-key`` for terms, ``key`` for messages."""
        return f"-{self.key}" if self.is_term else self.key

    def get_attribute(self, name: str) -> ResourceAttribute | None:
        """Return the attribute called ``name``, if declared."""
        return next((a for a in self.attributes if a.name == name), None)


@dataclass(slots=True)
class _Segment:
    """Lines of one template (entry value or attribute) under construction."""

    line: int
    lines: list[tuple[int, str]] = field(default_factory=list)
    # Indices of lines written as indented text; their common indent is removed
    block_lines: list[int] = field(default_factory=list)
    depth: int = 0

    def append(self, line_no: int, text: str, *, block: bool = False) -> None:
        if block:
            self.block_lines.append(len(self.lines))
        self.lines.append((line_no, text))
        self.depth = _brace_depth(text, self.depth)

    @property
    def is_open(self) -> bool:
        return self.depth > 0


@dataclass(slots=True)
class _EntryBuilder:
    key: str
    is_term: bool
    line: int
    value: _Segment
    attributes: list[tuple[str, _Segment]] = field(default_factory=list)

    @property
    def current(self) -> _Segment:
        return self.attributes[-1][1] if self.attributes else self.value


def parse_resource(source: str, *, source_path: str | None = None) -> tuple[ResourceEntry, ...]:
    """Parse resource file text into entry records in declaration order.

    Duplicate keys are NOT rejected here; the bundle builder reports them with
    both locations.

    Args:
        source: File contents
        source_path: Path used in error messages (optional)

    Returns:
        Tuple of ResourceEntry in declaration order

    Raises:
        ParseError: On the first malformed entry

    Example:
        >>> entries = parse_resource("name=English\\ncounter=count is at {$counter}\\n")
        >>> [(e.key, e.template) for e in entries]
        [('name', 'English'), ('counter', 'count is at {$counter}')]
    """
    if len(source) > MAX_SOURCE_SIZE:
        msg = f"Resource exceeds maximum size of {MAX_SOURCE_SIZE} characters"
        raise ParseError(msg, 1, source_path=source_path)

    entries: list[ResourceEntry] = []
    builder: _EntryBuilder | None = None

    for line_no, line in _iter_lines(source):
        segment = builder.current if builder is not None else None

        if segment is not None and segment.is_open:
            if line and line[0] != " " and not line.startswith(_OPEN_PLACEABLE_CONTINUATIONS):
                raise ParseError("Unterminated placeable", segment.line, source_path=source_path)
            segment.append(line_no, line.lstrip(" "))
            continue

        if not line.strip(" "):
            if segment is not None:
                segment.append(line_no, "")
            continue

        if line[0] == "\t" or (line[0] == " " and "\t" in line[: len(line) - len(line.lstrip())]):
            msg = "Tab characters are not allowed for indentation"
            raise ParseError(msg, line_no, source_path=source_path)

        if line[0] == " ":
            if builder is None:
                msg = "Indented content outside of an entry"
                raise ParseError(msg, line_no, source_path=source_path)
            content = line.lstrip(" ")
            attribute = _ATTRIBUTE_PATTERN.match(content)
            if attribute is not None:
                attribute_segment = _Segment(line_no)
                attribute_segment.append(line_no, attribute.group(2))
                builder.attributes.append((attribute.group(1), attribute_segment))
            else:
                builder.current.append(line_no, line, block=True)
            continue

        # Column 0: closes the current entry
        if builder is not None:
            entries.append(_finish_entry(builder, source_path))
            builder = None

        if line[0] == "#":
            if not _COMMENT_PATTERN.match(line):
                msg = "Comment markers must be followed by a space"
                raise ParseError(msg, line_no, source_path=source_path)
            continue

        header = _HEADER_PATTERN.match(line)
        if header is None:
            msg = f"Expected an entry of the form 'key = value', got {line.strip()!r}"
            raise ParseError(msg, line_no, source_path=source_path)
        value_segment = _Segment(line_no)
        value_segment.append(line_no, header.group(3))
        builder = _EntryBuilder(
            key=header.group(2),
            is_term=header.group(1) == "-",
            line=line_no,
            value=value_segment,
        )

    if builder is not None:
        entries.append(_finish_entry(builder, source_path))

    logger.debug("Parsed %d entries from %s", len(entries), source_path or "<string>")
    return tuple(entries)


def _iter_lines(source: str) -> Iterator[tuple[int, str]]:
    """Yield (1-based line number, line) after BOM removal and newline normalization."""
    source = source.removeprefix("\ufeff")
    source = source.replace("\r\n", "\n").replace("\r", "\n")
    for index, line in enumerate(source.split("\n"), start=1):
        yield index, line


def _brace_depth(text: str, depth: int) -> int:
    """Track '{' / '}' nesting across one line, skipping string literals."""
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth = max(depth - 1, 0)
        elif ch == '"' and depth > 0:
            in_string = True
    return depth


def _dedent_block(segment: _Segment) -> list[tuple[int, str]]:
    """Remove the common indentation of the indented text lines of a segment.

    The inline first line and lines inside an open placeable keep their own
    handling, so only relative indentation between text lines survives.

    Example:
        >>> segment = _Segment(1)
        >>> segment.append(1, "")
        >>> segment.append(2, "    line1", block=True)
        >>> segment.append(3, "      indented", block=True)
        >>> [text for _, text in _dedent_block(segment)]
        ['', 'line1', '  indented']
    """
    indents = [
        len(text) - len(text.lstrip(" "))
        for index in segment.block_lines
        if (text := segment.lines[index][1]).strip(" ")
    ]
    if not indents:
        return list(segment.lines)
    common = min(indents)
    block = set(segment.block_lines)
    return [
        (line_no, text[common:] if index in block else text)
        for index, (line_no, text) in enumerate(segment.lines)
    ]


def _finish_segment(
    segment: _Segment, source_path: str | None
) -> tuple[str, Pattern, int] | None:
    """Join a segment into template text and parse it.

    Returns:
        (template, pattern, first line) or None for an empty template
    """
    if segment.is_open:
        raise ParseError("Unterminated placeable", segment.line, source_path=source_path)

    lines = _dedent_block(segment)
    while lines and not lines[0][1].strip(" "):
        lines.pop(0)
    while lines and not lines[-1][1].strip(" "):
        lines.pop()
    if not lines:
        return None

    template = "\n".join(text for _, text in lines).rstrip(" ")
    try:
        pattern = parse_template(template)
    except TemplateSyntaxError as e:
        file_line = lines[min(e.line, len(lines)) - 1][0]
        raise ParseError(e.reason, file_line, source_path=source_path) from e
    return template, pattern, lines[0][0]


def _finish_entry(builder: _EntryBuilder, source_path: str | None) -> ResourceEntry:
    display_key = f"-{builder.key}" if builder.is_term else builder.key
    value = _finish_segment(builder.value, source_path)

    attributes: list[ResourceAttribute] = []
    seen: set[str] = set()
    for name, segment in builder.attributes:
        if name in seen:
            msg = f"Duplicate attribute '{name}' in '{display_key}'"
            raise ParseError(msg, segment.line, source_path=source_path)
        seen.add(name)
        parsed = _finish_segment(segment, source_path)
        if parsed is None:
            msg = f"Attribute '{name}' of '{display_key}' has no value"
            raise ParseError(msg, segment.line, source_path=source_path)
        template, pattern, _ = parsed
        attributes.append(ResourceAttribute(name, template, pattern, segment.line))

    if value is None and builder.is_term:
        msg = f"Term '{display_key}' must have a value"
        raise ParseError(msg, builder.line, source_path=source_path)
    if value is None and not attributes:
        msg = f"Message '{display_key}' has neither a value nor attributes"
        raise ParseError(msg, builder.line, source_path=source_path)

    return ResourceEntry(
        key=builder.key,
        template=value[0] if value is not None else None,
        attributes=tuple(attributes),
        pattern=value[1] if value is not None else None,
        is_term=builder.is_term,
        line=builder.line,
    )
