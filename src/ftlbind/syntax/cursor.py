"""Immutable cursor over template text.

Python 3.13+. Zero external dependencies.

The template parser never mutates position state: each step returns a new
Cursor, and reaching the end of the text is a property (``is_eof``) rather
than a sentinel character. Line and column are derived only when an error
needs them.

Templates handed to the parser have already been LF-normalized by the
resource parser, so ``\\n`` is the only line break.
"""

from dataclasses import dataclass

__all__ = ["Cursor", "ParseResult"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Position within a template.

    Example:
        >>> start = Cursor("{$n}", 0)
        >>> start.advance().current
        '$'
        >>> start.current
        '{'
        >>> Cursor("ab", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Whether every character has been consumed."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Character under the cursor.

        Raises:
            EOFError: At the end of the template
        """
        if self.is_eof:
            msg = f"Read past the end of the template at offset {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Character ``offset`` places ahead, or None beyond the end."""
        index = self.pos + offset
        return self.source[index] if index < len(self.source) else None

    def advance(self, count: int = 1) -> "Cursor":
        """Cursor moved forward by ``count``, never past the end."""
        return Cursor(self.source, min(self.pos + count, len(self.source)))

    def slice_to(self, end_pos: int) -> str:
        """Text between this cursor and ``end_pos``."""
        return self.source[self.pos : end_pos]

    def skip_spaces(self) -> "Cursor":
        """Cursor after any run of U+0020.

        Example:
            >>> Cursor("  $n", 0).skip_spaces().current
            '$'
        """
        cursor = self
        while cursor.peek() == " ":
            cursor = cursor.advance()
        return cursor

    def skip_whitespace(self) -> "Cursor":
        """Cursor after any run of spaces and line breaks."""
        cursor = self
        while cursor.peek() in (" ", "\n"):
            cursor = cursor.advance()
        return cursor

    def expect(self, char: str) -> "Cursor | None":
        """Cursor after ``char`` if it is next, else None.

        Example:
            >>> Cursor("}", 0).expect("}").is_eof
            True
            >>> Cursor("x", 0).expect("}") is None
            True
        """
        return self.advance() if self.peek() == char else None

    def compute_line_col(self) -> tuple[int, int]:
        """1-based (line, column) of the cursor, for error messages.

        Example:
            >>> Cursor("a\\n{b", 3).compute_line_col()
            (2, 2)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        line_start = self.source.rfind("\n", 0, self.pos) + 1
        return (line, self.pos - line_start + 1)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Value produced by a sub-parser plus the cursor after it.

    Sub-parsers share the shape ``_parse_x(cursor, ...) -> ParseResult[X]``
    and raise TemplateSyntaxError on malformed input.
    """

    value: T
    cursor: Cursor
