"""Tests for syntax.resource: .ftl text to ordered entry records."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ftlbind.constants import MAX_SOURCE_SIZE
from ftlbind.diagnostics import ParseError
from ftlbind.syntax import Placeable, TextElement, parse_resource

from tests.strategies import ftl_identifiers, ftl_safe_text

# ============================================================================
# ENTRIES
# ============================================================================


class TestParseResourceEntries:
    """Well-formed entries."""

    def test_compact_entries_without_spaces(self) -> None:
        """``key=value`` needs no spaces around '='."""
        entries = parse_resource("name=English\ncounter=count is at {$counter}\n")

        assert [(e.key, e.template) for e in entries] == [
            ("name", "English"),
            ("counter", "count is at {$counter}"),
        ]

    def test_declaration_order_preserved(self) -> None:
        """Entries come back in file order, not sorted."""
        entries = parse_resource("zeta = z\nalpha = a\nmid = m\n")

        assert [e.key for e in entries] == ["zeta", "alpha", "mid"]

    def test_value_is_parsed_into_pattern(self) -> None:
        """Each entry carries its parsed pattern."""
        (entry,) = parse_resource("counter = count is at {$counter}")

        assert entry.pattern is not None
        assert isinstance(entry.pattern.elements[0], TextElement)
        assert isinstance(entry.pattern.elements[1], Placeable)

    def test_header_line_recorded(self) -> None:
        """Line numbers are 1-based and point at the header."""
        entries = parse_resource("# comment\n\nfirst = 1\n\nsecond = 2\n")

        assert [e.line for e in entries] == [3, 5]

    def test_attributes_in_declaration_order(self) -> None:
        """Attributes keep their order and their own templates."""
        (entry,) = parse_resource(
            "login = Sign in\n    .tooltip = Click to sign in\n    .aria-label = Sign in button\n"
        )

        assert [a.name for a in entry.attributes] == ["tooltip", "aria-label"]
        assert entry.attributes[0].template == "Click to sign in"
        assert entry.get_attribute("aria-label") is not None
        assert entry.get_attribute("missing") is None

    def test_attribute_only_message(self) -> None:
        """A message may have attributes and no value."""
        (entry,) = parse_resource("login =\n    .title = Sign in\n")

        assert entry.template is None
        assert entry.pattern is None
        assert [a.name for a in entry.attributes] == ["title"]

    def test_term_entry(self) -> None:
        """Terms keep the bare key and are flagged."""
        (entry,) = parse_resource("-brand = Firefox")

        assert entry.key == "brand"
        assert entry.is_term
        assert entry.entry_key == "-brand"

    def test_multiline_value_joined(self) -> None:
        """Continuation lines are de-indented and joined with newlines."""
        (entry,) = parse_resource("multi =\n    First line\n    second line\n")

        assert entry.template == "First line\nsecond line"

    def test_relative_indentation_kept(self) -> None:
        """Only the shared indentation of continuation lines is removed."""
        (entry,) = parse_resource("m =\n    line1\n      indented\n    back\n")

        assert entry.template == "line1\n  indented\nback"

    def test_inline_first_line_not_counted(self) -> None:
        """Text after ``=`` does not lower the common indentation."""
        (entry,) = parse_resource("m = first\n        second\n          third\n")

        assert entry.template == "first\nsecond\n  third"

    def test_attribute_relative_indentation(self) -> None:
        """Attributes dedent their own continuation lines."""
        (entry,) = parse_resource("m = v\n    .title =\n        a\n          b\n")

        assert entry.attributes[0].template == "a\n  b"

    def test_multiline_select_closed_at_column_zero(self) -> None:
        """An open placeable continues until its closing brace."""
        source = (
            "emails = { $count ->\n"
            "    [one] one email\n"
            "   *[other] { $count } emails\n"
            "}\n"
            "after = next\n"
        )
        entries = parse_resource(source)

        assert [e.key for e in entries] == ["emails", "after"]
        assert entries[0].template is not None
        assert entries[0].template.endswith("}")

    def test_comments_and_blank_lines_ignored(self) -> None:
        """All three comment levels are skipped."""
        source = "### Resource\n## Group\n# Entry\nname = English\n#\n"

        assert [e.key for e in parse_resource(source)] == ["name"]

    def test_crlf_and_bom_normalized(self) -> None:
        """Windows newlines and a leading BOM do not leak into templates."""
        entries = parse_resource("\ufeffname = English\r\nother = Value\r\n")

        assert [(e.key, e.template) for e in entries] == [
            ("name", "English"),
            ("other", "Value"),
        ]

    def test_duplicate_keys_are_left_to_the_bundle(self) -> None:
        """The parser reports both records; bundles reject duplicates."""
        entries = parse_resource("name = a\nname = b\n")

        assert [e.template for e in entries] == ["a", "b"]

    def test_empty_source(self) -> None:
        """Empty text yields no entries."""
        assert parse_resource("") == ()


# ============================================================================
# ERRORS
# ============================================================================


class TestParseResourceErrors:
    """Malformed input raises ParseError with the file line."""

    def test_missing_equals(self) -> None:
        """A column-0 line that is not an entry is rejected."""
        with pytest.raises(ParseError) as exc_info:
            parse_resource("name = ok\nthis is not an entry\n")

        assert exc_info.value.line == 2

    def test_unterminated_placeable(self) -> None:
        """A placeable left open at end of file is reported at the entry."""
        with pytest.raises(ParseError, match="Unterminated placeable") as exc_info:
            parse_resource("first = ok\nbroken = { $var\n")

        assert exc_info.value.line == 2

    def test_template_error_mapped_to_file_line(self) -> None:
        """Template errors report the line inside the file."""
        with pytest.raises(ParseError) as exc_info:
            parse_resource("a = 1\nb = 2\nc = { $ }\n")

        assert exc_info.value.line == 3

    def test_template_error_on_continuation_line(self) -> None:
        """Errors in later template lines point at that line."""
        with pytest.raises(ParseError) as exc_info:
            parse_resource("multi =\n    fine\n    broken } here\n")

        assert exc_info.value.line == 3

    def test_tab_indentation_rejected(self) -> None:
        """Tabs are not valid indentation."""
        with pytest.raises(ParseError, match="Tab"):
            parse_resource("name = English\n\t.title = x\n")

    def test_indented_content_before_any_entry(self) -> None:
        """Indented lines need an entry to belong to."""
        with pytest.raises(ParseError, match="outside of an entry"):
            parse_resource("    stray\n")

    def test_comment_without_space(self) -> None:
        """``#comment`` is malformed."""
        with pytest.raises(ParseError, match="Comment"):
            parse_resource("#comment\n")

    def test_duplicate_attribute(self) -> None:
        """An attribute name may appear once per entry."""
        with pytest.raises(ParseError, match="Duplicate attribute"):
            parse_resource("login = x\n    .title = a\n    .title = b\n")

    def test_empty_attribute(self) -> None:
        """Attributes need a value."""
        with pytest.raises(ParseError, match="has no value"):
            parse_resource("login = x\n    .title =\n")

    def test_term_without_value(self) -> None:
        """Terms must have a value even when they have attributes."""
        with pytest.raises(ParseError, match="Term '-brand'"):
            parse_resource("-brand =\n    .gender = masculine\n")

    def test_message_without_value_or_attributes(self) -> None:
        """An empty message is an error."""
        with pytest.raises(ParseError, match="neither a value nor attributes"):
            parse_resource("empty =\n")

    def test_source_path_in_message(self) -> None:
        """The file path appears in the error text."""
        with pytest.raises(ParseError, match=r"en_US/base\.ftl:1"):
            parse_resource("oops\n", source_path="en_US/base.ftl")

    def test_oversized_source_rejected(self) -> None:
        """Files beyond the size limit are refused before parsing."""
        with pytest.raises(ParseError, match="maximum size"):
            parse_resource("a" * (MAX_SOURCE_SIZE + 1))


# ============================================================================
# PROPERTIES
# ============================================================================


class TestParseResourceProperties:
    """Property-based checks."""

    @given(
        entries=st.dictionaries(ftl_identifiers(), ftl_safe_text(), min_size=1, max_size=10)
    )
    def test_simple_entries_round_trip_templates(self, entries: dict[str, str]) -> None:
        """Plain-text entries come back in order with their exact text."""
        source = "".join(f"{key} = {text}\n" for key, text in entries.items())

        parsed = parse_resource(source)

        assert [(e.key, e.template) for e in parsed] == list(entries.items())
