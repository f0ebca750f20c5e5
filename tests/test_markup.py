"""Tests for climan/core/markup.py - escaping and inline markup."""

import io

import pytest

from climan.core.markup import format_for_man, join_quoted, man_quote, quote_value

pytestmark = pytest.mark.unit


def _format(text: str) -> str:
    buf = io.StringIO()
    format_for_man(buf, text)
    return buf.getvalue()


class TestManQuote:
    """Test backslash escaping."""

    def test_plain_text_unchanged(self):
        """Text without backslashes passes through."""
        assert man_quote("hello - world.") == "hello - world."

    def test_backslash_doubled(self):
        """A single backslash becomes two."""
        assert man_quote("C:\\temp") == "C:\\\\temp"

    def test_escaping_twice_double_escapes(self):
        """Escaping is not idempotent."""
        assert man_quote(man_quote("\\")) == "\\\\\\\\"

    def test_newlines_preserved(self):
        """Structural characters are left to the caller."""
        assert man_quote("a\nb") == "a\nb"


class TestFormatForMan:
    """Test the `span' to bold run translation."""

    @pytest.mark.parametrize("text", [
        "",
        "plain text",
        "it's got apostrophes",
        "back\\slash",
        "multi\nline",
    ])
    def test_no_backtick_equals_man_quote(self, text):
        """Without backticks the translator only escapes."""
        assert _format(text) == man_quote(text)

    def test_simple_span(self):
        """A matched span becomes a bold run with nothing trailing."""
        assert _format("`foo'") == "\\fBfoo\\fP"

    def test_span_inside_text(self):
        """Text around a span is kept."""
        assert _format("run `make' now") == "run \\fBmake\\fP now"

    def test_multiple_spans(self):
        """Every span is converted."""
        assert _format("`a' and `b'") == "\\fBa\\fP and \\fBb\\fP"

    def test_unterminated_span_is_literal(self):
        """A backtick with no closing apostrophe is written as-is."""
        assert _format("`foo") == "`foo"

    def test_unterminated_after_span(self):
        """Fallback applies after earlier spans were converted."""
        assert _format("`a' then `b") == "\\fBa\\fP then `b"

    def test_backslash_escaped_once_inside_span(self):
        """Backslashes in a span are escaped exactly once."""
        assert _format("`C:\\dir'") == "\\fBC:\\\\dir\\fP"

    def test_backslash_next_to_delimiter(self):
        """Segments are escaped independently of the delimiters."""
        assert _format("x\\`y'") == "x\\\\\\fBy\\fP"

    def test_unterminated_backslash_escaped_once(self):
        """The literal fallback escapes its remainder once."""
        assert _format("`a\\b") == "`a\\\\b"


class TestQuoteValue:
    """Test Go-style string literal quoting for defaults."""

    def test_plain(self):
        assert quote_value("abc") == '"abc"'

    def test_empty(self):
        assert quote_value("") == '""'

    def test_quotes_and_backslashes(self):
        assert quote_value('a"b\\c') == '"a\\"b\\\\c"'

    def test_control_characters(self):
        assert quote_value("a\nb\tc") == '"a\\nb\\tc"'
        assert quote_value("\x01") == '"\\x01"'

    def test_unicode_printable_kept(self):
        assert quote_value("café") == '"café"'

    def test_join_quoted(self):
        assert join_quoted(["1", "2"]) == '"1", "2"'
        assert join_quoted([]) == ""
