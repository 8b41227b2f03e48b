"""Tests for source parsing."""

from unittest.mock import patch

from security_scan.languages import Language
from security_scan.parser import ParsedSource, SourceParser


class TestSourceParserLines:
    """Test the line split."""

    def test_preserves_empty_lines(self) -> None:
        """Test that line indices line up with 1-indexed line numbers."""
        parsed = SourceParser().parse("a\n\nb\n", Language.JAVASCRIPT)

        assert parsed.lines == ("a", "", "b", "")
        assert parsed.line_count == 4
        assert parsed.line_text(3) == "b"
        assert parsed.language == Language.JAVASCRIPT

    def test_line_text_out_of_range_is_empty(self) -> None:
        """Test that invalid line numbers return an empty string."""
        parsed = ParsedSource(raw="a", lines=("a",))

        assert parsed.line_text(0) == ""
        assert parsed.line_text(2) == ""
        assert parsed.line_text(-1) == ""


class TestSourceParserTokens:
    """Test best-effort tokenisation."""

    def test_tokenises_keywords_strings_and_comments(self) -> None:
        """Test token types and positions."""
        parsed = SourceParser().parse(
            'const name = "x"; // note', Language.JAVASCRIPT
        )

        values = [(t.type, t.value) for t in parsed.tokens]

        assert ("keyword", "const") in values
        assert ("identifier", "name") in values
        assert ("string", '"x"') in values
        assert ("comment", "// note") in values
        assert parsed.tokens[0].line == 1
        assert parsed.tokens[0].column == 0

    def test_keywords_inside_strings_are_not_tokens(self) -> None:
        """Test that a string token covers its contents."""
        parsed = SourceParser().parse("'return this'", Language.JAVASCRIPT)

        assert [t.type for t in parsed.tokens] == ["string"]

    def test_tokeniser_failure_returns_lines_without_tokens(self) -> None:
        """Test that parse never raises."""
        parser = SourceParser()

        with patch.object(parser, "_tokenise", side_effect=RuntimeError("boom")):
            parsed = parser.parse("let a = 1;\nlet b = 2;", Language.JAVASCRIPT)

        assert parsed.lines == ("let a = 1;", "let b = 2;")
        assert parsed.tokens == ()
