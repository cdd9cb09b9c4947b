"""Tests for quoted literal regions."""

from logleak.scanner.literals import (
    in_literal,
    literal_contents,
    literal_ranges,
    strip_literals,
)


class TestLiteralRanges:
    """Test literal span computation."""

    def test_ranges_include_quotes(self):
        text = 'log("ab" + x + "c")'
        ranges = literal_ranges(text)

        assert ranges == [(4, 8), (15, 18)]
        assert [text[s:e] for s, e in ranges] == ['"ab"', '"c"']

    def test_in_literal_half_open(self):
        ranges = [(4, 8)]
        assert not in_literal(3, ranges)
        assert in_literal(4, ranges)
        assert in_literal(7, ranges)
        assert not in_literal(8, ranges)

    def test_empty_input(self):
        assert literal_ranges("") == []
        assert literal_contents("") == []

    def test_unbalanced_quote_is_not_a_literal(self):
        assert literal_ranges('log("open + ssn)') == []


class TestLiteralContents:
    """Test literal content extraction."""

    def test_contents_without_quotes(self):
        assert literal_contents('a("User: " + u + " SSN: ")') == ["User: ", " SSN: "]

    def test_blank_contents_skipped(self):
        assert literal_contents('a("" + "  " + "x")') == ["x"]

    def test_strip_literals(self):
        assert strip_literals('log("a" + b + "c")') == "log( + b + )"


class TestEscapedQuoteBoundary:
    """Escaped quotes are not understood; literals end at the next quote."""

    def test_escaped_quote_splits_literal(self):
        text = r'log("say \"ssn\" now" + x)'

        assert literal_contents(text) == ["say \\", " now"]

    def test_text_between_split_literals_is_treated_as_code(self):
        text = r'log("say \"ssn\" now")'
        ranges = literal_ranges(text)
        position = text.index("ssn")

        assert not in_literal(position, ranges)
