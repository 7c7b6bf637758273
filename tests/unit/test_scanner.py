"""Tests for lexical primitives and combinators."""

import pytest

from hledger_parse.core.parser import InvalidValue, LexicalMiss, UnexpectedEnd
from hledger_parse.core.parser.scanner import (
    alpha1,
    char,
    digit1,
    end_of_line,
    first_of,
    line_ending,
    optional,
    space0,
    space1,
    tag,
    take_till,
    take_till1,
)


class TestPrimitives:
    """Tests for single-token recognizers."""

    def test_char(self) -> None:
        """Test matching one character."""
        assert char("P 2022", 0, "P") == 1

    def test_char_miss(self) -> None:
        """Test that a different character is a lexical miss at that offset."""
        with pytest.raises(LexicalMiss) as exc_info:
            char("xP", 0, "P")
        assert exc_info.value.offset == 0

    def test_char_at_end(self) -> None:
        """Test that running out of input is an unexpected end."""
        with pytest.raises(UnexpectedEnd):
            char("ab", 2, "c")

    def test_tag(self) -> None:
        """Test matching a literal."""
        assert tag("@@ 5", 0, "@@") == 2
        with pytest.raises(LexicalMiss):
            tag("@ 5", 0, "@@")

    def test_space1_spaces_and_tabs(self) -> None:
        """Test that spaces and tabs are both whitespace."""
        assert space1(" \t x", 0) == 3

    def test_space1_never_eats_newline(self) -> None:
        """Test that newline is not whitespace."""
        with pytest.raises(LexicalMiss):
            space1("\n", 0)
        assert space0("  \n", 0) == 2

    def test_digit1(self) -> None:
        """Test digit runs."""
        assert digit1("2022-07", 0) == (4, "2022")
        with pytest.raises(LexicalMiss):
            digit1("-1", 0)

    def test_alpha1_ascii_only(self) -> None:
        """Test that only ASCII letters form an alphabetic run."""
        assert alpha1("CAD ;", 0) == (3, "CAD")
        assert alpha1("Yé", 0) == (1, "Y")
        with pytest.raises(LexicalMiss):
            alpha1("€", 0)

    def test_take_till(self) -> None:
        """Test consuming until a predicate holds."""
        assert take_till("abc;d", 0, lambda c: c == ";") == (3, "abc")
        assert take_till(";d", 0, lambda c: c == ";") == (0, "")

    def test_take_till1_requires_one(self) -> None:
        """Test the non-empty variant."""
        with pytest.raises(LexicalMiss):
            take_till1(" x", 0, lambda c: c == " ")

    def test_line_ending(self) -> None:
        """Test LF and CRLF terminators."""
        assert line_ending("\nx", 0) == 1
        assert line_ending("\r\nx", 0) == 2
        with pytest.raises(LexicalMiss):
            line_ending("\rx", 0)

    def test_end_of_line_allows_trailing_whitespace(self) -> None:
        """Test that trailing whitespace before the terminator is skipped."""
        assert end_of_line("  \nx", 0) == 3
        assert end_of_line("  ", 0) == 2


class TestCombinators:
    """Tests for optional and first_of."""

    def test_optional_hit(self) -> None:
        """Test that a match is passed through."""
        assert optional(digit1, "12x", 0) == (2, "12")

    def test_optional_miss_stays_put(self) -> None:
        """Test that a miss yields None without consuming."""
        assert optional(digit1, "x", 0) == (0, None)
        assert optional(digit1, "", 0) == (0, None)

    def test_optional_propagates_invalid(self) -> None:
        """Test that semantic errors are never swallowed."""

        def invalid(text: str, pos: int) -> tuple[int, str]:
            raise InvalidValue("HLP-DATE-001", "bad month", text, pos)

        with pytest.raises(InvalidValue):
            optional(invalid, "x", 0)

    def test_first_of_order(self) -> None:
        """Test that alternatives are tried in order."""

        def two(text: str, pos: int) -> tuple[int, str]:
            return tag(text, pos, "@@"), "two"

        def one(text: str, pos: int) -> tuple[int, str]:
            return char(text, pos, "@"), "one"

        assert first_of([two, one], "@@", 0) == (2, "two")
        assert first_of([two, one], "@", 0) == (1, "one")

    def test_first_of_reports_first_failure(self) -> None:
        """Test that the first alternative's failure is raised."""
        with pytest.raises(LexicalMiss) as exc_info:
            first_of([digit1, alpha1], ";", 0)
        assert exc_info.value.context["expected"] == "a digit"
