"""Tests for main parser functionality."""

from datetime import date
from pathlib import Path

import pytest

from hledger_parse.core.parser import (
    CommentLine,
    Entry,
    InvalidValue,
    ParseFailure,
    Price,
    iter_blocks,
    parse_all,
)


class TestParseAll:
    """Tests for parse_all function."""

    def test_sample_journal(self, sample_text: str) -> None:
        """Test parsing the sample journal into its blocks."""
        blocks = parse_all(sample_text)

        assert [block.kind for block in blocks] == ["comment", "entry", "price", "entry", "entry"]

    def test_sample_journal_contents(self, sample_text: str) -> None:
        """Test the fields of the parsed sample journal."""
        comment, grocery, price, salary, exchange = parse_all(sample_text)

        assert comment == CommentLine(text=" a standalone comment")

        assert isinstance(grocery, Entry)
        assert grocery.date == date(2022, 7, 16)
        assert grocery.description == "Grocery store"
        assert grocery.comment == " weekly shop"
        assert [c.text for c in grocery.comments] == [" paid cash"]

        assert isinstance(price, Price)
        assert price.asset == "TSLA"
        assert price.comment == " great buy?"

        assert isinstance(salary, Entry)
        assert salary.postings[0].amount is not None
        assert salary.postings[0].amount.is_assertion

        assert isinstance(exchange, Entry)
        assert exchange.postings[1].amount is None

    def test_crlf_journal(self, crlf_journal: Path) -> None:
        """Test that CRLF files parse like LF files."""
        text = crlf_journal.read_bytes().decode("utf-8")
        assert "\r\n" in text

        entry, price = parse_all(text)

        assert isinstance(entry, Entry)
        assert entry.description == "Grocery store"
        assert entry.postings[1].comment == " change"
        assert isinstance(price, Price)
        assert price.comment is None

    def test_empty_input(self) -> None:
        """Test that empty and blank inputs have no blocks."""
        assert parse_all("") == []
        assert parse_all("\n\n  \n\t") == []

    def test_no_trailing_newline(self) -> None:
        """Test a journal whose last line has no terminator."""
        blocks = parse_all("; one\n; two")
        assert blocks == [CommentLine(text=" one"), CommentLine(text=" two")]

    def test_blocks_without_blank_lines_between(self) -> None:
        """Test that blank lines are optional between blocks."""
        text = "P 2022-07-12 TSLA 1 U\n2022-07-16 x\n  a  1\n  b\n; done\n"
        assert [block.kind for block in parse_all(text)] == ["price", "entry", "comment"]

    def test_single_posting_entry(self, single_posting_journal: Path) -> None:
        """Test that an entry with one posting fails the whole parse."""
        with pytest.raises(InvalidValue) as exc_info:
            parse_all(single_posting_journal.read_text(encoding="utf-8"))
        assert exc_info.value.location.line_no == 3

    def test_failure_position(self, bad_date_journal: Path) -> None:
        """Test that the first failure reports its line and column."""
        with pytest.raises(ParseFailure) as exc_info:
            parse_all(bad_date_journal.read_text(encoding="utf-8"))

        error = exc_info.value.error
        assert error.code == "HLP-DATE-002"
        assert error.location.line_no == 3
        assert error.location.column == 1

    def test_zero_padded_amount(self) -> None:
        """Test an entry whose amount has thousands of leading zeroes."""
        text = f"2022-07-16 x\n  a  {'0' * 5000}1.50 CAD\n  b\n"
        (entry,) = parse_all(text)
        assert isinstance(entry, Entry)
        amount = entry.postings[0].amount
        assert amount is not None
        assert str(amount.amount) == "1.50 CAD"

    def test_deterministic(self, sample_text: str) -> None:
        """Test that parsing is a pure function of the input."""
        assert parse_all(sample_text) == parse_all(sample_text)


class TestIterBlocks:
    """Tests for the streaming driver."""

    def test_lazy(self, bad_date_journal: Path) -> None:
        """Test that blocks before a failure are yielded first."""
        blocks = iter_blocks(bad_date_journal.read_text(encoding="utf-8"))

        assert isinstance(next(blocks), Price)
        with pytest.raises(InvalidValue):
            next(blocks)

    def test_matches_parse_all(self, sample_text: str) -> None:
        """Test that streaming and eager parsing agree."""
        assert list(iter_blocks(sample_text)) == parse_all(sample_text)


class TestCommentPreservation:
    """Comment text survives parsing byte for byte."""

    @pytest.mark.parametrize(
        "comment",
        ["", " ", "plain", "  two leading", "trailing  ", "semi;colons;", "tab\tinside", "ünïcödé €"],
    )
    def test_comment_text_preserved(self, comment: str) -> None:
        """Test every comment position of an entry and a standalone comment."""
        text = (
            f";{comment}\n"
            f"2022-07-16 Shop ;{comment}\n"
            f"  ;{comment}\n"
            f"  a  1 CAD ;{comment}\n"
            f"  b ;{comment}\n"
        )
        standalone, entry = parse_all(text)

        assert isinstance(standalone, CommentLine)
        assert standalone.text == comment
        assert isinstance(entry, Entry)
        assert entry.comment == comment
        assert entry.comments[0].text == comment
        assert [p.comment for p in entry.postings] == [comment, comment]
