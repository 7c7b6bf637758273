"""Tests for the record tree models."""

from datetime import date

import pytest
from pydantic import TypeAdapter, ValidationError

from hledger_parse.core.parser import (
    Amount,
    Block,
    CommentLine,
    DecNumber,
    Entry,
    IntNumber,
    Posting,
    parse_all,
)


class TestImmutability:
    """Nodes are frozen once built."""

    def test_frozen(self) -> None:
        """Test that fields cannot be reassigned."""
        posting = Posting(account="assets:cash")
        with pytest.raises(ValidationError):
            posting.account = "other"  # type: ignore[misc]


class TestPostingModel:
    """Tests for Posting validation."""

    @pytest.mark.parametrize("account", ["", "assets cash", "assets\tcash", "a\nb"])
    def test_account_rejects_whitespace(self, account: str) -> None:
        """Test that accounts are non-empty and whitespace-free."""
        with pytest.raises(ValidationError):
            Posting(account=account)


class TestEntryModel:
    """Tests for Entry validation."""

    def test_needs_two_postings(self) -> None:
        """Test that comments do not count toward the minimum."""
        with pytest.raises(ValidationError):
            Entry(
                date=date(2022, 1, 1),
                description="x",
                lines=(Posting(account="a"), CommentLine(text="c")),
            )

    def test_postings_and_comments(self) -> None:
        """Test the convenience accessors."""
        entry = Entry(
            date=date(2022, 1, 1),
            description="x",
            lines=(Posting(account="a"), CommentLine(text="c"), Posting(account="b")),
        )
        assert [p.account for p in entry.postings] == ["a", "b"]
        assert [c.text for c in entry.comments] == ["c"]


class TestAmountModel:
    """Tests for Amount validation and printing."""

    def test_commodity_alphabetic(self) -> None:
        """Test that commodity tags are ASCII letters."""
        with pytest.raises(ValidationError):
            Amount(number=IntNumber(value=1), commodity="US$")

    def test_equal_values_equal_amounts(self) -> None:
        """Test that amount equality follows number equality."""
        assert Amount(number=IntNumber(value=600), commodity="U") == Amount(
            number=DecNumber(integer_part=600, leading_zeroes=3), commodity="U"
        )

    def test_str(self) -> None:
        """Test the canonical printer."""
        assert str(Amount(number=DecNumber(integer_part=0, leading_zeroes=4, trailing_digits=7))) == "0.00007"


class TestSerialization:
    """The tree dumps to JSON and validates back."""

    def test_round_trip_through_json(self, sample_text: str) -> None:
        """Test that the discriminated unions survive a JSON round trip."""
        adapter = TypeAdapter(list[Block])
        blocks = parse_all(sample_text)

        restored = adapter.validate_json(adapter.dump_json(blocks))

        assert restored == blocks
        assert [type(b) for b in restored] == [type(b) for b in blocks]
