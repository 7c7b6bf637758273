"""
hledger journal parser core.

Public API for parsing hledger journal text.

Usage:
    from hledger_parse.core.parser import parse_all, Entry

    for block in parse_all(text):
        if isinstance(block, Entry):
            print(block.date, block.description)

Every ``parse_*`` building block takes the input text and returns a tuple of
(remaining text, value). Failures raise ``ParseFailure`` (``LexicalMiss``,
``InvalidValue`` or ``UnexpectedEnd``) carrying the offset into that input.

API Functions:
    parse_block(text) -> (remaining, Block)
    parse_all(text) -> list[Block]
    iter_blocks(text) -> Iterator[Block]
    parse_date(text) -> (remaining, date)
    parse_number(text) -> (remaining, Number)
    parse_amount(text) -> (remaining, Amount)
    parse_exchange(text) -> (remaining, Exchange)
    parse_comment(text) -> (remaining, str)
    parse_posting(text) -> (remaining, Posting)
    parse_price(text) -> (remaining, Price)
    parse_entry(text) -> (remaining, Entry)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from .blocks import iter_blocks, recognize_block, recognize_entry, recognize_price
from .dates import recognize_date
from .errors import (
    PARSER_ERROR_CODES,
    ErrorKind,
    InvalidValue,
    LexicalMiss,
    Location,
    ParseFailure,
    ParserError,
    UnexpectedEnd,
    get_error_description,
)
from .models import (
    Amount,
    AmountAndExchange,
    Block,
    CommentLine,
    DecNumber,
    Entry,
    Exchange,
    IntNumber,
    Number,
    PerUnit,
    Posting,
    PostingOrComment,
    Price,
    Total,
)
from .numbers import recognize_amount, recognize_exchange, recognize_number
from .postings import recognize_comment, recognize_posting

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date

T = TypeVar("T")


def _run(recognizer: Callable[[str, int], tuple[int, T]], text: str) -> tuple[str, T]:
    pos, value = recognizer(text, 0)
    return text[pos:], value


def parse_block(text: str) -> tuple[str, Block]:
    """
    Recognize one top-level record.

    Leading blank lines are skipped; the record's final line terminator is
    consumed.

    Raises:
        ParseFailure: If no block can be recognized
    """
    return _run(recognize_block, text)


def parse_all(text: str) -> list[Block]:
    """
    Parse a whole journal.

    Returns:
        Every block in authored order

    Raises:
        ParseFailure: At the first failure
    """
    return list(iter_blocks(text))


def parse_date(text: str) -> tuple[str, date]:
    """Recognize a ``YYYY-MM-DD`` calendar date."""
    return _run(recognize_date, text)


def parse_number(text: str) -> tuple[str, IntNumber | DecNumber]:
    """Recognize a number, keeping its exact decimal layout."""
    return _run(recognize_number, text)


def parse_amount(text: str) -> tuple[str, Amount]:
    """Recognize a number with an optional commodity tag."""
    return _run(recognize_amount, text)


def parse_exchange(text: str) -> tuple[str, PerUnit | Total]:
    """Recognize an ``@`` or ``@@`` exchange rate."""
    return _run(recognize_exchange, text)


def parse_comment(text: str) -> tuple[str, str]:
    """Recognize a ``;`` comment up to the end of the line."""
    return _run(recognize_comment, text)


def parse_posting(text: str) -> tuple[str, Posting]:
    """Recognize a posting line starting at its account name."""
    return _run(recognize_posting, text)


def parse_price(text: str) -> tuple[str, Price]:
    """Recognize a ``P`` price declaration."""
    return _run(recognize_price, text)


def parse_entry(text: str) -> tuple[str, Entry]:
    """Recognize a transaction entry and its postings."""
    return _run(recognize_entry, text)


# =============================================================================
# Public API Exports
# =============================================================================

__all__ = [
    "PARSER_ERROR_CODES",
    # Models
    "Amount",
    "AmountAndExchange",
    "Block",
    "CommentLine",
    "DecNumber",
    "Entry",
    # Errors
    "ErrorKind",
    "Exchange",
    "IntNumber",
    "InvalidValue",
    "LexicalMiss",
    "Location",
    "Number",
    "ParseFailure",
    "ParserError",
    "PerUnit",
    "Posting",
    "PostingOrComment",
    "Price",
    "Total",
    "UnexpectedEnd",
    "get_error_description",
    "iter_blocks",
    "parse_all",
    "parse_amount",
    # Main functions
    "parse_block",
    "parse_comment",
    "parse_date",
    "parse_entry",
    "parse_exchange",
    "parse_number",
    "parse_posting",
    "parse_price",
]
