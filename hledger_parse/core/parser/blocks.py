"""
Top-level records: price declarations, entries and the block dispatcher.

A journal is a sequence of blocks separated by blank lines. The first
non-whitespace character of a block's first line decides its kind:

    P      -> Price        P 2022-07-12 TSLA 699.21 U ; great buy?
    ;      -> CommentLine  ; a standalone comment
    digit  -> Entry        2022-07-16 Grocery store ; weekly shop
                               expenses:food   42.50 CAD
                               assets:cash    -42.50 CAD

Anything else is an unrecognized block. Parsing stops at the first failure;
there is no recovery.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hledger_parse.logging_setup import get_logger

from .dates import recognize_date
from .errors import InvalidValue, LexicalMiss
from .models import Block, CommentLine, Entry, Posting, PostingOrComment, Price
from .numbers import recognize_amount
from .postings import recognize_comment, recognize_posting
from .scanner import (
    WHITESPACE,
    alpha1,
    at_line_end,
    char,
    end_of_line,
    line_ending,
    miss,
    optional,
    space0,
    space1,
    take_till,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import date

_logger = get_logger(__name__)


# =============================================================================
# Price
# =============================================================================


def _spaced_comment(text: str, pos: int) -> tuple[int, str]:
    pos = space1(text, pos)
    return recognize_comment(text, pos)


def recognize_price(text: str, pos: int) -> tuple[int, Price]:
    """Recognize ``"P" ws Date ws Asset ws Amount [ws Comment]``."""
    pos = char(text, pos, "P")
    pos = space1(text, pos)
    pos, when = recognize_date(text, pos)
    pos = space1(text, pos)
    pos, asset = alpha1(text, pos)
    pos = space1(text, pos)
    pos, amount = recognize_amount(text, pos)
    pos, comment = optional(_spaced_comment, text, pos)
    return pos, Price(date=when, asset=asset, amount=amount, comment=comment)


# =============================================================================
# Entry
# =============================================================================


def _description(text: str, pos: int) -> tuple[int, str]:
    """Everything up to a ``;`` or the line end, without trailing whitespace."""
    end, raw = take_till(text, pos, lambda c: c in ";\n")
    if raw.endswith("\r") and end < len(text) and text[end] == "\n":
        end -= 1
        raw = raw[:-1]
    return end, raw.rstrip(WHITESPACE)


def _header(text: str, pos: int) -> tuple[int, tuple[date, str, str | None]]:
    """Recognize ``Date [ws Description] [Comment]`` up to the line end."""
    pos, when = recognize_date(text, pos)
    description = ""
    if not at_line_end(text, pos):
        pos = space1(text, pos)
        pos, description = _description(text, pos)
    comment = None
    if text.startswith(";", pos):
        pos, comment = recognize_comment(text, pos)
    return pos, (when, description, comment)


def _content_line(text: str, pos: int) -> tuple[int, PostingOrComment | None]:
    """
    Recognize one indented line of an entry, including its terminator.

    Yields None without consuming anything when the line is not indented or
    holds only whitespace: both end the entry.
    """
    indented = space0(text, pos)
    if indented == pos or at_line_end(text, indented):
        return pos, None

    line: PostingOrComment
    if text.startswith(";", indented):
        end, comment = recognize_comment(text, indented)
        line = CommentLine(text=comment)
    else:
        end, line = recognize_posting(text, indented)
    return end_of_line(text, end), line


def recognize_entry(text: str, pos: int) -> tuple[int, Entry]:
    """
    Recognize a header line followed by its indented content lines.

    The entry ends at the first line that is not indented, a blank line or
    the end of input. The terminator of the last content line is consumed.

    Raises:
        InvalidValue: If fewer than two postings were found
    """
    start = pos
    pos, (when, description, comment) = _header(text, pos)
    if pos == len(text):
        raise miss(text, pos, "a posting line")
    pos = line_ending(text, pos)

    lines: list[PostingOrComment] = []
    while pos < len(text):
        pos, line = _content_line(text, pos)
        if line is None:
            break
        lines.append(line)

    postings = sum(1 for line in lines if isinstance(line, Posting))
    if postings < 2:
        raise InvalidValue(
            "HLP-ENT-001",
            f"Entry has {postings} posting(s), at least two are required",
            text,
            start,
            context={"postings": postings},
        )

    return pos, Entry(date=when, description=description, comment=comment, lines=tuple(lines))


# =============================================================================
# Dispatcher
# =============================================================================


def skip_blank_lines(text: str, pos: int) -> int:
    """Skip lines holding nothing but whitespace."""
    while pos < len(text):
        end = space0(text, pos)
        if end == len(text):
            return end
        if not text.startswith(("\n", "\r\n"), end):
            return pos
        pos = line_ending(text, end)
    return pos


def recognize_block(text: str, pos: int) -> tuple[int, Block]:
    """
    Recognize the next top-level record, skipping blank lines before it.

    The terminator of the record's last line is consumed.

    Raises:
        UnexpectedEnd: If only blank lines remain
        LexicalMiss: If the block does not start with P, ; or a digit
    """
    pos = skip_blank_lines(text, pos)
    pos = space0(text, pos)
    if pos >= len(text):
        raise miss(text, pos, "a block")

    first = text[pos]
    block: Block
    if first == "P":
        pos, block = recognize_price(text, pos)
        pos = end_of_line(text, pos)
    elif first == ";":
        pos, comment = recognize_comment(text, pos)
        block = CommentLine(text=comment)
        pos = end_of_line(text, pos)
    elif "0" <= first <= "9":
        pos, block = recognize_entry(text, pos)
    else:
        raise LexicalMiss(
            "HLP-BLK-001",
            f"A block must start with 'P', ';' or a date, found {first!r}",
            text,
            pos,
            context={"found": first},
        )
    return pos, block


def iter_blocks(text: str) -> Iterator[Block]:
    """
    Lazily yield every block of ``text`` in order.

    Raises:
        ParseFailure: At the first failure; blocks before it have been yielded
    """
    pos = skip_blank_lines(text, 0)
    while pos < len(text):
        start = pos
        pos, block = recognize_block(text, pos)
        _logger.debug("Parsed %s block at offset %d", block.kind, start)
        yield block
        pos = skip_blank_lines(text, pos)
