"""
Comment and posting-line recognizers.

A posting line (after its indentation) reads, left to right:

    account  [= ]amount [@|@@ amount]  ; comment

The account runs up to the first space, tab or line end. The amount column
is only entered after a separator of AT LEAST TWO whitespace characters:
``assets:cash 42`` is an account followed by stray text, not an amount, while
``assets:cash  42`` carries the amount 42. This rule is the one place where
whitespace changes meaning in the grammar.
"""

from __future__ import annotations

from .models import AmountAndExchange, Exchange, Posting
from .numbers import recognize_amount, recognize_exchange
from .scanner import WHITESPACE, char, miss, optional, space0, space1, take_till, take_till1


def recognize_comment(text: str, pos: int) -> tuple[int, str]:
    """
    Recognize ``";" <anything but newline>*``.

    The returned text excludes the semicolon and the line terminator (a
    ``\\r`` before the ``\\n`` included). Leading whitespace is kept.
    """
    pos = char(text, pos, ";")
    end, comment = take_till(text, pos, lambda c: c == "\n")
    if comment.endswith("\r") and end < len(text):
        end -= 1
        comment = comment[:-1]
    return end, comment


def _spaced_comment(text: str, pos: int) -> tuple[int, str]:
    pos = space1(text, pos)
    return recognize_comment(text, pos)


def _separator(text: str, pos: int) -> int:
    """At least two whitespace characters between account and amount."""
    end = space0(text, pos)
    if end - pos < 2:
        raise miss(text, pos, "two whitespace characters before the amount")
    return end


def _assertion(text: str, pos: int) -> tuple[int, str]:
    pos = char(text, pos, "=")
    return space0(text, pos), "="


def _spaced_exchange(text: str, pos: int) -> tuple[int, Exchange]:
    pos = space1(text, pos)
    return recognize_exchange(text, pos)


def recognize_amount_and_exchange(text: str, pos: int) -> tuple[int, AmountAndExchange]:
    """Recognize ``["=" ws] Amount [ws Exchange]``."""
    pos, symbol = optional(_assertion, text, pos)
    pos, amount = recognize_amount(text, pos)
    pos, exchange = optional(_spaced_exchange, text, pos)
    return pos, AmountAndExchange(symbol=symbol, amount=amount, exchange=exchange)


def _amount_column(text: str, pos: int) -> tuple[int, AmountAndExchange]:
    pos = _separator(text, pos)
    return recognize_amount_and_exchange(text, pos)


def _is_account_end(c: str) -> bool:
    return c in WHITESPACE or c in "\r\n"


def recognize_posting(text: str, pos: int) -> tuple[int, Posting]:
    """
    Recognize a posting line, starting at the account.

    Trailing whitespace and the line terminator are left to the caller.
    """
    pos, account = take_till1(text, pos, _is_account_end, expected="an account name")
    pos, amount = optional(_amount_column, text, pos)
    pos, comment = optional(_spaced_comment, text, pos)
    return pos, Posting(account=account, amount=amount, comment=comment)
