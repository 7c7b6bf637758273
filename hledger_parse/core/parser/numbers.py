"""
Number, amount and exchange-rate recognizers.

Numbers are parsed into the tagged, non-lossy form of ``models.py``:

    600          -> IntNumber(600)
    600.         -> DecNumber(600, 0, None)
    600.000      -> DecNumber(600, 3, None)
    600.000123   -> DecNumber(600, 3, 123)
    -1.5         -> DecNumber(-1, 0, 5)

At least one digit is required before the point. Only ``-`` is accepted as
a sign.
"""

from __future__ import annotations

from .errors import LexicalMiss
from .models import I64_MAX, I64_MIN, U64_MAX, Amount, DecNumber, Exchange, IntNumber, PerUnit, Total
from .scanner import alpha1, char, digit1, first_of, optional, space1, tag, take_while


def recognize_number(text: str, pos: int) -> tuple[int, IntNumber | DecNumber]:
    """
    Recognize ``[-]digits[.0*[digits]]``.

    Raises:
        LexicalMiss: If no number starts at ``pos`` or a part overflows 64 bits
    """
    start = pos
    negative = text.startswith("-", pos)
    if negative:
        pos += 1
    pos, int_digits = digit1(text, pos)
    significant = int_digits.lstrip("0") or "0"
    if len(significant) > 19:
        raise _out_of_range(text, start, pos)
    integer_part = -int(significant) if negative else int(significant)
    if not I64_MIN <= integer_part <= I64_MAX:
        raise _out_of_range(text, start, pos)

    if not text.startswith(".", pos):
        return pos, IntNumber(value=integer_part, negative=negative)

    pos, zeroes = take_while(text, pos + 1, lambda c: c == "0")
    pos, trailing = optional(digit1, text, pos)
    if trailing is None:
        trailing_digits = None
    elif len(trailing) > 20 or int(trailing) > U64_MAX:
        raise _out_of_range(text, start, pos)
    else:
        trailing_digits = int(trailing)

    return pos, DecNumber(
        integer_part=integer_part,
        leading_zeroes=len(zeroes),
        trailing_digits=trailing_digits,
        negative=negative,
    )


def _out_of_range(text: str, start: int, end: int) -> LexicalMiss:
    return LexicalMiss(
        "HLP-NUM-001",
        f"Number does not fit in 64 bits: '{text[start:end]}'",
        text,
        start,
        context={"raw_value": text[start:end]},
    )


def _commodity(text: str, pos: int) -> tuple[int, str]:
    pos = space1(text, pos)
    return alpha1(text, pos)


def recognize_amount(text: str, pos: int) -> tuple[int, Amount]:
    """Recognize ``Number [whitespace letters]``, e.g. ``699.21 U``."""
    pos, number = recognize_number(text, pos)
    pos, commodity = optional(_commodity, text, pos)
    return pos, Amount(number=number, commodity=commodity)


def _total(text: str, pos: int) -> tuple[int, Exchange]:
    pos = tag(text, pos, "@@")
    pos = space1(text, pos)
    pos, amount = recognize_amount(text, pos)
    return pos, Total(amount=amount)


def _per_unit(text: str, pos: int) -> tuple[int, Exchange]:
    pos = char(text, pos, "@")
    pos = space1(text, pos)
    pos, amount = recognize_amount(text, pos)
    return pos, PerUnit(amount=amount)


def recognize_exchange(text: str, pos: int) -> tuple[int, Exchange]:
    """
    Recognize ``("@@" | "@") whitespace Amount``.

    ``@@`` is tried first so that it is never read as ``@`` followed by a
    stray ``@``.
    """
    return first_of([_total, _per_unit], text, pos)
