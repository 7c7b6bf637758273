"""
ISO date recognizer.

Journal dates are written ``YYYY-MM-DD``. The three fields are read as plain
digit runs, then checked: the month must be 1..12 and the triple must name a
real Gregorian date (no Feb 30). Years outside 1..9999 are rejected.
"""

from __future__ import annotations

from datetime import date

from .errors import InvalidValue
from .scanner import char, digit1


def recognize_date(text: str, pos: int) -> tuple[int, date]:
    """
    Recognize ``digits "-" digits "-" digits`` as a calendar date.

    Args:
        text: Input text
        pos: Offset of the first year digit

    Returns:
        Tuple of (offset after the day, date)

    Raises:
        LexicalMiss: If the input is not shaped like a date
        InvalidValue: If the month or the full date is impossible
    """
    start = pos
    pos, year = digit1(text, pos)
    pos = char(text, pos, "-")
    month_pos = pos
    pos, raw_month = digit1(text, pos)
    pos = char(text, pos, "-")
    pos, day = digit1(text, pos)
    year, month, day = (field.lstrip("0") or "0" for field in (year, raw_month, day))

    if len(month) > 2 or not 1 <= int(month) <= 12:
        raise InvalidValue(
            "HLP-DATE-001",
            f"Month must be between 1 and 12, got {raw_month}",
            text,
            month_pos,
            context={"raw_value": text[start:pos]},
        )

    if len(year) > 4 or len(day) > 2:
        raise _not_a_date(text, start, pos)
    try:
        return pos, date(int(year), int(month), int(day))
    except ValueError:
        raise _not_a_date(text, start, pos) from None


def _not_a_date(text: str, start: int, end: int) -> InvalidValue:
    return InvalidValue(
        "HLP-DATE-002",
        f"Not a calendar date: '{text[start:end]}'",
        text,
        start,
        context={"raw_value": text[start:end]},
    )
