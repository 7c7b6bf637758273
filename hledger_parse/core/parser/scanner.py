"""
Lexical primitives for the journal grammar.

Every recognizer in this package has the shape

    recognizer(text, pos) -> (new_pos, value)

where ``pos`` is a character offset into the read-only ``text``. On failure a
recognizer raises ``LexicalMiss`` (or ``UnexpectedEnd`` when it ran off the
end of the text). ``optional`` and ``first_of`` turn those two into retries;
``InvalidValue`` always propagates.

Whitespace means spaces and tabs, never a newline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from .errors import LexicalMiss, UnexpectedEnd

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

T = TypeVar("T")

WHITESPACE = " \t"


def miss(text: str, pos: int, expected: str, *, code: str = "HLP-LEX-001") -> LexicalMiss | UnexpectedEnd:
    """Build the failure for ``expected`` not being found at ``pos``."""
    if pos >= len(text):
        return UnexpectedEnd(
            "HLP-EOF-001",
            f"Expected {expected}, found end of input",
            text,
            pos,
            context={"expected": expected},
        )
    return LexicalMiss(
        code,
        f"Expected {expected}, found {text[pos]!r}",
        text,
        pos,
        context={"expected": expected, "found": text[pos]},
    )


# =============================================================================
# Primitives
# =============================================================================


def char(text: str, pos: int, c: str) -> int:
    """Match the single character ``c``."""
    if pos < len(text) and text[pos] == c:
        return pos + 1
    raise miss(text, pos, repr(c))


def tag(text: str, pos: int, literal: str) -> int:
    """Match ``literal`` exactly."""
    if text.startswith(literal, pos):
        return pos + len(literal)
    raise miss(text, pos, repr(literal))


def take_while(text: str, pos: int, predicate: Callable[[str], bool]) -> tuple[int, str]:
    """Consume characters while ``predicate`` holds (possibly none)."""
    end = pos
    while end < len(text) and predicate(text[end]):
        end += 1
    return end, text[pos:end]


def take_till(text: str, pos: int, predicate: Callable[[str], bool]) -> tuple[int, str]:
    """Consume characters until ``predicate`` holds (possibly none)."""
    return take_while(text, pos, lambda c: not predicate(c))


def take_till1(
    text: str, pos: int, predicate: Callable[[str], bool], expected: str = "at least one character"
) -> tuple[int, str]:
    """Like ``take_till`` but at least one character must be consumed."""
    end, value = take_till(text, pos, predicate)
    if not value:
        raise miss(text, pos, expected)
    return end, value


def space0(text: str, pos: int) -> int:
    """Skip zero or more spaces and tabs."""
    end, _ = take_while(text, pos, lambda c: c in WHITESPACE)
    return end


def space1(text: str, pos: int) -> int:
    """Skip one or more spaces and tabs."""
    end = space0(text, pos)
    if end == pos:
        raise miss(text, pos, "whitespace")
    return end


def digit1(text: str, pos: int) -> tuple[int, str]:
    """One or more ASCII digits."""
    end, value = take_while(text, pos, lambda c: "0" <= c <= "9")
    if not value:
        raise miss(text, pos, "a digit")
    return end, value


def alpha1(text: str, pos: int) -> tuple[int, str]:
    """One or more ASCII letters."""
    end, value = take_while(text, pos, lambda c: c.isascii() and c.isalpha())
    if not value:
        raise miss(text, pos, "a letter")
    return end, value


def line_ending(text: str, pos: int) -> int:
    """Match ``\\n`` or ``\\r\\n``."""
    if text.startswith("\n", pos):
        return pos + 1
    if text.startswith("\r\n", pos):
        return pos + 2
    raise miss(text, pos, "end of line", code="HLP-LEX-002")


def end_of_line(text: str, pos: int) -> int:
    """Skip trailing whitespace, then a line ending or the end of input."""
    pos = space0(text, pos)
    if pos == len(text):
        return pos
    return line_ending(text, pos)


def at_line_end(text: str, pos: int) -> bool:
    """Check if ``pos`` is at a line ending or the end of input."""
    return pos >= len(text) or text.startswith(("\n", "\r\n"), pos)


# =============================================================================
# Combinators
# =============================================================================


def optional(recognizer: Callable[[str, int], tuple[int, T]], text: str, pos: int) -> tuple[int, T | None]:
    """Run ``recognizer``; on a miss stay at ``pos`` and yield None."""
    try:
        return recognizer(text, pos)
    except (LexicalMiss, UnexpectedEnd):
        return pos, None


def first_of(recognizers: Sequence[Callable[[str, int], tuple[int, T]]], text: str, pos: int) -> tuple[int, T]:
    """Return the result of the first recognizer that matches at ``pos``."""
    failure: LexicalMiss | UnexpectedEnd | None = None
    for recognizer in recognizers:
        try:
            return recognizer(text, pos)
        except (LexicalMiss, UnexpectedEnd) as e:
            failure = failure or e
    if failure is None:
        raise miss(text, pos, "one of the alternatives")
    raise failure
