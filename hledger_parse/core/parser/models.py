"""
Parser data models.

Record tree produced by the journal parser.

CRITICAL DESIGN DECISIONS:
- Amounts are NEVER floats. DecNumber keeps the integer part, the run of
  zeroes after the point and the remaining digits, so "600.000" and "600.0"
  stay distinguishable and print back exactly as typed.
- Closed variants (Number, Exchange, PostingOrComment, Block) are unions of
  sibling models tagged with a ``kind`` literal, never subclass hierarchies.
- All models are frozen (immutable) once the parser builds them.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, model_validator

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1
U64_MAX = 2**64 - 1


# =============================================================================
# Numbers
# =============================================================================


def _equality_key(number: IntNumber | DecNumber) -> tuple[object, ...]:
    """
    Key under which two numbers compare equal.

    A decimal without trailing digits denotes the same exact value as the
    integer, whatever its zero run. Decimals with trailing digits only match
    each other, field by field.
    """
    if isinstance(number, IntNumber):
        return ("exact", number.value)
    if number.trailing_digits is None:
        return ("exact", number.integer_part)
    return (
        "fraction",
        number.integer_part,
        number.leading_zeroes,
        number.trailing_digits,
        number.is_negative_zero,
    )


class IntNumber(BaseModel, frozen=True):
    """An amount written without a decimal point, e.g. ``600``."""

    kind: Literal["int"] = "int"
    value: int = Field(ge=I64_MIN, le=I64_MAX)
    # "-0": the sign cannot live on a value of zero
    negative: bool = False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (IntNumber, DecNumber)):
            return _equality_key(self) == _equality_key(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(_equality_key(self))

    def __str__(self) -> str:
        if self.negative and self.value == 0:
            return "-0"
        return str(self.value)

    def to_decimal(self) -> Decimal:
        """Exact value as a Decimal."""
        return Decimal(self.value)


class DecNumber(BaseModel, frozen=True):
    """
    An amount written with a decimal point.

    ``600.000123`` is ``DecNumber(integer_part=600, leading_zeroes=3,
    trailing_digits=123)``; ``600.`` has no zeroes and no trailing digits.
    """

    kind: Literal["dec"] = "dec"
    integer_part: int = Field(ge=I64_MIN, le=I64_MAX)
    leading_zeroes: int = Field(default=0, ge=0, description="Zeroes right after the point")
    trailing_digits: int | None = Field(default=None, ge=0, le=U64_MAX)
    # "-0.5": the sign cannot live on an integer part of zero
    negative: bool = False

    @property
    def is_negative_zero(self) -> bool:
        """True for literals like ``-0.5`` whose sign sits on a zero integer part."""
        return self.negative and self.integer_part == 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (IntNumber, DecNumber)):
            return _equality_key(self) == _equality_key(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(_equality_key(self))

    def __str__(self) -> str:
        sign = "-" if self.is_negative_zero else ""
        digits = "" if self.trailing_digits is None else str(self.trailing_digits)
        return f"{sign}{self.integer_part}.{'0' * self.leading_zeroes}{digits}"

    def to_decimal(self) -> Decimal:
        """Exact value as a Decimal, keeping the authored exponent."""
        return Decimal(str(self))


Number = Annotated[Union[IntNumber, DecNumber], Field(discriminator="kind")]


# =============================================================================
# Amounts and exchange rates
# =============================================================================


class Amount(BaseModel, frozen=True):
    """A number with an optional commodity tag, e.g. ``42.50 CAD``."""

    number: Number
    commodity: str | None = Field(default=None, pattern=r"^[A-Za-z]+$")

    def __str__(self) -> str:
        if self.commodity is None:
            return str(self.number)
        return f"{self.number} {self.commodity}"


class PerUnit(BaseModel, frozen=True):
    """Cost of one unit: ``11.23 CAD @ 1.21 USD``."""

    kind: Literal["per_unit"] = "per_unit"
    amount: Amount

    def __str__(self) -> str:
        return f"@ {self.amount}"


class Total(BaseModel, frozen=True):
    """Cost of the whole quantity: ``200000 YEN @@ 1927.20 CAD``."""

    kind: Literal["total"] = "total"
    amount: Amount

    def __str__(self) -> str:
        return f"@@ {self.amount}"


Exchange = Annotated[Union[PerUnit, Total], Field(discriminator="kind")]


class AmountAndExchange(BaseModel, frozen=True):
    """The amount column of a posting line."""

    symbol: str | None = Field(
        default=None,
        min_length=1,
        max_length=1,
        description="Assertion symbol; only '=' is recognized",
    )
    amount: Amount
    exchange: Exchange | None = None

    @property
    def is_assertion(self) -> bool:
        """Check if the amount is a balance assertion."""
        return self.symbol == "="


# =============================================================================
# Records
# =============================================================================


class CommentLine(BaseModel, frozen=True):
    """Text after a ``;``, without the semicolon and the newline."""

    kind: Literal["comment"] = "comment"
    text: str


class Posting(BaseModel, frozen=True):
    """One leg of an entry."""

    kind: Literal["posting"] = "posting"
    account: str = Field(
        min_length=1,
        pattern=r"^[^ \t\r\n]+$",
        description="Colon-separated account path, never contains whitespace",
    )
    amount: AmountAndExchange | None = None
    comment: str | None = None


PostingOrComment = Annotated[Union[Posting, CommentLine], Field(discriminator="kind")]


class Entry(BaseModel, frozen=True):
    """
    A transaction: a dated header line and its indented postings.

    Comment lines stay in authored order among the postings and do not count
    toward the two-posting minimum.
    """

    kind: Literal["entry"] = "entry"
    date: date
    description: str
    comment: str | None = None
    lines: tuple[PostingOrComment, ...]

    @model_validator(mode="after")
    def check_postings(self) -> Entry:
        if len(self.postings) < 2:
            raise ValueError("an entry needs at least two postings")
        return self

    @property
    def postings(self) -> list[Posting]:
        """Postings in authored order."""
        return [line for line in self.lines if isinstance(line, Posting)]

    @property
    def comments(self) -> list[CommentLine]:
        """Comment lines between the postings, in authored order."""
        return [line for line in self.lines if isinstance(line, CommentLine)]


class Price(BaseModel, frozen=True):
    """
    A price declaration.

    > P 2022-07-12 TSLA 699.21 U
    """

    kind: Literal["price"] = "price"
    date: date
    asset: str = Field(pattern=r"^[A-Za-z]+$")
    amount: Amount
    comment: str | None = None


Block = Annotated[Union[Entry, Price, CommentLine], Field(discriminator="kind")]
