"""
Parser error models.

This module defines structured errors for the journal parser.
All parser errors use error codes from the HLP-XXX-NNN taxonomy.

Three kinds of failure exist:
- LEXICAL: the input does not match the grammar at the current position.
  Optional and alternative combinators may retry after one of these.
- INVALID: the grammar matched but the value is nonsensical (month 13,
  Feb 30, an entry with a single posting). Never retried.
- EOF: more input was required at a non-optional position.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ErrorKind(Enum):
    """Failure kinds."""

    LEXICAL = "lexical"  # Grammar mismatch, retryable
    INVALID = "invalid"  # Semantic error, never retried
    EOF = "eof"  # Ran out of input


class Location(BaseModel, frozen=True):
    """Error location in the input text."""

    offset: int = Field(ge=0, description="0-indexed character offset")
    byte_offset: int | None = Field(default=None, ge=0, description="0-indexed UTF-8 byte offset")
    line_no: int | None = None
    column: int | None = None

    @classmethod
    def from_offset(cls, text: str, offset: int) -> Location:
        """Build a location with 1-indexed line and column for an offset."""
        offset = min(max(offset, 0), len(text))
        line_start = text.rfind("\n", 0, offset) + 1
        return cls(
            offset=offset,
            byte_offset=len(text[:offset].encode("utf-8", "surrogatepass")),
            line_no=text.count("\n", 0, offset) + 1,
            column=offset - line_start + 1,
        )

    def __str__(self) -> str:
        """Format location for display."""
        if self.line_no is not None and self.column is not None:
            return f"line {self.line_no}, col {self.column}"
        return f"offset {self.offset}"


class ParserError(BaseModel, frozen=True):
    """
    Structured parser error.

    Uses error codes from the Error Taxonomy (HLP-XXX-NNN).
    Error domains:
    - HLP-LEX-*: Grammar mismatches
    - HLP-EOF-*: Unexpected end of input
    - HLP-NUM-*: Number literal errors
    - HLP-DATE-*: Date errors
    - HLP-ENT-*: Entry structure errors
    - HLP-BLK-*: Top-level block errors
    """

    code: str = Field(
        pattern=r"^HLP-[A-Z]{2,5}-\d{3}$",
        description="Error code, e.g., 'HLP-LEX-001'",
    )
    kind: ErrorKind
    title: str = Field(description="Short error title")
    message: str = Field(description="Detailed error message")
    location: Location
    context: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional context (expected, found, etc.)",
    )

    def __str__(self) -> str:
        """Format error for display."""
        return f"[{self.code}] {self.kind.value.upper()}: {self.title} - {self.message} ({self.location})"


# =============================================================================
# Exceptions
# =============================================================================


class ParseFailure(Exception):
    """
    Raised by every recognizer on failure.

    The offset counts characters from the start of the text handed to the
    public parse function. On non-ASCII input it differs from the UTF-8
    byte offset, which ``location.byte_offset`` reports. The source text is
    kept by reference only so that the location can be computed on demand.
    """

    kind: ErrorKind = ErrorKind.LEXICAL

    def __init__(
        self,
        code: str,
        message: str,
        source: str,
        offset: int,
        *,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.source = source
        self.offset = offset
        self.context = context or {}
        super().__init__(f"offset {offset}: {message}")

    @property
    def location(self) -> Location:
        """Location of the failure with line and column."""
        return Location.from_offset(self.source, self.offset)

    @property
    def error(self) -> ParserError:
        """Structured form of this failure."""
        return ParserError(
            code=self.code,
            kind=self.kind,
            title=get_error_description(self.code) or "Parse failure",
            message=self.message,
            location=self.location,
            context=self.context,
        )


class LexicalMiss(ParseFailure):
    """Input does not match the grammar here."""

    kind = ErrorKind.LEXICAL


class InvalidValue(ParseFailure):
    """Grammar matched but the value is invalid."""

    kind = ErrorKind.INVALID


class UnexpectedEnd(ParseFailure):
    """Input ended where more was required."""

    kind = ErrorKind.EOF


# =============================================================================
# Error Codes Registry
# =============================================================================

PARSER_ERROR_CODES: dict[str, str] = {
    # Grammar errors
    "HLP-LEX-001": "Unexpected input",
    "HLP-LEX-002": "Expected end of line",
    # End of input
    "HLP-EOF-001": "Unexpected end of input",
    # Number errors
    "HLP-NUM-001": "Number out of range",
    # Date errors
    "HLP-DATE-001": "Month out of range",
    "HLP-DATE-002": "Invalid calendar date",
    # Entry errors
    "HLP-ENT-001": "Entry has fewer than two postings",
    # Block errors
    "HLP-BLK-001": "Unrecognized block",
}


def get_error_description(code: str) -> str | None:
    """Get the description for an error code."""
    return PARSER_ERROR_CODES.get(code)
