"""
Output adapter base classes.

Defines the interface for output adapters.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, TextIO

from pydantic import BaseModel

from hledger_parse.core.parser import CommentLine, Entry, Price

if TYPE_CHECKING:
    from collections.abc import Iterable

    from hledger_parse.core.parser import Block, ParserError


class OutputFormat(Enum):
    """Supported output formats."""

    TERMINAL = "terminal"
    JSON = "json"


class JournalSummary(BaseModel, frozen=True):
    """Counts of what a journal holds."""

    file: str
    entries: int = 0
    postings: int = 0
    prices: int = 0
    comments: int = 0

    @classmethod
    def from_blocks(cls, file: str, blocks: Iterable[Block]) -> JournalSummary:
        """Count the blocks of a parsed journal."""
        entries = postings = prices = comments = 0
        for block in blocks:
            if isinstance(block, Entry):
                entries += 1
                postings += len(block.postings)
                comments += len(block.comments)
            elif isinstance(block, Price):
                prices += 1
            elif isinstance(block, CommentLine):
                comments += 1
        return cls(file=file, entries=entries, postings=postings, prices=prices, comments=comments)


class OutputAdapter(ABC):
    """Base class for output adapters."""

    format: OutputFormat

    def __init__(self, stream: TextIO | None = None, color: bool = True):
        self.stream = stream or sys.stdout
        self.color = color

    @abstractmethod
    def render_summary(self, summary: JournalSummary) -> str:
        """Render a successful parse."""
        pass

    @abstractmethod
    def render_failure(self, file: str, error: ParserError) -> str:
        """Render the first parse failure."""
        pass

    def write(self, content: str) -> None:
        """Write content to stream."""
        self.stream.write(content)
        if not content.endswith("\n"):
            self.stream.write("\n")
        self.stream.flush()


def get_output_adapter(
    format: OutputFormat | str,
    stream: TextIO | None = None,
    color: bool = True,
) -> OutputAdapter:
    """Get an output adapter by format."""
    if isinstance(format, str):
        format = OutputFormat(format)

    if format == OutputFormat.TERMINAL:
        from hledger_parse.cli.output.terminal import TerminalOutput

        return TerminalOutput(stream=stream, color=color)
    elif format == OutputFormat.JSON:
        from hledger_parse.cli.output.json import JsonOutput

        return JsonOutput(stream=stream, color=color)
    else:
        raise ValueError(f"Unknown output format: {format}")
