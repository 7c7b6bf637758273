"""
Terminal output adapter.

Renders parse results with ANSI colors when writing to a TTY.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from hledger_parse.cli.output.base import OutputAdapter, OutputFormat

if TYPE_CHECKING:
    from hledger_parse.cli.output.base import JournalSummary
    from hledger_parse.core.parser import ParserError


def _supports_unicode() -> bool:
    """Check if terminal supports Unicode."""
    try:
        "✓".encode(sys.stdout.encoding or "utf-8")
        return True
    except (UnicodeEncodeError, LookupError):
        return False


SUCCESS_SYMBOL_UNICODE = "✓"
SUCCESS_SYMBOL_ASCII = "OK"
FAILURE_SYMBOL_UNICODE = "✖"
FAILURE_SYMBOL_ASCII = "X"

STYLE_CODES = {
    "bold": "\033[1m",
    "red": "\033[31m",
    "green": "\033[32m",
    "bold red": "\033[1;31m",
}
RESET = "\033[0m"


class TerminalOutput(OutputAdapter):
    """Terminal output with ANSI colors."""

    format = OutputFormat.TERMINAL

    def __init__(self, stream: TextIO | None = None, color: bool = True):
        super().__init__(stream=stream, color=color)
        self._use_color = color and self._is_tty()
        use_unicode = _supports_unicode()
        self._success_symbol = SUCCESS_SYMBOL_UNICODE if use_unicode else SUCCESS_SYMBOL_ASCII
        self._failure_symbol = FAILURE_SYMBOL_UNICODE if use_unicode else FAILURE_SYMBOL_ASCII

    def _is_tty(self) -> bool:
        """Check if output is a TTY."""
        return hasattr(self.stream, "isatty") and self.stream.isatty()

    def render_summary(self, summary: JournalSummary) -> str:
        """Render block counts."""
        counts = (
            f"{summary.entries} entr{'y' if summary.entries == 1 else 'ies'}, "
            f"{summary.postings} posting(s), "
            f"{summary.prices} price(s), "
            f"{summary.comments} comment(s)"
        )
        header = self._style(f"{self._success_symbol} {summary.file}", "green")
        return f"{header}\n  {counts}"

    def render_failure(self, file: str, error: ParserError) -> str:
        """Render the failure with its position."""
        header = self._style(f"{self._failure_symbol} {file}:{error.location}", "bold red")
        return f"{header}\n  [{error.code}] {error.title}: {error.message}"

    def _style(self, text: str, style: str) -> str:
        """Apply style to text if colors are enabled."""
        if not self._use_color:
            return text
        code = STYLE_CODES.get(style, "")
        if code:
            return f"{code}{text}{RESET}"
        return text
