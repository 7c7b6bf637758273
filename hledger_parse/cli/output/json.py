"""
JSON output adapter.

Renders parse results as JSON for machine processing.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, TextIO

from hledger_parse.cli.output.base import OutputAdapter, OutputFormat

if TYPE_CHECKING:
    from hledger_parse.cli.output.base import JournalSummary
    from hledger_parse.core.parser import ParserError


class JsonOutput(OutputAdapter):
    """JSON output adapter."""

    format = OutputFormat.JSON

    def __init__(self, stream: TextIO | None = None, color: bool = False, indent: int = 2):
        super().__init__(stream=stream, color=False)  # Never colorize JSON
        self.indent = indent

    def render_summary(self, summary: JournalSummary) -> str:
        """Render summary as JSON."""
        output: dict[str, Any] = {"ok": True, "summary": summary.model_dump()}
        return json.dumps(output, indent=self.indent)

    def render_failure(self, file: str, error: ParserError) -> str:
        """Render the failure as JSON."""
        output: dict[str, Any] = {
            "ok": False,
            "file": file,
            "error": error.model_dump(mode="json"),
        }
        return json.dumps(output, indent=self.indent, default=str)
