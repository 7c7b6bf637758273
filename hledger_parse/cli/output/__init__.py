"""
Output adapters for CLI.

Provides different output formats: terminal, JSON.
"""

from hledger_parse.cli.output.base import JournalSummary, OutputAdapter, OutputFormat, get_output_adapter
from hledger_parse.cli.output.json import JsonOutput
from hledger_parse.cli.output.terminal import TerminalOutput

__all__ = [
    "JournalSummary",
    "JsonOutput",
    "OutputAdapter",
    "OutputFormat",
    "TerminalOutput",
    "get_output_adapter",
]
