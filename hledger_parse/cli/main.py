"""
Main CLI application.

Entry point for the hledger-parse command.
"""

from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import Annotated

import typer
from pydantic import TypeAdapter

import hledger_parse
from hledger_parse.cli.context import CliContext, ConfigError, ExitCode
from hledger_parse.cli.output import JournalSummary, OutputFormat, get_output_adapter
from hledger_parse.core.parser import Block, ParseFailure, parse_all
from hledger_parse.logging_setup import configure_logging, get_logger

_logger = get_logger(__name__)

_BLOCKS = TypeAdapter(list[Block])

# Create main app
app = typer.Typer(
    name="hledger-parse",
    help="hledger journal parser",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"hledger-parse {hledger_parse.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level (defaults to HLEDGER_PARSE_LOG_LEVEL or WARNING)"),
    ] = None,
) -> None:
    """hledger journal parser."""
    configure_logging(log_level)


def _read_journal(file: Path, ctx: CliContext) -> str:
    """Read and decode a journal, enforcing the size limit."""
    with file.open("rb") as f:
        data = f.read() if ctx.max_bytes is None else f.read(ctx.max_bytes + 1)
    if ctx.max_bytes is not None and len(data) > ctx.max_bytes:
        typer.echo(f"File exceeds maximum size of {ctx.max_bytes} bytes: {file}", err=True)
        raise typer.Exit(ExitCode.FATAL)
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        typer.echo(f"File is not valid UTF-8: {file} ({e.reason} at byte {e.start})", err=True)
        raise typer.Exit(ExitCode.FATAL) from None


def _build_context(max_bytes: int | None, **options: object) -> CliContext:
    try:
        return CliContext.from_options(max_bytes, **options)
    except ConfigError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(ExitCode.CONFIG) from None


# =============================================================================
# Check Command
# =============================================================================


@app.command()
def check(
    file: Annotated[Path, typer.Argument(help="Journal file to check", exists=True, dir_okay=False)],
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: terminal, json"),
    ] = "terminal",
    color: Annotated[
        bool,
        typer.Option("--color/--no-color", help="Enable/disable colored output"),
    ] = True,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress output on success"),
    ] = False,
    max_bytes: Annotated[
        int | None,
        typer.Option(
            "--max-bytes",
            help="Maximum input size in bytes (0 = unlimited). Defaults to HLEDGER_PARSE_MAX_BYTES or 100MiB.",
        ),
    ] = None,
) -> None:
    """Parse a journal and report what it holds or where it fails."""
    ctx = _build_context(max_bytes, format=format, color=color, quiet=quiet)

    try:
        output_format = OutputFormat(ctx.format)
    except ValueError:
        typer.echo(f"Unknown format: {ctx.format}", err=True)
        typer.echo("Available formats: terminal, json", err=True)
        raise typer.Exit(ExitCode.USAGE) from None

    adapter = get_output_adapter(output_format, color=ctx.color)
    text = _read_journal(file, ctx)

    try:
        blocks = parse_all(text)
    except ParseFailure as e:
        _logger.debug("Parse failure in %s: %s", file, e)
        adapter.write(adapter.render_failure(str(file), e.error))
        raise typer.Exit(ExitCode.FATAL) from None

    if not ctx.quiet:
        adapter.write(adapter.render_summary(JournalSummary.from_blocks(str(file), blocks)))
    raise typer.Exit(ExitCode.SUCCESS)


# =============================================================================
# Dump Command
# =============================================================================


@app.command()
def dump(
    file: Annotated[Path, typer.Argument(help="Journal file to dump", exists=True, dir_okay=False)],
    max_bytes: Annotated[
        int | None,
        typer.Option("--max-bytes", help="Maximum input size in bytes (0 = unlimited)"),
    ] = None,
) -> None:
    """Print the parsed record tree as JSON."""
    ctx = _build_context(max_bytes)
    text = _read_journal(file, ctx)

    try:
        blocks = parse_all(text)
    except ParseFailure as e:
        typer.echo(str(e.error), err=True)
        raise typer.Exit(ExitCode.FATAL) from None

    typer.echo(_BLOCKS.dump_json(blocks, indent=2).decode())


if __name__ == "__main__":
    app()
