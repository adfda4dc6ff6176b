"""Console output helpers for the CLI."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, NoReturn

import click

if TYPE_CHECKING:
    from chromecastise.cli.exit_codes import ExitCode
    from chromecastise.workflow import BatchResult, FileResult


def error_exit(message: str, code: ExitCode | int) -> NoReturn:
    """Print ``Error: message`` to stderr and exit with ``code``."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(int(code))


def format_summary(result: BatchResult) -> str:
    """One-line batch summary."""
    total = len(result.results)
    return (
        f"Processed {total} file(s): {result.converted} converted, "
        f"{result.skipped} skipped, {result.failed} failed"
    )


def echo_file_output(file_result: FileResult) -> None:
    """Print the captured encoder output of one file, if it ran the encoder."""
    if file_result.process_result is None:
        return
    click.echo(f"==> {file_result.path}")
    click.echo(file_result.process_result.output.rstrip())
