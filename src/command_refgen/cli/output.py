"""Console output helpers for the command-refgen CLI."""

from __future__ import annotations

import sys

from loguru import logger
from rich.console import Console
from rich.table import Table

from ..core.diagnostics import Diagnostic, DiagnosticLevel
from ..output.reports import ActionSummary

# Workflow commands go to stdout, so human-facing output goes to stderr
console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Route loguru to stderr at INFO, or DEBUG with --verbose."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def print_info(message: str) -> None:
    console.print(f"[blue]ℹ[/blue] {message}")


def print_warning(message: str) -> None:
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_error(message: str) -> None:
    console.print(f"[red]✗[/red] {message}")


def print_diagnostics(diagnostics: list[Diagnostic], limit: int = 20) -> None:
    """Print collected diagnostics, warnings first."""
    if not diagnostics:
        return

    ordered = sorted(diagnostics, key=lambda d: d.level is not DiagnosticLevel.WARNING)
    table = Table(title=f"Diagnostics ({len(diagnostics)})", show_lines=False)
    table.add_column("Level", style="yellow")
    table.add_column("Where", style="cyan", overflow="fold")
    table.add_column("Message")
    for diagnostic in ordered[:limit]:
        table.add_row(str(diagnostic.level), diagnostic.source or "", diagnostic.message)
    console.print(table)

    if len(diagnostics) > limit:
        console.print(f"[dim]... and {len(diagnostics) - limit} more (use --verbose to log all)[/dim]")


def print_summary(summary: ActionSummary) -> None:
    if not summary.updated_metrics:
        print_warning(summary.details)
        return

    print_success(summary.title)
    for path in summary.written_files:
        console.print(f"  [dim]•[/dim] {path}")
