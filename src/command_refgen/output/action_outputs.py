"""GitHub Actions output parameters.

With ``GITHUB_OUTPUT`` set, outputs are appended to that file; multi-line
values use the heredoc form::

    summary-details<<ghadelimiter_3f2a...
    first line
    second line
    ghadelimiter_3f2a...

Without it, the legacy ``::set-output`` workflow commands are printed.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from pathlib import Path

import typer
from loguru import logger

from ..core.exceptions import OutputError
from .reports import ActionSummary


def summary_outputs(summary: ActionSummary) -> dict[str, str]:
    """Output parameters in the order they are emitted."""
    return {
        "updated-metrics": str(summary.updated_metrics),
        "summary-title": summary.title,
        "summary-details": summary.details,
    }


def format_output_file_entry(name: str, value: str) -> str:
    if "\n" not in value and "\r" not in value:
        return f"{name}={value}\n"

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    body = value if value.endswith("\n") else f"{value}\n"
    return f"{name}<<{delimiter}\n{body}{delimiter}\n"


def format_set_output_command(name: str, value: str) -> str:
    # workflow command data escaping
    escaped = value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    return f"::set-output name={name}::{escaped}"


def emit_action_outputs(
    summary: ActionSummary,
    github_output: str | None,
    echo: Callable[[str], None] = typer.echo,
) -> None:
    """Publish the run summary to the workflow.

    Args:
        summary: Run summary
        github_output: Path from ``GITHUB_OUTPUT``, if set
        echo: Line printer for the legacy protocol

    Raises:
        OutputError: If the output file cannot be appended to
    """
    outputs = summary_outputs(summary)

    if github_output and github_output.strip():
        path = Path(github_output)
        try:
            with open(path, "a", encoding="utf-8") as f:
                for name, value in outputs.items():
                    f.write(format_output_file_entry(name, value))
        except OSError as e:
            raise OutputError(
                f"Cannot append to GITHUB_OUTPUT file {path}: {e}", context={"path": str(path)}
            ) from e
        logger.debug(f"Appended {len(outputs)} output(s) to {path}")
        return

    for name, value in outputs.items():
        echo(format_set_output_command(name, value))
