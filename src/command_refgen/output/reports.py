"""Writing the rendered documents."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from ..analysis.aggregate import AnalysisRun
from ..config.settings import ActionInputs, RefGenSettings
from ..core.exceptions import OutputError
from ..render.command_catalog import render_command_catalog
from ..render.metrics_report import render_metrics_report

NO_METRICS_DETAILS = "No metrics were determined."


@dataclass(frozen=True)
class ActionSummary:
    """Outcome reported back to the workflow.

    Attributes:
        updated_metrics: True when the documents were written
        title: One-line summary, empty when nothing was written
        details: Longer summary text
        written_files: Paths of the documents written
    """

    updated_metrics: bool
    title: str
    details: str
    written_files: tuple[Path, ...] = ()


def write_reports(run: AnalysisRun, inputs: ActionInputs, settings: RefGenSettings) -> ActionSummary:
    """Render and write both documents when any project produced metrics.

    The command reference shares the metrics gate: with no metrics neither
    document is written, whatever the command map holds.

    Args:
        run: Aggregated analysis run
        inputs: Run inputs; documents go to ``inputs.directory``
        settings: Output file names

    Returns:
        Summary for the GitHub outputs

    Raises:
        OutputError: If a document cannot be written
    """
    if not run.metrics:
        logger.info("No metrics were determined; nothing written")
        return ActionSummary(updated_metrics=False, title="", details=NO_METRICS_DETAILS)

    metrics_path = inputs.directory / settings.metrics_file_name
    commands_path = inputs.directory / settings.commands_file_name
    existed = metrics_path.exists()

    logger.info(
        f"{'Updating' if existed else 'Creating'} {settings.metrics_file_name} "
        f"markdown file with latest code metric data."
    )
    title = (
        f"{'Updated' if existed else 'Created'} {settings.metrics_file_name} file, "
        f"analyzed metrics for {len(run.metrics)} projects."
    )

    _write(metrics_path, render_metrics_report(run.metrics, inputs, run.diagnostics))

    logger.info(
        f"{'Updating' if commands_path.exists() else 'Creating'} {settings.commands_file_name} "
        f"markdown file with latest command data."
    )
    _write(
        commands_path,
        render_command_catalog(run.commands, inputs, run.diagnostics, settings.workspace_marker),
    )

    return ActionSummary(
        updated_metrics=True,
        title=title,
        details=f"{title}\n",
        written_files=(metrics_path, commands_path),
    )


def _write(path: Path, contents: str) -> None:
    try:
        path.write_text(contents, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Cannot write {path}: {e}", context={"path": str(path)}) from e
    logger.debug(f"Wrote {len(contents)} characters to {path}")
