"""Generate command for the command-refgen CLI."""

from __future__ import annotations

import asyncio
import signal
from pathlib import Path

import typer
from loguru import logger

from ...analysis import AnalysisRun, ProjectAnalyzer, analyze_projects
from ...config.defaults import get_default_config_path
from ...config.settings import ActionInputs, RefGenSettings
from ...core.diagnostics import DiagnosticSink
from ...core.exceptions import ConfigError, OutputError
from ...output import ActionSummary, emit_action_outputs, write_reports
from ...utils.cancellation import CancellationToken
from ..output import (
    configure_logging,
    print_diagnostics,
    print_error,
    print_info,
    print_summary,
    print_warning,
)

generate_app = typer.Typer(help="📄 Generate CODE_METRICS.md and COMMAND_REFERENCE.md")


@generate_app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    owner: str = typer.Option(
        ...,
        "--owner",
        "-o",
        envvar="INPUT_OWNER",
        help='The owner, for example: "dotnet". Assign from `github.repository_owner`.',
        rich_help_panel="🐙 Repository",
    ),
    name: str = typer.Option(
        ...,
        "--name",
        "-n",
        envvar="INPUT_NAME",
        help='The repository name, for example: "samples". Assign from `github.repository`.',
        rich_help_panel="🐙 Repository",
    ),
    branch: str = typer.Option(
        ...,
        "--branch",
        "-b",
        envvar="INPUT_BRANCH",
        help='The branch name, for example: "refs/heads/main". Assign from `github.ref`.',
        rich_help_panel="🐙 Repository",
    ),
    directory: Path = typer.Option(
        ...,
        "--dir",
        "-d",
        envvar="INPUT_DIR",
        help="The root directory to start recursive searching from.",
        exists=True,
        file_okay=False,
        dir_okay=True,
        rich_help_panel="📁 Locations",
    ),
    workspace: Path = typer.Option(
        ...,
        "--workspace",
        "-w",
        envvar="INPUT_WORKSPACE",
        help="The workspace directory, or repository root directory.",
        rich_help_panel="📁 Locations",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML settings file (defaults to .command-refgen.yaml in --dir)",
        dir_okay=False,
        rich_help_panel="🔧 Global Options",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
        rich_help_panel="🔧 Global Options",
    ),
) -> None:
    """📄 Analyze every project under --dir and write the reports.

    Finds project files (``pyproject.toml``) below --dir, computes code
    metrics, extracts commands from classes extending the command module base
    types and writes CODE_METRICS.md and COMMAND_REFERENCE.md into --dir.

    [bold cyan]Examples:[/bold cyan]

    [green]Local run:[/green]
        $ command-refgen generate -o octocat -n octocat/bot -b refs/heads/main -d . -w .

    [green]Inside the action container (inputs from INPUT_* variables):[/green]
        $ command-refgen generate

    [dim]💡 Ctrl+C stops after the current project; finished projects are still written.[/dim]
    """
    if ctx.invoked_subcommand is not None:
        return

    configure_logging(verbose)

    try:
        inputs = ActionInputs.create(
            owner=owner,
            name=name,
            branch=branch,
            directory=directory,
            workspace_directory=workspace,
        )
        settings = RefGenSettings.load(config_file or get_default_config_path(directory))
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        print_error(str(e))
        raise typer.Exit(2)

    token = CancellationToken()
    previous_handler = signal.signal(signal.SIGINT, lambda signum, frame: token.cancel())
    try:
        run, summary = asyncio.run(run_generate(inputs, settings, token))
    except OutputError as e:
        logger.error(f"Output error: {e}")
        print_error(str(e))
        raise typer.Exit(1)
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    for diagnostic in run.diagnostics.warnings:
        logger.warning(str(diagnostic))
    print_diagnostics(run.diagnostics.diagnostics)
    if run.cancelled:
        print_warning("Cancelled; reports only cover the projects finished before Ctrl+C")
    print_summary(summary)


async def run_generate(
    inputs: ActionInputs,
    settings: RefGenSettings,
    token: CancellationToken,
) -> tuple[AnalysisRun, ActionSummary]:
    """Discover, analyze, write the reports and emit the workflow outputs.

    Args:
        inputs: Validated run inputs
        settings: Effective settings
        token: Cancellation token

    Returns:
        The aggregated run and the summary that was emitted

    Raises:
        OutputError: If a report or the GITHUB_OUTPUT file cannot be written
    """
    diagnostics = DiagnosticSink()
    analyzer = ProjectAnalyzer(settings, diagnostics)

    paths = analyzer.workspace.discover_projects(inputs.directory)
    print_info(f"Found {len(paths)} project file(s) under {inputs.directory}")

    run = await analyze_projects(paths, analyzer, token)
    summary = write_reports(run, inputs, settings)
    emit_action_outputs(summary, settings.github_output)
    return run, summary
