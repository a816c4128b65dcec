"""Unit tests for report writing."""

from __future__ import annotations

import pytest

from command_refgen.analysis.aggregate import AnalysisRun
from command_refgen.config.settings import RefGenSettings
from command_refgen.core.exceptions import OutputError
from command_refgen.extraction.models import CommandCatalog
from command_refgen.metrics.models import MetricNode, SymbolKind
from command_refgen.output.reports import NO_METRICS_DETAILS, write_reports


def assembly() -> MetricNode:
    return MetricNode(kind=SymbolKind.ASSEMBLY, name="silverbot", display_name="silverbot")


@pytest.fixture
def run() -> AnalysisRun:
    analysis = AnalysisRun()
    analysis.metrics["/github/workspace/pyproject.toml"] = assembly()
    analysis.commands["/github/workspace/pyproject.toml"] = CommandCatalog()
    return analysis


class TestWriteReports:
    """Both documents share the metrics gate."""

    def test_nothing_written_without_metrics(self, action_inputs, settings):
        analysis = AnalysisRun()
        analysis.commands["p"] = CommandCatalog()

        summary = write_reports(analysis, action_inputs, settings)

        assert not summary.updated_metrics
        assert summary.title == ""
        assert summary.details == NO_METRICS_DETAILS
        assert not (action_inputs.directory / "CODE_METRICS.md").exists()
        assert not (action_inputs.directory / "COMMAND_REFERENCE.md").exists()

    def test_creates_both_files(self, run, action_inputs, settings):
        summary = write_reports(run, action_inputs, settings)

        title = "Created CODE_METRICS.md file, analyzed metrics for 1 projects."
        assert summary.updated_metrics
        assert summary.title == title
        assert summary.details == f"{title}\n"
        assert (action_inputs.directory / "CODE_METRICS.md").read_text(encoding="utf-8").startswith(
            "<!-- markdownlint-capture -->"
        )
        assert "# Commands and geeky info" in (
            action_inputs.directory / "COMMAND_REFERENCE.md"
        ).read_text(encoding="utf-8")
        assert len(summary.written_files) == 2

    def test_updates_existing_file(self, run, action_inputs, settings):
        (action_inputs.directory / "CODE_METRICS.md").write_text("old", encoding="utf-8")

        summary = write_reports(run, action_inputs, settings)

        assert summary.title.startswith("Updated CODE_METRICS.md file")

    def test_custom_file_names(self, run, action_inputs):
        settings = RefGenSettings(metrics_file_name="METRICS.md", commands_file_name="COMMANDS.md")

        summary = write_reports(run, action_inputs, settings)

        assert summary.title.startswith("Created METRICS.md file")
        assert (action_inputs.directory / "COMMANDS.md").exists()

    def test_write_failure(self, run, action_inputs, settings):
        (action_inputs.directory / "CODE_METRICS.md").mkdir()

        with pytest.raises(OutputError):
            write_reports(run, action_inputs, settings)
