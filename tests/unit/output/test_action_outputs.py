"""Unit tests for GitHub Actions outputs."""

from __future__ import annotations

import pytest

from command_refgen.core.exceptions import OutputError
from command_refgen.output.action_outputs import (
    emit_action_outputs,
    format_output_file_entry,
    format_set_output_command,
    summary_outputs,
)
from command_refgen.output.reports import ActionSummary

SUMMARY = ActionSummary(
    updated_metrics=True,
    title="Created CODE_METRICS.md file, analyzed metrics for 1 projects.",
    details="Created CODE_METRICS.md file, analyzed metrics for 1 projects.\n",
)


class TestFormatting:
    def test_output_names_in_order(self):
        assert list(summary_outputs(SUMMARY)) == ["updated-metrics", "summary-title", "summary-details"]
        assert summary_outputs(SUMMARY)["updated-metrics"] == "True"

    def test_single_line_entry(self):
        assert format_output_file_entry("summary-title", "hello") == "summary-title=hello\n"

    def test_multi_line_entry_uses_delimiter(self):
        entry = format_output_file_entry("summary-details", "one\ntwo")

        header, *body = entry.splitlines()
        name, delimiter = header.split("<<")
        assert name == "summary-details"
        assert delimiter.startswith("ghadelimiter_")
        assert body == ["one", "two", delimiter]

    def test_set_output_escaping(self):
        assert format_set_output_command("x", "50%\r\ndone") == "::set-output name=x::50%25%0D%0Adone"


class TestEmitActionOutputs:
    def test_appends_to_output_file(self, tmp_path):
        output = tmp_path / "github_output"
        output.write_text("existing=1\n", encoding="utf-8")

        emit_action_outputs(SUMMARY, str(output))

        text = output.read_text(encoding="utf-8")
        assert text.startswith("existing=1\nupdated-metrics=True\n")
        assert f"summary-title={SUMMARY.title}\n" in text
        assert "summary-details<<ghadelimiter_" in text

    def test_legacy_commands_without_output_file(self):
        lines: list[str] = []

        emit_action_outputs(SUMMARY, None, echo=lines.append)

        assert lines == [
            "::set-output name=updated-metrics::True",
            f"::set-output name=summary-title::{SUMMARY.title}",
            f"::set-output name=summary-details::{SUMMARY.title}%0A",
        ]

    def test_blank_output_path_falls_back_to_legacy(self):
        lines: list[str] = []
        emit_action_outputs(SUMMARY, "  ", echo=lines.append)
        assert len(lines) == 3

    def test_unwritable_output_file(self, tmp_path):
        with pytest.raises(OutputError):
            emit_action_outputs(SUMMARY, str(tmp_path / "missing" / "out"))
