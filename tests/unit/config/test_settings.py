"""Unit tests for run inputs and settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from command_refgen.config.defaults import DEFAULT_MARKER_BASE_TYPES, get_default_config_path
from command_refgen.config.settings import ActionInputs, RefGenSettings
from command_refgen.core.exceptions import ConfigError


class TestActionInputs:
    def test_last_path_segment(self, tmp_path):
        inputs = ActionInputs.create(
            owner="dotnet",
            name="dotnet/samples",
            branch="refs/heads/main",
            directory=tmp_path,
            workspace_directory=tmp_path,
        )

        assert inputs.name == "samples"
        assert inputs.branch == "main"
        assert inputs.owner == "dotnet"

    def test_plain_values_kept(self, tmp_path):
        inputs = ActionInputs.create(
            owner="o", name="samples", branch="main", directory=tmp_path, workspace_directory=tmp_path
        )
        assert (inputs.name, inputs.branch) == ("samples", "main")

    def test_empty_owner_rejected(self, tmp_path):
        with pytest.raises(ConfigError):
            ActionInputs.create(
                owner="", name="n", branch="b", directory=tmp_path, workspace_directory=tmp_path
            )


class TestRefGenSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
        settings = RefGenSettings.load(None)

        assert settings.marker_base_types == DEFAULT_MARKER_BASE_TYPES
        assert settings.metrics_file_name == "CODE_METRICS.md"
        assert settings.github_output is None

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = RefGenSettings.load(tmp_path / "absent.yaml")
        assert settings.workspace_marker == "github/workspace"

    def test_yaml_overlay(self, tmp_path):
        path = tmp_path / ".command-refgen.yaml"
        path.write_text(
            "marker_base_types: [Cog]\n"
            "decorator_names:\n"
            "  command: [hybrid_command]\n",
            encoding="utf-8",
        )

        settings = RefGenSettings.load(path)

        assert settings.marker_base_types == ["Cog"]
        assert settings.decorator_names["command"] == ["hybrid_command"]
        assert settings.decorator_names["aliases"] == ["Aliases", "aliases"]

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("COMMAND_REFGEN_WORKSPACE_MARKER", "srv/checkout")
        monkeypatch.setenv("GITHUB_OUTPUT", "/tmp/out")

        settings = RefGenSettings.load(None)

        assert settings.workspace_marker == "srv/checkout"
        assert settings.github_output == "/tmp/out"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("marker_base_types: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            RefGenSettings.load(path)

    def test_non_mapping_yaml(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            RefGenSettings.load(path)

    def test_unknown_decorator_kind(self, tmp_path):
        path = tmp_path / "kinds.yaml"
        path.write_text("decorator_names:\n  subcommand: [sub]\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="subcommand"):
            RefGenSettings.load(path)

    def test_default_config_path(self):
        assert get_default_config_path(Path("/repo")) == Path("/repo/.command-refgen.yaml")
