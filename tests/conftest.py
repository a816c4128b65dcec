"""Shared fixtures for command-refgen tests."""

from __future__ import annotations

import ast
import textwrap
from pathlib import Path

import pytest

from command_refgen.config.settings import ActionInputs, RefGenSettings
from command_refgen.core.diagnostics import DiagnosticSink
from command_refgen.frontend.source import SourceModule
from command_refgen.frontend.workspace import LoadedProject

FUN_MODULE = '''\
"""Fun commands."""

from typing import Annotated

from silverbot.framework import (
    BaseCommandModule,
    CommandContext,
    Description,
    RemainingText,
    aliases,
    command,
    cooldown,
    description,
)


class Fun(BaseCommandModule):
    """Commands that are fun."""

    greeting = "hello"

    def __init__(self, client: Client) -> None:
        self.client = client

    @command("ping")
    async def ping(self, ctx: CommandContext) -> None:
        await ctx.respond("pong")

    @command("say")
    @description("Repeats what you say")
    @aliases("echo", "repeat")
    async def say(
        self,
        ctx: CommandContext,
        text: Annotated[str, RemainingText()],
    ) -> None:
        await ctx.respond(text)

    @cooldown(5)
    @command("roll")
    def roll(
        self,
        ctx: CommandContext,
        sides: Annotated[int, Description("Number of sides")] = 6,
    ) -> int:
        if sides < 1:
            return 0
        return sides

    def helper(self) -> int:
        return 1


class Plain:
    def noop(self) -> None:
        pass
'''


def make_source_module(source: str, module_name: str, path: Path) -> SourceModule:
    """Build a SourceModule without touching the file system."""
    source = textwrap.dedent(source)
    return SourceModule(path=path, module_name=module_name, source=source, tree=ast.parse(source))


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """A checkout root shaped like the Actions container path."""
    root = tmp_path / "github" / "workspace"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def make_project(workspace_root: Path):
    """Factory building an in-memory LoadedProject from module sources."""

    def _make(modules: dict[str, str], name: str = "silverbot") -> LoadedProject:
        source_root = workspace_root / "src"
        loaded = []
        for module_name, source in modules.items():
            path = source_root / Path(*module_name.split(".")).with_suffix(".py")
            loaded.append(make_source_module(source, module_name, path))
        return LoadedProject(
            file_path=workspace_root / "pyproject.toml",
            name=name,
            root=workspace_root,
            source_root=source_root,
            modules=tuple(loaded),
        )

    return _make


@pytest.fixture
def sample_project_dir(workspace_root: Path) -> Path:
    """A real project on disk with one command module."""
    (workspace_root / "pyproject.toml").write_text(
        '[project]\nname = "silverbot"\nversion = "1.0.0"\n', encoding="utf-8"
    )
    package = workspace_root / "src" / "silverbot"
    (package / "commands").mkdir(parents=True)
    (package / "__init__.py").write_text('"""Silverbot."""\n', encoding="utf-8")
    (package / "commands" / "__init__.py").write_text("", encoding="utf-8")
    (package / "commands" / "fun.py").write_text(FUN_MODULE, encoding="utf-8")
    return workspace_root


@pytest.fixture
def diagnostics() -> DiagnosticSink:
    return DiagnosticSink()


@pytest.fixture
def settings() -> RefGenSettings:
    return RefGenSettings()


@pytest.fixture
def action_inputs(workspace_root: Path) -> ActionInputs:
    return ActionInputs(
        owner="silvercraft",
        name="silvercraft/silverbot",
        branch="refs/heads/main",
        directory=workspace_root,
        workspace_directory=workspace_root,
    )


@pytest.fixture
def make_module(workspace_root: Path):
    """Factory building a single SourceModule under the workspace root."""

    def _make(source: str, module_name: str = "silverbot.commands.fun") -> SourceModule:
        path = workspace_root / "src" / Path(*module_name.split(".")).with_suffix(".py")
        return make_source_module(source, module_name, path)

    return _make


@pytest.fixture
def fun_source() -> str:
    """Source of a command module with three commands and a plain class."""
    return FUN_MODULE
