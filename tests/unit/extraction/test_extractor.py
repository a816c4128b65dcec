"""Unit tests for command extraction."""

from __future__ import annotations

import pytest

from command_refgen.extraction.extractor import CommandExtractor
from command_refgen.extraction.models import Argument
from command_refgen.frontend.binder import SymbolBinder


@pytest.fixture
def extract(make_project, settings, diagnostics):
    """Extract the catalog of a project built from ``{module: source}``."""

    def _extract(modules: dict[str, str]):
        project = make_project(modules)
        extractor = CommandExtractor(settings, diagnostics)
        return extractor.extract(project, SymbolBinder(project))

    return _extract


class TestCommandModuleDetection:
    """Classes become command modules through their direct bases."""

    def test_fun_module(self, extract, fun_source):
        catalog = extract({"silverbot.commands.fun": fun_source})

        assert [m.name for m in catalog.command_modules] == ["silverbot.commands.fun.Fun"]
        assert catalog.command_modules[0].source_path == "/src/silverbot/commands/fun.py"

    def test_marker_without_decorated_methods(self, extract):
        catalog = extract(
            {
                "silverbot.commands.empty": (
                    "from silverbot.framework import BaseCommandModule\n"
                    "\n"
                    "class Empty(BaseCommandModule):\n"
                    "    def helper(self):\n"
                    "        return 1\n"
                )
            }
        )

        assert len(catalog.command_modules) == 1
        assert catalog.command_modules[0].commands == []
        assert catalog.command_count == 0

    def test_module_attribute_base(self, extract):
        catalog = extract(
            {
                "silverbot.commands.admin": (
                    "import silverbot.framework as framework\n"
                    "\n"
                    "class Admin(framework.ApplicationCommandModule):\n"
                    '    @framework.slash_command("ban", "Bans a member")\n'
                    "    async def ban(self, ctx: framework.InteractionContext, member: str):\n"
                    "        pass\n"
                )
            }
        )

        (module,) = catalog.command_modules
        (command,) = module.commands
        assert command.name == "ban"
        assert command.description == "Bans a member"
        assert command.arguments == [Argument(name="member", type="str")]

    def test_marker_is_substring_match(self, extract):
        catalog = extract(
            {"m": "class Mine(MyBaseCommandModuleV2):\n    @command('x')\n    def x(self): ...\n"}
        )
        assert catalog.command_count == 1

    def test_indirect_subclass_is_not_a_command_module(self, extract, fun_source):
        catalog = extract(
            {
                "silverbot.commands.fun": fun_source,
                "silverbot.commands.more": (
                    "from .fun import Fun\n"
                    "\n"
                    "class MoreFun(Fun):\n"
                    '    @command("more")\n'
                    "    def more(self): ...\n"
                ),
            }
        )

        assert [m.name for m in catalog.command_modules] == ["silverbot.commands.fun.Fun"]

    def test_plain_classes_ignored(self, extract):
        catalog = extract({"m": "class Plain:\n    @command('x')\n    def x(self): ...\n"})
        assert catalog.command_modules == []


class TestCommands:
    """Decorators fold into command records."""

    @pytest.fixture
    def fun_commands(self, extract, fun_source):
        return extract({"silverbot.commands.fun": fun_source}).command_modules[0].commands

    def test_decorated_methods_in_order(self, fun_commands):
        assert [c.name for c in fun_commands] == ["ping", "say", "roll"]

    def test_bare_command(self, fun_commands):
        ping = fun_commands[0]

        assert ping.description is None
        assert ping.aliases is None
        assert ping.arguments == []
        assert ping.custom_attributes == []
        assert ping.location == "/src/silverbot/commands/fun.py#L25-L27"

    def test_description_and_aliases(self, fun_commands):
        say = fun_commands[1]

        assert say.description == "Repeats what you say"
        assert say.aliases == ["echo", "repeat"]
        assert say.arguments == [Argument(name="text", type="str", remaining_text=True)]

    def test_unknown_decorator_and_optional_argument(self, fun_commands, diagnostics):
        roll = fun_commands[2]

        assert roll.custom_attributes == ["cooldown"]
        assert roll.arguments == [
            Argument(name="sides", type="int", optional=True, description="Number of sides")
        ]
        assert any("@cooldown" in w.message for w in diagnostics.warnings)

    def test_slash_command_without_description(self, extract, diagnostics):
        catalog = extract(
            {
                "m": (
                    "class Slash(ApplicationCommandModule):\n"
                    '    @slash_command("ping")\n'
                    "    async def ping(self, ctx: InteractionContext): ...\n"
                )
            }
        )

        (command,) = catalog.command_modules[0].commands
        assert command.name == "ping"
        assert command.description is None
        assert len(diagnostics.warnings) == 1
        assert "no description" in diagnostics.warnings[0].message

    def test_slash_command_with_description(self, extract, diagnostics):
        catalog = extract(
            {
                "m": (
                    "class Slash(ApplicationCommandModule):\n"
                    '    @slash_command("ping", "replies pong")\n'
                    "    async def ping(self, ctx: InteractionContext): ...\n"
                )
            }
        )

        (command,) = catalog.command_modules[0].commands
        assert command.name == "ping"
        assert command.description == "replies pong"
        assert command.arguments == []
        assert diagnostics.warnings == []

    def test_description_decorator_after_slash_command_wins(self, extract):
        catalog = extract(
            {
                "m": (
                    "class Slash(ApplicationCommandModule):\n"
                    '    @slash_command("ping", "first")\n'
                    '    @description("second")\n'
                    "    async def ping(self, ctx: InteractionContext): ...\n"
                )
            }
        )

        assert catalog.command_modules[0].commands[0].description == "second"

    def test_aliased_decorator_import(self, extract):
        catalog = extract(
            {
                "m": (
                    "from silverbot.framework import BaseCommandModule, command as cmd\n"
                    "\n"
                    "class Fun(BaseCommandModule):\n"
                    '    @cmd("ping")\n'
                    "    def ping(self, ctx): ...\n"
                )
            }
        )

        assert catalog.command_modules[0].commands[0].name == "ping"

    def test_unnamed_command(self, extract):
        catalog = extract(
            {"m": "class Fun(BaseCommandModule):\n    @cooldown(3)\n    def ping(self): ...\n"}
        )

        (command,) = catalog.command_modules[0].commands
        assert command.name is None
        assert command.custom_attributes == ["cooldown"]

    def test_missing_decorator_arguments_warn(self, extract, diagnostics):
        catalog = extract(
            {"m": "class Fun(BaseCommandModule):\n    @command\n    def ping(self): ...\n"}
        )

        assert catalog.command_modules[0].commands[0].name is None
        assert "has no arguments" in diagnostics.warnings[0].message


class TestArguments:
    """Parameter handling."""

    def arguments(self, extract, signature: str) -> list[Argument]:
        source = (
            "class Fun(BaseCommandModule):\n"
            '    @command("go")\n'
            f"    def go({signature}): ...\n"
        )
        return extract({"m": source}).command_modules[0].commands[0].arguments

    def test_only_leading_context_skipped(self, extract):
        args = self.arguments(extract, "self, ctx: CommandContext, other: CommandContext")
        assert [a.name for a in args] == ["other"]

    @pytest.mark.parametrize(
        "annotation",
        ["commands.Context[Bot]", '"commands.Context"', 'Context["Bot"]'],
    )
    def test_generic_and_quoted_context_skipped(self, extract, annotation):
        args = self.arguments(extract, f"self, ctx: {annotation}, who: str")
        assert [a.name for a in args] == ["who"]

    def test_untyped_context_kept(self, extract):
        args = self.arguments(extract, "self, ctx")
        assert args == [Argument(name="ctx", type="Any")]

    def test_varargs_are_remaining_text(self, extract):
        args = self.arguments(extract, "self, ctx: CommandContext, *words: str")
        assert args == [Argument(name="words", type="str", remaining_text=True)]

    def test_keyword_only_and_kwargs(self, extract):
        args = self.arguments(extract, "self, ctx: CommandContext, *, times: int = 1, flag: bool, **extra")
        assert args == [
            Argument(name="times", type="int", optional=True),
            Argument(name="flag", type="bool"),
        ]

    def test_defaults_align_right(self, extract):
        args = self.arguments(extract, "self, a: int, b: int = 2, c: int = 3")
        assert [(a.name, a.optional) for a in args] == [("a", False), ("b", True), ("c", True)]

    def test_static_method_keeps_first_parameter(self, extract):
        args = self.arguments(extract, "who: str")
        assert [a.name for a in args] == ["who"]

    def test_unknown_argument_metadata(self, extract, diagnostics):
        args = self.arguments(extract, "self, n: Annotated[int, Range(1, 6)]")

        assert args[0].custom_attributes == ["Range"]
        assert diagnostics.warnings
