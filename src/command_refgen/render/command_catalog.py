"""COMMAND_REFERENCE.md rendering."""

from __future__ import annotations

from collections.abc import Mapping

import orjson
from loguru import logger

from ..config.defaults import DEFAULT_WORKSPACE_MARKER
from ..config.settings import ActionInputs
from ..core.diagnostics import DiagnosticSink
from ..extraction.locations import relativize_workspace_path
from ..extraction.models import Argument, Command, CommandCatalog
from .markdown import MarkdownDocument, append_maintained_by_bot

UNKNOWN_COMMAND_NAME = "Unknown command name"
UNKNOWN_DESCRIPTION = "Unknown description"
NO_DESCRIPTION = "No description"


def group_commands(commands: list[Command]) -> list[tuple[str | None, list[Command]]]:
    """Group commands by name.

    Groups are sorted by name with unnamed commands last; commands keep their
    declaration order within a group.
    """
    groups: dict[str | None, list[Command]] = {}
    for command in commands:
        groups.setdefault(command.name, []).append(command)
    return sorted(groups.items(), key=lambda item: (item[0] is None, item[0] or ""))


def format_signature(name: str | None, arguments: list[Argument]) -> str:
    """Usage line such as ``ping <who> [times] [rest...]`` in inline code.

    Required arguments use angle brackets; optional and remaining-text ones
    use square brackets, remaining-text ones with a trailing ellipsis.
    """
    parts = [name or ""]
    for argument in arguments:
        text = argument.name + ("..." if argument.remaining_text else "")
        if argument.optional or argument.remaining_text:
            parts.append(f"[{text}]")
        else:
            parts.append(f"<{text}>")
    return f"`{' '.join(parts)}`"


def format_argument(argument: Argument) -> str:
    return f"{argument.name} - {argument.description or NO_DESCRIPTION} ({argument.type})"


def serialize_catalogs(command_data: Mapping[str, CommandCatalog]) -> str:
    payload = {
        key: catalog.model_dump(mode="json")
        for key, catalog in sorted(command_data.items(), key=lambda item: item[0])
    }
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode()


def render_command_catalog(
    command_data: Mapping[str, CommandCatalog],
    inputs: ActionInputs,
    diagnostics: DiagnosticSink,
    workspace_marker: str = DEFAULT_WORKSPACE_MARKER,
) -> str:
    """Render the command reference of all analyzed projects.

    Args:
        command_data: Command catalogs keyed by project file path
        inputs: Repository identity used for permalinks
        diagnostics: Receives notes about commands without a name
        workspace_marker: Path fragment stripped from module paths

    Returns:
        Markdown document text
    """
    document = MarkdownDocument()
    document.append_linter_capture()
    document.append_header("Commands and geeky info", 1)
    document.append_paragraph("This file is dynamically maintained by a bot, ~~a silverbot~~.")

    blob_url = f"https://github.com/{inputs.owner}/{inputs.name}/blob/{inputs.branch}"

    for project_path, catalog in sorted(command_data.items(), key=lambda item: item[0]):
        document.append_header(relativize_workspace_path(project_path, workspace_marker), 2)

        for module in catalog.command_modules:
            document.append_header(relativize_workspace_path(module.source_path, workspace_marker), 3)
            document.append_paragraph(f"`{module.name}`")

            for name, commands in group_commands(module.commands):
                if name is None:
                    diagnostics.info(
                        f"{len(commands)} command(s) in {module.name} have no name",
                        source=module.source_path,
                    )
                document.append_header(name or UNKNOWN_COMMAND_NAME, 4)
                document.append_paragraph(commands[0].description or UNKNOWN_DESCRIPTION)

                for command in commands:
                    if command.aliases is not None:
                        document.append_paragraph(",".join(f"`{alias}`" for alias in command.aliases))

                    document.append_header("Arguments", 5)
                    document.append_paragraph(format_signature(name, command.arguments))
                    document.append_list(format_argument(argument) for argument in command.arguments)
                    document.append_paragraph(f"{blob_url}{command.location}")

    document.append_code("json", serialize_catalogs(command_data))
    append_maintained_by_bot(document)
    document.append_linter_restore()

    logger.debug(f"Rendered command catalog for {len(command_data)} project(s)")
    return document.render()
