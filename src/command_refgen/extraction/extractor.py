"""Command extraction over a bound project."""

from __future__ import annotations

import ast
from typing import assert_never

from loguru import logger

from ..config.defaults import CONTEXT_TYPE_SUFFIX
from ..config.settings import RefGenSettings
from ..core.diagnostics import DiagnosticSink
from ..frontend.binder import ClassDeclaration, SymbolBinder
from ..frontend.source import SourceModule, first_line, iter_preorder
from ..frontend.workspace import LoadedProject
from .annotations import (
    AliasList,
    Annotation,
    AnnotationParser,
    CommandName,
    DescriptionText,
    MissingArguments,
    RemainingTextMarker,
    SlashCommandName,
    Unrecognized,
)
from .builder import ArgumentBuilder, CommandBuilder
from .locations import format_location, relativize_workspace_path
from .models import Argument, Command, CommandCatalog, CommandModule

FunctionNode = ast.FunctionDef | ast.AsyncFunctionDef


class CommandExtractor:
    """Recognizes command modules and folds their decorators into commands.

    A class is a command module when one of its bases resolves to a name
    containing a marker base type. Every decorated ``def`` inside such a class
    (nested ones included) yields a Command; undecorated ones are skipped.

    Args:
        settings: Marker names, decorator aliases and workspace marker
        diagnostics: Sink receiving warnings about malformed decorators
    """

    def __init__(self, settings: RefGenSettings, diagnostics: DiagnosticSink) -> None:
        self.settings = settings
        self.diagnostics = diagnostics

    def extract(self, project: LoadedProject, binder: SymbolBinder) -> CommandCatalog:
        """Extract the command catalog of a project.

        Args:
            project: Loaded project
            binder: Symbol binder over the same project

        Returns:
            Command modules in module then source order
        """
        modules: list[CommandModule] = []
        for module in project.modules:
            for declaration in binder.class_declarations(module):
                if self.is_command_module(module, declaration, binder):
                    modules.append(self._extract_module(module, declaration, binder))

        logger.debug(
            f"Extracted {len(modules)} command module(s) from {project.name}"
        )
        return CommandCatalog(command_modules=modules)

    def is_command_module(
        self, module: SourceModule, declaration: ClassDeclaration, binder: SymbolBinder
    ) -> bool:
        for base in declaration.node.bases:
            resolved = binder.resolve_base(module, base)
            if any(marker in resolved.name for marker in self.settings.marker_base_types):
                return True
        return False

    def _extract_module(
        self, module: SourceModule, declaration: ClassDeclaration, binder: SymbolBinder
    ) -> CommandModule:
        parser = AnnotationParser(module, self.settings.decorator_names, binder)
        commands: list[Command] = []

        for node in iter_preorder(declaration.node):
            if not isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
                continue
            if not node.decorator_list:
                continue
            commands.append(self._extract_command(module, parser, node))

        return CommandModule(
            name=declaration.qualified_name,
            source_path=relativize_workspace_path(str(module.path), self.settings.workspace_marker),
            commands=commands,
        )

    def _extract_command(self, module: SourceModule, parser: AnnotationParser, node: FunctionNode) -> Command:
        location = format_location(
            str(module.path), first_line(node), node.end_lineno, self.settings.workspace_marker
        )
        builder = CommandBuilder(location=location)

        for decorator in node.decorator_list:
            self._apply_command_annotation(builder, parser.parse_decorator(decorator), location)

        for argument in self._extract_arguments(parser, node, location):
            builder.add_argument(argument)

        return builder.build()

    def _apply_command_annotation(self, builder: CommandBuilder, annotation: Annotation, location: str) -> None:
        if isinstance(annotation, CommandName):
            builder.set("name", annotation.name)
        elif isinstance(annotation, SlashCommandName):
            builder.set("name", annotation.name)
            if annotation.description is None:
                self.diagnostics.warning(
                    f"Slash command '{annotation.name}' has no description", source=location
                )
            else:
                builder.set("description", annotation.description)
        elif isinstance(annotation, DescriptionText):
            builder.set("description", annotation.text)
        elif isinstance(annotation, AliasList):
            builder.set("aliases", list(annotation.aliases))
        elif isinstance(annotation, MissingArguments):
            self.diagnostics.warning(
                f"@{annotation.written_name} has no arguments; {annotation.kind} left unset",
                source=location,
            )
        elif isinstance(annotation, (Unrecognized, RemainingTextMarker)):
            self.diagnostics.warning(
                f"Unknown decorator @{annotation.written_name}, added to the custom attributes of the command",
                source=location,
            )
            builder.append("custom_attributes", annotation.written_name)
        else:
            assert_never(annotation)

    def _extract_arguments(self, parser: AnnotationParser, node: FunctionNode, location: str) -> list[Argument]:
        positional = [*node.args.posonlyargs, *node.args.args]
        if positional and positional[0].arg in ("self", "cls"):
            positional = positional[1:]

        defaults_start = len(node.args.posonlyargs) + len(node.args.args) - len(node.args.defaults)
        offset = len(node.args.posonlyargs) + len(node.args.args) - len(positional)

        parameters: list[tuple[ast.arg, bool, bool]] = []
        for index, arg in enumerate(positional):
            parameters.append((arg, index + offset >= defaults_start, False))
        if node.args.vararg is not None:
            parameters.append((node.args.vararg, False, True))
        for arg, default in zip(node.args.kwonlyargs, node.args.kw_defaults, strict=True):
            parameters.append((arg, default is not None, False))

        arguments: list[Argument] = []
        for index, (arg, has_default, is_vararg) in enumerate(parameters):
            type_text, metadata = parser.parse_parameter_metadata(arg.annotation)
            # only a leading context parameter is implied by the framework
            if index == 0 and _declared_type_name(type_text).endswith(CONTEXT_TYPE_SUFFIX):
                continue

            builder = ArgumentBuilder(name=arg.arg, type=type_text)
            builder.set("optional", has_default)
            if is_vararg:
                builder.set("remaining_text", True)
            for annotation in metadata:
                self._apply_argument_annotation(builder, annotation, location)
            arguments.append(builder.build())

        return arguments

    def _apply_argument_annotation(self, builder: ArgumentBuilder, annotation: Annotation, location: str) -> None:
        if isinstance(annotation, DescriptionText):
            builder.set("description", annotation.text)
        elif isinstance(annotation, RemainingTextMarker):
            builder.set("remaining_text", True)
        elif isinstance(annotation, MissingArguments):
            self.diagnostics.warning(
                f"@{annotation.written_name} on argument '{builder.name}' has no arguments; "
                f"{annotation.kind} left unset",
                source=location,
            )
        elif isinstance(annotation, Unrecognized):
            self._defer_argument_attribute(builder, annotation.written_name, location)
        elif isinstance(annotation, (CommandName, SlashCommandName, AliasList)):
            self._defer_argument_attribute(builder, _written_kind(annotation), location)
        else:
            assert_never(annotation)

    def _defer_argument_attribute(self, builder: ArgumentBuilder, name: str, location: str) -> None:
        self.diagnostics.warning(
            f"Unknown metadata {name} on argument '{builder.name}', "
            f"added to the custom attributes of the argument",
            source=location,
        )
        builder.append("custom_attributes", name)


def _written_kind(annotation: CommandName | SlashCommandName | AliasList) -> str:
    if isinstance(annotation, CommandName):
        return "command"
    if isinstance(annotation, SlashCommandName):
        return "slash_command"
    return "aliases"


def _declared_type_name(type_text: str) -> str:
    """Bare name of a declared type, e.g. ``Context`` for ``"commands.Context[Bot]"``."""
    try:
        expr = ast.parse(type_text, mode="eval").body
    except SyntaxError:
        return type_text

    while True:
        if isinstance(expr, ast.Constant) and isinstance(expr.value, str):
            try:
                expr = ast.parse(expr.value.strip(), mode="eval").body
            except SyntaxError:
                return expr.value
        elif isinstance(expr, ast.Subscript):
            expr = expr.value
        else:
            break

    if isinstance(expr, ast.Attribute):
        return expr.attr
    if isinstance(expr, ast.Name):
        return expr.id
    return type_text
