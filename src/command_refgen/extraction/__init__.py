"""Command extraction engine."""

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
from .builder import ArgumentBuilder, CommandBuilder, FieldUpdate
from .extractor import CommandExtractor
from .locations import format_location, relativize_workspace_path
from .models import Argument, Command, CommandCatalog, CommandModule

__all__ = [
    "AliasList",
    "Annotation",
    "AnnotationParser",
    "Argument",
    "ArgumentBuilder",
    "Command",
    "CommandBuilder",
    "CommandCatalog",
    "CommandExtractor",
    "CommandModule",
    "CommandName",
    "DescriptionText",
    "FieldUpdate",
    "MissingArguments",
    "RemainingTextMarker",
    "SlashCommandName",
    "Unrecognized",
    "format_location",
    "relativize_workspace_path",
]
