"""Command catalog models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Argument(BaseModel):
    """A command parameter exposed to the user.

    Attributes:
        name: Parameter name
        type: Declared type as written (inner type of ``Annotated``)
        optional: True when the parameter has a default value
        remaining_text: True when the parameter consumes all trailing input
        description: Human readable description, if declared
        custom_attributes: Names of metadata entries the extractor does not know
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    optional: bool = False
    remaining_text: bool = False
    description: str | None = None
    custom_attributes: list[str] = Field(default_factory=list)


class Command(BaseModel):
    """A decorated method of a command module.

    Attributes:
        location: Workspace-relative path with line span, ``/src/bot/fun.py#L10-L14``
        name: Command name, unset when no decorator supplied one
        description: Command description
        aliases: Alternative names, unset when no aliases decorator is present
        custom_attributes: Names of decorators the extractor does not know
        arguments: Parameters in declaration order
    """

    model_config = ConfigDict(frozen=True)

    location: str
    name: str | None = None
    description: str | None = None
    aliases: list[str] | None = None
    custom_attributes: list[str] = Field(default_factory=list)
    arguments: list[Argument] = Field(default_factory=list)


class CommandModule(BaseModel):
    """A class extending one of the marker base types."""

    model_config = ConfigDict(frozen=True)

    name: str
    source_path: str
    commands: list[Command] = Field(default_factory=list)


class CommandCatalog(BaseModel):
    """Command modules of one project, in discovery order."""

    model_config = ConfigDict(frozen=True)

    command_modules: list[CommandModule] = Field(default_factory=list)

    @property
    def command_count(self) -> int:
        return sum(len(module.commands) for module in self.command_modules)
