"""Run inputs and tunable settings for command-refgen."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.exceptions import ConfigError
from .defaults import (
    DEFAULT_COMMANDS_FILE_NAME,
    DEFAULT_DECORATOR_NAMES,
    DEFAULT_IGNORE_PATTERNS,
    DEFAULT_MARKER_BASE_TYPES,
    DEFAULT_METRICS_FILE_NAME,
    DEFAULT_PROJECT_PATTERNS,
    DEFAULT_WORKSPACE_MARKER,
)


class ActionInputs(BaseModel):
    """Identity and location inputs of a run.

    ``name`` and ``branch`` accept the raw GitHub context values
    (``owner/repo``, ``refs/heads/main``) and keep only the last path segment.

    Attributes:
        owner: Repository owner, e.g. ``dotnet``
        name: Repository name, e.g. ``samples``
        branch: Branch name, e.g. ``main``
        directory: Root directory to search for project files
        workspace_directory: Repository root used to relativize source links
    """

    owner: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    branch: str = Field(..., min_length=1)
    directory: Path
    workspace_directory: Path

    @field_validator("name", "branch", mode="before")
    @classmethod
    def _last_path_segment(cls, value: Any) -> Any:
        if isinstance(value, str) and value:
            return value.split("/")[-1]
        return value

    @classmethod
    def create(cls, **values: Any) -> ActionInputs:
        """Validate raw inputs, converting validation failures to ConfigError."""
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(
                f"Invalid action inputs: {e}", context={"errors": e.errors()}
            ) from e


class RefGenSettings(BaseSettings):
    """Tunable behavior, overridable via environment or a YAML file.

    Environment variables use the ``COMMAND_REFGEN_`` prefix
    (``COMMAND_REFGEN_WORKSPACE_MARKER=...``). ``GITHUB_OUTPUT`` is read
    without prefix since it is provided by the Actions runner.
    """

    model_config = SettingsConfigDict(
        env_prefix="COMMAND_REFGEN_",
        populate_by_name=True,
        extra="ignore",
    )

    marker_base_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MARKER_BASE_TYPES)
    )
    workspace_marker: str = DEFAULT_WORKSPACE_MARKER
    project_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PROJECT_PATTERNS)
    )
    ignore_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS)
    )
    decorator_names: dict[str, list[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_DECORATOR_NAMES.items()}
    )
    metrics_file_name: str = DEFAULT_METRICS_FILE_NAME
    commands_file_name: str = DEFAULT_COMMANDS_FILE_NAME
    github_output: str | None = Field(default=None, validation_alias="GITHUB_OUTPUT")

    @field_validator("decorator_names")
    @classmethod
    def _merge_decorator_defaults(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        unknown = set(value) - set(DEFAULT_DECORATOR_NAMES)
        if unknown:
            raise ValueError(
                f"Unknown decorator kinds: {', '.join(sorted(unknown))}. "
                f"Expected any of: {', '.join(DEFAULT_DECORATOR_NAMES)}"
            )
        merged = {k: list(v) for k, v in DEFAULT_DECORATOR_NAMES.items()}
        merged.update(value)
        return merged

    @classmethod
    def load(cls, path: Path | None = None) -> RefGenSettings:
        """Load settings, overlaying a YAML file when it exists.

        Args:
            path: Path to a YAML configuration file

        Returns:
            RefGenSettings instance

        Raises:
            ConfigError: If the file cannot be parsed or holds invalid values
        """
        data: dict[str, Any] = {}
        if path is not None and path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"Expected a mapping at the top of {path}")
            logger.debug(f"Loaded settings overrides from {path}")

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings: {e}", context={"path": str(path)}) from e
