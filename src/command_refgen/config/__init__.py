"""Configuration: defaults, run inputs and settings."""

from .settings import ActionInputs, RefGenSettings

__all__ = ["ActionInputs", "RefGenSettings"]
