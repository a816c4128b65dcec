"""Typed exception hierarchy for command-refgen.

Hierarchy
---------
CommandRefGenError (base)
├── ConfigError              – missing / invalid run inputs (fatal)
├── ProjectError             – project loading failures
│   └── ProjectNotFoundError
├── ParsingError             – a source file could not be parsed
├── AnalysisCancelledError   – cooperative cancellation observed
└── OutputError              – a report or output sink could not be written

Only ``ConfigError`` and ``OutputError`` escalate to a non-zero process exit.
Everything else is reported as a diagnostic and the run continues with what
was successfully aggregated.
"""

from typing import Any


class CommandRefGenError(Exception):
    """Base exception for command-refgen."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


# ── Configuration layer ─────────────────────────────────────────────────


class ConfigError(CommandRefGenError):
    """Configuration / validation errors."""

    pass


# ── Project layer ───────────────────────────────────────────────────────


class ProjectError(CommandRefGenError):
    """Project loading errors."""

    pass


class ProjectNotFoundError(ProjectError):
    """Project file does not exist."""

    pass


# ── Front end ───────────────────────────────────────────────────────────


class ParsingError(CommandRefGenError):
    """A source module could not be parsed into a syntax tree."""

    pass


# ── Orchestration ───────────────────────────────────────────────────────


class AnalysisCancelledError(CommandRefGenError):
    """Analysis was cancelled before the current project completed."""

    pass


# ── Output layer ────────────────────────────────────────────────────────


class OutputError(CommandRefGenError):
    """A report file or the GitHub output file could not be written."""

    pass
