"""Diagnostics collected during extraction and rendering.

Extraction never writes warnings to a global stream. Callers create a
``DiagnosticSink``, pass it into the engine entry points and decide what to do
with the collected diagnostics afterwards (the CLI logs them).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from loguru import logger


class DiagnosticLevel(StrEnum):
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A single non-fatal problem found during a run.

    Attributes:
        level: Severity of the diagnostic
        message: Human readable description
        source: Where it happened (file location, symbol, anchor), if known
    """

    level: DiagnosticLevel
    message: str
    source: str | None = None

    def __str__(self) -> str:
        if self.source:
            return f"{self.source}: {self.message}"
        return self.message


@dataclass
class DiagnosticSink:
    """Ordered collector of diagnostics."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def warning(self, message: str, source: str | None = None) -> None:
        self._add(Diagnostic(DiagnosticLevel.WARNING, message, source))

    def info(self, message: str, source: str | None = None) -> None:
        self._add(Diagnostic(DiagnosticLevel.INFO, message, source))

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.level is DiagnosticLevel.WARNING]

    def __len__(self) -> int:
        return len(self.diagnostics)

    def _add(self, diagnostic: Diagnostic) -> None:
        logger.debug(f"Diagnostic recorded: {diagnostic}")
        self.diagnostics.append(diagnostic)
