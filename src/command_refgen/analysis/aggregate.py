"""Aggregation of per-project results across a run."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, MutableMapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Generic, TypeVar

from loguru import logger

from ..core.diagnostics import DiagnosticSink
from ..core.exceptions import AnalysisCancelledError, ProjectError
from ..extraction.models import CommandCatalog
from ..metrics.models import MetricNode
from ..utils.cancellation import CancellationToken
from .analyzer import ProjectAnalyzer

V = TypeVar("V")


class ProjectResultMap(MutableMapping[str, V], Generic[V]):
    """Mapping keyed by project path, ignoring letter case.

    Assigning to an existing key (in any casing) replaces the value and keeps
    the spelling the key was first stored with.
    """

    def __init__(self, items: Iterable[tuple[str, V]] = ()) -> None:
        self._data: dict[str, tuple[str, V]] = {}
        for key, value in items:
            self[key] = value

    def __setitem__(self, key: str, value: V) -> None:
        folded = key.casefold()
        existing = self._data.get(folded)
        original = existing[0] if existing is not None else key
        self._data[folded] = (original, value)

    def __getitem__(self, key: str) -> V:
        return self._data[key.casefold()][1]

    def __delitem__(self, key: str) -> None:
        del self._data[key.casefold()]

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._data.values())

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"


@dataclass
class AnalysisRun:
    """Everything a run aggregated.

    Attributes:
        metrics: Assembly metrics per project file
        commands: Command catalog per project file
        diagnostics: Warnings collected while analyzing
        cancelled: True when cancellation stopped the run early
    """

    metrics: ProjectResultMap[MetricNode] = field(default_factory=ProjectResultMap)
    commands: ProjectResultMap[CommandCatalog] = field(default_factory=ProjectResultMap)
    diagnostics: DiagnosticSink = field(default_factory=DiagnosticSink)
    cancelled: bool = False


async def analyze_projects(
    paths: Iterable[Path],
    analyzer: ProjectAnalyzer,
    token: CancellationToken,
) -> AnalysisRun:
    """Analyze project files one after another.

    A project's results are committed only after it completes. Cancellation
    stops the queue; results committed so far are kept. Project-level errors
    skip the project with a warning.

    Args:
        paths: Project files, in processing order
        analyzer: Analyzer sharing the run's diagnostics sink
        token: Cancellation token observed at each project boundary

    Returns:
        Aggregated run
    """
    run = AnalysisRun(diagnostics=analyzer.diagnostics)

    for path in paths:
        try:
            results = await analyzer.analyze(path, token)
        except AnalysisCancelledError as e:
            logger.warning(f"{e}; skipping remaining projects")
            run.cancelled = True
            break
        except ProjectError as e:
            logger.warning(f"Skipping {path}: {e}")
            run.diagnostics.warning(str(e), source=str(path))
            continue

        for result in results:
            run.metrics[result.path] = result.metrics
            run.commands[result.path] = result.catalog

    logger.info(f"Analyzed {len(run.metrics)} project(s)")
    return run
