"""Per-project analysis."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from ..config.settings import RefGenSettings
from ..core.diagnostics import DiagnosticSink
from ..extraction.extractor import CommandExtractor
from ..extraction.models import CommandCatalog
from ..frontend.binder import SymbolBinder
from ..frontend.metrics_builder import MetricsTreeBuilder
from ..frontend.workspace import LoadedProject, ProjectWorkspace
from ..metrics.models import MetricNode
from ..utils.cancellation import CancellationToken


@dataclass(frozen=True)
class ProjectResult:
    """Metrics and commands of one project file.

    Attributes:
        path: Project file path, the aggregation key
        metrics: Assembly-level metrics tree
        catalog: Command modules found in the project
    """

    path: str
    metrics: MetricNode
    catalog: CommandCatalog


class ProjectAnalyzer:
    """Loads a project file and produces its metrics tree and command catalog."""

    def __init__(self, settings: RefGenSettings, diagnostics: DiagnosticSink) -> None:
        self.settings = settings
        self.diagnostics = diagnostics
        self.workspace = ProjectWorkspace(settings, diagnostics)
        self.extractor = CommandExtractor(settings, diagnostics)

    async def analyze(self, path: Path, token: CancellationToken) -> list[ProjectResult]:
        """Analyze one project file.

        Cancellation is checked before loading and after every awaited step,
        so a cancelled project returns nothing partial.

        Args:
            path: Project file path
            token: Cancellation token

        Returns:
            One result per project defined by the file; empty if it is missing

        Raises:
            AnalysisCancelledError: If cancellation was requested
        """
        token.raise_if_cancelled(str(path))

        if not path.is_file():
            logger.warning(f"{path} doesn't exist")
            self.diagnostics.warning("Project file doesn't exist", source=str(path))
            return []

        logger.info(f"Computing analytics on {path}")
        projects = await self.workspace.load_project(path)
        token.raise_if_cancelled(str(path))

        results = []
        for project in projects:
            metrics, catalog = await asyncio.to_thread(self._analyze_loaded, project)
            token.raise_if_cancelled(str(path))
            results.append(
                ProjectResult(path=str(project.file_path), metrics=metrics, catalog=catalog)
            )
        return results

    def _analyze_loaded(self, project: LoadedProject) -> tuple[MetricNode, CommandCatalog]:
        binder = SymbolBinder(project)
        catalog = self.extractor.extract(project, binder)
        metrics = MetricsTreeBuilder(project, binder).build()
        return metrics, catalog
