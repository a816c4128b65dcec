"""Project discovery and loading."""

from __future__ import annotations

import asyncio
import fnmatch
import tomllib
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from ..config.settings import RefGenSettings
from ..core.diagnostics import DiagnosticSink
from ..core.exceptions import ParsingError, ProjectNotFoundError
from .source import SourceModule


@dataclass(frozen=True)
class LoadedProject:
    """A project file and the parsed modules it owns.

    Attributes:
        file_path: Path of the project file (``pyproject.toml``)
        name: Distribution name, or the directory name when undeclared
        root: Directory holding the project file
        source_root: Import root (``root/src`` for src layouts, else ``root``)
        modules: Parsed modules, ordered by path
    """

    file_path: Path
    name: str
    root: Path
    source_root: Path
    modules: tuple[SourceModule, ...]


class ProjectWorkspace:
    """Finds project files and loads their Python modules.

    A project owns every ``*.py`` file below its directory, except files in
    ignored directories and files belonging to a nested project.
    """

    def __init__(self, settings: RefGenSettings, diagnostics: DiagnosticSink) -> None:
        self.settings = settings
        self.diagnostics = diagnostics
        self._project_file_names = {
            Path(pattern).name for pattern in settings.project_patterns
        }

    def discover_projects(self, directory: Path) -> list[Path]:
        """Return absolute paths of all project files below ``directory``.

        Args:
            directory: Root directory to search recursively

        Returns:
            Sorted list of matching project files
        """
        directory = directory.resolve()
        found: set[Path] = set()
        for pattern in self.settings.project_patterns:
            for path in directory.glob(pattern):
                if not path.is_file():
                    continue
                if self._is_ignored(path.relative_to(directory)):
                    continue
                found.add(path)

        projects = sorted(found)
        logger.debug(f"Discovered {len(projects)} project file(s) under {directory}")
        return projects

    async def load_project(self, path: Path) -> list[LoadedProject]:
        """Load a project file without blocking the event loop."""
        return await asyncio.to_thread(self._load_project, path)

    def _load_project(self, path: Path) -> list[LoadedProject]:
        if not path.is_file():
            raise ProjectNotFoundError(f"{path} doesn't exist", context={"path": str(path)})

        root = path.parent
        source_root = root / "src" if (root / "src").is_dir() else root
        name = self.read_project_name(path) or root.name

        modules: list[SourceModule] = []
        for file_path in self._iter_source_files(root):
            module_name = self.module_name_for(file_path, source_root, root)
            try:
                modules.append(SourceModule.parse(file_path, module_name))
            except ParsingError as e:
                logger.warning(f"Skipping unparseable module: {e}")
                self.diagnostics.warning(str(e), source=str(file_path))

        logger.debug(f"Loaded {len(modules)} module(s) for project {name}")
        return [
            LoadedProject(
                file_path=path,
                name=name,
                root=root,
                source_root=source_root,
                modules=tuple(modules),
            )
        ]

    def _iter_source_files(self, root: Path) -> list[Path]:
        files = []
        for file_path in sorted(root.rglob("*.py")):
            relative = file_path.relative_to(root)
            if self._is_ignored(relative):
                continue
            if self._in_nested_project(file_path, root):
                continue
            files.append(file_path)
        return files

    def _is_ignored(self, relative: Path) -> bool:
        for part in relative.parts[:-1]:
            for pattern in self.settings.ignore_patterns:
                if fnmatch.fnmatch(part, pattern):
                    return True
        return False

    def _in_nested_project(self, file_path: Path, root: Path) -> bool:
        for parent in file_path.parents:
            if parent == root:
                return False
            if any((parent / name).is_file() for name in self._project_file_names):
                return True
        return False

    @staticmethod
    def read_project_name(path: Path) -> str | None:
        """Read ``[project].name`` from a pyproject file, if declared."""
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.debug(f"Could not read project name from {path}: {e}")
            return None
        project = data.get("project")
        if isinstance(project, dict) and isinstance(project.get("name"), str):
            return project["name"]
        return None

    @staticmethod
    def module_name_for(file_path: Path, source_root: Path, root: Path) -> str:
        """Dotted module name of ``file_path`` relative to its import root."""
        try:
            relative = file_path.relative_to(source_root)
        except ValueError:
            relative = file_path.relative_to(root)

        parts = list(relative.with_suffix("").parts)
        if parts and parts[-1] == "__init__":
            parts.pop()
        return ".".join(parts) or file_path.parent.name
