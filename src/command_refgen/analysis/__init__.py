"""Project analysis orchestration."""

from .aggregate import AnalysisRun, ProjectResultMap, analyze_projects
from .analyzer import ProjectAnalyzer, ProjectResult

__all__ = [
    "AnalysisRun",
    "ProjectAnalyzer",
    "ProjectResult",
    "ProjectResultMap",
    "analyze_projects",
]
