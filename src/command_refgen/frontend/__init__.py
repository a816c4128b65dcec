"""Python front end: project loading, symbol binding and raw metrics."""

from .binder import ClassDeclaration, ResolvedType, SymbolBinder
from .metrics_builder import MetricsTreeBuilder, collect_type_references
from .source import SourceModule, first_line, iter_preorder
from .workspace import LoadedProject, ProjectWorkspace

__all__ = [
    "ClassDeclaration",
    "LoadedProject",
    "MetricsTreeBuilder",
    "ProjectWorkspace",
    "ResolvedType",
    "SourceModule",
    "SymbolBinder",
    "collect_type_references",
    "first_line",
    "iter_preorder",
]
