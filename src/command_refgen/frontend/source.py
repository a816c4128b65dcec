"""Parsed Python source modules."""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path

from ..core.exceptions import ParsingError


@dataclass(frozen=True, eq=False)
class SourceModule:
    """A Python file and its syntax tree.

    Attributes:
        path: Absolute path of the file
        module_name: Dotted module name (``pkg.sub.mod``)
        source: File contents
        tree: Parsed module
    """

    path: Path
    module_name: str
    source: str
    tree: ast.Module = field(repr=False)

    @classmethod
    def parse(cls, path: Path, module_name: str) -> SourceModule:
        """Read and parse a Python file.

        Raises:
            ParsingError: If the file cannot be decoded or parsed
        """
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParsingError(f"Cannot read {path}: {e}", context={"path": str(path)}) from e

        try:
            tree = ast.parse(source, filename=str(path))
        except SyntaxError as e:
            raise ParsingError(
                f"Cannot parse {path}: {e.msg} (line {e.lineno})",
                context={"path": str(path), "line": e.lineno},
            ) from e

        return cls(path=path, module_name=module_name, source=source, tree=tree)

    @cached_property
    def lines(self) -> list[str]:
        return self.source.splitlines()

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def text_of(self, node: ast.AST) -> str:
        """Source text of an expression as written, falling back to unparse."""
        segment = ast.get_source_segment(self.source, node)
        if segment is None:
            return ast.unparse(node)
        return " ".join(segment.split())


def first_line(node: ast.FunctionDef | ast.AsyncFunctionDef | ast.ClassDef) -> int:
    """First line of a definition, decorators included."""
    lines = [decorator.lineno for decorator in node.decorator_list]
    lines.append(node.lineno)
    return min(lines)


def iter_preorder(node: ast.AST):
    """Yield ``node`` and its descendants in source (pre-)order.

    ``ast.walk`` is breadth-first, which does not preserve declaration order.
    """
    yield node
    for child in ast.iter_child_nodes(node):
        yield from iter_preorder(child)
