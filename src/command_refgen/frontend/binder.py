"""Symbol binding for a loaded project.

Resolves base-class expressions to declared names by following each module's
imports and the project-wide class index. Anything that cannot be found in the
project (third-party or builtin bases) resolves to the name as imported.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass

from loguru import logger

from ..metrics.models import TypeReference
from .source import SourceModule
from .workspace import LoadedProject

# Bases that carry no inheritance information
_IGNORED_BASES = {"object", "builtins.object"}


@dataclass(frozen=True)
class ClassDeclaration:
    """A class found in a project module.

    Attributes:
        module: Module declaring the class
        node: Class definition
        qualified_name: ``pkg.mod.Outer.Inner``
        display_name: Name within its module, ``Outer.Inner``
    """

    module: SourceModule
    node: ast.ClassDef
    qualified_name: str
    display_name: str


@dataclass(frozen=True)
class ResolvedType:
    """Result of resolving a type expression.

    Attributes:
        name: Simple name (last dotted segment)
        qualified_name: Fully qualified name as far as imports tell
        type_arguments: Subscript arguments for generic bases
        declaration: Project declaration, when the type lives in the project
    """

    name: str
    qualified_name: str
    type_arguments: tuple[str, ...] = ()
    declaration: ClassDeclaration | None = None


class SymbolBinder:
    """Name resolution over one project's modules."""

    def __init__(self, project: LoadedProject) -> None:
        self.project = project
        self._classes: dict[str, ClassDeclaration] = {}
        self._local_classes: dict[str, dict[str, ClassDeclaration]] = {}
        self._imports: dict[str, dict[str, str]] = {}
        self._depth_cache: dict[str, int] = {}

        for module in project.modules:
            self._index_module(module)

        logger.debug(
            f"Bound {len(self._classes)} class(es) across {len(project.modules)} module(s)"
        )

    # ── indexing ────────────────────────────────────────────────────────

    def _index_module(self, module: SourceModule) -> None:
        local: dict[str, ClassDeclaration] = {}
        self._local_classes[module.module_name] = local
        self._imports[module.module_name] = self._collect_imports(module)

        def visit(node: ast.AST, prefix: str) -> None:
            for child in ast.iter_child_nodes(node):
                if isinstance(child, ast.ClassDef):
                    display = f"{prefix}.{child.name}" if prefix else child.name
                    declaration = ClassDeclaration(
                        module=module,
                        node=child,
                        qualified_name=f"{module.module_name}.{display}",
                        display_name=display,
                    )
                    self._classes[declaration.qualified_name] = declaration
                    if not prefix:
                        local[child.name] = declaration
                    visit(child, display)
                else:
                    visit(child, prefix)

        visit(module.tree, "")

    def _collect_imports(self, module: SourceModule) -> dict[str, str]:
        aliases: dict[str, str] = {}
        for node in ast.walk(module.tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.asname:
                        aliases[alias.asname] = alias.name
                    else:
                        head = alias.name.split(".")[0]
                        aliases[head] = head
            elif isinstance(node, ast.ImportFrom):
                base = self._resolve_from_module(module, node)
                for alias in node.names:
                    if alias.name == "*":
                        continue
                    target = f"{base}.{alias.name}" if base else alias.name
                    aliases[alias.asname or alias.name] = target
        return aliases

    @staticmethod
    def _resolve_from_module(module: SourceModule, node: ast.ImportFrom) -> str:
        if not node.level:
            return node.module or ""

        package = module.module_name
        if module.path.name != "__init__.py":
            package = package.rpartition(".")[0]
        for _ in range(node.level - 1):
            package = package.rpartition(".")[0]

        if node.module:
            return f"{package}.{node.module}" if package else node.module
        return package

    # ── queries ─────────────────────────────────────────────────────────

    def class_declarations(self, module: SourceModule) -> list[ClassDeclaration]:
        """All classes declared in ``module``, nested ones included, in source order."""
        declarations = [
            declaration
            for declaration in self._classes.values()
            if declaration.module is module
        ]
        return sorted(
            declarations, key=lambda d: (d.node.lineno, d.node.col_offset)
        )

    def resolve_base(self, module: SourceModule, expr: ast.expr) -> ResolvedType:
        """Resolve a base-class expression written in ``module``.

        Handles plain names, import aliases, dotted attributes and subscripted
        (generic) bases.
        """
        if isinstance(expr, ast.Subscript):
            resolved = self.resolve_base(module, expr.value)
            elements = expr.slice.elts if isinstance(expr.slice, ast.Tuple) else [expr.slice]
            return ResolvedType(
                name=resolved.name,
                qualified_name=resolved.qualified_name,
                type_arguments=tuple(module.text_of(element) for element in elements),
                declaration=resolved.declaration,
            )

        dotted = _dotted_name(expr)
        if dotted is None:
            text = module.text_of(expr)
            return ResolvedType(name=text, qualified_name=text)

        head, _, rest = dotted.partition(".")
        local = self._local_classes.get(module.module_name, {})
        if not rest and head in local:
            declaration = local[head]
            return ResolvedType(
                name=head,
                qualified_name=declaration.qualified_name,
                declaration=declaration,
            )

        imports = self._imports.get(module.module_name, {})
        if head in imports:
            qualified = imports[head] + (f".{rest}" if rest else "")
        else:
            qualified = dotted

        return ResolvedType(
            name=qualified.rpartition(".")[2],
            qualified_name=qualified,
            declaration=self._classes.get(qualified),
        )

    def interfaces(self, module: SourceModule, node: ast.ClassDef) -> tuple[TypeReference, ...]:
        """Explicit base types of a class, ``object`` excluded."""
        references = []
        for base in node.bases:
            resolved = self.resolve_base(module, base)
            if resolved.qualified_name in _IGNORED_BASES:
                continue
            references.append(
                TypeReference(name=resolved.name, type_arguments=resolved.type_arguments)
            )
        return tuple(references)

    def depth_of_inheritance(self, declaration: ClassDeclaration) -> int:
        """Depth of a class in its inheritance tree.

        A class with no explicit bases sits at depth 1 (below ``object``). Bases
        outside the project count as depth 1, so their subclasses get 2.
        """
        return self._depth(declaration, set())

    def _depth(self, declaration: ClassDeclaration, visiting: set[str]) -> int:
        key = declaration.qualified_name
        if key in self._depth_cache:
            return self._depth_cache[key]
        if key in visiting:
            logger.debug(f"Inheritance cycle through {key}")
            return 1

        visiting.add(key)
        depth = 1
        for base in declaration.node.bases:
            resolved = self.resolve_base(declaration.module, base)
            if resolved.qualified_name in _IGNORED_BASES:
                continue
            if resolved.declaration is not None:
                depth = max(depth, self._depth(resolved.declaration, visiting) + 1)
            else:
                depth = max(depth, 2)
        visiting.discard(key)

        self._depth_cache[key] = depth
        return depth


def _dotted_name(expr: ast.expr) -> str | None:
    parts: list[str] = []
    current: ast.expr = expr
    while isinstance(current, ast.Attribute):
        parts.append(current.attr)
        current = current.value
    if not isinstance(current, ast.Name):
        return None
    parts.append(current.id)
    return ".".join(reversed(parts))
