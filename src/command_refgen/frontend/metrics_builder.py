"""Metrics tree construction backed by radon.

Member-level values come straight from radon (cyclomatic complexity, Halstead
volume, maintainability index). Type, namespace and assembly nodes aggregate
their children: line counts are summed, maintainability is averaged and
complexity is left unset above member granularity.
"""

from __future__ import annotations

import ast
import builtins

from loguru import logger
from radon.metrics import h_visit_ast, mi_compute
from radon.visitors import ComplexityVisitor

from ..config.defaults import SYNTHETIC_TYPE_NAME
from ..metrics.models import MetricNode, SymbolKind, SymbolLocation
from .binder import ClassDeclaration, SymbolBinder
from .source import SourceModule, first_line
from .workspace import LoadedProject

_BUILTIN_NAMES = frozenset(dir(builtins))

# typing special forms are not coupled types
_TYPING_FORMS = frozenset(
    {
        "Annotated",
        "Any",
        "Callable",
        "ClassVar",
        "Final",
        "Generic",
        "Literal",
        "Optional",
        "Protocol",
        "Self",
        "TypeVar",
        "Union",
    }
)

_STATIC_DECORATORS = {"staticmethod", "classmethod"}

FunctionNode = ast.FunctionDef | ast.AsyncFunctionDef


def collect_type_references(node: ast.AST) -> set[str]:
    """Collect names of types referenced below ``node``.

    Annotations contribute every name they mention; calls contribute their
    callee when it looks like a class (capitalized). Builtins and typing
    special forms are excluded.
    """
    names: set[str] = set()

    def add_annotation(annotation: ast.expr | None) -> None:
        if annotation is None:
            return
        for sub in ast.walk(annotation):
            if isinstance(sub, ast.Name):
                names.add(sub.id)
            elif isinstance(sub, ast.Attribute):
                names.add(sub.attr)
            elif isinstance(sub, ast.Constant) and isinstance(sub.value, str):
                # string (forward) annotations
                try:
                    names.update(collect_type_references(ast.parse(sub.value, mode="eval")))
                except SyntaxError:
                    continue

    for sub in ast.walk(node):
        if isinstance(sub, (ast.FunctionDef, ast.AsyncFunctionDef)):
            add_annotation(sub.returns)
            for arg in _all_arguments(sub.args):
                add_annotation(arg.annotation)
        elif isinstance(sub, ast.AnnAssign):
            add_annotation(sub.annotation)
        elif isinstance(sub, ast.Call):
            callee = sub.func
            name = None
            if isinstance(callee, ast.Name):
                name = callee.id
            elif isinstance(callee, ast.Attribute):
                name = callee.attr
            if name and name[0].isupper():
                names.add(name)
        elif isinstance(sub, ast.Expression):
            add_annotation(sub.body)

    return {
        name for name in names if name not in _BUILTIN_NAMES and name not in _TYPING_FORMS
    }


def _all_arguments(args: ast.arguments) -> list[ast.arg]:
    collected = [*args.posonlyargs, *args.args, *args.kwonlyargs]
    if args.vararg:
        collected.append(args.vararg)
    if args.kwarg:
        collected.append(args.kwarg)
    return collected


def _decorator_name(decorator: ast.expr) -> str:
    target = decorator.func if isinstance(decorator, ast.Call) else decorator
    if isinstance(target, ast.Attribute):
        return target.attr
    if isinstance(target, ast.Name):
        return target.id
    return ""


def _executable_lines(body: list[ast.stmt]) -> int:
    """Distinct lines holding a statement, docstring excluded."""
    if (
        body
        and isinstance(body[0], ast.Expr)
        and isinstance(body[0].value, ast.Constant)
        and isinstance(body[0].value.value, str)
    ):
        body = body[1:]

    lines: set[int] = set()
    for statement in body:
        for sub in ast.walk(statement):
            if isinstance(sub, ast.stmt):
                lines.add(sub.lineno)
    return len(lines)


class MetricsTreeBuilder:
    """Builds the assembly -> namespace -> type -> member tree of one project."""

    def __init__(self, project: LoadedProject, binder: SymbolBinder) -> None:
        self.project = project
        self.binder = binder

    def build(self) -> MetricNode:
        """Compute the project's metrics tree.

        Returns:
            Assembly node named after the project
        """
        namespaces = [self._namespace(module) for module in self.project.modules]
        namespaces = [node for node in namespaces if node.children]

        logger.debug(
            f"Built metrics for {self.project.name}: {len(namespaces)} namespace(s)"
        )
        return MetricNode(
            kind=SymbolKind.ASSEMBLY,
            name=self.project.name,
            display_name=self.project.name,
            source_lines=sum(node.source_lines for node in namespaces),
            executable_lines=sum(node.executable_lines for node in namespaces),
            maintainability_index=_mean_index(namespaces),
            coupled_types=_merged_coupling(namespaces),
            children=tuple(namespaces),
        )

    # ── containers ──────────────────────────────────────────────────────

    def _namespace(self, module: SourceModule) -> MetricNode:
        types = [self._type(module, declaration) for declaration in self.binder.class_declarations(module)]
        synthetic = self._synthetic_type(module)
        if synthetic is not None:
            types.append(synthetic)

        return MetricNode(
            kind=SymbolKind.NAMESPACE,
            name=module.module_name,
            display_name=module.module_name,
            source_lines=module.line_count,
            executable_lines=sum(node.executable_lines for node in types),
            maintainability_index=_mean_index(types),
            coupled_types=_merged_coupling(types),
            children=tuple(types),
        )

    def _type(self, module: SourceModule, declaration: ClassDeclaration) -> MetricNode:
        node = declaration.node
        owner = declaration.display_name
        members = self._members(module, owner, node.body, in_class=True)

        return MetricNode(
            kind=SymbolKind.NAMED_TYPE,
            name=owner,
            display_name=owner,
            source_lines=node.end_lineno - first_line(node) + 1,
            executable_lines=sum(member.executable_lines for member in members),
            maintainability_index=_mean_index(members),
            depth_of_inheritance=self.binder.depth_of_inheritance(declaration),
            coupled_types=tuple(sorted(collect_type_references(node))),
            children=tuple(members),
            location=SymbolLocation(str(module.path), first_line(node)),
            interfaces=self.binder.interfaces(module, node),
        )

    def _synthetic_type(self, module: SourceModule) -> MetricNode | None:
        members = self._members(module, SYNTHETIC_TYPE_NAME, module.tree.body, in_class=False)
        if not members:
            return None

        return MetricNode(
            kind=SymbolKind.NAMED_TYPE,
            name=SYNTHETIC_TYPE_NAME,
            display_name=SYNTHETIC_TYPE_NAME,
            source_lines=sum(member.source_lines for member in members),
            executable_lines=sum(member.executable_lines for member in members),
            maintainability_index=_mean_index(members),
            depth_of_inheritance=1,
            coupled_types=_merged_coupling(members),
            children=tuple(members),
        )

    # ── members ─────────────────────────────────────────────────────────

    def _members(
        self, module: SourceModule, owner: str, body: list[ast.stmt], *, in_class: bool
    ) -> list[MetricNode]:
        members: list[MetricNode] = []
        seen_fields: set[str] = set()

        for statement in body:
            if isinstance(statement, (ast.FunctionDef, ast.AsyncFunctionDef)):
                member = self._function_member(module, owner, statement, in_class=in_class)
                if member is not None:
                    members.append(member)
                if in_class and statement.name == "__init__":
                    for field in self._instance_fields(module, owner, statement):
                        if field.name not in seen_fields:
                            seen_fields.add(field.name)
                            members.append(field)
            elif isinstance(statement, (ast.Assign, ast.AnnAssign)):
                for field in self._assigned_fields(module, owner, statement, in_class=in_class):
                    if field.name not in seen_fields:
                        seen_fields.add(field.name)
                        members.append(field)

        return members

    def _function_member(
        self, module: SourceModule, owner: str, node: FunctionNode, *, in_class: bool
    ) -> MetricNode | None:
        decorators = {_decorator_name(decorator) for decorator in node.decorator_list}
        if decorators & {"setter", "deleter"}:
            return None

        is_property = in_class and ("property" in decorators or "cached_property" in decorators)
        start = first_line(node)
        complexity = _cyclomatic_complexity(node)
        source_lines = node.end_lineno - start + 1

        if is_property:
            kind = SymbolKind.PROPERTY
            display_name = f"{owner}.{node.name}"
            return_type = None
        else:
            kind = SymbolKind.METHOD
            return_type = _annotation_text(module, node.returns)
            params = _format_parameters(module, node.args, drop_receiver=in_class and "staticmethod" not in decorators)
            if in_class and node.name == "__init__":
                display_name = f"{owner}.__init__({params})"
            else:
                display_name = f"{return_type} {owner}.{node.name}({params})"

        return MetricNode(
            kind=kind,
            name=node.name,
            display_name=display_name,
            source_lines=source_lines,
            executable_lines=_executable_lines(node.body),
            cyclomatic_complexity=complexity,
            maintainability_index=_maintainability_index(module, node, complexity, start),
            coupled_types=tuple(sorted(collect_type_references(node))),
            location=SymbolLocation(str(module.path), start),
            is_static=bool(decorators & _STATIC_DECORATORS) or not in_class,
            is_abstract="abstractmethod" in decorators,
            return_type=return_type,
        )

    def _assigned_fields(
        self,
        module: SourceModule,
        owner: str,
        node: ast.Assign | ast.AnnAssign,
        *,
        in_class: bool,
    ) -> list[MetricNode]:
        if isinstance(node, ast.AnnAssign):
            targets = [node.target]
            annotation = node.annotation
        else:
            targets = node.targets
            annotation = None

        annotation_text = module.text_of(annotation) if annotation is not None else ""
        is_class_var = annotation is None or annotation_text.startswith(("ClassVar", "typing.ClassVar"))

        fields = []
        for target in targets:
            if not isinstance(target, ast.Name):
                continue
            fields.append(
                self._field(
                    module,
                    owner,
                    target.id,
                    node,
                    has_value=node.value is not None,
                    is_static=is_class_var or not in_class,
                )
            )
        return fields

    def _instance_fields(self, module: SourceModule, owner: str, init: FunctionNode) -> list[MetricNode]:
        fields = []
        for sub in ast.walk(init):
            if isinstance(sub, ast.Assign):
                targets = sub.targets
            elif isinstance(sub, ast.AnnAssign):
                targets = [sub.target]
            else:
                continue
            for target in targets:
                if (
                    isinstance(target, ast.Attribute)
                    and isinstance(target.value, ast.Name)
                    and target.value.id == "self"
                ):
                    fields.append(
                        self._field(module, owner, target.attr, sub, has_value=True, is_static=False)
                    )
        return fields

    @staticmethod
    def _field(
        module: SourceModule,
        owner: str,
        name: str,
        node: ast.stmt,
        *,
        has_value: bool,
        is_static: bool,
    ) -> MetricNode:
        return MetricNode(
            kind=SymbolKind.FIELD,
            name=name,
            display_name=f"{owner}.{name}",
            source_lines=node.end_lineno - node.lineno + 1,
            executable_lines=1 if has_value else 0,
            cyclomatic_complexity=0,
            maintainability_index=100,
            coupled_types=tuple(sorted(collect_type_references(node))),
            location=SymbolLocation(str(module.path), node.lineno),
            is_static=is_static,
        )


# ── radon helpers ───────────────────────────────────────────────────────


def _cyclomatic_complexity(node: FunctionNode) -> int:
    visitor = ComplexityVisitor.from_ast(node)
    if visitor.functions:
        return visitor.functions[0].complexity
    return visitor.complexity


def _maintainability_index(module: SourceModule, node: FunctionNode, complexity: int, start: int) -> int:
    span = module.lines[start - 1 : node.end_lineno]
    lloc = _executable_lines(node.body) or 1
    comments = sum(1 for line in span if line.strip().startswith("#"))
    comment_percent = comments * 100.0 / len(span) if span else 0.0

    try:
        volume = h_visit_ast(node).total.volume
    except (ValueError, ZeroDivisionError) as e:
        logger.debug(f"Halstead volume unavailable for {node.name} in {module.path.name}: {e}")
        volume = 0

    index = mi_compute(volume, complexity, lloc, comment_percent)
    return max(0, min(100, round(index)))


def _mean_index(nodes: list[MetricNode]) -> int:
    if not nodes:
        return 100
    return round(sum(node.maintainability_index for node in nodes) / len(nodes))


def _merged_coupling(nodes: list[MetricNode]) -> tuple[str, ...]:
    merged: set[str] = set()
    for node in nodes:
        merged.update(node.coupled_types)
    return tuple(sorted(merged))


# ── display helpers ─────────────────────────────────────────────────────


def _annotation_text(module: SourceModule, annotation: ast.expr | None) -> str:
    if annotation is None:
        return "Any"
    return module.text_of(annotation).replace(" ", "")


def _format_parameters(module: SourceModule, args: ast.arguments, *, drop_receiver: bool) -> str:
    positional = [*args.posonlyargs, *args.args]
    if drop_receiver and positional and positional[0].arg in ("self", "cls"):
        positional = positional[1:]

    rendered = [_format_arg(module, arg) for arg in positional]
    if args.vararg:
        rendered.append(f"*{args.vararg.arg}")
    rendered.extend(_format_arg(module, arg) for arg in args.kwonlyargs)
    if args.kwarg:
        rendered.append(f"**{args.kwarg.arg}")
    return ", ".join(rendered)


def _format_arg(module: SourceModule, arg: ast.arg) -> str:
    if arg.annotation is None:
        return arg.arg
    return f"{arg.arg}: {module.text_of(arg.annotation)}"
