"""Metrics tree model.

A project's metrics form a tree: assembly -> namespace -> type -> member.
Nodes are immutable after construction and own their children; children hold
no reference back to their parent.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum

from .severity import Severity, classify_complexity


class SymbolKind(StrEnum):
    ASSEMBLY = "Assembly"
    NAMESPACE = "Namespace"
    NAMED_TYPE = "NamedType"
    METHOD = "Method"
    FIELD = "Field"
    PROPERTY = "Property"
    EVENT = "Event"

    @property
    def is_member(self) -> bool:
        return self not in _CONTAINER_KINDS


_CONTAINER_KINDS = frozenset(
    {SymbolKind.ASSEMBLY, SymbolKind.NAMESPACE, SymbolKind.NAMED_TYPE}
)


@dataclass(frozen=True)
class SymbolLocation:
    """Source position of a symbol (1-based line)."""

    file_path: str
    line: int


@dataclass(frozen=True)
class TypeReference:
    """A referenced type, e.g. a base class.

    Attributes:
        name: Simple type name
        type_arguments: Names of the type arguments; non-empty for generics
    """

    name: str
    type_arguments: tuple[str, ...] = ()

    @property
    def is_generic(self) -> bool:
        return bool(self.type_arguments)


@dataclass(frozen=True)
class MetricNode:
    """Metrics for one symbol and its children.

    Attributes:
        kind: Symbol kind
        name: Symbol name, used for ordering within a level
        display_name: Name rendered in reports (methods include the signature)
        source_lines: Lines of source code spanned by the symbol
        executable_lines: Approximate lines of executable code
        cyclomatic_complexity: Member-level complexity; None above members
        maintainability_index: Maintainability index, 0-100
        depth_of_inheritance: Inheritance depth; only meaningful for types
        coupled_types: Distinct names of referenced types
        children: Child nodes in declaration order
        location: Declaration position, when known
        is_static: Static/class-level member
        is_abstract: Abstract member
        return_type: Declared return type of a method (spaces removed)
        interfaces: Base types of a named type
    """

    kind: SymbolKind
    name: str
    display_name: str
    source_lines: int = 0
    executable_lines: int = 0
    cyclomatic_complexity: int | None = None
    maintainability_index: int = 100
    depth_of_inheritance: int | None = None
    coupled_types: tuple[str, ...] = ()
    children: tuple[MetricNode, ...] = ()
    location: SymbolLocation | None = None
    is_static: bool = False
    is_abstract: bool = False
    return_type: str | None = None
    interfaces: tuple[TypeReference, ...] = field(default=())

    @property
    def coupled_type_count(self) -> int:
        return len(self.coupled_types)


@dataclass(frozen=True)
class ComplexityRating:
    """A complexity value paired with its severity band.

    ``UNKNOWN_COMPLEXITY`` (both fields None) is returned when a subtree holds
    no member-level symbol.
    """

    value: int | None
    severity: Severity | None

    @property
    def is_unknown(self) -> bool:
        return self.value is None


UNKNOWN_COMPLEXITY = ComplexityRating(value=None, severity=None)


def iter_descendants(node: MetricNode) -> Iterator[MetricNode]:
    """Yield every descendant of ``node`` in pre-order (node itself excluded)."""
    for child in node.children:
        yield child
        yield from iter_descendants(child)


def count_kind(node: MetricNode, kind: SymbolKind) -> int:
    """Count descendants of ``node`` with the given kind."""
    return sum(1 for descendant in iter_descendants(node) if descendant.kind is kind)


def count_namespaces(node: MetricNode) -> int:
    return count_kind(node, SymbolKind.NAMESPACE)


def count_named_types(node: MetricNode) -> int:
    return count_kind(node, SymbolKind.NAMED_TYPE)


def find_highest_complexity(node: MetricNode) -> ComplexityRating:
    """Find the highest member-level cyclomatic complexity below ``node``.

    Ties keep the first member met in pre-order.

    Args:
        node: Root of the subtree to inspect

    Returns:
        Rating of the most complex member, or UNKNOWN_COMPLEXITY
    """
    highest: MetricNode | None = None
    for descendant in iter_descendants(node):
        if not descendant.kind.is_member or descendant.cyclomatic_complexity is None:
            continue
        if (
            highest is None
            or descendant.cyclomatic_complexity > highest.cyclomatic_complexity
        ):
            highest = descendant

    if highest is None:
        return UNKNOWN_COMPLEXITY

    complexity = highest.cyclomatic_complexity
    return ComplexityRating(value=complexity, severity=classify_complexity(complexity))
