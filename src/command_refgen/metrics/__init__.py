"""Metrics tree model and complexity severity classification.

Example:
    member = MetricNode(
        kind=SymbolKind.METHOD,
        name="ping",
        display_name="None Fun.ping(ctx: Context)",
        cyclomatic_complexity=9,
    )
    fun = MetricNode(
        kind=SymbolKind.NAMED_TYPE, name="Fun", display_name="Fun", children=(member,)
    )

    rating = find_highest_complexity(fun)
    assert rating.value == 9
    assert rating.severity is Severity.CAUTION
"""

from .models import (
    UNKNOWN_COMPLEXITY,
    ComplexityRating,
    MetricNode,
    SymbolKind,
    SymbolLocation,
    TypeReference,
    count_kind,
    count_named_types,
    count_namespaces,
    find_highest_complexity,
    iter_descendants,
)
from .severity import Severity, classify_complexity

__all__ = [
    "UNKNOWN_COMPLEXITY",
    "ComplexityRating",
    "MetricNode",
    "Severity",
    "SymbolKind",
    "SymbolLocation",
    "TypeReference",
    "classify_complexity",
    "count_kind",
    "count_named_types",
    "count_namespaces",
    "find_highest_complexity",
    "iter_descendants",
]
