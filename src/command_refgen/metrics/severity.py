"""Cyclomatic complexity severity bands.

The breakpoints are a fixed contract, not measured thresholds:

    0-7   pass
    8-9   caution
    10-11 high
    12-14 critical
    15+   extreme

Bands are inclusive on both ends and partition all non-negative integers.
"""

from __future__ import annotations

from enum import Enum


class Severity(Enum):
    """Severity band of a complexity value, ordered from safest to worst."""

    PASS = (0, "pass")
    CAUTION = (1, "caution")
    HIGH = (2, "high")
    CRITICAL = (3, "critical")
    EXTREME = (4, "extreme")

    def __init__(self, rank: int, label: str) -> None:
        self.rank = rank
        self.label = label

    def __lt__(self, other: Severity) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank


# (inclusive upper bound, band); the last band is open-ended
_BANDS: list[tuple[int, Severity]] = [
    (7, Severity.PASS),
    (9, Severity.CAUTION),
    (11, Severity.HIGH),
    (14, Severity.CRITICAL),
]


def classify_complexity(complexity: int) -> Severity:
    """Map a cyclomatic complexity value to its severity band.

    Args:
        complexity: Non-negative cyclomatic complexity

    Returns:
        The severity band containing ``complexity``

    Raises:
        ValueError: If ``complexity`` is negative
    """
    if complexity < 0:
        raise ValueError(f"Complexity must be non-negative, got {complexity}")

    for upper, severity in _BANDS:
        if complexity <= upper:
            return severity
    return Severity.EXTREME
