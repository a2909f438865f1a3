"""Synthetic complexity telemetry for solve calls.

These numbers describe wall-clock behaviour only. They have no influence
on the solution and say nothing about the true complexity of the problem.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from drift_solver.core.problems import ProblemKind


THEORETICAL_COMPLEXITY: dict[ProblemKind, str] = {
    ProblemKind.TOUR: 'O(n!)',
    ProblemKind.COLORING: 'O(k^n)',
    ProblemKind.SATISFACTION: 'O(2^n)',
    ProblemKind.SUBSET: 'O(2^n)',
}


@dataclass(frozen=True)
class ComplexityMetrics:
    """Telemetry attached to a solve result.

    Attributes:
        theoretical_complexity: Textbook worst case for exact search.
        measured_complexity: ``elapsed_ms / (size * ln(size))``.
        polynomial_degree: ``ln(elapsed_ms / 10) / ln(size)``, 2 decimals.
        time_complexity: ``O(n^<degree>)`` display string.
    """

    theoretical_complexity: str
    measured_complexity: float
    polynomial_degree: float

    @property
    def time_complexity(self) -> str:
        return f"O(n^{self.polynomial_degree})"

    def to_dict(self) -> dict[str, Any]:
        return {
            'theoretical_complexity': self.theoretical_complexity,
            'measured_complexity': self.measured_complexity,
            'polynomial_degree': self.polynomial_degree,
            'time_complexity': self.time_complexity,
        }


def measured_complexity(size: int, elapsed_ms: float) -> float:
    """Elapsed time normalized by ``n log n``; 0.0 when ``size <= 1``."""
    if size <= 1:
        return 0.0
    return elapsed_ms / (size * math.log(size))


def polynomial_degree(size: int, elapsed_ms: float) -> float:
    """Exponent ``d`` with ``elapsed_ms / 10 == size ** d``.

    Returns 0.0 when the logarithms are undefined (``size <= 1`` or no
    measurable time).
    """
    if size <= 1 or elapsed_ms <= 0:
        return 0.0
    degree = math.log(elapsed_ms / 10) / math.log(size)
    return round(degree, 2)


def estimate_metrics(kind: ProblemKind, size: int, elapsed_ms: float) -> ComplexityMetrics:
    return ComplexityMetrics(
        theoretical_complexity=THEORETICAL_COMPLEXITY.get(kind, 'Unknown'),
        measured_complexity=measured_complexity(size, elapsed_ms),
        polynomial_degree=polynomial_degree(size, elapsed_ms),
    )
