"""Pairwise correlation analysis over the dimension history.

Every unordered pair of dimensions whose windows hold more than
``min_samples`` values is scored with the Pearson coefficient of their
most recent ``window`` samples. The strongest pairs by absolute value
become the pattern the projector works with.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from drift_solver.engine.history import DimensionHistory
from drift_solver.engine.projection import Projection, project_vectors


CORRELATION_WINDOW = 10
TOP_PAIRS = 3


@dataclass(frozen=True)
class CorrelationPattern:
    """Top correlated dimension pairs and the projections derived from them.

    Attributes:
        pairs: Dimension index pairs ``(a, b)`` with ``a < b``, sorted by
            descending absolute correlation.
        strengths: Signed Pearson coefficients matching ``pairs``.
        projections: Projections of the vectors the pattern was built from.
    """

    pairs: tuple[tuple[int, int], ...]
    strengths: tuple[float, ...]
    projections: tuple[Projection, ...] = field(default=(), compare=False)

    def project(self, vectors: Sequence[np.ndarray]) -> list[Projection]:
        """Project a new batch of vectors through this pattern's pairs."""
        return project_vectors(vectors, self.pairs, self.strengths)

    def to_dict(self) -> dict:
        return {
            'pairs': [list(p) for p in self.pairs],
            'strengths': list(self.strengths),
            'projections': [p.to_dict() for p in self.projections],
        }


def pearson(x: np.ndarray, y: np.ndarray) -> float:
    """Pearson correlation by the running-sums formula.

    Returns 0.0 for empty or mismatched series and whenever either series
    has no variance.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    n = len(x)
    if n == 0 or n != len(y):
        return 0.0

    sum_x = float(x.sum())
    sum_y = float(y.sum())
    sum_x2 = float(np.dot(x, x))
    sum_y2 = float(np.dot(y, y))
    sum_xy = float(np.dot(x, y))

    num = sum_xy - sum_x * sum_y / n
    den_sq = (sum_x2 - sum_x ** 2 / n) * (sum_y2 - sum_y ** 2 / n)
    if den_sq <= 0:
        return 0.0

    return float(np.clip(num / np.sqrt(den_sq), -1.0, 1.0))


def dimension_correlations(
    history: DimensionHistory,
    window: int = CORRELATION_WINDOW,
) -> list[tuple[tuple[int, int], float]]:
    """Correlate every qualifying dimension pair, in discovery order.

    A pair qualifies when both windows hold more than ``window`` samples.
    """
    results = []
    for a in range(history.dimensions - 1):
        if history.sample_count(a) <= window:
            continue
        tail_a = history.tail(a, window)
        for b in range(a + 1, history.dimensions):
            if history.sample_count(b) <= window:
                continue
            results.append(((a, b), pearson(tail_a, history.tail(b, window))))
    return results


def build_pattern(
    history: DimensionHistory,
    vectors: Sequence[np.ndarray],
    window: int = CORRELATION_WINDOW,
    top: int = TOP_PAIRS,
) -> CorrelationPattern:
    """Select the strongest pairs and project ``vectors`` onto them.

    Pairs are ranked by descending ``|r|`` with a stable sort, so ties keep
    discovery order. Fewer than ``top`` pairs are returned when the history
    is too short.
    """
    ranked = sorted(dimension_correlations(history, window), key=lambda item: -abs(item[1]))
    selected = ranked[:top]

    pairs = tuple(pair for pair, _ in selected)
    strengths = tuple(r for _, r in selected)
    projections = tuple(project_vectors(vectors, pairs, strengths))

    return CorrelationPattern(pairs, strengths, projections)
