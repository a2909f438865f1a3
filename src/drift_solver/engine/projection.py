"""Projection of candidate vectors onto correlated dimension pairs.

For pair ``(d1, d2)`` at rank ``k`` with coefficient ``r_k`` a vector gets
coordinate ``((v[d1] + v[d2]) / 2) * |r_k|``, and its scalar value is
``sum(coord_k * PHI**k)``. The collapser then keeps the highest-valued
projections as evidence for the strategy layer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from drift_solver.engine.sampler import PHI


@dataclass(frozen=True)
class Projection:
    """One vector's position in pattern space.

    Attributes:
        coordinates: One coordinate per selected dimension pair (0 to 3).
        value: Golden-ratio weighted sum of the coordinates.
        vector_index: Index of the source vector in its batch.
    """

    coordinates: tuple[float, ...]
    value: float
    vector_index: int = 0

    def coord(self, rank: int) -> float:
        """Coordinate at ``rank``, or 0.0 when the pattern has fewer pairs."""
        if rank < len(self.coordinates):
            return self.coordinates[rank]
        return 0.0

    def to_dict(self) -> dict:
        return {
            'coordinates': list(self.coordinates),
            'value': self.value,
            'vector_index': self.vector_index,
        }


def project_vector(
    vector: np.ndarray,
    pairs: Sequence[tuple[int, int]],
    strengths: Sequence[float],
    vector_index: int = 0,
) -> Projection:
    """Project a single vector onto the given dimension pairs.

    A pair that indexes past the end of ``vector`` contributes a zero
    coordinate.
    """
    coordinates = []
    value = 0.0
    n = len(vector)

    for k, ((d1, d2), r) in enumerate(zip(pairs, strengths)):
        if d1 < n and d2 < n:
            coord = (float(vector[d1]) + float(vector[d2])) / 2 * abs(r)
        else:
            coord = 0.0
        coordinates.append(coord)
        value += coord * PHI ** k

    return Projection(tuple(coordinates), value, vector_index)


def project_vectors(
    vectors: Sequence[np.ndarray],
    pairs: Sequence[tuple[int, int]],
    strengths: Sequence[float],
) -> list[Projection]:
    return [
        project_vector(v, pairs, strengths, vector_index=i)
        for i, v in enumerate(vectors)
    ]


def evidence_count(size: int) -> int:
    """Number of projections kept by the collapser, ``max(1, ceil(log2(size)))``."""
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    return max(1, math.ceil(math.log2(size)))


def collapse(projections: Sequence[Projection], size: int) -> list[Projection]:
    """Rank projections by descending value and keep the top ones.

    The sort is stable, so equal values keep their batch order.
    """
    ranked = sorted(projections, key=lambda p: -p.value)
    return ranked[:evidence_count(size)]
