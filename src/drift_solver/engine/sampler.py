"""Deterministic candidate vector sampling.

Vectors are spread over the unit hypercube with a golden-ratio low
discrepancy sequence: draw ``i`` has phase ``(i * PHI) mod 1`` and
dimension ``d`` takes ``((d + 1) * phase * PHI) mod 1``. No external
randomness is involved, so the same draw index always yields the same
vector.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from drift_solver.core.errors import InvalidDimension
from drift_solver.core.problems import Constraint


# Golden ratio, ~1.618033988749895
PHI = (1 + math.sqrt(5)) / 2


def vector_count(size: int) -> int:
    """Number of candidate vectors drawn for a problem of ``size``.

    ``ceil(log2(size) * PHI)``, floored at one so that a size-1 problem
    still produces evidence for the strategy layer.
    """
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    return max(1, math.ceil(math.log2(size) * PHI))


def sample_vector(
    seed: int,
    dimensions: int,
    constraints: Sequence[Constraint | None] | None = None,
) -> np.ndarray:
    """Generate the ``seed``-th candidate vector.

    Args:
        seed: 0-based draw index within one solve call.
        dimensions: Vector length.
        constraints: Optional per-dimension constraints; missing or None
            entries leave the raw unit value untouched.

    Returns:
        Float64 array of length ``dimensions``.

    Raises:
        InvalidDimension: If ``dimensions <= 0``.
    """
    if dimensions <= 0:
        raise InvalidDimension(dimensions)

    phase_factor = (seed * PHI) % 1
    vector = np.empty(dimensions, dtype=np.float64)

    for d in range(dimensions):
        value = ((d + 1) * phase_factor * PHI) % 1
        if constraints is not None and d < len(constraints) and constraints[d] is not None:
            value = constraints[d].apply(value)
        vector[d] = value

    return vector


def sample_vectors(
    size: int,
    dimensions: int,
    constraints: Sequence[Constraint | None] | None = None,
) -> list[np.ndarray]:
    """Draw the full candidate set for a problem of ``size``."""
    if dimensions <= 0:
        raise InvalidDimension(dimensions)
    return [
        sample_vector(i, dimensions, constraints)
        for i in range(vector_count(size))
    ]
