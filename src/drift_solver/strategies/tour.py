"""Tour construction from ranked projections."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from drift_solver.core.problems import TourInstance
from drift_solver.core.solutions import TourSolution
from drift_solver.engine.projection import Projection


def tour_length(cities: Sequence[tuple[float, float]], path: Sequence[int]) -> float:
    """Length of the closed tour visiting ``cities`` in ``path`` order."""
    if len(path) == 0:
        return 0.0
    points = np.asarray(cities, dtype=np.float64)[list(path)]
    deltas = np.roll(points, -1, axis=0) - points
    return float(np.hypot(deltas[:, 0], deltas[:, 1]).sum())


def solve_tour(
    projections: Sequence[Projection],
    instance: TourInstance,
    config=None,
) -> TourSolution:
    """Order cities by a projection-derived score.

    City ``c`` at initial position ``i`` scores
    ``sum((p.coord(0) * (i + 1) + p.coord(1) * c) mod 1)`` over the
    evidence; cities are visited in ascending score order (stable).
    """
    n = len(instance.cities)

    scores = []
    for i in range(n):
        city = i
        value = 0.0
        for proj in projections:
            value += (proj.coord(0) * (i + 1) + proj.coord(1) * city) % 1
        scores.append(value)

    path = tuple(sorted(range(n), key=lambda c: scores[c]))
    return TourSolution(path=path, distance=tour_length(instance.cities, path))
