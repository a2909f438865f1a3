"""Greedy, projection-scored vertex coloring."""

from __future__ import annotations

from typing import Sequence

from drift_solver.core.problems import ColoringInstance
from drift_solver.core.solutions import ColoringSolution
from drift_solver.engine.projection import Projection


def solve_coloring(
    projections: Sequence[Projection],
    instance: ColoringInstance,
    config=None,
) -> ColoringSolution:
    """Color nodes in index order, picking the cheapest color for each.

    The cost of color ``k`` for node ``i`` is
    ``sum((p.coord(0) * i + p.coord(1) * k) mod 1)`` plus a fixed penalty
    for every already-colored neighbour holding ``k``. The first minimum
    wins, so ties go to the lowest color index. Only neighbours with a
    lower index have a color yet.
    """
    penalty = config.coloring_penalty if config is not None else 100.0
    n = len(instance.graph)
    coloring = [0] * n

    for i in range(n):
        colored = [j for j in instance.neighbors(i) if j < i]
        costs = []
        for color in range(instance.max_colors):
            cost = 0.0
            for proj in projections:
                cost += (proj.coord(0) * i + proj.coord(1) * color) % 1
            for j in colored:
                if coloring[j] == color:
                    cost += penalty
            costs.append(cost)

        coloring[i] = costs.index(min(costs))

    return ColoringSolution(coloring=tuple(coloring), color_count=max(coloring) + 1)
