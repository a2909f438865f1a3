"""Matplotlib rendering of solve results.

One figure per problem kind:
- Tour: cities and the closed path
- Coloring: nodes on a circle, colored by assignment, with edges
- Satisfaction: variable assignment strip and a clause table
- Subset: bar chart of the numbers with the selected ones highlighted
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from drift_solver.core.problems import (
    ColoringInstance,
    Instance,
    SatisfactionInstance,
    SubsetInstance,
    TourInstance,
    kind_of,
)

if TYPE_CHECKING:
    import matplotlib.figure

    from drift_solver.engine.solver import SolveResult


NODE_COLORS = [
    '#e41a1c', '#377eb8', '#4daf4a', '#984ea3',
    '#ff7f00', '#ffff33', '#a65628', '#f781bf',
    '#999999', '#66c2a5', '#fc8d62', '#8da0cb',
]

MAX_CLAUSES_SHOWN = 10


def format_clause(clause) -> str:
    """Render a clause as ``(x1 ∨ ¬x3 ∨ x4)``."""
    literals = [("" if lit > 0 else "¬") + f"x{abs(lit)}" for lit in clause]
    return "(" + " ∨ ".join(literals) + ")"


def render_tour(
    instance: TourInstance,
    result: 'SolveResult',
    figsize: tuple[int, int] = (8, 8),
) -> "matplotlib.figure.Figure":
    import matplotlib.pyplot as plt

    points = np.asarray(instance.cities, dtype=np.float64)
    path = list(result.solution.path)

    fig, ax = plt.subplots(figsize=figsize)

    if path:
        loop = points[path + path[:1]]
        ax.plot(loop[:, 0], loop[:, 1], color='#4CAF50', linewidth=2, zorder=1)

    ax.scatter(points[:, 0], points[:, 1], s=60, color='#2196F3',
               edgecolors='#0b7dda', zorder=2)
    for i, (x, y) in enumerate(points):
        ax.annotate(str(i), (x, y), ha='center', va='center', fontsize=8, zorder=3)

    ax.set_title(
        f"Total Distance: {result.solution.distance:.2f}   "
        f"Solution Time: {result.elapsed_ms:.2f} ms"
    )
    ax.set_aspect('equal')
    ax.axis('off')
    fig.tight_layout()
    return fig


def render_coloring(
    instance: ColoringInstance,
    result: 'SolveResult',
    figsize: tuple[int, int] = (8, 8),
) -> "matplotlib.figure.Figure":
    import matplotlib.pyplot as plt
    from matplotlib.patches import Patch

    n = len(instance.graph)
    angles = np.arange(n) / n * 2 * np.pi
    xs, ys = np.cos(angles), np.sin(angles)
    coloring = result.solution.coloring

    fig, ax = plt.subplots(figsize=figsize)

    for i in range(n):
        for j in range(i + 1, n):
            if instance.graph[i][j] == 1:
                ax.plot([xs[i], xs[j]], [ys[i], ys[j]], color='#999999',
                        linewidth=1, zorder=1)

    node_colors = [NODE_COLORS[c % len(NODE_COLORS)] for c in coloring]
    ax.scatter(xs, ys, s=400, c=node_colors, edgecolors='#333333', zorder=2)
    for i in range(n):
        ax.annotate(str(i), (xs[i], ys[i]), ha='center', va='center',
                    color='white', fontsize=9, zorder=3)

    shown = min(result.solution.color_count, len(NODE_COLORS))
    handles = [Patch(color=NODE_COLORS[k], label=f"Color {k}") for k in range(shown)]
    ax.legend(handles=handles, loc='upper left', fontsize=8)

    ax.set_title(
        f"Colors Used: {result.solution.color_count}   "
        f"Solution Time: {result.elapsed_ms:.2f} ms"
    )
    ax.set_aspect('equal')
    ax.axis('off')
    fig.tight_layout()
    return fig


def render_satisfaction(
    instance: SatisfactionInstance,
    result: 'SolveResult',
    figsize: tuple[int, int] = (10, 6),
) -> "matplotlib.figure.Figure":
    import matplotlib.pyplot as plt

    assignment = result.solution.assignment
    satisfied = result.solution.satisfied
    shown = instance.clauses[:MAX_CLAUSES_SHOWN]

    fig, (ax_vars, ax_clauses) = plt.subplots(
        2, 1, figsize=figsize, gridspec_kw={'height_ratios': [1, 3]},
    )

    strip = np.array([[1.0 if v else 0.0 for v in assignment]])
    ax_vars.imshow(strip, cmap='RdYlGn', vmin=0, vmax=1, aspect='auto')
    for i, v in enumerate(assignment):
        ax_vars.text(i, 0, 'T' if v else 'F', ha='center', va='center', color='white')
    ax_vars.set_xticks(range(len(assignment)))
    ax_vars.set_xticklabels([f"x{i + 1}" for i in range(len(assignment))], fontsize=7)
    ax_vars.set_yticks([])
    ax_vars.set_title(
        f"{'SATISFIED' if satisfied else 'UNSATISFIED'}   "
        f"({instance.variables} variables, {len(instance.clauses)} clauses, "
        f"{result.elapsed_ms:.2f} ms)",
        color='#4CAF50' if satisfied else '#F44336',
    )

    ax_clauses.axis('off')
    ax_clauses.set_title(f"Clauses (showing {len(shown)} of {len(instance.clauses)})", fontsize=10)
    if shown:
        cell_colors = []
        for clause in shown:
            ok = any(assignment[abs(lit) - 1] == (lit > 0) for lit in clause)
            cell_colors.append(['#E8F5E9' if ok else '#FFEBEE'])
        ax_clauses.table(
            cellText=[[format_clause(c)] for c in shown],
            cellColours=cell_colors,
            loc='center',
            cellLoc='center',
        )

    fig.tight_layout()
    return fig


def render_subset(
    instance: SubsetInstance,
    result: 'SolveResult',
    figsize: tuple[int, int] = (10, 5),
) -> "matplotlib.figure.Figure":
    import matplotlib.pyplot as plt

    selected = set(result.solution.subset)
    colors = ['#4CAF50' if i in selected else '#BDBDBD' for i in range(len(instance.numbers))]

    fig, ax = plt.subplots(figsize=figsize)
    ax.bar(range(len(instance.numbers)), instance.numbers, color=colors)
    ax.set_xlabel("index")
    ax.set_ylabel("value")
    ax.set_title(
        f"Target: {instance.target}   Sum: {result.solution.sum}   "
        f"Difference: {result.solution.difference}   "
        f"Solution Time: {result.elapsed_ms:.2f} ms"
    )
    fig.tight_layout()
    return fig


def render_solution(instance: Instance, result: 'SolveResult', **kwargs) -> "matplotlib.figure.Figure":
    """Render ``result`` with the figure type matching the instance kind.

    Raises:
        UnsupportedKind: If ``instance`` is not a known variant.
    """
    kind_of(instance)
    if isinstance(instance, TourInstance):
        return render_tour(instance, result, **kwargs)
    if isinstance(instance, ColoringInstance):
        return render_coloring(instance, result, **kwargs)
    if isinstance(instance, SatisfactionInstance):
        return render_satisfaction(instance, result, **kwargs)
    return render_subset(instance, result, **kwargs)


def save_figure(fig: "matplotlib.figure.Figure", path: str | Path, dpi: int = 100) -> None:
    """Save a figure and release it."""
    import matplotlib.pyplot as plt

    try:
        fig.savefig(path, dpi=dpi, bbox_inches="tight", pad_inches=0.1)
    finally:
        plt.close(fig)
