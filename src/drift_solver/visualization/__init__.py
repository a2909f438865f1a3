"""Rendering of solve results."""

from drift_solver.visualization.renderer import (
    format_clause,
    render_coloring,
    render_satisfaction,
    render_solution,
    render_subset,
    render_tour,
    save_figure,
)

__all__ = [
    "format_clause",
    "render_tour",
    "render_coloring",
    "render_satisfaction",
    "render_subset",
    "render_solution",
    "save_figure",
]
