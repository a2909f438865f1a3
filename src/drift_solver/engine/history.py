"""Rolling per-dimension history of drifted values."""

from __future__ import annotations

from collections import deque
from typing import Iterable

import numpy as np

from drift_solver.core.errors import InvalidDimension


HISTORY_CAPACITY = 100


class DimensionHistory:
    """Bounded FIFO windows, one per dimension.

    Each window keeps the most recent ``capacity`` values; appending to a
    full window evicts its oldest entry.

    Attributes:
        dimensions: Number of windows.
        capacity: Maximum entries per window.
    """

    def __init__(self, dimensions: int, capacity: int = HISTORY_CAPACITY):
        if dimensions < 1:
            raise InvalidDimension(dimensions)
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")

        self.dimensions = dimensions
        self.capacity = capacity
        self._windows: list[deque[float]] = [
            deque(maxlen=capacity) for _ in range(dimensions)
        ]

    def push(self, vector: Iterable[float]) -> None:
        """Append one value per dimension.

        Values beyond ``dimensions`` are ignored; a shorter vector only
        feeds the leading windows.
        """
        for window, value in zip(self._windows, vector):
            window.append(float(value))

    def window(self, dim: int) -> list[float]:
        """Return a copy of one dimension's window, oldest first."""
        return list(self._windows[dim])

    def tail(self, dim: int, n: int) -> np.ndarray:
        """Return the last ``n`` samples of a dimension."""
        window = self._windows[dim]
        start = max(0, len(window) - n)
        return np.fromiter(
            (window[i] for i in range(start, len(window))),
            dtype=np.float64,
        )

    def sample_count(self, dim: int) -> int:
        return len(self._windows[dim])

    def clear(self) -> None:
        for window in self._windows:
            window.clear()

    def __len__(self) -> int:
        return self.dimensions
