"""Solver configuration and the mutable state of one solver session.

All cross-call state lives in a single ``EngineState``: the drift cycle
counter, the current drift value, the dimension history and the pattern
cache. Stage functions receive it explicitly. A session is not thread-safe;
give each worker its own solver or serialize whole ``solve`` calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from drift_solver.core.errors import InvalidDimension
from drift_solver.core.problems import DEFAULT_DIMENSIONS
from drift_solver.engine.cache import CACHE_TOLERANCE, PatternCache
from drift_solver.engine.correlation import CORRELATION_WINDOW, TOP_PAIRS
from drift_solver.engine.history import HISTORY_CAPACITY, DimensionHistory


@dataclass
class SolverConfig:
    """Configuration for a solver session.

    Changing the defaults yields a different, equally deterministic
    heuristic.
    """

    # Engine sizing
    dimensions: int = DEFAULT_DIMENSIONS
    history_capacity: int = HISTORY_CAPACITY

    # Correlation analysis
    correlation_window: int = CORRELATION_WINDOW
    top_pairs: int = TOP_PAIRS
    cache_tolerance: float = CACHE_TOLERANCE

    # Strategy tuning
    coloring_penalty: float = 100.0
    satisfaction_bias: float = 0.1
    subset_tolerance: float = 0.001

    def __post_init__(self):
        if self.dimensions < 1:
            raise InvalidDimension(self.dimensions)
        if self.correlation_window < 2:
            raise ValueError(f"correlation_window must be >= 2, got {self.correlation_window}")
        if self.top_pairs < 1:
            raise ValueError(f"top_pairs must be >= 1, got {self.top_pairs}")


@dataclass
class EngineState:
    """Mutable state shared by every solve call of one session."""

    dimensions: int
    history: DimensionHistory
    cache: PatternCache
    cycle_count: int = 0
    drift_state: float = 0.0

    @classmethod
    def create(cls, config: SolverConfig) -> 'EngineState':
        return cls(
            dimensions=config.dimensions,
            history=DimensionHistory(config.dimensions, config.history_capacity),
            cache=PatternCache(config.cache_tolerance),
        )

    def reset(self) -> None:
        """Forget history, cached patterns and drift counters."""
        self.history.clear()
        self.cache.clear()
        self.cycle_count = 0
        self.drift_state = 0.0
