"""Pattern-projection solver.

Runs the full pipeline for one problem instance:

1. Sample candidate vectors (golden-ratio sequence)
2. Apply drift, feeding the dimension history
3. Fetch a cached correlation pattern or build one from the history
4. Project the drifted vectors and keep the top-ranked projections
5. Hand the evidence to the problem-specific strategy
6. Verify the solution and attach timing telemetry

The result is a best-effort answer plus a validity flag. Nothing here is
an exact algorithm; the amount of work is fixed by the instance size.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Mapping

from drift_solver.core.problems import Instance, kind_of
from drift_solver.core.solutions import Solution
from drift_solver.engine.correlation import CorrelationPattern, build_pattern
from drift_solver.engine.drift import apply_drift
from drift_solver.engine.projection import Projection, collapse
from drift_solver.engine.sampler import sample_vectors
from drift_solver.engine.state import EngineState, SolverConfig
from drift_solver.evaluation.metrics import ComplexityMetrics, estimate_metrics
from drift_solver.evaluation.verifier import verify_solution
from drift_solver.strategies import get_strategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolveResult:
    """Outcome of one solve call.

    Attributes:
        solution: Kind-specific solution record.
        valid: Whether the verifier accepted the solution.
        elapsed_ms: Wall-clock time of the pipeline in milliseconds.
        problem_size: The instance's size hint.
        metrics: Synthetic complexity telemetry.
        drift_state: Drift value after this call's drift step.
        pattern: Correlation pattern used (cached or fresh).
        evidence: Projections handed to the strategy, best first.
        cache_hit: Whether ``pattern`` came from the cache.
    """

    solution: Solution
    valid: bool
    elapsed_ms: float
    problem_size: int
    metrics: ComplexityMetrics
    drift_state: float
    pattern: CorrelationPattern
    evidence: tuple[Projection, ...] = ()
    cache_hit: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'solution': self.solution.to_dict(),
            'isValid': self.valid,
            'timeElapsed': self.elapsed_ms,
            'problemSize': self.problem_size,
            'complexityMetrics': self.metrics.to_dict(),
            'driftState': self.drift_state,
            'pattern': {
                'pairs': [list(p) for p in self.pattern.pairs],
                'strengths': list(self.pattern.strengths),
            },
            'cacheHit': self.cache_hit,
        }


class PatternSolver:
    """Stateful solver session.

    The session owns an ``EngineState`` (drift counters, dimension history,
    pattern cache) that persists across ``solve`` calls. Sessions are not
    thread-safe: use one per worker.

    Attributes:
        config: Session configuration.
        state: Mutable engine state.
    """

    def __init__(self, dimensions: int | None = None, config: SolverConfig | None = None):
        """Initialize a solver session.

        Args:
            dimensions: Shortcut for ``SolverConfig(dimensions=...)``.
            config: Full configuration; must agree with ``dimensions`` when both
                are given.
        """
        if config is None:
            config = SolverConfig() if dimensions is None else SolverConfig(dimensions=dimensions)
        elif dimensions is not None and dimensions != config.dimensions:
            raise ValueError(
                f"dimensions={dimensions} conflicts with config.dimensions={config.dimensions}"
            )

        self.config = config
        self.state = EngineState.create(config)

    def solve(self, instance: Instance, options: Mapping[str, Any] | None = None) -> SolveResult:
        """Solve one problem instance.

        Args:
            instance: One of the four instance variants.
            options: Per-call option bag, accepted for interface stability.

        Returns:
            SolveResult with the best-effort solution and its validity.

        Raises:
            UnsupportedKind: If ``instance`` is not a known variant.
            InvalidDimension: If the instance has a non-positive dimension count.
        """
        kind = kind_of(instance)
        strategy = get_strategy(kind)

        logger.info("Starting solution for: %s", instance.name)
        start = time.perf_counter()

        vectors = sample_vectors(instance.size, instance.dimensions, instance.constraints)
        drifted = apply_drift(self.state, vectors, instance.size)

        pattern, cache_hit = self._pattern_for(kind, instance, drifted)
        projections = pattern.project(drifted) if cache_hit else list(pattern.projections)
        evidence = collapse(projections, instance.size)

        solution = strategy(evidence, instance, self.config)

        elapsed_ms = (time.perf_counter() - start) * 1000

        valid = verify_solution(solution, instance, subset_tolerance=self.config.subset_tolerance)
        metrics = estimate_metrics(kind, instance.size, elapsed_ms)

        logger.debug(
            "Solved %s (size=%d) in %.3f ms: valid=%s, drift=%.6f",
            kind.value, instance.size, elapsed_ms, valid, self.state.drift_state,
        )

        return SolveResult(
            solution=solution,
            valid=valid,
            elapsed_ms=elapsed_ms,
            problem_size=instance.size,
            metrics=metrics,
            drift_state=self.state.drift_state,
            pattern=pattern,
            evidence=tuple(evidence),
            cache_hit=cache_hit,
        )

    def _pattern_for(self, kind, instance, drifted) -> tuple[CorrelationPattern, bool]:
        """Return a valid cached pattern or build and cache a fresh one."""
        cached = self.state.cache.lookup(kind, instance.size, instance.dimensions)
        if cached is not None:
            logger.debug("Pattern cache hit for %s size=%d", kind.value, instance.size)
            return cached, True

        pattern = build_pattern(
            self.state.history,
            drifted,
            window=self.config.correlation_window,
            top=self.config.top_pairs,
        )
        self.state.cache.store(kind, instance.size, instance.dimensions, pattern)
        logger.debug(
            "New pattern for %s size=%d: pairs=%s strengths=%s",
            kind.value, instance.size, pattern.pairs, pattern.strengths,
        )
        return pattern, False

    def reset(self) -> None:
        """Start a fresh session: clear history, cache and drift counters."""
        self.state.reset()


def solve(instance: Instance, options: Mapping[str, Any] | None = None) -> SolveResult:
    """Solve ``instance`` with a fresh, single-use solver session."""
    return PatternSolver().solve(instance, options)
