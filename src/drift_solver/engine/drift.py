"""Golden-ratio drift applied to candidate vectors.

Each application advances the session's cycle counter, recomputes the
drift value ``sin(cycle * PHI) * 0.1`` and nudges every vector component
by ``value * factor * drift`` where

    factor = ((vector_index * PHI + dim) mod 1) * sizeFactor * 0.2
    sizeFactor = 1 / (1 + log10(size))

Results are clamped to [0, 1] and pushed to the dimension history in
vector order. This is the only place the history and the drift counters
change.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from drift_solver.engine.sampler import PHI
from drift_solver.engine.state import EngineState


def drift_factor(size: int, vector_index: int, dim: int) -> float:
    base = (vector_index * PHI + dim) % 1
    size_factor = 1 / (1 + math.log10(size))
    return base * size_factor * 0.2


def advance(state: EngineState) -> float:
    """Advance the cycle counter and return the new drift value."""
    state.cycle_count += 1
    state.drift_state = math.sin(state.cycle_count * PHI) * 0.1
    return state.drift_state


def apply_drift(
    state: EngineState,
    vectors: Sequence[np.ndarray],
    size: int,
) -> list[np.ndarray]:
    """Drift a batch of vectors and record them in the history.

    Args:
        state: Session state; its counters and history are updated.
        vectors: Candidate vectors. They are not modified.
        size: Problem size used to damp the drift.

    Returns:
        New drifted vectors, in input order.
    """
    drift = advance(state)
    drifted = []

    for i, vector in enumerate(vectors):
        factors = np.array(
            [drift_factor(size, i, j) for j in range(len(vector))],
            dtype=np.float64,
        )
        out = np.clip(vector + vector * factors * drift, 0.0, 1.0)
        drifted.append(out)
        state.history.push(out)

    return drifted
