"""Pattern cache keyed by problem signature.

A cached pattern is reused for any later request of the same kind and
dimensionality whose size lies within 20% of the size the pattern was
computed for. Entries are never evicted; the cache grows with the number
of distinct signatures seen by a solver session.
"""

from __future__ import annotations

from dataclasses import dataclass

from drift_solver.core.problems import ProblemKind
from drift_solver.engine.correlation import CorrelationPattern


CACHE_TOLERANCE = 0.2


@dataclass(frozen=True)
class PatternCacheEntry:
    """A pattern together with the signature it was computed for."""

    kind: ProblemKind
    size: int
    dimensions: int
    pattern: CorrelationPattern


def is_pattern_valid(
    entry: PatternCacheEntry,
    kind: ProblemKind,
    size: int,
    dimensions: int,
    tolerance: float = CACHE_TOLERANCE,
) -> bool:
    """Check whether ``entry`` may serve a request of ``(kind, size, dimensions)``.

    Valid iff kind and dimensions match and
    ``|entry.size - size| / size < tolerance``.
    """
    if entry.kind != kind or entry.dimensions != dimensions:
        return False
    return abs(entry.size - size) / size < tolerance


class PatternCache:
    """Approximate-match store of correlation patterns."""

    def __init__(self, tolerance: float = CACHE_TOLERANCE):
        self.tolerance = tolerance
        self._entries: dict[tuple[ProblemKind, int, int], PatternCacheEntry] = {}

    def lookup(
        self,
        kind: ProblemKind,
        size: int,
        dimensions: int,
    ) -> CorrelationPattern | None:
        """Return a valid cached pattern, or None.

        The exact signature wins; otherwise the valid entry with the
        closest size, earliest stored on ties.
        """
        exact = self._entries.get((kind, size, dimensions))
        if exact is not None:
            return exact.pattern

        best: PatternCacheEntry | None = None
        for entry in self._entries.values():
            if not is_pattern_valid(entry, kind, size, dimensions, self.tolerance):
                continue
            if best is None or abs(entry.size - size) < abs(best.size - size):
                best = entry

        return best.pattern if best is not None else None

    def store(
        self,
        kind: ProblemKind,
        size: int,
        dimensions: int,
        pattern: CorrelationPattern,
    ) -> None:
        """Store ``pattern``, overwriting any entry with the exact signature."""
        self._entries[(kind, size, dimensions)] = PatternCacheEntry(kind, size, dimensions, pattern)

    def entries(self) -> list[PatternCacheEntry]:
        return list(self._entries.values())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: tuple[ProblemKind, int, int]) -> bool:
        return key in self._entries
