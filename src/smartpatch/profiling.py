"""MatchAccumulator: opt-in profiling for pattern searches.

Records how hard the matcher worked:
- Number of match calls
- Search steps taken (the quantity bounded by max_steps)
- Wildcard branches tried
- Elapsed time

Zero overhead when disabled (get_match_accumulator() returns None).

Example:
    from smartpatch import apply_patch
    from smartpatch.profiling import profiled_match

    with profiled_match() as metrics:
        apply_patch(source, match_text, patch_text)

    print(metrics.summary())
    # {"total_ms": 0.4, "match_calls": 1, "steps": 37, "wildcard_branches": 2}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class MatchAccumulator:
    """Accumulated metrics across matcher runs.

    Attributes:
        start_time: Profiling start timestamp.
        match_calls: Number of find_offsets() calls recorded.
        steps: Total search steps.
        wildcard_branches: Total wildcard candidates tried.

    """

    start_time: float = field(default_factory=perf_counter)
    match_calls: int = 0
    steps: int = 0
    wildcard_branches: int = 0

    def record_match(self, steps: int, wildcard_branches: int) -> None:
        """Record one completed (or failed) search."""
        self.match_calls += 1
        self.steps += steps
        self.wildcard_branches += wildcard_branches

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of match metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "match_calls": self.match_calls,
            "steps": self.steps,
            "wildcard_branches": self.wildcard_branches,
        }


_accumulator: ContextVar[MatchAccumulator | None] = ContextVar(
    "match_accumulator",
    default=None,
)


def get_match_accumulator() -> MatchAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_match() -> Iterator[MatchAccumulator]:
    """Context manager for profiled matching.

    Yields:
        MatchAccumulator populated by every search inside the with block.

    """
    acc = MatchAccumulator()
    token: Token[MatchAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
