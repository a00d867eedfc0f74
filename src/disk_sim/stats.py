"""Seek statistics — how far the head travelled, and where it spent its time.

For an ordered list of visited positions and the head position the
visit started from, ``compute_stats`` reports:

    - **total_distance** — the sum of every head movement, walking the
      list in order from the start position.
    - **mean** — the average track visited.
    - **variance / stddev** — population spread of the visited tracks
      (divides by ``count``, not ``count - 1``: the window *is* the
      population, not a sample of one).

An empty list has no mean, so ``compute_stats`` raises
``DegenerateInputError``; callers substitute ``RunStatistics.empty()``.
"""

import math
import statistics
from collections.abc import Iterable, Sequence
from dataclasses import dataclass


class DegenerateInputError(ValueError):
    """Raise when statistics are requested for an empty sequence."""


@dataclass(frozen=True)
class RunStatistics:
    """Summary of one ordered visit sequence.

    Attributes:
        count: Number of positions visited.
        mean: Arithmetic mean of the positions.
        variance: Population variance of the positions.
        stddev: Square root of the variance.
        total_distance: Total head movement from the start position.

    """

    count: int
    mean: float
    variance: float
    stddev: float
    total_distance: int

    @classmethod
    def empty(cls) -> "RunStatistics":
        """Return the all-zero record used in place of degenerate input."""
        return cls(count=0, mean=0.0, variance=0.0, stddev=0.0, total_distance=0)


def total_distance(positions: Iterable[int], start_position: int) -> int:
    """Return the total head movement visiting *positions* in order."""
    distance = 0
    previous = start_position
    for position in positions:
        distance += abs(position - previous)
        previous = position
    return distance


def compute_stats(positions: Sequence[int], start_position: int) -> RunStatistics:
    """Compute distance and spread statistics for an ordered visit sequence.

    Args:
        positions: Track positions in the order the head visits them.
        start_position: Head position before the first visit.

    Returns:
        The statistics record.

    Raises:
        DegenerateInputError: If *positions* is empty.

    """
    if not positions:
        msg = "cannot compute statistics of an empty sequence"
        raise DegenerateInputError(msg)
    mean = statistics.fmean(positions)
    variance = float(statistics.pvariance(positions, mu=mean))
    return RunStatistics(
        count=len(positions),
        mean=mean,
        variance=variance,
        stddev=math.sqrt(variance),
        total_distance=total_distance(positions, start_position),
    )


def pooled_mean(parts: Iterable[RunStatistics]) -> float:
    """Recombine per-window means into the mean of the whole stream.

    Each window's mean is weighted by its count, so splitting a stream
    into windows and pooling gives the same answer as one big window.
    Returns 0.0 when nothing was counted.
    """
    total = 0.0
    count = 0
    for part in parts:
        total += part.mean * part.count
        count += part.count
    return total / count if count else 0.0
