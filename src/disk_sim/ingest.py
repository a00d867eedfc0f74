"""Ingestion — turning raw input into a valid request sequence.

Requests reach the simulator from a file, from stdin, or from a random
generator.  Whatever the source, every value must name a real track:
``MIN_TRACK <= value <= MAX_TRACK``.  Out-of-range values are
**rejected**, never clamped — the run carries on with the remaining
values in their original order, and each rejection is reported as a
``VALUE_OUT_OF_RANGE`` diagnostic.

Malformed text (a token that is not an integer at all) is a different
matter: that is a usage error, raised as ``IngestError`` for the CLI
to report.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from random import Random
from typing import TextIO

from disk_sim.buffer import OutOfMemoryError
from disk_sim.config import MAX_TRACK, MIN_TRACK
from disk_sim.logging import DiagnosticCode, Logger, LogLevel

_SOURCE = "ingest"


class IngestError(ValueError):
    """Raise when input text contains a token that is not an integer."""


class ValueOutOfRangeError(ValueError):
    """Raise when a requested position lies outside the disk's tracks."""

    def __init__(self, value: int) -> None:
        """Create the error for the offending *value*."""
        super().__init__(f"position {value} outside [{MIN_TRACK}, {MAX_TRACK}]")
        self.value = value


@dataclass(frozen=True)
class Ingested:
    """The outcome of range-checking a batch of values.

    Attributes:
        positions: Accepted values, in input order.
        rejected: One diagnostic per refused value, in input order.

    """

    positions: list[int]
    rejected: list[ValueOutOfRangeError]


def check_position(value: int) -> int:
    """Return *value* if it names a real track.

    Raises:
        ValueOutOfRangeError: If *value* is outside the track range.

    """
    if not MIN_TRACK <= value <= MAX_TRACK:
        raise ValueOutOfRangeError(value)
    return value


def accept_positions(values: Iterable[int], *, logger: Logger | None = None) -> Ingested:
    """Split *values* into accepted positions and rejection diagnostics.

    Args:
        values: Raw integers, in arrival order.
        logger: Optional run log; each rejection is logged as a warning.

    Returns:
        The accepted positions and the rejections.

    """
    positions: list[int] = []
    rejected: list[ValueOutOfRangeError] = []
    for value in values:
        try:
            positions.append(check_position(value))
        except ValueOutOfRangeError as exc:
            rejected.append(exc)
            if logger is not None:
                logger.log(
                    LogLevel.WARNING,
                    f"rejected {exc}",
                    source=_SOURCE,
                    code=DiagnosticCode.VALUE_OUT_OF_RANGE,
                )
    return Ingested(positions=positions, rejected=rejected)


def parse_positions(lines: Iterable[str]) -> list[int]:
    """Parse whitespace-separated decimal integers from *lines*.

    Raises:
        IngestError: On the first token that is not an integer, or on
            text that is not valid UTF-8.
        OutOfMemoryError: If the parsed values cannot be stored.

    """
    values: list[int] = []
    try:
        for lineno, line in enumerate(lines, start=1):
            for token in line.split():
                try:
                    values.append(int(token))
                except ValueError:
                    msg = f"line {lineno}: not an integer: {token!r}"
                    raise IngestError(msg) from None
    except UnicodeDecodeError as exc:
        # Streams decode ahead in chunks, so there is no reliable line number.
        msg = f"input is not valid UTF-8 ({exc.reason})"
        raise IngestError(msg) from None
    except MemoryError as exc:
        msg = "out of memory while reading requests"
        raise OutOfMemoryError(msg) from exc
    return values


def read_positions(stream: TextIO) -> list[int]:
    """Parse every integer in an open text stream (a file or stdin)."""
    return parse_positions(stream)


def generate_random_positions(count: int, *, seed: int | None = None) -> list[int]:
    """Return *count* positions drawn uniformly from the whole track range.

    Args:
        count: Number of requests to generate.
        seed: Optional seed for a reproducible sequence.

    Raises:
        ValueError: If *count* is negative.
        OutOfMemoryError: If *count* values cannot be stored.

    """
    if count < 0:
        msg = f"count must be non-negative, got {count}"
        raise ValueError(msg)
    rng = Random(seed)  # noqa: S311
    try:
        return [rng.randint(MIN_TRACK, MAX_TRACK) for _ in range(count)]
    except MemoryError as exc:
        msg = f"out of memory while generating {count} requests"
        raise OutOfMemoryError(msg) from exc
