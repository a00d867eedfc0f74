"""Chunk dispatcher — feeds the request stream to the policies window by window.

Real disk controllers never see the whole future request stream; they
schedule whatever is queued right now.  The dispatcher mimics that by
cutting the stream into **windows** of at most ``window_size``
requests, pulled through a fixed-capacity ``SlidingBuffer``:

    1. Fill the buffer from the stream.
    2. Cut a window off the front of the buffer.
    3. Hand a private copy of the window to every policy, each with
       its own head state, and measure the reordered result.
    4. Refill the buffer and repeat until both are exhausted.

Head states are threaded through window boundaries: a policy's second
window starts wherever its first window left the head.

With ``chunked=False`` the whole stream is processed as one window.
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from disk_sim.buffer import SlidingBuffer
from disk_sim.config import DEFAULT_BUFFER_SIZE, DEFAULT_WINDOW_SIZE
from disk_sim.logging import DiagnosticCode, Logger, LogLevel
from disk_sim.policies import DiskPolicy, HeadState
from disk_sim.stats import DegenerateInputError, RunStatistics, compute_stats

_SOURCE = "dispatcher"


@dataclass(frozen=True)
class ProcessedWindow:
    """One window as one policy serviced it.

    Attributes:
        policy: Name of the policy that ordered the window.
        index: Zero-based window number within the run.
        start_position: Head position before the window was serviced.
        positions: The window in visit order.
        stats: Statistics of ``positions`` from ``start_position``.

    """

    policy: str
    index: int
    start_position: int
    positions: tuple[int, ...]
    stats: RunStatistics


def measure(
    positions: Sequence[int],
    start_position: int,
    *,
    logger: Logger | None = None,
    source: str = _SOURCE,
) -> RunStatistics:
    """Return statistics for *positions*, or the empty record if there are none.

    The degenerate case is logged as a warning rather than raised, so
    an empty stream still produces a (zeroed) report.
    """
    try:
        return compute_stats(positions, start_position)
    except DegenerateInputError as exc:
        if logger is not None:
            logger.log(
                LogLevel.WARNING,
                f"{exc}; reporting zero statistics",
                source=source,
                code=DiagnosticCode.DEGENERATE_INPUT,
            )
        return RunStatistics.empty()


class ChunkDispatcher:
    """Cut a request stream into windows and run every policy over each one."""

    def __init__(
        self,
        *,
        window_size: int = DEFAULT_WINDOW_SIZE,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        chunked: bool = True,
        logger: Logger | None = None,
    ) -> None:
        """Create a dispatcher.

        Args:
            window_size: Maximum requests per window.
            buffer_size: Sliding buffer capacity; must hold a full window.
            chunked: If False, the whole stream becomes a single window.
            logger: Optional run log for progress messages.

        Raises:
            ValueError: If the sizes are not positive or the buffer is
                smaller than a window.

        """
        if window_size < 1:
            msg = f"window size must be at least 1, got {window_size}"
            raise ValueError(msg)
        if buffer_size < window_size:
            msg = f"buffer size {buffer_size} cannot hold a window of {window_size}"
            raise ValueError(msg)
        self._window_size = window_size
        self._buffer_size = buffer_size
        self._chunked = chunked
        self._logger = logger

    @property
    def chunked(self) -> bool:
        """Return whether the stream is split into windows."""
        return self._chunked

    def windows(self, requests: Iterable[int]) -> Iterator[list[int]]:
        """Yield the windows of *requests* in stream order.

        Empty input yields nothing.
        """
        if not self._chunked:
            whole = list(requests)
            if whole:
                yield whole
            return

        buffer = SlidingBuffer(capacity=self._buffer_size)
        source = iter(requests)
        buffer.refill(source)
        while len(buffer):
            yield buffer.take(self._window_size)
            buffer.refill(source)

    def dispatch(
        self,
        requests: Iterable[int],
        runs: Sequence[tuple[DiskPolicy, HeadState]],
    ) -> list[ProcessedWindow]:
        """Run every (policy, head) pair over every window of *requests*.

        Each policy receives its own copy of the window, so one policy's
        reordering never leaks into another's input.

        Args:
            requests: The validated request stream.
            runs: Policies paired with the head states they advance.

        Returns:
            Processed windows, grouped by window then by policy order.

        """
        processed: list[ProcessedWindow] = []
        for index, window in enumerate(self.windows(requests)):
            self._debug(f"window {index}: {len(window)} requests")
            for policy, head in runs:
                ordered = list(window)
                start = head.position
                policy.apply(ordered, head)
                processed.append(
                    ProcessedWindow(
                        policy=policy.name,
                        index=index,
                        start_position=start,
                        positions=tuple(ordered),
                        stats=measure(ordered, start, logger=self._logger),
                    )
                )
        return processed

    def _debug(self, message: str) -> None:
        if self._logger is not None:
            self._logger.log(LogLevel.DEBUG, message, source=_SOURCE)
