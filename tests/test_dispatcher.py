"""Tests for the chunk dispatcher.

The dispatcher cuts the request stream into windows through a sliding
buffer and runs every policy over each window, threading each policy's
head state across window boundaries.
"""

import pytest

from disk_sim.dispatcher import ChunkDispatcher, measure
from disk_sim.logging import DiagnosticCode, Logger, LogLevel
from disk_sim.policies import FCFSPolicy, HeadState, SCANPolicy, SSTFPolicy
from disk_sim.stats import RunStatistics

_WINDOW = 3
_BUFFER = 5


class TestWindows:
    """Windowing through the sliding buffer."""

    def test_last_window_is_short(self) -> None:
        """A length that is not a multiple of the window leaves a short tail."""
        dispatcher = ChunkDispatcher(window_size=_WINDOW, buffer_size=_BUFFER)
        assert list(dispatcher.windows(range(8))) == [[0, 1, 2], [3, 4, 5], [6, 7]]

    def test_exact_multiple(self) -> None:
        """Full windows only when the length divides evenly."""
        dispatcher = ChunkDispatcher(window_size=_WINDOW, buffer_size=_WINDOW)
        assert list(dispatcher.windows(range(6))) == [[0, 1, 2], [3, 4, 5]]

    def test_shorter_than_one_window(self) -> None:
        """A short stream becomes a single short window."""
        dispatcher = ChunkDispatcher(window_size=_WINDOW, buffer_size=_BUFFER)
        assert list(dispatcher.windows([9, 8])) == [[9, 8]]

    def test_empty_stream(self) -> None:
        """No requests, no windows."""
        dispatcher = ChunkDispatcher(window_size=_WINDOW, buffer_size=_BUFFER)
        assert list(dispatcher.windows([])) == []

    def test_unchunked_is_one_window(self) -> None:
        """With chunking off the whole stream is a single window."""
        dispatcher = ChunkDispatcher(window_size=_WINDOW, buffer_size=_BUFFER, chunked=False)
        assert not dispatcher.chunked
        assert list(dispatcher.windows(range(8))) == [list(range(8))]

    def test_unchunked_empty_stream(self) -> None:
        """Chunking off still yields nothing for an empty stream."""
        dispatcher = ChunkDispatcher(chunked=False)
        assert list(dispatcher.windows([])) == []

    def test_zero_window_raises(self) -> None:
        """A window must hold at least one request."""
        with pytest.raises(ValueError, match="window size"):
            ChunkDispatcher(window_size=0, buffer_size=_BUFFER)

    def test_buffer_smaller_than_window_raises(self) -> None:
        """The buffer must be able to hold a full window."""
        with pytest.raises(ValueError, match="buffer size"):
            ChunkDispatcher(window_size=_BUFFER, buffer_size=_WINDOW)


class TestDispatch:
    """Running policies over the windows."""

    def test_head_threads_across_windows(self) -> None:
        """A window starts where the previous one left the head."""
        dispatcher = ChunkDispatcher(window_size=2, buffer_size=4)
        head = HeadState.at(0)
        windows = dispatcher.dispatch([10, 20, 30], [(FCFSPolicy(), head)])
        starts = [w.start_position for w in windows]
        assert starts == [0, 20]
        expected = 30
        assert head.position == expected

    def test_sstf_uses_previous_window_end(self) -> None:
        """SSTF's second window measures from the first window's last visit."""
        dispatcher = ChunkDispatcher(window_size=2, buffer_size=2)
        head = HeadState.at(0)
        windows = dispatcher.dispatch([100, 10, 12], [(SSTFPolicy(), head)])
        assert windows[0].positions == (10, 100)
        assert windows[1].start_position == 100
        assert windows[1].stats.total_distance == 88

    def test_each_policy_gets_its_own_copy(self) -> None:
        """One policy's reordering never leaks into another's window."""
        dispatcher = ChunkDispatcher()
        runs = [(FCFSPolicy(), HeadState.at(53)), (SSTFPolicy(), HeadState.at(53))]
        requests = [98, 183, 37, 122, 14, 124, 65, 67]
        windows = dispatcher.dispatch(requests, runs)
        by_policy = {w.policy: w for w in windows}
        assert by_policy["fcfs"].positions == tuple(requests)
        assert by_policy["sstf"].positions[0] == 65
        assert requests == [98, 183, 37, 122, 14, 124, 65, 67]

    def test_windows_are_grouped_in_stream_order(self) -> None:
        """Windows come out window by window, policies in run order."""
        dispatcher = ChunkDispatcher(window_size=2, buffer_size=2)
        runs = [(FCFSPolicy(), HeadState.at(0)), (SCANPolicy(), HeadState.at(0))]
        windows = dispatcher.dispatch([5, 1, 7], runs)
        assert [(w.index, w.policy) for w in windows] == [
            (0, "fcfs"),
            (0, "scan"),
            (1, "fcfs"),
            (1, "scan"),
        ]

    def test_stats_measured_from_window_start(self) -> None:
        """Window statistics use the head position the window started from."""
        dispatcher = ChunkDispatcher()
        windows = dispatcher.dispatch([100, 25], [(FCFSPolicy(), HeadState.at(50))])
        expected = 125
        assert windows[0].stats.total_distance == expected
        assert windows[0].stats.count == 2

    def test_empty_stream_leaves_heads_alone(self) -> None:
        """No windows means the head states never leave READY values."""
        head = HeadState.at(32767)
        windows = ChunkDispatcher().dispatch([], [(SCANPolicy(), head)])
        assert windows == []
        expected = 32767
        assert head.position == expected
        assert head.effective_seek_count == 0

    def test_logs_each_window(self) -> None:
        """The dispatcher records one debug entry per window."""
        logger = Logger()
        dispatcher = ChunkDispatcher(window_size=2, buffer_size=2, logger=logger)
        dispatcher.dispatch([1, 2, 3], [(FCFSPolicy(), HeadState.at(0))])
        debug = logger.filter(source="dispatcher")
        assert len(debug) == 2
        assert all(e.level is LogLevel.DEBUG for e in debug)


class TestMeasure:
    """measure() turns degenerate input into zeroed statistics."""

    def test_non_empty(self) -> None:
        """Regular input is passed straight to compute_stats."""
        stats = measure([10, 20], 0)
        assert stats.total_distance == 20

    def test_empty_gives_zero_record(self) -> None:
        """Empty input yields the empty record instead of raising."""
        assert measure([], 0) == RunStatistics.empty()

    def test_empty_is_logged(self) -> None:
        """The degenerate case is reported as a diagnostic."""
        logger = Logger()
        measure([], 0, logger=logger, source="test")
        entries = logger.filter(code=DiagnosticCode.DEGENERATE_INPUT)
        assert len(entries) == 1
        assert entries[0].level is LogLevel.WARNING
        assert entries[0].source == "test"
