"""Tests for whole simulation runs and the report they produce.

A run range-checks the input, places one head per policy, dispatches
the stream window by window, finalizes the heads and projects the
result into a ``RunReport``.
"""

import pytest

from disk_sim.config import SimulationConfig
from disk_sim.ingest import generate_random_positions
from disk_sim.logging import DiagnosticCode, Logger
from disk_sim.policies import Direction, FCFSPolicy, count_effective_seeks
from disk_sim.report import RunReport
from disk_sim.simulation import run_simulation
from disk_sim.stats import RunStatistics, compute_stats

_TEXTBOOK_REQUESTS = [98, 183, 37, 122, 14, 124, 65, 67]
_TEXTBOOK_HEAD = 53
_TEXTBOOK_CONFIG = SimulationConfig(initial_head=_TEXTBOOK_HEAD)


def _textbook_report() -> RunReport:
    """Run the classic example with the head at 53."""
    return run_simulation(_TEXTBOOK_REQUESTS, config=_TEXTBOOK_CONFIG)


class TestTextbookRun:
    """The classic 8-request example through the full pipeline."""

    def test_policies_in_order(self) -> None:
        """FCFS, SSTF and SCAN are reported in that order."""
        report = _textbook_report()
        assert [p.name for p in report.policies] == ["fcfs", "sstf", "scan"]

    def test_fcfs_distance(self) -> None:
        """FCFS travels the sum of consecutive gaps from 53."""
        report = _textbook_report()
        expected = 640
        assert report.policy("fcfs").total_distance == expected
        assert report.policy("fcfs").order == _TEXTBOOK_REQUESTS

    def test_sstf_starts_nearest(self) -> None:
        """SSTF picks 65 first (12 tracks from 53)."""
        report = _textbook_report()
        assert report.policy("sstf").order[0] == 65

    def test_scan_sweeps_up_then_down(self) -> None:
        """SCAN goes up through 183, then back down through 37 and 14."""
        report = _textbook_report()
        assert report.policy("scan").order == [65, 67, 98, 122, 124, 183, 37, 14]

    def test_summary(self) -> None:
        """Every request is a distinct track, so every visit is a seek."""
        report = _textbook_report()
        assert report.summary() == {"fcfs": 8, "sstf": 8, "scan": 8}

    def test_window_records(self) -> None:
        """The single window carries overview and run details."""
        window = _textbook_report().policy("fcfs").windows[0]
        assert window.overview.request_count == len(_TEXTBOOK_REQUESTS)
        assert window.overview.mean == pytest.approx(88.75)
        assert window.run.start_position == _TEXTBOOK_HEAD
        assert window.run.positions == tuple(_TEXTBOOK_REQUESTS)

    def test_final_positions(self) -> None:
        """Each policy reports where it left the head."""
        report = _textbook_report()
        assert report.policy("fcfs").final_position == 67
        assert report.policy("scan").final_position == 14

    def test_overall_statistics(self) -> None:
        """The overall record is the arrival-order walk from the initial head."""
        report = _textbook_report()
        assert report.overall == compute_stats(_TEXTBOOK_REQUESTS, _TEXTBOOK_HEAD)

    def test_unknown_policy_raises(self) -> None:
        """Looking up a policy that did not run is a KeyError."""
        with pytest.raises(KeyError):
            _textbook_report().policy("cscan")

    def test_initial_direction_down(self) -> None:
        """The configured direction decides SCAN's first sweep."""
        config = SimulationConfig(initial_head=_TEXTBOOK_HEAD, initial_direction=Direction.DOWN)
        report = run_simulation(_TEXTBOOK_REQUESTS, config=config)
        assert report.policy("scan").order[:2] == [37, 14]


class TestRejection:
    """Out-of-range values are dropped and reported, never clamped."""

    def test_out_of_range_values_rejected(self) -> None:
        """-5 and 70000 are excluded; the rest keep their order."""
        logger = Logger()
        report = run_simulation(
            [98, -5, 183, 70000, 37],
            config=_TEXTBOOK_CONFIG,
            logger=logger,
        )
        assert report.rejected == (-5, 70000)
        assert report.policy("fcfs").order == [98, 183, 37]
        diagnostics = logger.filter(code=DiagnosticCode.VALUE_OUT_OF_RANGE)
        assert len(diagnostics) == 2


class TestEmptyRun:
    """An empty stream still produces a well-formed report."""

    def test_no_windows(self) -> None:
        """Heads stay at the initial position with zero tallies."""
        report = run_simulation([])
        for policy in report.policies:
            assert policy.windows == ()
            assert policy.effective_seeks == 0
            assert policy.final_position == SimulationConfig().initial_head
            assert policy.mean == 0.0

    def test_overall_is_zeroed_and_logged(self) -> None:
        """Overall statistics degrade to zeros with a diagnostic."""
        logger = Logger()
        report = run_simulation([], logger=logger)
        assert report.overall == RunStatistics.empty()
        assert logger.filter(code=DiagnosticCode.DEGENERATE_INPUT)


class TestRunProperties:
    """Properties that hold for any input."""

    def test_effective_seeks_match_final_order(self) -> None:
        """The tally equals the adjacent changes of the full visit order."""
        values = generate_random_positions(203, seed=7)
        config = SimulationConfig(initial_head=1000)
        report = run_simulation(values, config=config)
        for policy in report.policies:
            order = policy.order
            assert policy.effective_seeks == count_effective_seeks(order, start=1000)
            assert policy.effective_seeks <= len(order)

    def test_reordering_is_a_permutation(self) -> None:
        """SSTF and SCAN service exactly the requested tracks."""
        values = generate_random_positions(57, seed=11)
        report = run_simulation(values)
        for name in ("sstf", "scan"):
            assert sorted(report.policy(name).order) == sorted(values)
        assert report.policy("fcfs").order == values

    def test_window_of_one_pools_to_global_mean(self) -> None:
        """Single-request windows pool back to the whole-stream mean."""
        config = SimulationConfig(window_size=1, buffer_size=1)
        report = run_simulation(_TEXTBOOK_REQUESTS, config=config)
        fcfs = report.policy("fcfs")
        assert len(fcfs.windows) == len(_TEXTBOOK_REQUESTS)
        assert fcfs.mean == pytest.approx(report.overall.mean)

    def test_window_count(self) -> None:
        """45 requests in windows of 20 make three windows."""
        report = run_simulation(generate_random_positions(45, seed=3))
        sizes = [w.overview.request_count for w in report.policy("scan").windows]
        assert sizes == [20, 20, 5]

    def test_unchunked_matches_one_big_window(self) -> None:
        """Chunking off gives one window holding everything."""
        values = generate_random_positions(45, seed=3)
        report = run_simulation(values, config=SimulationConfig(chunked=False))
        assert len(report.policy("sstf").windows) == 1
        assert report.policy("fcfs").total_distance == report.overall.total_distance

    def test_custom_policy_list(self) -> None:
        """Callers may compare any subset of policies."""
        report = run_simulation(_TEXTBOOK_REQUESTS, policies=(FCFSPolicy(),))
        assert list(report.summary()) == ["fcfs"]
