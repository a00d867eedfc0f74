"""Run report — the plain-data result of a simulation run.

The report is a pure projection of what the dispatcher produced and
where each head ended up.  It owns no state of its own and performs no
formatting; rendering it as text is the CLI's job.

Shape::

    RunReport
    ├── policies: PolicyReport (one per policy, in run order)
    │   ├── windows: WindowReport
    │   │   ├── overview: WindowOverview  (count, mean, stddev)
    │   │   └── run:      WindowRun       (start, distance, positions)
    │   ├── effective_seeks
    │   └── final_position
    ├── overall: RunStatistics of the accepted stream in arrival order
    └── rejected: values refused at ingestion
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from disk_sim.dispatcher import ProcessedWindow
from disk_sim.policies import DiskPolicy, HeadState
from disk_sim.stats import RunStatistics, pooled_mean


@dataclass(frozen=True)
class WindowOverview:
    """Headline numbers for one window."""

    request_count: int
    mean: float
    stddev: float


@dataclass(frozen=True)
class WindowRun:
    """How the head travelled through one window."""

    start_position: int
    total_distance: int
    positions: tuple[int, ...]


@dataclass(frozen=True)
class WindowReport:
    """One window of one policy."""

    index: int
    overview: WindowOverview
    run: WindowRun
    stats: RunStatistics


@dataclass(frozen=True)
class PolicyReport:
    """Everything one policy did over a run.

    Attributes:
        name: Short policy name.
        title: Human-readable policy title.
        windows: Per-window reports in stream order.
        effective_seeks: Final effective-seek tally of the policy's head.
        final_position: Where the policy left the head.

    """

    name: str
    title: str
    windows: tuple[WindowReport, ...]
    effective_seeks: int
    final_position: int

    @property
    def total_distance(self) -> int:
        """Return the head travel summed over every window."""
        return sum(w.run.total_distance for w in self.windows)

    @property
    def mean(self) -> float:
        """Return the mean track visited, pooled across windows."""
        return pooled_mean(w.stats for w in self.windows)

    @property
    def order(self) -> list[int]:
        """Return the full visit order, window after window."""
        return [p for w in self.windows for p in w.run.positions]


@dataclass(frozen=True)
class RunReport:
    """The result of a whole run."""

    policies: tuple[PolicyReport, ...]
    overall: RunStatistics
    rejected: tuple[int, ...] = field(default=())

    def policy(self, name: str) -> PolicyReport:
        """Return the report of the policy called *name*.

        Raises:
            KeyError: If no policy of that name took part in the run.

        """
        for report in self.policies:
            if report.name == name:
                return report
        raise KeyError(name)

    def summary(self) -> dict[str, int]:
        """Return the effective-seek tally of every policy, keyed by name."""
        return {p.name: p.effective_seeks for p in self.policies}


def _window_report(window: ProcessedWindow) -> WindowReport:
    stats = window.stats
    return WindowReport(
        index=window.index,
        overview=WindowOverview(
            request_count=stats.count,
            mean=stats.mean,
            stddev=stats.stddev,
        ),
        run=WindowRun(
            start_position=window.start_position,
            total_distance=stats.total_distance,
            positions=window.positions,
        ),
        stats=stats,
    )


def build_report(
    windows: Iterable[ProcessedWindow],
    runs: Sequence[tuple[DiskPolicy, HeadState]],
    *,
    overall: RunStatistics,
    rejected: Iterable[int] = (),
) -> RunReport:
    """Assemble the run report from processed windows and final head states.

    Args:
        windows: Everything the dispatcher produced.
        runs: The (policy, head) pairs of the run, in report order.
        overall: Statistics of the accepted stream in arrival order.
        rejected: Values refused during ingestion.

    Returns:
        The assembled report.

    """
    by_policy: dict[str, list[WindowReport]] = {policy.name: [] for policy, _ in runs}
    for window in windows:
        by_policy[window.policy].append(_window_report(window))

    policies = tuple(
        PolicyReport(
            name=policy.name,
            title=policy.title,
            windows=tuple(by_policy[policy.name]),
            effective_seeks=head.effective_seek_count,
            final_position=head.position,
        )
        for policy, head in runs
    )
    return RunReport(policies=policies, overall=overall, rejected=tuple(rejected))
