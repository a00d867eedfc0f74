"""Run orchestration — one call from raw integers to a finished report.

``run_simulation`` wires the components together in the order a run
needs them:

    1. Range-check the input (rejections become diagnostics).
    2. Place one head per policy at the configured starting track.
    3. Dispatch the stream window by window through every policy.
    4. Finalize the heads, freezing their tallies.
    5. Project everything into a ``RunReport``.

Head states live only for the duration of the call; nothing is shared
between runs.
"""

from collections.abc import Iterable, Sequence

from disk_sim.config import SimulationConfig
from disk_sim.dispatcher import ChunkDispatcher, measure
from disk_sim.ingest import accept_positions
from disk_sim.logging import Logger, LogLevel
from disk_sim.policies import DEFAULT_POLICIES, DiskPolicy, HeadState
from disk_sim.report import RunReport, build_report

_SOURCE = "simulation"


def run_simulation(
    values: Iterable[int],
    *,
    config: SimulationConfig | None = None,
    policies: Sequence[DiskPolicy] = DEFAULT_POLICIES,
    logger: Logger | None = None,
) -> RunReport:
    """Simulate every policy over *values* and report the results.

    Args:
        values: Raw requested positions, in arrival order.
        config: Run options; defaults to ``SimulationConfig()``.
        policies: The policies to compare, in report order.
        logger: Optional run log for diagnostics and progress.

    Returns:
        The run report.

    """
    config = config or SimulationConfig()
    ingested = accept_positions(values, logger=logger)
    positions = ingested.positions

    runs = [(policy, HeadState.at(config.initial_head, config.initial_direction)) for policy in policies]
    dispatcher = ChunkDispatcher(
        window_size=config.window_size,
        buffer_size=config.buffer_size,
        chunked=config.chunked,
        logger=logger,
    )
    if logger is not None:
        logger.log(
            LogLevel.INFO,
            f"{len(positions)} requests, head at {config.initial_head}, "
            f"{'window ' + str(config.window_size) if config.chunked else 'unchunked'}",
            source=_SOURCE,
        )

    windows = dispatcher.dispatch(positions, runs)
    for _, head in runs:
        head.finalize()

    return build_report(
        windows,
        runs,
        overall=measure(positions, config.initial_head, logger=logger, source=_SOURCE),
        rejected=(exc.value for exc in ingested.rejected),
    )
