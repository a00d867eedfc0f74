"""disk_sim — a disk-head scheduling simulator.

Given a stream of requested track positions, the simulator shows how
three classic policies move the disk head:

    - **FCFS** — service requests in arrival order.
    - **SSTF** — always seek to the nearest pending request.
    - **SCAN** — the elevator: sweep one way, then reverse.

The stream is cut into fixed-size windows, each policy keeps its own
head state across windows, and every window is summarised with its
seek distance, mean and standard deviation.

Re-exports the public symbols so callers can write::

    from disk_sim import run_simulation, SimulationConfig
"""

from disk_sim.config import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_HEAD_POSITION,
    DEFAULT_WINDOW_SIZE,
    MAX_TRACK,
    MIN_TRACK,
    ConfigError,
    SimulationConfig,
)
from disk_sim.policies import (
    Direction,
    DiskPolicy,
    FCFSPolicy,
    HeadPhase,
    HeadState,
    HeadStateError,
    SCANPolicy,
    SSTFPolicy,
)
from disk_sim.report import PolicyReport, RunReport, WindowOverview, WindowReport, WindowRun
from disk_sim.simulation import run_simulation
from disk_sim.stats import DegenerateInputError, RunStatistics, compute_stats

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "DEFAULT_HEAD_POSITION",
    "DEFAULT_WINDOW_SIZE",
    "MAX_TRACK",
    "MIN_TRACK",
    "ConfigError",
    "DegenerateInputError",
    "Direction",
    "DiskPolicy",
    "FCFSPolicy",
    "HeadPhase",
    "HeadState",
    "HeadStateError",
    "PolicyReport",
    "RunReport",
    "RunStatistics",
    "SCANPolicy",
    "SSTFPolicy",
    "SimulationConfig",
    "WindowOverview",
    "WindowReport",
    "WindowRun",
    "compute_stats",
    "run_simulation",
]
