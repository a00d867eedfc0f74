"""Simulation configuration — disk geometry constants and run options.

The disk has a fixed geometry: tracks are numbered ``MIN_TRACK`` to
``MAX_TRACK`` inclusive, and every run starts with the head parked in
the middle (``DEFAULT_HEAD_POSITION``) unless told otherwise.

Everything else a run can vary lives in ``SimulationConfig``:

    - ``initial_head`` — where every policy's head starts.
    - ``initial_direction`` — the first SCAN sweep direction.
    - ``window_size`` — requests per chunk handed to a policy.
    - ``buffer_size`` — capacity of the sliding buffer feeding windows.
    - ``chunked`` — process in windows, or the whole stream at once.

The config is frozen: it is chosen once before a run begins and never
changes while the run is in flight.
"""

from dataclasses import dataclass

from disk_sim.env import Environment
from disk_sim.policies import Direction

MIN_TRACK = 0
MAX_TRACK = 65535
DEFAULT_HEAD_POSITION = 32767

DEFAULT_WINDOW_SIZE = 20
DEFAULT_BUFFER_SIZE = 100

ENV_HEAD = "DISK_SIM_HEAD"
ENV_DIRECTION = "DISK_SIM_DIRECTION"
ENV_WINDOW = "DISK_SIM_WINDOW"
ENV_BUFFER = "DISK_SIM_BUFFER"
ENV_CHUNKED = "DISK_SIM_CHUNKED"


class ConfigError(ValueError):
    """Raise when a configuration value is malformed or out of range."""


@dataclass(frozen=True)
class SimulationConfig:
    """Options for one simulation run.

    Attributes:
        initial_head: Starting head position shared by all policies.
        initial_direction: Direction of SCAN's first sweep.
        window_size: Maximum number of requests per window.
        buffer_size: Capacity of the sliding buffer (>= window_size).
        chunked: If False, the whole stream is one window.

    """

    initial_head: int = DEFAULT_HEAD_POSITION
    initial_direction: Direction = Direction.UP
    window_size: int = DEFAULT_WINDOW_SIZE
    buffer_size: int = DEFAULT_BUFFER_SIZE
    chunked: bool = True

    def __post_init__(self) -> None:
        """Reject option combinations the dispatcher cannot honour."""
        if not MIN_TRACK <= self.initial_head <= MAX_TRACK:
            msg = f"initial head {self.initial_head} outside [{MIN_TRACK}, {MAX_TRACK}]"
            raise ConfigError(msg)
        if self.window_size < 1:
            msg = f"window size must be at least 1, got {self.window_size}"
            raise ConfigError(msg)
        if self.buffer_size < self.window_size:
            msg = f"buffer size {self.buffer_size} is smaller than window size {self.window_size}"
            raise ConfigError(msg)

    @classmethod
    def from_environment(cls, env: Environment) -> "SimulationConfig":
        """Build a config from ``DISK_SIM_*`` variables, falling back to defaults.

        Args:
            env: The environment snapshot to read.

        Raises:
            ConfigError: If a variable is malformed or out of range.

        """
        try:
            head = env.get_int(ENV_HEAD, DEFAULT_HEAD_POSITION)
            window = env.get_int(ENV_WINDOW, DEFAULT_WINDOW_SIZE)
            buffer = env.get_int(ENV_BUFFER, max(DEFAULT_BUFFER_SIZE, window))
            chunked = env.get_bool(ENV_CHUNKED, default=True)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

        raw_direction = (env.get(ENV_DIRECTION) or Direction.UP.value).strip().lower()
        try:
            direction = Direction(raw_direction)
        except ValueError:
            msg = f"{ENV_DIRECTION} must be 'up' or 'down', got {raw_direction!r}"
            raise ConfigError(msg) from None

        return cls(
            initial_head=head,
            initial_direction=direction,
            window_size=window,
            buffer_size=buffer,
            chunked=chunked,
        )
