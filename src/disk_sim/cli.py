"""Command-line front end — read requests, run the simulation, print the report.

Usage::

    disk-sim file <path>     read requests from a file
    disk-sim in              read requests from stdin
    disk-sim rand <number>   simulate <number> random requests

This module is the thin I/O wrapper around the core.  Commands are
dispatched through a dict, and each handler only *produces* the request
list; running the simulation and rendering the report are shared.

``format_report`` is pure and testable; ``main`` is the I/O entrypoint
and returns the process exit status.  The starting head position and
the other run options come from ``DISK_SIM_*`` environment variables.
"""

import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TypeAlias

from disk_sim.buffer import OutOfMemoryError
from disk_sim.config import ConfigError, SimulationConfig
from disk_sim.env import Environment
from disk_sim.ingest import IngestError, generate_random_positions, read_positions
from disk_sim.report import PolicyReport, RunReport
from disk_sim.simulation import run_simulation

# A command handler turns its arguments into the raw request list.
_Handler: TypeAlias = Callable[[list[str]], list[int]]

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

_PROG = "disk-sim"

_HELP = (
    f"Usage: {_PROG} <command>\n"
    "\n"
    "Commands:\n"
    "file <path>    -   read disk seeks from file at path\n"
    "in             -   read disk seeks from stdin\n"
    "rand <number>  -   use given number of random disk seeks\n"
)


class UsageError(Exception):
    """Raise when a command is invoked with missing or malformed arguments."""


def _cmd_file(args: list[str]) -> list[int]:
    """Read requests from the file named by the first argument."""
    if not args:
        msg = f"Usage: {_PROG} file <path>"
        raise UsageError(msg)
    with Path(args[0]).open(encoding="utf-8") as stream:
        return read_positions(stream)


def _cmd_in(_args: list[str]) -> list[int]:
    """Read requests from standard input."""
    return read_positions(sys.stdin)


def _cmd_rand(args: list[str]) -> list[int]:
    """Generate the requested number of random requests."""
    usage = f"Usage: {_PROG} rand <number>"
    if not args:
        raise UsageError(usage)
    try:
        count = int(args[0])
    except ValueError:
        raise UsageError(usage) from None
    if count < 0:
        raise UsageError(usage)
    return generate_random_positions(count)


_COMMANDS: dict[str, _Handler] = {
    "file": _cmd_file,
    "in": _cmd_in,
    "rand": _cmd_rand,
}


def format_header(text: str) -> str:
    """Return *text* underlined with ``=``, followed by a blank line."""
    return f"{text}\n{'=' * len(text)}\n\n"


def _format_policy(policy: PolicyReport) -> str:
    parts = [format_header(policy.title)]
    numbered = len(policy.windows) > 1
    for window in policy.windows:
        if numbered:
            parts.append(f"Window {window.index + 1} (head at {window.run.start_position})\n")
        parts.append(
            f"Requests: {window.overview.request_count}\n"
            f"Distance: {window.run.total_distance}\n"
            f"Mean: {window.overview.mean:.4f}\n"
            f"Standard deviation: {window.overview.stddev:.4f}\n"
            "\n"
        )
        parts.append(", ".join(str(p) for p in window.run.positions) + "\n\n")
    if numbered:
        parts.append(f"Total distance: {policy.total_distance}\n")
    parts.append(f"Effective seeks: {policy.effective_seeks}\n\n")
    return "".join(parts)


def format_report(report: RunReport) -> str:
    """Render a run report as plain text.

    Args:
        report: The report to render.

    Returns:
        One section per policy, then rejected values (if any) and the
        effective-seek summary.

    """
    if not report.policies or not report.policies[0].windows:
        body = "No disk seeks to simulate.\n\n"
    else:
        body = "".join(_format_policy(policy) for policy in report.policies)

    if report.rejected:
        body += format_header("Rejected values")
        body += ", ".join(str(v) for v in report.rejected) + "\n\n"

    body += format_header("Effective seeks")
    width = max((len(p.title) for p in report.policies), default=0)
    body += "".join(f"{p.title:<{width}}  {p.effective_seeks}\n" for p in report.policies)
    return body


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command-line interface.

    Args:
        argv: Arguments without the program name; defaults to ``sys.argv[1:]``.

    Returns:
        The process exit status.

    """
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(_HELP, end="")
        return EXIT_SUCCESS

    name, rest = args[0], args[1:]
    handler = _COMMANDS.get(name)
    if handler is None:
        print(f"Unknown command: {name}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        config = SimulationConfig.from_environment(Environment.from_os())
        values = handler(rest)
    except UsageError as exc:
        print(exc)
        return EXIT_FAILURE
    except (ConfigError, IngestError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    except OSError as exc:
        print(f"Could not open file: {exc.filename or '<stdin>'}", file=sys.stderr)
        return EXIT_FAILURE
    except OutOfMemoryError as exc:
        print(f"Failed to create list of disk seeks: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        report = run_simulation(values, config=config)
    except OutOfMemoryError as exc:
        print(f"Simulation aborted: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    print(format_report(report), end="")
    return EXIT_SUCCESS
