"""Run log — structured diagnostics for a simulation run.

The logger records structured entries for the events of a run: values
rejected during ingestion, windows that had nothing to measure, and
the progress of the dispatcher.  It is the run's equivalent of a
kernel log buffer (``dmesg``): an append-only list the caller can
query after the fact, instead of text sprayed onto stderr.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **DiagnosticCode** — machine-readable tag for entries that report a
  recoverable condition (``VALUE_OUT_OF_RANGE``, ``DEGENERATE_INPUT``).
- **LogEntry** — a single structured record.
- **Logger** — an append-only log with filtering and clearing.
"""

from dataclasses import dataclass
from enum import IntEnum, StrEnum


class LogLevel(IntEnum):
    """Severity levels for log entries.

    IntEnum so that minimum-level filtering is a plain ``>=``.
    """

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


class DiagnosticCode(StrEnum):
    """Recoverable conditions the core reports without aborting the run."""

    VALUE_OUT_OF_RANGE = "value-out-of-range"
    DEGENERATE_INPUT = "degenerate-input"


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that generated the event (e.g. "ingest").
        code: The diagnostic this entry reports, if any.

    """

    level: LogLevel
    message: str
    source: str
    code: DiagnosticCode | None = None

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        code: DiagnosticCode | None = None,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.
            code: Diagnostic code for recoverable conditions.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source, code=code))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
        code: DiagnosticCode | None = None,
    ) -> list[LogEntry]:
        """Return entries matching all of the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.
            code: If set, only return entries carrying this diagnostic.

        Returns:
            A filtered list of log entries.

        """
        result = list(self._entries)
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        if code is not None:
            result = [e for e in result if e.code is code]
        return result

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()
