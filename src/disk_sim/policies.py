"""Disk scheduling policies — reordering requests to minimise head travel.

When several requests are waiting, the disk arm must move between
tracks to service them.  The dominant cost is **seek distance** — how
far the head travels.  A scheduling policy decides the *order* in which
a window of requests is serviced.

Think of the disk head like an elevator in a building:
    - **FCFS** — stop at every floor in the order people pressed buttons.
    - **SSTF** — always go to the nearest requested floor (greedy).
    - **SCAN** — go all the way up, then all the way down (elevator).

Every policy works *in place* on a window (a list of track positions)
and advances a ``HeadState`` that the caller owns.  The head state
survives from one window to the next, so a later window starts where
the previous one left the head, not at the original starting track.

Head state lifecycle::

    UNINITIALIZED → READY → ACTIVE → FINALIZED
         init()    apply()      finalize()

All policies implement the ``DiskPolicy`` protocol — the Strategy
pattern: the dispatcher never needs to know which one it is driving.
"""

from collections.abc import Iterable
from enum import StrEnum
from typing import Protocol


class Direction(StrEnum):
    """Direction of head travel (meaningful for SCAN only)."""

    UP = "up"
    DOWN = "down"

    def reversed(self) -> "Direction":
        """Return the opposite direction."""
        return Direction.DOWN if self is Direction.UP else Direction.UP


class HeadPhase(StrEnum):
    """Lifecycle of a head state over one run."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    ACTIVE = "active"
    FINALIZED = "finalized"


class HeadStateError(RuntimeError):
    """Raise when a head state is used outside its lifecycle."""


class HeadState:
    """Where one policy's disk head is, and how many real seeks it made.

    A head state is created UNINITIALIZED, placed with ``init()``,
    mutated by every ``apply()`` of its policy, and frozen with
    ``finalize()`` once the last window has been processed.  There is
    no way back to READY within a run.
    """

    def __init__(self) -> None:
        """Create an unplaced head state."""
        self._phase = HeadPhase.UNINITIALIZED
        self.position = 0
        self.direction = Direction.UP
        self.effective_seek_count = 0

    @classmethod
    def at(cls, position: int, direction: Direction = Direction.UP) -> "HeadState":
        """Return a READY head state placed at *position*."""
        head = cls()
        head.init(position, direction)
        return head

    @property
    def phase(self) -> HeadPhase:
        """Return the current lifecycle phase."""
        return self._phase

    def init(self, position: int, direction: Direction = Direction.UP) -> None:
        """Transition UNINITIALIZED → READY, placing the head.

        Raises:
            HeadStateError: If the head was already initialised.

        """
        self._require("init", HeadPhase.UNINITIALIZED)
        self.position = position
        self.direction = direction
        self.effective_seek_count = 0
        self._phase = HeadPhase.READY

    def begin(self) -> None:
        """Mark the head as in use by a policy (READY or ACTIVE → ACTIVE).

        Raises:
            HeadStateError: If the head is unplaced or already finalized.

        """
        self._require("apply a policy to", HeadPhase.READY, HeadPhase.ACTIVE)
        self._phase = HeadPhase.ACTIVE

    def finalize(self) -> None:
        """Freeze the tallies for reporting (READY or ACTIVE → FINALIZED).

        Raises:
            HeadStateError: If the head was never placed or is already final.

        """
        self._require("finalize", HeadPhase.READY, HeadPhase.ACTIVE)
        self._phase = HeadPhase.FINALIZED

    def seek(self, position: int) -> None:
        """Move the head, counting the seek only if the track changes."""
        if position != self.position:
            self.effective_seek_count += 1
        self.position = position

    def _require(self, action: str, *allowed: HeadPhase) -> None:
        if self._phase not in allowed:
            msg = f"Cannot {action} head state: it is {self._phase}"
            raise HeadStateError(msg)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return (
            f"HeadState(position={self.position}, direction={self.direction}, "
            f"effective_seek_count={self.effective_seek_count}, phase={self._phase})"
        )


def count_effective_seeks(positions: Iterable[int], *, start: int) -> int:
    """Return how many visits in *positions* actually move the head."""
    count = 0
    previous = start
    for position in positions:
        if position != previous:
            count += 1
        previous = position
    return count


class DiskPolicy(Protocol):
    """Protocol for disk scheduling policies (Strategy pattern).

    Attributes:
        name: Short identifier used as a report key (e.g. ``"sstf"``).
        title: Human-readable policy title.

    """

    name: str
    title: str

    def apply(self, window: list[int], head: HeadState) -> None:
        """Reorder *window* in place into visit order and advance *head*.

        Args:
            window: Track positions to service; permuted in place.
            head: The policy's head state, carried across windows.

        """
        ...  # pragma: no cover


def schedule(policy: DiskPolicy, requests: Iterable[int], *, head: int) -> list[int]:
    """Return the visit order *policy* gives *requests*, leaving them untouched.

    A one-shot helper: the policy runs on a copy with a fresh head
    state placed at *head*.
    """
    window = list(requests)
    policy.apply(window, HeadState.at(head))
    return window


class FCFSPolicy:
    """First Come, First Served — service in arrival order.

    The simplest policy.  Fair (no starvation), but the arm zigzags
    wildly across the disk, producing high total seek distance.
    """

    name = "fcfs"
    title = "First come, first served"

    def apply(self, window: list[int], head: HeadState) -> None:
        """Walk the window in order; the window itself is left unchanged."""
        head.begin()
        for position in window:
            head.seek(position)


class SSTFPolicy:
    """Shortest Seek Time First — always go to the nearest request.

    A greedy selection sort by distance from the moving head: slot
    ``i`` receives whichever remaining request is closest to where the
    head currently is.  Equidistant requests are resolved in favour of
    the earliest one in the window.  O(n²) per window, which is fine for
    windows of a few dozen requests.

    Better total movement than FCFS, but it can **starve** distant
    requests if new ones keep arriving near the head.
    """

    name = "sstf"
    title = "Shortest seek first"

    def apply(self, window: list[int], head: HeadState) -> None:
        """Permute *window* into nearest-first order from the head."""
        head.begin()
        for i in range(len(window)):
            best = i
            best_distance = abs(window[i] - head.position)
            for j in range(i + 1, len(window)):
                distance = abs(window[j] - head.position)
                if distance < best_distance:
                    best, best_distance = j, distance
            if best != i:
                window[i], window[best] = window[best], window[i]
            head.seek(window[i])


class SCANPolicy:
    """SCAN (Elevator algorithm) — sweep one direction, then reverse.

    The window is ordered by exactly two sweeps: the first in the head's
    current direction, the second in the opposite one.  Each sweep
    repeatedly picks the nearest remaining request strictly beyond the
    head in the sweep direction and swaps it into the next slot.  When
    nothing is left beyond the head, the sweep ends and the next sweep
    resumes at the same slot.

    A request sitting exactly on the head's track is never eligible
    (strict bounds), so duplicates of the turning point stay where the
    sweeps left them and are visited at the end.  The effective-seek
    tally is therefore recounted from the final order, exactly like
    FCFS counts its walk.
    """

    name = "scan"
    title = "Elevator algorithm"

    def apply(self, window: list[int], head: HeadState) -> None:
        """Permute *window* into two-sweep elevator order."""
        head.begin()
        start = head.position
        direction = head.direction
        last_serviced: Direction | None = None
        cursor = 0
        for _ in range(2):
            sweep_start = cursor
            cursor = self._sweep(window, cursor, head, direction)
            if cursor > sweep_start:
                last_serviced = direction
            direction = direction.reversed()

        head.effective_seek_count += count_effective_seeks(window, start=start)
        if window:
            head.position = window[-1]
        if last_serviced is not None:
            head.direction = last_serviced

    def _sweep(
        self,
        window: list[int],
        cursor: int,
        head: HeadState,
        direction: Direction,
    ) -> int:
        """Fill slots from *cursor* while requests remain beyond the head.

        Returns the cursor at which the sweep ran out of candidates.
        """
        while cursor < len(window):
            found = self._nearest_beyond(window, cursor, head.position, direction)
            if found is None:
                break
            window[cursor], window[found] = window[found], window[cursor]
            head.position = window[cursor]
            cursor += 1
        return cursor

    @staticmethod
    def _nearest_beyond(
        window: list[int],
        cursor: int,
        position: int,
        direction: Direction,
    ) -> int | None:
        """Return the index of the closest request past *position*, or None.

        The search keeps an open bound between the head and the best
        candidate so far; each closer candidate narrows it.  Strict
        comparisons mean the first of several equal candidates wins.
        """
        best: int | None = None
        bound: int | None = None
        for j in range(cursor, len(window)):
            value = window[j]
            if direction is Direction.UP:
                eligible = value > position and (bound is None or value < bound)
            else:
                eligible = value < position and (bound is None or value > bound)
            if eligible:
                best, bound = j, value
        return best


DEFAULT_POLICIES: tuple[DiskPolicy, ...] = (FCFSPolicy(), SSTFPolicy(), SCANPolicy())
