"""Sliding buffer — a fixed-capacity ring that feeds windows to the policies.

The request stream can be arbitrarily long, but the dispatcher only
ever holds ``capacity`` requests at once.  The buffer is an **arena**
of fixed size allocated up front, with two cursors:

    - the **read cursor** points at the oldest buffered request
      (the head of the next window);
    - the **write cursor** is where the next request from the source
      lands.

Both cursors wrap around the arena, so cutting a window off the front
never shifts the remaining requests — it just advances the read
cursor.  ``refill`` tops the arena up from the source between windows.
"""

from collections.abc import Iterator


class OutOfMemoryError(Exception):
    """Raise when the buffer arena or input backing store cannot be allocated."""


class SlidingBuffer:
    """A bounded FIFO of track positions backed by a ring arena."""

    def __init__(self, *, capacity: int) -> None:
        """Allocate an empty buffer of *capacity* slots.

        Args:
            capacity: Number of requests the arena can hold.

        Raises:
            ValueError: If *capacity* is not positive.
            OutOfMemoryError: If the arena cannot be allocated.

        """
        if capacity < 1:
            msg = f"buffer capacity must be at least 1, got {capacity}"
            raise ValueError(msg)
        try:
            self._arena: list[int] = [0] * capacity
        except MemoryError as exc:
            msg = f"cannot allocate a sliding buffer of {capacity} slots"
            raise OutOfMemoryError(msg) from exc
        self._capacity = capacity
        self._read = 0
        self._write = 0
        self._count = 0

    def __len__(self) -> int:
        """Return the number of buffered requests."""
        return self._count

    def push(self, value: int) -> None:
        """Append *value* at the write cursor.

        Raises:
            OverflowError: If the buffer is full.

        """
        if self._count == self._capacity:
            msg = "sliding buffer is full"
            raise OverflowError(msg)
        self._arena[self._write] = value
        self._write = (self._write + 1) % self._capacity
        self._count += 1

    def refill(self, source: Iterator[int]) -> int:
        """Top the buffer up from *source* until it is full or the source ends.

        Returns:
            The number of requests pulled from the source.

        """
        pulled = 0
        while self._count < self._capacity:
            value = next(source, None)
            if value is None:
                break
            self.push(value)
            pulled += 1
        return pulled

    def take(self, size: int) -> list[int]:
        """Cut up to *size* requests off the front, oldest first."""
        size = min(size, self._count)
        window = [self._arena[(self._read + k) % self._capacity] for k in range(size)]
        self._read = (self._read + size) % self._capacity
        self._count -= size
        return window
