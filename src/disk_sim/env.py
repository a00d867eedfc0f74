"""Environment variables — run configuration via key-value pairs.

A simulation run is configured the same way a Unix process is: through
``KEY=VALUE`` string pairs in its environment.  The ``Environment``
class wraps a plain dict snapshot (usually of ``os.environ``) and adds
typed accessors so the config layer never parses strings by hand.

Key design properties:
    - **Snapshot, not live view** — the environment is copied when the
      object is built, so later changes to ``os.environ`` don't leak
      into a run that has already started.
    - **Strings in, typed values out** — ``get_int`` and ``get_bool``
      raise ``ValueError`` naming the offending variable.
"""

import os
from collections.abc import Mapping

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


class Environment:
    """A key-value store for environment variables.

    Each instance is a read-only copy; the real process environment is
    never touched.
    """

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        """Create an environment, optionally pre-populated.

        Args:
            initial: Starting variables (copied, not referenced).

        """
        self._vars: dict[str, str] = dict(initial) if initial else {}

    @classmethod
    def from_os(cls) -> "Environment":
        """Return a snapshot of the current process environment."""
        return cls(initial=os.environ)

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for *key*, or *default* if not set."""
        return self._vars.get(key, default)

    def get_int(self, key: str, default: int) -> int:
        """Return *key* parsed as a decimal integer, or *default* if unset.

        Raises:
            ValueError: If the value is set but is not an integer.

        """
        raw = self._vars.get(key)
        if raw is None or not raw.strip():
            return default
        try:
            return int(raw.strip())
        except ValueError:
            msg = f"{key} must be an integer, got {raw!r}"
            raise ValueError(msg) from None

    def get_bool(self, key: str, default: bool) -> bool:  # noqa: FBT001
        """Return *key* parsed as a boolean flag, or *default* if unset.

        Accepts ``1/0``, ``true/false``, ``yes/no`` and ``on/off`` in any
        case.

        Raises:
            ValueError: If the value is set but is not a recognised flag.

        """
        raw = self._vars.get(key)
        if raw is None or not raw.strip():
            return default
        word = raw.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        msg = f"{key} must be a boolean flag, got {raw!r}"
        raise ValueError(msg)
