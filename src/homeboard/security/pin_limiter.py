"""In-memory PIN attempt limiter with fixed lockout windows.

Per identity (user id or client IP):

    clear -> accumulating(n) -> locked(until) -> clear

Five consecutive failures lock the identity for fifteen minutes (both
configurable).  A successful verification clears the entry.  Expired entries
are swept lazily on every ``check()`` / ``record_failure()``; there is no
background task.

State is process-local and lost on restart.  Running more than one worker
process needs a shared store instead of this class.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable

__all__ = ["PinAttemptLimiter", "PinLockedError"]

logger = logging.getLogger(__name__)


class PinLockedError(Exception):
    """Raised by ``check()`` while an identity is locked out."""

    def __init__(self, key: str, remaining_seconds: float):
        self.key = key
        self.remaining_seconds = remaining_seconds
        self.remaining_minutes = max(1, math.ceil(remaining_seconds / 60))
        super().__init__(self.message)

    @property
    def message(self) -> str:
        n = self.remaining_minutes
        return f"Too many PIN attempts. Please try again in {n} minute{'' if n == 1 else 's'}."

    def headers(self) -> dict[str, str]:
        return {"Retry-After": str(math.ceil(self.remaining_seconds))}


class _Entry:
    """Failure state for one identity."""

    __slots__ = ("failures", "locked_until", "first_failure_at")

    def __init__(self, now: float):
        self.failures: int = 0
        self.locked_until: float = 0.0
        self.first_failure_at: float = now


class PinAttemptLimiter:
    """Failure counter with lockout, keyed by identity.

    Parameters
    ----------
    max_attempts : int
        Failures allowed before the identity is locked.
    lockout_seconds : float
        Length of the lockout window.
    clock : callable
        Returns the current time in seconds (injectable for tests).
    """

    def __init__(
        self,
        max_attempts: int = 5,
        lockout_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.time,
    ):
        self.max_attempts = max_attempts
        self.lockout_seconds = lockout_seconds
        self._clock = clock
        self._entries: dict[str, _Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def failures(self, key: str) -> int:
        entry = self._entries.get(key)
        return entry.failures if entry else 0

    def is_locked(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.locked_until > self._clock()

    def check(self, key: str) -> None:
        """Raise PinLockedError if *key* is currently locked out."""
        self.prune()
        entry = self._entries.get(key)
        now = self._clock()
        if entry and entry.locked_until > now:
            raise PinLockedError(key, entry.locked_until - now)

    def record_failure(self, key: str) -> None:
        """Count a failed verification; lock *key* once the threshold is hit."""
        self.prune()
        now = self._clock()
        entry = self._entries.get(key)
        if entry is None or (entry.locked_until and entry.locked_until <= now):
            entry = _Entry(now)
            self._entries[key] = entry

        entry.failures += 1
        if entry.failures >= self.max_attempts:
            entry.locked_until = now + self.lockout_seconds
            logger.warning(
                "PIN: too many failed attempts for %s, locked for %d minutes",
                key,
                math.ceil(self.lockout_seconds / 60),
            )

    def clear(self, key: str) -> None:
        """Forget all failures for *key* (called after a successful check)."""
        self._entries.pop(key, None)

    def prune(self) -> int:
        """Drop expired lockouts and stale unlocked counters. Returns count removed."""
        now = self._clock()
        stale = []
        for key, entry in self._entries.items():
            if entry.locked_until:
                if entry.locked_until <= now:
                    stale.append(key)
            elif now - entry.first_failure_at > self.lockout_seconds:
                stale.append(key)
        for key in stale:
            del self._entries[key]
        return len(stale)
