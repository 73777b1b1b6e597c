"""PIN credentials and attempt limiting."""

from homeboard.security.pin import hash_pin, is_legacy_pin, verify_pin
from homeboard.security.pin_limiter import PinAttemptLimiter, PinLockedError

__all__ = [
    "hash_pin",
    "verify_pin",
    "is_legacy_pin",
    "PinAttemptLimiter",
    "PinLockedError",
]
