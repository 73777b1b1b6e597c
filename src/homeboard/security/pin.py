"""Salted scrypt hashing for household and per-user PINs.

Stored format: ``{salt_hex}:{derived_key_hex}``

The hex salt *string* is the scrypt salt (its ASCII bytes, not the decoded
bytes), which keeps hashes written by earlier deployments verifiable.  A
``SCRYPT:{salt_hex}:{derived_key_hex}`` value is read as the same hash.  Any
other shape is a legacy plaintext PIN, accepted only so callers can migrate it.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets

__all__ = ["hash_pin", "verify_pin", "is_legacy_pin"]

logger = logging.getLogger(__name__)

_SALT_BYTES = 16
_KEY_LENGTH = 64
_SCRYPT_N = 16384
_SCRYPT_R = 8
_SCRYPT_P = 1
_SCRYPT_PREFIX = "SCRYPT"


def _derive(pin: str, salt: str) -> bytes:
    return hashlib.scrypt(
        pin.encode(),
        salt=salt.encode(),
        n=_SCRYPT_N,
        r=_SCRYPT_R,
        p=_SCRYPT_P,
        dklen=_KEY_LENGTH,
    )


def _split(stored: str) -> tuple[str, str] | None:
    """Return (salt, key) for a hashed credential, or None for plaintext."""
    parts = stored.split(":")
    if len(parts) == 2:
        return parts[0], parts[1]
    if len(parts) == 3 and parts[0] == _SCRYPT_PREFIX:
        return parts[1], parts[2]
    return None


def hash_pin(pin: str) -> str:
    """Hash *pin* with a fresh random salt. Returns ``salt:key``."""
    salt = secrets.token_hex(_SALT_BYTES)
    return f"{salt}:{_derive(pin, salt).hex()}"


def is_legacy_pin(stored: str | None) -> bool:
    """True if *stored* is a non-empty plaintext (unhashed) credential."""
    return bool(stored) and _split(stored) is None


def verify_pin(pin: str, stored: str | None) -> bool:
    """Check a candidate *pin* against a *stored* credential.

    Fails closed: an empty credential, a malformed hash or any error during
    derivation yields False instead of raising.
    """
    if not stored:
        return False

    try:
        split = _split(stored)
        if split is None:
            return hmac.compare_digest(stored.encode(), pin.encode())

        salt, key = split
        if not salt or not key:
            return False

        expected = bytes.fromhex(key)
        derived = _derive(pin, salt)
        if len(derived) != len(expected):
            return False
        return hmac.compare_digest(derived, expected)
    except (ValueError, TypeError, MemoryError) as e:
        logger.debug("PIN verification failed on malformed credential: %s", e)
        return False
