# PIN verification against stored credentials, with legacy migration.
# Created: 2026-10-04
#
# scrypt is CPU-bound, so hashing and verification run in a worker thread to
# keep the event loop responsive.

from __future__ import annotations

import asyncio
import logging

from homeboard.models import User, UserRole
from homeboard.security.pin import hash_pin, is_legacy_pin, verify_pin
from homeboard.store import FileHouseholdStore

logger = logging.getLogger(__name__)


async def hash_pin_async(pin: str) -> str:
    return await asyncio.to_thread(hash_pin, pin)


async def verify_pin_async(pin: str, stored: str | None) -> bool:
    return await asyncio.to_thread(verify_pin, pin, stored)


async def verify_household_pin(store: FileHouseholdStore, pin: str) -> bool | None:
    """Check *pin* against the adult PIN.

    Returns None when no adult PIN is configured. A legacy plaintext PIN that
    matches is replaced by its hash.
    """
    settings = await store.get_household_settings()
    if settings is None or not settings.adult_pin:
        return None

    stored = settings.adult_pin
    valid = await verify_pin_async(pin, stored)
    if valid and is_legacy_pin(stored):
        try:
            settings.adult_pin = await hash_pin_async(pin)
            await store.save_household_settings(settings)
            logger.info("Migrated legacy household PIN to hashed format")
        except Exception:
            logger.exception("Failed to migrate household PIN")
    return valid


async def verify_user_pin(store: FileHouseholdStore, user: User, pin: str) -> bool:
    """Check *pin* for *user*.

    Order: the user's own PIN, then the household adult PIN. With neither
    configured, adults pass and children do not.
    """
    if user.pin:
        stored = user.pin
        valid = await verify_pin_async(pin, stored)
        if valid and is_legacy_pin(stored):
            try:
                user.pin = await hash_pin_async(pin)
                await store.save_user(user)
                logger.info("Migrated legacy PIN for user %s", user.id)
            except Exception:
                logger.exception("Failed to migrate PIN for user %s", user.id)
        return valid

    household = await verify_household_pin(store, pin)
    if household is None:
        return user.role == UserRole.ADULT
    return household
