# Household router — adult PIN settings and verification.
# Created: 2026-10-04

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from homeboard.api.deps import client_ip, get_pin_limiter, get_store
from homeboard.api.v1.schemas.pin import (
    HouseholdSettingsResponse,
    HouseholdSettingsUpdate,
    VerifyPinRequest,
    VerifyPinResponse,
)
from homeboard.models import HouseholdSettings
from homeboard.security.pin_limiter import PinAttemptLimiter
from homeboard.security.verification import hash_pin_async, verify_household_pin
from homeboard.store import FileHouseholdStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Household"])


@router.get("/household/settings", response_model=HouseholdSettingsResponse)
async def get_household_settings(store: FileHouseholdStore = Depends(get_store)):
    settings = await store.get_household_settings()
    return HouseholdSettingsResponse(has_adult_pin=bool(settings and settings.adult_pin))


@router.put("/household/settings", response_model=HouseholdSettingsResponse)
async def update_household_settings(
    body: HouseholdSettingsUpdate,
    store: FileHouseholdStore = Depends(get_store),
):
    """Set the adult PIN (stored hashed) or clear it with an empty value."""
    settings = await store.get_household_settings() or HouseholdSettings()
    settings.adult_pin = await hash_pin_async(body.adult_pin) if body.adult_pin else None
    await store.save_household_settings(settings)
    return HouseholdSettingsResponse(has_adult_pin=bool(settings.adult_pin))


@router.post("/household/verify-pin", response_model=VerifyPinResponse)
async def verify_pin(
    body: VerifyPinRequest,
    request: Request,
    store: FileHouseholdStore = Depends(get_store),
    limiter: PinAttemptLimiter = Depends(get_pin_limiter),
):
    """Check the household adult PIN.

    No user is involved here, so attempts are limited per client address.
    """
    key = f"ip:{client_ip(request)}"
    limiter.check(key)

    valid = await verify_household_pin(store, body.pin)
    if valid is None:
        return VerifyPinResponse(valid=True)

    if valid:
        limiter.clear(key)
    else:
        limiter.record_failure(key)
    return VerifyPinResponse(valid=valid)
