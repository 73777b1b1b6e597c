# PIN schemas.
# Created: 2026-10-03

from __future__ import annotations

from pydantic import BaseModel, Field

PIN_PATTERN = r"^\d{4}$"


class VerifyPinRequest(BaseModel):
    """Household (adult) PIN check."""

    pin: str = Field(..., pattern=PIN_PATTERN, description="Four-digit PIN")


class VerifyUserPinRequest(BaseModel):
    """Per-user PIN check."""

    user_id: str = Field(..., min_length=1)
    pin: str = Field(..., pattern=PIN_PATTERN, description="Four-digit PIN")


class VerifyPinResponse(BaseModel):
    valid: bool


class HouseholdSettingsResponse(BaseModel):
    """Household settings as exposed over the API (never the PIN itself)."""

    has_adult_pin: bool


class HouseholdSettingsUpdate(BaseModel):
    """Set or clear (empty string / null) the adult PIN."""

    adult_pin: str | None = Field(default=None, pattern=r"^(\d{4})?$")
