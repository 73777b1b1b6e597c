# PinClient — household and per-user PIN checks from the dashboard.
# Created: 2026-10-07

from __future__ import annotations

import logging

from homeboard.client.api_client import ApiClient
from homeboard.client.errors import ApiError, get_error_message
from homeboard.client.toasts import AlertToasts

logger = logging.getLogger(__name__)


class PinClient:
    """Thin wrapper over the verify-pin endpoints.

    A wrong PIN is a normal ``False``.  A lockout (HTTP 429) is shown as a
    toast carrying the server's message and re-raised, so the caller can
    disable the keypad until it expires.
    """

    def __init__(self, api: ApiClient, toasts: AlertToasts | None = None):
        self.api = api
        self.toasts = toasts if toasts is not None else AlertToasts()

    async def verify_household_pin(self, pin: str) -> bool:
        return await self._verify("/household/verify-pin", {"pin": pin})

    async def verify_user_pin(self, user_id: str, pin: str) -> bool:
        return await self._verify("/users/verify-pin", {"user_id": user_id, "pin": pin})

    async def _verify(self, path: str, body: dict) -> bool:
        try:
            data = await self.api.post(path, json=body)
        except ApiError as err:
            if err.status_code == 429:
                self.toasts.show_error("Too Many Attempts", get_error_message(err))
            else:
                self.toasts.show_error("PIN Check Failed", get_error_message(err, "Failed to verify PIN"))
            raise
        return bool(data and data.get("valid"))
