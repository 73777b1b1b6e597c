# Shared FastAPI dependencies for the API layer.
# Created: 2026-10-03
#
# The store and the PIN limiter are built once by create_app() and hung on
# app.state; handlers reach them only through these dependencies so tests
# can hand in their own instances.

from __future__ import annotations

from fastapi import Request

from homeboard.security.pin_limiter import PinAttemptLimiter
from homeboard.store import FileHouseholdStore


def get_store(request: Request) -> FileHouseholdStore:
    return request.app.state.store


def get_pin_limiter(request: Request) -> PinAttemptLimiter:
    return request.app.state.pin_limiter


def client_ip(request: Request) -> str:
    """Best-effort client address, honouring a single X-Forwarded-For hop."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"
