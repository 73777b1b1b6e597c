# Common API response schemas.
# Created: 2026-10-03

from __future__ import annotations

from pydantic import BaseModel


class APIResponse(BaseModel):
    """Base response wrapper."""

    model_config = {"from_attributes": True}


class SuccessResponse(APIResponse):
    """Simple success response."""

    success: bool = True


class ClearedResponse(SuccessResponse):
    """Bulk-delete result."""

    deleted: int = 0
