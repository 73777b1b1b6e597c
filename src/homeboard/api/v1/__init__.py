# API v1 router aggregation.
# Created: 2026-10-04
#
# mount_v1_routers(app) registers all domain routers at /api/v1/.

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)

_V1_ROUTERS: list[tuple[str, str, str]] = [
    # (module_path, attr_name, tag)
    ("homeboard.api.v1.household", "router", "Household"),
    ("homeboard.api.v1.users", "router", "Users"),
    ("homeboard.api.v1.shopping", "router", "Shopping"),
    ("homeboard.api.v1.todos", "router", "Todos"),
    ("homeboard.api.v1.calendar_events", "router", "Calendar"),
]


def mount_v1_routers(app: FastAPI) -> None:
    """Mount all v1 domain routers on *app* at ``/api/v1``."""
    for module_path, attr_name, tag in _V1_ROUTERS:
        mod = importlib.import_module(module_path)
        app.include_router(getattr(mod, attr_name), prefix="/api/v1")
        logger.debug("Mounted v1 router: %s (%s)", module_path, tag)
