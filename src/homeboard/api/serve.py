"""Application factory and server runner for ``homeboard serve``.

``create_app()`` builds the FastAPI app and its process-lifetime collaborators:
the JSON file store and the PIN attempt limiter.  Both live on ``app.state``
and can be handed in explicitly (tests do this with a temp directory and a
fake clock).
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from homeboard import __version__
from homeboard.config import Settings, get_config_dir
from homeboard.security.pin_limiter import PinAttemptLimiter, PinLockedError
from homeboard.store import FileHouseholdStore

logger = logging.getLogger(__name__)


async def _pin_locked_handler(request: Request, exc: PinLockedError) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={"detail": exc.message},
        headers=exc.headers(),
    )


def create_app(
    settings: Settings | None = None,
    store: FileHouseholdStore | None = None,
    pin_limiter: PinAttemptLimiter | None = None,
) -> FastAPI:
    """Build the homeboard API application."""
    from homeboard.api.v1 import mount_v1_routers

    settings = settings or Settings.load()

    app = FastAPI(
        title="homeboard API",
        description="Household dashboard: shopping, todos, calendar and PIN access.",
        version=__version__,
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
        openapi_url="/api/v1/openapi.json",
    )

    app.state.settings = settings
    app.state.store = store or FileHouseholdStore(get_config_dir(settings))
    app.state.pin_limiter = pin_limiter or PinAttemptLimiter(
        max_attempts=settings.pin_max_attempts,
        lockout_seconds=settings.pin_lockout_seconds,
    )

    # --- CORS -----------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api_cors_allowed_origins,
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.add_exception_handler(PinLockedError, _pin_locked_handler)

    mount_v1_routers(app)
    return app


def run_api_server(host: str = "127.0.0.1", port: int = 8787, dev: bool = False) -> None:
    """Start the API server with uvicorn."""
    import uvicorn

    logger.info("homeboard API on http://%s:%d/api/v1/docs", host, port)

    if dev:
        import pathlib

        src_dir = str(pathlib.Path(__file__).resolve().parent.parent)
        uvicorn.run(
            "homeboard.api.serve:create_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
            reload_dirs=[src_dir],
            reload_includes=["*.py"],
            log_level="debug",
        )
    else:
        uvicorn.run(create_app(), host=host, port=port)
