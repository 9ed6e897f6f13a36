"""
FastAPI Application Factory & Configuration.

This module initializes the FastAPI application instance. It is responsible for:
1.  **Middleware Setup**: CORS (Cross-Origin Resource Sharing) for frontend access.
2.  **Exception Handling**: Global handlers so all errors return structured JSON.
3.  **Routing**: Mounting the board router and the health probe.
4.  **Lifecycle**: Loading the initial dataset into the board store at startup.

Design Pattern
--------------
We use an **Application Factory** pattern (`create_app`). This allows for:
-   Easy testing (separate app instances per test, optional skipped load).
-   Configuration injection (a different dataset path per instance).
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hypewaves import __version__
from hypewaves.api.board_store import BoardStore
from hypewaves.api.routers import board
from hypewaves.core.settings import get_logger, load_settings

log = get_logger("hypewaves.api")


def create_app(data_path: str | Path | None = None, *, load_on_startup: bool = True) -> FastAPI:
    """
    Construct and configure the hypewaves FastAPI application.

    Parameters
    ----------
    data_path:
        Dataset loaded at startup; defaults to ``HYPEWAVES_DATA_PATH``.
    load_on_startup:
        When False the board store is left as it is (tests seed it directly).

    Returns
    -------
    FastAPI
        The configured ASGI application ready to be served by Uvicorn.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        ASGI Lifespan context manager.

        - **Startup**: Load the dataset into the board store singleton.
        - **Shutdown**: Nothing to release; edits are only persisted on request.
        """
        log.info("Starting up...")
        store = BoardStore.get_instance()
        if load_on_startup:
            b = store.load(data_path)
            log.info("Board ready with %d wave(s)", len(b.waves))
        yield
        log.info("Shutting down...")

    app = FastAPI(
        title="hypewaves API",
        description="Parallel hype-cycle timelines with user-drawn connections",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, restrict this to specific domains.
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Global Exception Handlers
    # -----------------------------------------------------------------------
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all handler so unhandled exceptions still return structured JSON."""
        log.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc),
                "path": request.url.path,
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        """Map Python ValueErrors (e.g. unknown timeline index) to HTTP 400 Bad Request."""
        return JSONResponse(
            status_code=400,
            content={
                "error": "Bad Request",
                "detail": str(exc),
            },
        )

    @app.exception_handler(LookupError)
    async def lookup_error_handler(request: Request, exc: LookupError) -> JSONResponse:
        """Map unknown event ids / connection indices to HTTP 404 Not Found."""
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not Found",
                "detail": str(exc),
            },
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    app.include_router(board.router)

    @app.get("/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        """Simple liveness probe."""
        return {
            "status": "ok",
            "environment": load_settings().environment,
            "version": __version__,
        }

    return app


__all__ = ["create_app"]
