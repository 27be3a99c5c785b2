"""FastAPI application setup.

Wires the store, the initializer and the dashboard router together and owns
the store's lifecycle through the application lifespan.
"""

import random
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from devpulse.adapters.frameworks.asgi import RequestLoggingMiddleware
from devpulse.adapters.frameworks.fastapi import create_dashboard_router
from devpulse.adapters.logging import get_logger
from devpulse.adapters.storage.initializer import initialize
from devpulse.adapters.storage.sqlite_base import SQLiteStore
from devpulse.config import Settings
from devpulse.core.errors import (
    InitializationError,
    QueryError,
    StoreUnavailable,
    ValidationError,
)
from devpulse.core.ports import StorePort

logger = get_logger(__name__)


def _format_validation_errors(exc: RequestValidationError) -> list[str]:
    details = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        details.append(f"{location}: {err.get('msg', 'invalid value')}")
    return details


def _register_error_handlers(app: FastAPI) -> None:
    """Map domain errors to JSON responses."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(
        _request: Request, exc: ValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "Validation failed", "details": exc.details},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return await handle_validation_error(
            request, ValidationError(_format_validation_errors(exc))
        )

    @app.exception_handler(QueryError)
    async def handle_query_error(_request: Request, exc: QueryError) -> JSONResponse:
        logger.error("Query failed: %s", exc.message)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(StoreUnavailable)
    async def handle_store_unavailable(
        _request: Request, exc: StoreUnavailable
    ) -> JSONResponse:
        logger.error("Store unavailable: %s", exc)
        return JSONResponse(status_code=503, content={"error": str(exc)})


def create_app(
    settings: Settings | None = None,
    store: StorePort | None = None,
    rng: random.Random | None = None,
) -> FastAPI:
    """Create and configure the dashboard FastAPI application.

    The store is opened and initialized when the application starts and
    closed when it shuts down. A store that cannot be opened aborts startup;
    a seeding failure is logged and startup continues.

    Args:
        settings: Runtime settings. Defaults to ``Settings()``.
        store: Store to use. Defaults to a SQLiteStore on
            ``settings.db_path``.
        rng: Random source for seeding and drift. Defaults to
            ``random.Random(settings.seed)``.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or Settings()
    store = store or SQLiteStore(settings.db_path)
    rng = rng or random.Random(settings.seed)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
        """Open and seed the store on startup, close it on shutdown."""
        await store.open()
        try:
            try:
                report = await initialize(store, rng)
                logger.info("Database ready, %d seed rows inserted", report.total)
            except InitializationError as e:
                logger.error("Database initialization incomplete: %s", e)
            yield
        finally:
            await store.close()

    app = FastAPI(title="devpulse", lifespan=lifespan)
    app.state.store = store
    app.state.settings = settings

    # CORS is added last so it also wraps the logging middleware's 500s
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(app)

    app.include_router(
        create_dashboard_router(
            store, rng, default_log_limit=settings.default_log_limit
        )
    )
    return app
