"""Contacts API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to a ResponseEnvelope
    - CORS configured from settings (not hardcoded)
    - The store is built once in the lifespan and kept on app.state.store

Design Decisions:
    - create_app() factory so tests can build an app around their own store;
      a store already on app.state is reused rather than replaced
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from contacts_api.api.error_handlers import register_error_handlers
from contacts_api.api.routes import contacts, health
from contacts_api.config import Settings, get_settings
from contacts_api.infrastructure.database import DatabaseSessionManager
from contacts_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    owns_store = getattr(app.state, "store", None) is None
    if owns_store:
        app.state.store = DatabaseSessionManager(
            settings.database_url, echo=settings.database_echo,
        )
    if settings.database_create_tables:
        await app.state.store.create_schema()
    logger.info(f"Contacts API started ({settings.app_env})")
    yield
    logger.info("Contacts API shutting down")
    if owns_store:
        await app.state.store.dispose()
        app.state.store = None


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Contacts API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return response

    app.include_router(health.router)
    app.include_router(contacts.router)

    register_error_handlers(app)
    return app


app = create_app()
