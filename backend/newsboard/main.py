"""Newsboard API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (health first, then the catch-all resource route)
    - One EntityStore and one Dispatcher per application, held on app.state
    - Snapshot loaded once on startup and saved after mutations, except in test mode
    - CORS headers on every response; OPTIONS never reaches the dispatcher

Design Decisions:
    - create_app factory: tests build isolated apps around their own stores
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import itertools
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from newsboard.api.cors import register_cors
from newsboard.api.error_handlers import register_error_handlers
from newsboard.api.routes import health, resources
from newsboard.config import Settings, get_settings
from newsboard.core.entity_store import EntityStore
from newsboard.infrastructure.observability import setup_logging
from newsboard.infrastructure.persistence import (
    YamlPersistenceStore, restore_snapshot,
)
from newsboard.services.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    if app.state.persistence is not None:
        restore_snapshot(app.state.store, app.state.persistence)
    logger.info(
        f"Newsboard API started on port {settings.port}",
        extra={"entity_counts": app.state.store.counts()},
    )
    yield
    logger.info("Newsboard API shutting down")


def create_app(
    settings: Settings | None = None, store: EntityStore | None = None,
) -> FastAPI:
    """Build the application around store (a fresh one when omitted)."""
    settings = settings or get_settings()
    app = FastAPI(
        title="Newsboard API", version="1.0.0", lifespan=lifespan,
        docs_url=None, redoc_url=None, openapi_url=None,
    )

    app.state.settings = settings
    app.state.store = store if store is not None else EntityStore()
    app.state.dispatcher = Dispatcher(app.state.store)
    app.state.persistence = (
        None if settings.is_test_mode
        else YamlPersistenceStore(settings.database_path)
    )
    app.state.save_generations = itertools.count(1)

    register_cors(app, settings)
    register_error_handlers(app)

    # Health before the catch-all, otherwise it would be dispatched
    app.include_router(health.router)
    app.include_router(resources.router)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve app with uvicorn on the configured port."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
