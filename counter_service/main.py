"""Counter Service — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from counter_service.application.ports.counter_store import CounterStore
from counter_service.application.services.counter_accessor import VersionedCounterAccessor
from counter_service.config import settings
from counter_service.domain.errors import TransportError
from counter_service.infrastructure.api.dependencies import build_store
from counter_service.infrastructure.api.routes_counter import router as counter_router
from counter_service.infrastructure.api.routes_health import router as health_router

logger = logging.getLogger(__name__)


def _attach_store(app: FastAPI, store: CounterStore) -> None:
    app.state.counter_store = store
    app.state.counter_accessor = VersionedCounterAccessor(store, settings.counter_key)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    engine = None
    if getattr(app.state, "counter_store", None) is None:
        store, engine = build_store()
        _attach_store(app, store)

    try:
        await app.state.counter_store.ping()
        logger.info("Counter store connection established")
    except TransportError as e:
        logger.warning("Counter store not available on startup: %s", e)
    yield
    if engine is not None:
        await engine.dispose()


def create_app(store: CounterStore | None = None) -> FastAPI:
    """Build the application; a given *store* replaces the configured backend."""
    app = FastAPI(
        title="Counter Service",
        description="Bounded shared counter with optimistic concurrency control",
        version="1.0.0",
        lifespan=lifespan,
    )
    if store is not None:
        _attach_store(app, store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(counter_router, prefix="/api")

    return app


app = create_app()
