"""FastAPI dependency injection — wires the store into use cases.

The store and accessor are built once per process (see ``main.lifespan``)
and kept on ``app.state``; every request reads them from there.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncEngine

from counter_service.adapters.memory.counter_store import InMemoryCounterStore
from counter_service.adapters.persistence.counter_store import SqlCounterStore
from counter_service.adapters.persistence.database import build_engine, build_session_factory
from counter_service.application.ports.counter_store import CounterStore
from counter_service.application.services.counter_accessor import VersionedCounterAccessor
from counter_service.application.use_cases.get_counter import GetCounterUseCase
from counter_service.application.use_cases.update_counter import UpdateCounterUseCase
from counter_service.config import settings
from counter_service.domain.policies.bounds import CounterBounds

logger = logging.getLogger(__name__)


def build_store() -> tuple[CounterStore, AsyncEngine | None]:
    """Create the configured store adapter and, for SQL, its engine."""
    if settings.store_backend == "memory":
        store = InMemoryCounterStore()
        store.seed(settings.counter_key, settings.min_counter_value)
        logger.info("Using in-memory counter store")
        return store, None

    engine = build_engine(echo=settings.debug)
    return SqlCounterStore(build_session_factory(engine)), engine


def get_counter_store(request: Request) -> CounterStore:
    return request.app.state.counter_store


def get_counter_accessor(request: Request) -> VersionedCounterAccessor:
    return request.app.state.counter_accessor


def get_counter_uc(
    accessor: VersionedCounterAccessor = Depends(get_counter_accessor),
) -> GetCounterUseCase:
    return GetCounterUseCase(accessor)


def get_update_counter_uc(
    accessor: VersionedCounterAccessor = Depends(get_counter_accessor),
) -> UpdateCounterUseCase:
    return UpdateCounterUseCase(
        accessor,
        bounds=CounterBounds(settings.min_counter_value, settings.max_counter_value),
        max_attempts=settings.max_retry_attempts,
        base_delay_ms=settings.retry_base_delay_ms,
    )
