"""SQLAlchemy implementation of the CounterStore port.

The compare-and-swap is a single ``UPDATE ... WHERE id = :key AND
version = :expected RETURNING ...`` statement, so the database row is the
only synchronisation point between writers.
"""

from __future__ import annotations

import logging

from sqlalchemy import select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from counter_service.adapters.persistence.models import CounterModel
from counter_service.application.ports.counter_store import CounterStore
from counter_service.domain.entities.counter import Counter
from counter_service.domain.errors import TransportError

logger = logging.getLogger(__name__)

# asyncpg lets socket errors (connection refused, DNS failure) escape unwrapped
BACKEND_ERRORS = (SQLAlchemyError, OSError)


def _row_to_domain(row_id: object, value: object, version: object) -> Counter:
    if not isinstance(row_id, str) or not isinstance(value, int) or not isinstance(version, int):
        raise TransportError(
            f"Malformed counter record: id={row_id!r}, value={value!r}, version={version!r}"
        )
    return Counter(id=row_id, value=value, version=version)


class SqlCounterStore(CounterStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._sf = session_factory

    async def get(self, key: str) -> Counter | None:
        stmt = select(CounterModel.id, CounterModel.value, CounterModel.version).where(
            CounterModel.id == key
        )
        try:
            async with self._sf() as session:
                row = (await session.execute(stmt)).one_or_none()
        except BACKEND_ERRORS as e:
            logger.exception("Error getting counter %s", key)
            raise TransportError(f"Failed to read counter: {e}") from e

        if row is None:
            return None
        return _row_to_domain(row.id, row.value, row.version)

    async def put_if_version_matches(
        self, key: str, new_record: Counter, expected_version: int
    ) -> Counter | None:
        stmt = (
            update(CounterModel)
            .where(CounterModel.id == key, CounterModel.version == expected_version)
            .values(value=new_record.value, version=expected_version + 1)
            .returning(CounterModel.id, CounterModel.value, CounterModel.version)
            .execution_options(synchronize_session=False)
        )
        try:
            async with self._sf() as session:
                row = (await session.execute(stmt)).one_or_none()
                await session.commit()
        except BACKEND_ERRORS as e:
            logger.exception("Error updating counter %s", key)
            raise TransportError(f"Failed to update counter: {e}") from e

        if row is None:
            return None
        return _row_to_domain(row.id, row.value, row.version)

    async def ping(self) -> None:
        try:
            async with self._sf() as session:
                await session.execute(text("SELECT 1"))
        except BACKEND_ERRORS as e:
            raise TransportError(f"Database unreachable: {e}") from e
