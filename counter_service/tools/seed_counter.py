"""Provision the singleton counter record.

Usage:
    python -m counter_service.tools.seed_counter
    python -m counter_service.tools.seed_counter --value 42
    python -m counter_service.tools.seed_counter --reset  # overwrite an existing record
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from counter_service.adapters.persistence.database import build_engine, build_session_factory
from counter_service.adapters.persistence.models import CounterModel
from counter_service.config import settings
from counter_service.domain.entities.counter import Counter
from counter_service.domain.errors import BoundaryError
from counter_service.domain.policies.bounds import CounterBounds

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def _find(session: AsyncSession, key: str, lock: bool = False) -> CounterModel | None:
    stmt = select(CounterModel).where(CounterModel.id == key)
    if lock:
        stmt = stmt.with_for_update()
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def provision(
    session_factory: async_sessionmaker[AsyncSession],
    key: str,
    value: int,
    reset: bool = False,
) -> Counter:
    """Create the counter record if missing (or overwrite it with *reset*).

    A reset keeps the version moving forward so in-flight writers that
    read the old record still lose their compare-and-swap. If another
    provisioner inserts the record first, that record is kept.
    """
    CounterBounds(settings.min_counter_value, settings.max_counter_value).validate(value)

    async with session_factory() as session:
        m = await _find(session, key, lock=True)
        if m is None:
            m = CounterModel(id=key, value=value, version=0)
            session.add(m)
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                m = await _find(session, key)
                logger.warning(
                    "Counter %s was created concurrently, keeping it (value %d, version %d)",
                    key, m.value, m.version,
                )
                return Counter(id=m.id, value=m.value, version=m.version)
            logger.info("Created counter %s with value %d", key, value)
            return Counter(id=m.id, value=m.value, version=m.version)

        if reset:
            m.value = value
            m.version = m.version + 1
            logger.info("Reset counter %s to %d (version %d)", key, value, m.version)
        else:
            logger.info("Counter %s already exists (value %d, version %d)", key, m.value, m.version)
        await session.commit()
        return Counter(id=m.id, value=m.value, version=m.version)


async def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Provision the shared counter record")
    parser.add_argument("--key", default=settings.counter_key, help="record key")
    parser.add_argument("--value", type=int, default=settings.min_counter_value, help="initial value")
    parser.add_argument("--reset", action="store_true", help="overwrite an existing record")
    args = parser.parse_args(argv)

    engine = build_engine()
    try:
        counter = await provision(build_session_factory(engine), args.key, args.value, args.reset)
    except BoundaryError as e:
        logger.error("%s", e)
        return 1
    finally:
        await engine.dispose()

    logger.info("Counter ready: %s", counter)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
