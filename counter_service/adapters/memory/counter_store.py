"""In-process CounterStore for local runs without a database."""

from __future__ import annotations

import asyncio

from counter_service.application.ports.counter_store import CounterStore
from counter_service.domain.entities.counter import Counter


class InMemoryCounterStore(CounterStore):
    """Dictionary-backed store with the same CAS contract as the SQL adapter.

    Each operation yields to the event loop first, like a network round
    trip would. The compare and the set happen without an intervening
    await, which makes the conditional write atomic within one loop.
    """

    def __init__(self) -> None:
        self._records: dict[str, Counter] = {}

    def seed(self, key: str, value: int, version: int = 0) -> Counter:
        record = Counter(id=key, value=value, version=version)
        self._records[key] = record
        return record

    async def get(self, key: str) -> Counter | None:
        await asyncio.sleep(0)
        return self._records.get(key)

    async def put_if_version_matches(
        self, key: str, new_record: Counter, expected_version: int
    ) -> Counter | None:
        await asyncio.sleep(0)
        stored = self._records.get(key)
        if stored is None or stored.version != expected_version:
            return None
        written = stored.with_value(new_record.value)
        self._records[key] = written
        return written

    async def ping(self) -> None:
        return None
