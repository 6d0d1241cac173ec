"""VersionedCounterAccessor — one-round-trip access to the singleton counter."""

from __future__ import annotations

import logging

from counter_service.application.ports.counter_store import CounterStore
from counter_service.domain.entities.counter import Counter
from counter_service.domain.errors import NotFoundError, TransportError
from counter_service.domain.value_objects.write_result import WriteOutcome, WriteResult

logger = logging.getLogger(__name__)


class VersionedCounterAccessor:
    """Reads and conditionally replaces the counter record.

    The accessor never interprets outcomes: it reports what the store did
    and leaves validation and retry decisions to the caller.
    """

    def __init__(self, store: CounterStore, key: str):
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    async def read(self) -> WriteResult:
        """Fetch the current record as FOUND, ABSENT or TRANSPORT_FAILURE."""
        try:
            record = await self._store.get(self._key)
        except TransportError as e:
            return WriteResult.transport_failure(e)
        if record is None:
            return WriteResult.absent()
        return WriteResult.found(record)

    async def fetch(self) -> Counter:
        """Return the current record or raise NotFoundError / TransportError."""
        result = await self.read()
        if result.outcome == WriteOutcome.ABSENT:
            raise NotFoundError(self._key)
        if result.outcome == WriteOutcome.TRANSPORT_FAILURE:
            raise result.error
        return result.record

    async def conditional_write(self, new_value: int, expected_version: int) -> WriteResult:
        """Set value and bump version iff the stored version is *expected_version*."""
        proposed = Counter(id=self._key, value=new_value, version=expected_version + 1)
        try:
            written = await self._store.put_if_version_matches(
                self._key, proposed, expected_version
            )
        except TransportError as e:
            return WriteResult.transport_failure(e)
        if written is None:
            logger.debug(
                "Version mismatch on %s (expected version %d)", self._key, expected_version
            )
            return WriteResult.conflict()
        return WriteResult.written(written)
