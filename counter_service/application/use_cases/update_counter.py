"""UpdateCounterUseCase — optimistic read-validate-write loop with backoff."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable

from counter_service.application.services.counter_accessor import VersionedCounterAccessor
from counter_service.domain.entities.counter import Counter
from counter_service.domain.errors import BoundaryError, NotFoundError, RetryExhaustedError
from counter_service.domain.policies.backoff import DEFAULT_BASE_DELAY_MS, backoff_delay_ms
from counter_service.domain.policies.bounds import CounterBounds
from counter_service.domain.value_objects.write_result import WriteOutcome

logger = logging.getLogger(__name__)

MAX_RETRY_ATTEMPTS = 5

Sleeper = Callable[[float], Awaitable[None]]


class UpdateCounterUseCase:
    """Applies a signed delta to the shared counter.

    Concurrency control lives entirely in the store's conditional write;
    this class holds no mutable state and may be shared between requests.
    """

    def __init__(
        self,
        accessor: VersionedCounterAccessor,
        bounds: CounterBounds | None = None,
        max_attempts: int = MAX_RETRY_ATTEMPTS,
        base_delay_ms: float = DEFAULT_BASE_DELAY_MS,
        sleep: Sleeper = asyncio.sleep,
        rng: random.Random | None = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._accessor = accessor
        self._bounds = bounds or CounterBounds()
        self._max_attempts = max_attempts
        self._base_delay_ms = base_delay_ms
        self._sleep = sleep
        self._rng = rng

    async def execute(self, delta: int) -> Counter:
        """Apply *delta* and return the record produced by the winning write.

        Pipeline per attempt:
        1. Fetch the current record
        2. Validate current.value + delta against the bounds (never retried)
        3. Conditional write keyed on the version just read
        4. On conflict, back off and start over

        Raises:
            NotFoundError: the record is not provisioned.
            BoundaryError: the result would leave the allowed range.
            RetryExhaustedError: every attempt lost the race.
            TransportError: the store failed; propagated unchanged.
        """
        conflicts = 0
        while True:
            read = await self._accessor.read()
            if read.outcome == WriteOutcome.ABSENT:
                raise NotFoundError(self._accessor.key)
            if read.outcome == WriteOutcome.TRANSPORT_FAILURE:
                raise read.error
            current = read.record

            proposed = current.value + delta
            try:
                self._bounds.validate(proposed)
            except BoundaryError as e:
                logger.error("Counter boundary violation: %s", e)
                raise

            written = await self._accessor.conditional_write(proposed, current.version)

            if written.outcome == WriteOutcome.WRITTEN:
                logger.info(
                    "Counter updated: %d -> %d (attempt %d)",
                    current.value, written.record.value, conflicts + 1,
                )
                return written.record

            if written.outcome == WriteOutcome.TRANSPORT_FAILURE:
                raise written.error

            conflicts += 1
            if conflicts >= self._max_attempts:
                logger.error(
                    "Giving up after %d conflicting attempts on %s",
                    conflicts, self._accessor.key,
                )
                raise RetryExhaustedError(self._max_attempts)

            delay_ms = backoff_delay_ms(conflicts - 1, self._base_delay_ms, self._rng)
            logger.warning(
                "Concurrent update detected, retry %d/%d after %.0fms",
                conflicts, self._max_attempts, delay_ms,
            )
            await self._sleep(delay_ms / 1000)

    async def increment(self) -> Counter:
        return await self.execute(1)

    async def decrement(self) -> Counter:
        return await self.execute(-1)
