"""Concurrent writers racing on one record through the in-memory store."""

from __future__ import annotations

import asyncio
import random

import pytest

from counter_service.adapters.memory.counter_store import InMemoryCounterStore
from counter_service.application.services.counter_accessor import VersionedCounterAccessor
from counter_service.application.use_cases.update_counter import UpdateCounterUseCase
from counter_service.domain.errors import BoundaryError, RetryExhaustedError
from counter_service.domain.policies.bounds import CounterBounds


async def _yield_sleep(seconds: float) -> None:
    await asyncio.sleep(0)


def _use_case(store: InMemoryCounterStore, **kwargs) -> UpdateCounterUseCase:
    return UpdateCounterUseCase(
        VersionedCounterAccessor(store, "global"),
        sleep=_yield_sleep,
        rng=random.Random(0),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_no_lost_updates_with_ample_budget():
    """Each writer loses at most once per other writer, so 20 attempts always suffice."""
    store = InMemoryCounterStore()
    store.seed("global", 100, version=1)
    uc = _use_case(store, max_attempts=20)
    deltas = [1, -1, 3, 5, -2, 1, 1, 7, -4, 2]

    results = await asyncio.gather(*(uc.execute(d) for d in deltas))

    final = await store.get("global")
    assert final.value == 100 + sum(deltas)
    assert final.version == 1 + len(deltas)
    # every write produced a distinct version
    assert sorted(r.version for r in results) == list(range(2, 2 + len(deltas)))


@pytest.mark.asyncio
async def test_final_value_matches_applied_deltas_under_tight_budget():
    """Writers that exhaust retries leave no trace in the stored value."""
    store = InMemoryCounterStore()
    store.seed("global", 0, version=0)
    uc = _use_case(store, max_attempts=2)

    outcomes = await asyncio.gather(
        *(uc.execute(1) for _ in range(25)), return_exceptions=True
    )

    applied = [o for o in outcomes if not isinstance(o, BaseException)]
    failed = [o for o in outcomes if isinstance(o, BaseException)]
    assert all(isinstance(f, RetryExhaustedError) for f in failed)
    assert applied

    final = await store.get("global")
    assert final.value == len(applied)
    assert final.version == len(applied)


@pytest.mark.asyncio
async def test_concurrent_decrements_never_cross_minimum():
    store = InMemoryCounterStore()
    store.seed("global", 3, version=0)
    uc = _use_case(store, max_attempts=50, bounds=CounterBounds(0, 1_000))

    outcomes = await asyncio.gather(
        *(uc.execute(-1) for _ in range(10)), return_exceptions=True
    )

    applied = [o for o in outcomes if not isinstance(o, BaseException)]
    failed = [o for o in outcomes if isinstance(o, BaseException)]
    assert len(applied) == 3
    assert len(failed) == 7
    assert all(isinstance(f, BoundaryError) for f in failed)

    final = await store.get("global")
    assert final.value == 0
