"""Tests for VersionedCounterAccessor outcome reporting."""

import pytest

from counter_service.adapters.memory.counter_store import InMemoryCounterStore
from counter_service.application.services.counter_accessor import VersionedCounterAccessor
from counter_service.application.use_cases.get_counter import GetCounterUseCase
from counter_service.domain.entities.counter import Counter
from counter_service.domain.errors import NotFoundError, TransportError
from counter_service.domain.value_objects.write_result import WriteOutcome


class BrokenStore(InMemoryCounterStore):
    async def get(self, key):
        raise TransportError("unreachable")

    async def put_if_version_matches(self, key, new_record, expected_version):
        raise TransportError("unreachable")


def _accessor(value: int | None = 10, version: int = 1) -> tuple[VersionedCounterAccessor, InMemoryCounterStore]:
    store = InMemoryCounterStore()
    if value is not None:
        store.seed("global", value, version)
    return VersionedCounterAccessor(store, "global"), store


@pytest.mark.asyncio
async def test_read_found():
    accessor, _ = _accessor()
    result = await accessor.read()
    assert result.outcome == WriteOutcome.FOUND
    assert result.record == Counter("global", 10, 1)


@pytest.mark.asyncio
async def test_read_absent():
    accessor, _ = _accessor(value=None)
    result = await accessor.read()
    assert result.outcome == WriteOutcome.ABSENT
    assert result.record is None


@pytest.mark.asyncio
async def test_read_transport_failure_is_reported_not_raised():
    accessor = VersionedCounterAccessor(BrokenStore(), "global")
    result = await accessor.read()
    assert result.outcome == WriteOutcome.TRANSPORT_FAILURE
    assert isinstance(result.error, TransportError)


@pytest.mark.asyncio
async def test_fetch_returns_record():
    accessor, _ = _accessor()
    assert await accessor.fetch() == Counter("global", 10, 1)


@pytest.mark.asyncio
async def test_fetch_missing_raises_not_found():
    accessor, _ = _accessor(value=None)
    with pytest.raises(NotFoundError):
        await accessor.fetch()


@pytest.mark.asyncio
async def test_fetch_raises_transport_error():
    accessor = VersionedCounterAccessor(BrokenStore(), "global")
    with pytest.raises(TransportError, match="unreachable"):
        await accessor.fetch()


@pytest.mark.asyncio
async def test_conditional_write_success_bumps_version():
    accessor, store = _accessor()
    result = await accessor.conditional_write(11, expected_version=1)
    assert result.outcome == WriteOutcome.WRITTEN
    assert result.record == Counter("global", 11, 2)
    assert await store.get("global") == Counter("global", 11, 2)


@pytest.mark.asyncio
async def test_conditional_write_stale_version_conflicts():
    accessor, store = _accessor(value=10, version=3)
    result = await accessor.conditional_write(11, expected_version=2)
    assert result.outcome == WriteOutcome.CONFLICT
    assert result.record is None
    assert await store.get("global") == Counter("global", 10, 3)


@pytest.mark.asyncio
async def test_conditional_write_transport_failure():
    accessor = VersionedCounterAccessor(BrokenStore(), "global")
    result = await accessor.conditional_write(11, expected_version=1)
    assert result.outcome == WriteOutcome.TRANSPORT_FAILURE


@pytest.mark.asyncio
async def test_get_counter_use_case():
    accessor, _ = _accessor(value=42, version=7)
    assert await GetCounterUseCase(accessor).execute() == Counter("global", 42, 7)
