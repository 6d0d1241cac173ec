"""Fetch-only path for reading the counter."""

from __future__ import annotations

from counter_service.application.services.counter_accessor import VersionedCounterAccessor
from counter_service.domain.entities.counter import Counter


class GetCounterUseCase:
    def __init__(self, accessor: VersionedCounterAccessor):
        self._accessor = accessor

    async def execute(self) -> Counter:
        return await self._accessor.fetch()
