"""WriteResult value object — tagged outcome of a single store round trip."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from counter_service.domain.entities.counter import Counter
from counter_service.domain.errors import TransportError


class WriteOutcome(str, Enum):
    FOUND = "found"
    WRITTEN = "written"
    CONFLICT = "conflict"
    ABSENT = "absent"
    TRANSPORT_FAILURE = "transport_failure"


@dataclass(frozen=True)
class WriteResult:
    outcome: WriteOutcome
    record: Counter | None = None
    error: TransportError | None = None

    @classmethod
    def found(cls, record: Counter) -> WriteResult:
        return cls(WriteOutcome.FOUND, record=record)

    @classmethod
    def written(cls, record: Counter) -> WriteResult:
        return cls(WriteOutcome.WRITTEN, record=record)

    @classmethod
    def conflict(cls) -> WriteResult:
        return cls(WriteOutcome.CONFLICT)

    @classmethod
    def absent(cls) -> WriteResult:
        return cls(WriteOutcome.ABSENT)

    @classmethod
    def transport_failure(cls, error: TransportError) -> WriteResult:
        return cls(WriteOutcome.TRANSPORT_FAILURE, error=error)
