"""Closed value range every persisted counter must respect."""

from __future__ import annotations

from dataclasses import dataclass

from counter_service.domain.errors import BoundaryError

MIN_COUNTER_VALUE = 0
MAX_COUNTER_VALUE = 1_000_000_000


@dataclass(frozen=True)
class CounterBounds:
    minimum: int = MIN_COUNTER_VALUE
    maximum: int = MAX_COUNTER_VALUE

    def __post_init__(self) -> None:
        if self.minimum > self.maximum:
            raise ValueError(
                f"Invalid counter bounds: minimum {self.minimum} > maximum {self.maximum}"
            )

    def contains(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum

    def validate(self, value: int) -> int:
        """Return *value* unchanged, or raise BoundaryError if it is out of range."""
        if not self.contains(value):
            raise BoundaryError(value, self.minimum, self.maximum)
        return value
