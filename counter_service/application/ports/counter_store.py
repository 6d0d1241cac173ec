"""Port interface for the versioned counter store."""

from abc import ABC, abstractmethod

from counter_service.domain.entities.counter import Counter


class CounterStore(ABC):
    @abstractmethod
    async def get(self, key: str) -> Counter | None:
        """Return the record stored under *key*, or None if absent.

        Raises TransportError when the backend cannot be reached or
        returns a malformed record.
        """
        ...

    @abstractmethod
    async def put_if_version_matches(
        self, key: str, new_record: Counter, expected_version: int
    ) -> Counter | None:
        """Atomically replace the record only if its version is *expected_version*.

        Must be a single compare-and-swap on the backend (no read-then-write).
        Returns the stored record on success, None on version mismatch.
        Raises TransportError on backend failure.
        """
        ...

    @abstractmethod
    async def ping(self) -> None:
        """Check connectivity. Raises TransportError if the store is unreachable."""
        ...
