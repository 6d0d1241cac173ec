"""Counter error taxonomy: terminal failures surfaced to callers.

Version conflicts are not errors here: they are an expected race
outcome reported as ``WriteOutcome.CONFLICT`` and consumed by the
update loop.
"""


class CounterError(Exception):
    """Base class for all counter failures."""


class NotFoundError(CounterError):
    """The counter record has not been provisioned."""

    def __init__(self, key: str):
        super().__init__(f"Counter item '{key}' not found in database")
        self.key = key


class BoundaryError(CounterError):
    """The proposed value falls outside the configured range."""

    def __init__(self, proposed: int, minimum: int, maximum: int):
        super().__init__(
            f"Counter value {proposed} is out of valid range [{minimum}, {maximum}]"
        )
        self.proposed = proposed
        self.minimum = minimum
        self.maximum = maximum


class RetryExhaustedError(CounterError):
    """Concurrent writers kept winning until the retry budget ran out."""

    def __init__(self, attempts: int):
        super().__init__(f"Maximum retry attempts ({attempts}) exceeded")
        self.attempts = attempts


class TransportError(CounterError):
    """The backing store was unreachable or returned a malformed response."""
