"""Exponential backoff with jitter for conflicting writers."""

from __future__ import annotations

import random

DEFAULT_BASE_DELAY_MS = 50.0
JITTER_RATIO = 0.3


def backoff_delay_ms(
    attempt: int,
    base_delay_ms: float = DEFAULT_BASE_DELAY_MS,
    rng: random.Random | None = None,
) -> float:
    """Delay before the next retry, in milliseconds.

    delay = base * 2^attempt + uniform(0, 0.3 * base * 2^attempt)

    Args:
        attempt: zero-based retry index (0 after the first conflict).
        base_delay_ms: delay unit for attempt 0.
        rng: random source for the jitter; the module RNG when omitted.

    Raises:
        ValueError: if attempt is negative.
    """
    if attempt < 0:
        raise ValueError("attempt must be non-negative")

    exponential = base_delay_ms * (2 ** attempt)
    jitter = (rng or random).uniform(0, JITTER_RATIO * exponential)
    return exponential + jitter
